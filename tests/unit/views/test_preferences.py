"""Unit tests for list filters, preferences and view-state transitions."""

from datetime import date

import pytest

from felinefinder.domain.value_objects import BookingStatus
from felinefinder.domain.workflow import StatusGroupKey
from felinefinder.views.preferences import (
    DEFAULT_PAGE_SIZE,
    Filters,
    SortDirection,
    SortField,
    UnknownFilterError,
    ViewPreferences,
    ViewState,
)

# pylint: disable=magic-value-comparison


class TestFilters:
    """Filters normalize their values and keep status/group exclusive."""

    @staticmethod
    def test_default_is_empty():
        assert Filters().is_empty
        assert not Filters(adopter="al").is_empty

    @staticmethod
    def test_status_and_group_cannot_both_be_set():
        with pytest.raises(ValueError, match="mutually exclusive"):
            Filters(status=BookingStatus.CONFIRMED, status_group=StatusGroupKey.ACTIVE)

    @staticmethod
    def test_setting_status_clears_group_and_back():
        filters = Filters().with_value("status_group", "assigned")
        assert filters.status_group is StatusGroupKey.ASSIGNED

        filters = filters.with_value("status", "confirmed")
        assert filters.status is BookingStatus.CONFIRMED
        assert filters.status_group is None

        filters = filters.with_value("status_group", StatusGroupKey.FINISHED)
        assert filters.status is None
        assert filters.status_group is StatusGroupKey.FINISHED

    @staticmethod
    def test_clearing_status_keeps_group_untouched():
        filters = Filters(status_group=StatusGroupKey.ACTIVE).cleared("status")
        assert filters.status_group is StatusGroupKey.ACTIVE

    @staticmethod
    def test_dates_accept_iso_strings():
        filters = Filters().with_value("date_from", "2025-03-01")
        assert filters.date_from == date(2025, 3, 1)
        assert filters.with_value("date_from", "").date_from is None

    @staticmethod
    def test_text_none_becomes_empty():
        assert Filters(cat="tab").cleared("cat").cat == ""

    @staticmethod
    def test_unknown_filter():
        with pytest.raises(UnknownFilterError, match="Unknown filter 'breed'"):
            Filters().with_value("breed", "siamese")

    @staticmethod
    def test_dict_roundtrip():
        filters = Filters(
            adopter="al",
            date_to=date(2025, 4, 30),
            status_group=StatusGroupKey.EARLY_STAGE,
        )
        assert Filters.from_dict(filters.to_dict()) == filters


class TestViewPreferences:
    """Validation and the saved-layout representation."""

    @staticmethod
    def test_defaults():
        prefs = ViewPreferences()
        assert prefs.page_size == DEFAULT_PAGE_SIZE
        assert prefs.workflow_sort is True
        assert prefs.sort_field is None

    @staticmethod
    def test_page_size_must_be_positive():
        with pytest.raises(ValueError, match="page_size"):
            ViewPreferences(page_size=0)

    @staticmethod
    def test_sort_field_and_direction_go_together():
        with pytest.raises(ValueError, match="set together"):
            ViewPreferences(sort_field=SortField.CAT)

    @staticmethod
    def test_to_dict_shape():
        prefs = ViewPreferences(
            sort_field=SortField.START,
            sort_direction=SortDirection.DESC,
            page_size=25,
            workflow_sort=False,
        )
        data = prefs.to_dict()
        assert data["sort_field"] == "start"
        assert data["sort_direction"] == "desc"
        assert data["page_size"] == 25
        assert data["workflow_sort_enabled"] is False
        assert set(data["filters"]) == {
            "adopter",
            "cat",
            "volunteer",
            "date_from",
            "date_to",
            "status",
            "status_group",
        }
        assert ViewPreferences.from_dict(data) == prefs

    @staticmethod
    def test_from_dict_tolerates_missing_and_extra_keys():
        prefs = ViewPreferences.from_dict({"page_size": 50, "saved_at": "yesterday"})
        assert prefs == ViewPreferences(page_size=50)


class TestViewState:
    """List-page interactions as pure state transitions."""

    @staticmethod
    def test_changing_a_filter_keeps_page_and_other_filters():
        state = ViewState(ViewPreferences(Filters(cat="tab")), current_page=3)
        new = state.set_filter("adopter", "al")
        assert new.current_page == 3
        assert new.filters == Filters(adopter="al", cat="tab")

    @staticmethod
    def test_reset_filters_returns_to_first_page():
        state = ViewState(ViewPreferences(Filters(cat="tab")), current_page=3)
        new = state.reset_filters()
        assert new.filters.is_empty
        assert new.current_page == 1

    @staticmethod
    def test_page_size_change_returns_to_first_page():
        new = ViewState(current_page=4).set_page_size(25)
        assert new.preferences.page_size == 25
        assert new.current_page == 1

    @staticmethod
    def test_toggle_sort_cycles_asc_desc_none():
        state = ViewState()
        state = state.toggle_sort(SortField.ADOPTER)
        assert state.preferences.sort_direction is SortDirection.ASC
        state = state.toggle_sort(SortField.ADOPTER)
        assert state.preferences.sort_direction is SortDirection.DESC
        state = state.toggle_sort(SortField.ADOPTER)
        assert state.preferences.sort_field is None
        assert state.preferences.sort_direction is None

    @staticmethod
    def test_toggle_to_another_field_starts_ascending():
        state = ViewState().set_sort(SortField.CAT, SortDirection.DESC)
        state = state.toggle_sort(SortField.START)
        assert state.preferences.sort_field is SortField.START
        assert state.preferences.sort_direction is SortDirection.ASC

    @staticmethod
    def test_set_sort_defaults_to_ascending_and_none_unsorts():
        state = ViewState().set_sort(SortField.END)
        assert state.preferences.sort_direction is SortDirection.ASC
        state = state.set_sort(None, SortDirection.DESC)
        assert state.preferences.sort_direction is None

    @staticmethod
    def test_load_layout_replaces_preferences_and_resets_page():
        prefs = ViewPreferences(Filters(volunteer="sam"), page_size=50)
        state = ViewState(current_page=7).load_layout(prefs)
        assert state.preferences == prefs
        assert state.current_page == 1

    @staticmethod
    def test_workflow_sort_toggle_keeps_page():
        state = ViewState(current_page=2).set_workflow_sort(False)
        assert state.preferences.workflow_sort is False
        assert state.current_page == 2

    @staticmethod
    def test_page_must_be_positive():
        with pytest.raises(ValueError, match="current_page"):
            ViewState(current_page=0)
