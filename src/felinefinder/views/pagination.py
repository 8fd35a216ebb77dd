"""Compact page-number strip for the booking list pager."""

ELLIPSIS = "..."
MAX_VISIBLE_PAGES = 5

PageMarker = int | str


def page_numbers(
    current_page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES
) -> list[PageMarker]:
    """Return the page buttons to show, with `ELLIPSIS` for skipped ranges.

    All pages are listed when they fit. Otherwise a window of up to
    `max_visible` pages starting two before the current page is shown, framed
    by the first and last page when those fall outside it:

    >>> page_numbers(6, 12)
    [1, '...', 4, 5, 6, 7, 8, '...', 12]
    """
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    start = max(1, current_page - 2)
    end = min(total_pages, start + max_visible - 1)

    pages: list[PageMarker] = []
    if start > 1:
        pages.append(1)
        if start > 2:
            pages.append(ELLIPSIS)
    pages.extend(range(start, end + 1))
    if end < total_pages:
        if end < total_pages - 1:
            pages.append(ELLIPSIS)
        pages.append(total_pages)
    return pages
