"""Translate domain errors into Click errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import click

from felinefinder.domain.errors import DomainError
from felinefinder.interfaces.layout_store import LayoutStoreError


@contextmanager
def reported_as_click_errors() -> Iterator[None]:
    """Re-raise domain and layout errors as `click.ClickException` (exit code 1).

    Anything else propagates unchanged so that unexpected failures keep their
    traceback in the logs.
    """
    try:
        yield
    except (DomainError, LayoutStoreError) as e:
        raise click.ClickException(str(e)) from e
