"""Status strings pushed to the announcement sink."""

from __future__ import annotations

from collections.abc import Callable

AnnouncementSink = Callable[[str], None]

ENTITY_NOUN = "Pokemon"
SEARCH_CLEARED = "Search cleared"
COPY_SUCCEEDED = "Command copied to clipboard"
COPY_FAILED = "Copy to clipboard failed"
EXPORT_SUCCEEDED = "Historical data exported successfully"
EXPORT_EMPTY = "No historical data available to export."


def filter_results(count: int) -> str:
    return f"{count} {ENTITY_NOUN} shown"


def search_results(query: str, count: int) -> str:
    return f'Search for "{query}" found {count} {ENTITY_NOUN}'


def filter_changed(filter_name: str, value: str) -> str:
    return f"{filter_name} changed to {value}"


def card_toggled(name: str, collapsed: bool) -> str:
    return f"{name or ENTITY_NOUN} card {'collapsed' if collapsed else 'expanded'}"


def discard_announcement(_message: str) -> None:
    """Sink used when nobody listens."""
