"""Result filtering domain exports."""

from .cooperative_scheduler import CooperativeScheduler, ScheduledTask
from .filter_state import AttributeFilter, EntityFilter, FilterOutcome, FilterState
from .search_coordinator import (
    DEFAULT_DEBOUNCE_MS,
    SearchCoordinator,
    matches_attribute_filter,
    matches_entity_filter,
    matches_search,
    search_results_label,
)

__all__ = [
    "AttributeFilter",
    "CooperativeScheduler",
    "DEFAULT_DEBOUNCE_MS",
    "EntityFilter",
    "FilterOutcome",
    "FilterState",
    "ScheduledTask",
    "SearchCoordinator",
    "matches_attribute_filter",
    "matches_entity_filter",
    "matches_search",
    "search_results_label",
]
