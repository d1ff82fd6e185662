"""Search and filter coordination service."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from validation_report_engine.snapshot_extraction.snapshot_models import (
    FieldStatus,
    ValidationEntity,
)

from .cooperative_scheduler import CooperativeScheduler, ScheduledTask
from .filter_state import (
    COMPLETE_THRESHOLD,
    HIGH_THRESHOLD,
    AttributeFilter,
    EntityFilter,
    FilterOutcome,
    FilterState,
)

DEFAULT_DEBOUNCE_MS = 300


def matches_search(entity: ValidationEntity, query: str) -> bool:
    """Case-insensitive substring match on the entity name; empty query matches all."""
    normalized = query.strip().lower()
    return not normalized or normalized in entity.name.lower()


def matches_entity_filter(entity: ValidationEntity, entity_filter: EntityFilter) -> bool:
    if entity_filter == EntityFilter.COMPLETE:
        return entity.completeness_percent >= COMPLETE_THRESHOLD
    if entity_filter == EntityFilter.HIGH:
        return entity.completeness_percent >= HIGH_THRESHOLD
    if entity_filter == EntityFilter.LOW:
        return entity.completeness_percent < HIGH_THRESHOLD
    return True


def matches_attribute_filter(status: FieldStatus, attribute_filter: AttributeFilter) -> bool:
    if attribute_filter == AttributeFilter.VALIDATED:
        return status.is_validated
    if attribute_filter == AttributeFilter.ISSUES:
        return not status.is_validated
    return True


def search_results_label(outcome: FilterOutcome, query: str) -> str | None:
    """Return the ``N of M found`` label, or None when no search is active."""
    if not query.strip():
        return None
    return f"{outcome.visible_count} of {outcome.total_count} found"


class SearchCoordinator:
    """Owns the predicate updates and recomputes the visible subset.

    Text input is debounced on the scheduler: each keystroke cancels the
    pending recomputation and schedules a new one. ``commit_query`` applies
    the text immediately.
    """

    def __init__(
        self,
        state: FilterState,
        scheduler: CooperativeScheduler,
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        on_recompute: Callable[[FilterOutcome], None] | None = None,
    ) -> None:
        if debounce_ms < 0:
            raise ValueError("debounce_ms must not be negative.")
        self._state = state
        self._scheduler = scheduler
        self._debounce_ms = debounce_ms
        self._on_recompute = on_recompute
        self._entities: tuple[ValidationEntity, ...] = ()
        self._pending: ScheduledTask | None = None

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def has_pending_query(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    def bind(self, entities: Sequence[ValidationEntity]) -> None:
        """Set the ordered entity list the predicates run against."""
        self._entities = tuple(entities)

    def set_query(self, text: str) -> ScheduledTask:
        """Schedule the query to be applied after the quiet period."""
        self._cancel_pending()
        self._pending = self._scheduler.schedule(
            self._debounce_ms, lambda: self._apply_query(text)
        )
        return self._pending

    def commit_query(self, text: str) -> FilterOutcome:
        """Apply the query now, dropping any pending debounced update."""
        self._cancel_pending()
        return self._apply_query(text)

    def clear_query(self) -> FilterOutcome:
        return self.commit_query("")

    def set_entity_filter(self, value: str | EntityFilter) -> FilterOutcome:
        self._state.entity_filter = EntityFilter.parse(value)
        return self.recompute()

    def set_attribute_filter(self, value: str | AttributeFilter) -> FilterOutcome:
        self._state.attribute_filter = AttributeFilter.parse(value)
        return self.recompute()

    def recompute(self) -> FilterOutcome:
        visible = self.compute_visible(self._entities)
        outcome = FilterOutcome(
            visible=visible,
            visible_count=len(visible),
            total_count=len(self._entities),
        )
        if self._on_recompute is not None:
            self._on_recompute(outcome)
        return outcome

    def compute_visible(
        self, entities: Sequence[ValidationEntity]
    ) -> tuple[ValidationEntity, ...]:
        """Stable filter of ``entities`` by search text and entity filter."""
        query = self._state.search_query
        entity_filter = self._state.entity_filter
        return tuple(
            entity
            for entity in entities
            if matches_search(entity, query) and matches_entity_filter(entity, entity_filter)
        )

    def visible_fields(self, entity: ValidationEntity) -> dict[str, FieldStatus]:
        """Fields of ``entity`` that pass the attribute filter, in their original order."""
        attribute_filter = self._state.attribute_filter
        return {
            field_name: status
            for field_name, status in entity.field_statuses.items()
            if matches_attribute_filter(status, attribute_filter)
        }

    def _apply_query(self, text: str) -> FilterOutcome:
        self._pending = None
        self._state.search_query = text.strip().lower()
        return self.recompute()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
