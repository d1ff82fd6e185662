"""Report controller wiring host events to the report components."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from validation_report_engine.chart_rendering import (
    ChartRendering,
    ChartSurface,
    completion_series,
    issue_severity_series,
    render_bar_chart,
    render_donut_chart,
    render_horizontal_bar_chart,
    render_trend_chart,
    validation_level_series,
)
from validation_report_engine.configuration.runtime_settings import (
    CHART_COMPLETION,
    CHART_ISSUES,
    CHART_LEVELS,
    CHART_NAMES,
    CHART_TREND,
    ReportSettings,
)
from validation_report_engine.history_tracking import (
    EmptyExportError,
    HistoryStore,
    write_export_document,
)
from validation_report_engine.result_filtering import (
    CooperativeScheduler,
    FilterOutcome,
    FilterState,
    ScheduledTask,
    SearchCoordinator,
    search_results_label,
)
from validation_report_engine.snapshot_diffing import (
    DiffResult,
    EntityChangeIndicator,
    NotableChanges,
    ProgressSummary,
    build_progress_summary,
    diff_snapshots,
    entity_change_indicators,
    notable_changes,
)
from validation_report_engine.snapshot_extraction import (
    FieldStatus,
    Snapshot,
    ValidationEntity,
    extract_snapshot,
)
from validation_report_engine.virtual_window import VirtualWindow, VirtualWindowRenderer

from . import announcements
from .announcements import AnnouncementSink
from .clipboard_copy import CopyMechanism, copy_with_fallback
from .quick_fixes import QuickFixAction, QuickFixError, available_quick_fixes, quick_fix_command

logger = logging.getLogger(__name__)


class ReportStateError(Exception):
    """Raised when an operation needs a loaded report and none is loaded."""


class ReportController:
    """Owns the filter state and the virtual window of one report session.

    A filter change always finishes recomputing the visible subset before the
    window is recomputed against it.
    """

    def __init__(
        self,
        settings: ReportSettings,
        *,
        history_store: HistoryStore,
        scheduler: CooperativeScheduler | None = None,
        announce: AnnouncementSink | None = None,
    ) -> None:
        self._settings = settings
        self._history_store = history_store
        self._scheduler = scheduler or CooperativeScheduler()
        self._announce = announce or announcements.discard_announcement
        self._filter_state = FilterState()
        self._coordinator = SearchCoordinator(
            self._filter_state,
            self._scheduler,
            debounce_ms=settings.search.debounce_ms,
            on_recompute=self._handle_filter_outcome,
        )
        self._renderer = VirtualWindowRenderer(
            item_height=settings.window.item_height,
            viewport_height=settings.window.viewport_height,
            activation_threshold=settings.window.activation_threshold,
        )
        self._snapshot: Snapshot | None = None
        self._previous: Snapshot | None = None
        self._diff: DiffResult | None = None
        self._last_outcome: FilterOutcome | None = None
        self._collapsed: set[str] = set()

    @property
    def filter_state(self) -> FilterState:
        return self._filter_state

    @property
    def window(self) -> VirtualWindow:
        return self._renderer.window

    @property
    def scheduler(self) -> CooperativeScheduler:
        return self._scheduler

    @property
    def snapshot(self) -> Snapshot:
        if self._snapshot is None:
            raise ReportStateError("No report has been loaded.")
        return self._snapshot

    @property
    def previous_snapshot(self) -> Snapshot | None:
        return self._previous

    @property
    def diff(self) -> DiffResult | None:
        return self._diff

    @property
    def history_degraded(self) -> bool:
        return self._history_store.degraded

    @property
    def last_outcome(self) -> FilterOutcome | None:
        return self._last_outcome

    def load_report(
        self,
        host_records: Iterable[Mapping[str, Any]],
        *,
        timestamp: datetime | None = None,
    ) -> Snapshot:
        """Extract the snapshot, compare it to the latest run and record it."""
        snapshot = extract_snapshot(host_records, timestamp=timestamp)
        self._history_store.load()
        self._previous = self._history_store.latest()
        self._diff = diff_snapshots(self._previous, snapshot)
        self._history_store.append(snapshot)

        self._snapshot = snapshot
        self._collapsed = {entity.id for entity in snapshot.entities}
        self._coordinator.bind(snapshot.entities)
        self._coordinator.recompute()
        return snapshot

    def on_search_input(self, text: str) -> ScheduledTask:
        return self._coordinator.set_query(text)

    def on_search_commit(self, text: str) -> FilterOutcome:
        return self._coordinator.commit_query(text)

    def on_search_cleared(self) -> FilterOutcome:
        outcome = self._coordinator.clear_query()
        self._announce(announcements.SEARCH_CLEARED)
        return outcome

    def on_entity_filter(self, value: str) -> FilterOutcome:
        outcome = self._coordinator.set_entity_filter(value)
        self._announce(
            announcements.filter_changed(
                f"{announcements.ENTITY_NOUN} filter", self._filter_state.entity_filter.value
            )
        )
        return outcome

    def on_attribute_filter(self, value: str) -> FilterOutcome:
        outcome = self._coordinator.set_attribute_filter(value)
        self._announce(
            announcements.filter_changed(
                "Attribute filter", self._filter_state.attribute_filter.value
            )
        )
        return outcome

    def advance_clock(self, elapsed_ms: int) -> int:
        """Let pending debounced work run; returns the number of tasks executed."""
        return self._scheduler.advance(elapsed_ms)

    def on_scroll(self, scroll_offset: float) -> VirtualWindow:
        return self._renderer.on_scroll(scroll_offset)

    def entity_at(self, index: int) -> ValidationEntity:
        return self._renderer.entity_at(index)

    def materialized_entities(self) -> tuple[ValidationEntity, ...]:
        return self._renderer.materialized()

    def visible_fields(self, entity: ValidationEntity) -> dict[str, FieldStatus]:
        return self._coordinator.visible_fields(entity)

    def search_results_label(self) -> str | None:
        if self._last_outcome is None:
            return None
        return search_results_label(self._last_outcome, self._filter_state.search_query)

    def is_collapsed(self, entity_id: str) -> bool:
        return entity_id in self._collapsed

    def toggle_entity(self, entity_id: str) -> bool:
        """Flip the collapsed state of one entity card; returns the new collapsed flag."""
        entity = self.snapshot.entity_by_id().get(entity_id)
        if entity is None:
            raise ValueError(f"Unknown entity id: {entity_id}")
        if entity_id in self._collapsed:
            self._collapsed.discard(entity_id)
            collapsed = False
        else:
            self._collapsed.add(entity_id)
            collapsed = True
        self._announce(announcements.card_toggled(entity.name, collapsed))
        return collapsed

    def render_charts(
        self, surfaces: Mapping[str, ChartSurface | None]
    ) -> dict[str, ChartRendering]:
        """Render every chart that has a surface; charts without one are skipped."""
        snapshot = self.snapshot
        renderers: dict[str, Callable[[ChartSurface], ChartRendering]] = {
            CHART_COMPLETION: lambda surface: render_donut_chart(
                completion_series(snapshot), surface, caption=announcements.ENTITY_NOUN
            ),
            CHART_ISSUES: lambda surface: render_bar_chart(
                issue_severity_series(snapshot), surface
            ),
            CHART_LEVELS: lambda surface: render_horizontal_bar_chart(
                validation_level_series(snapshot), surface
            ),
            CHART_TREND: lambda surface: render_trend_chart(
                self._history_store.trend_points(), surface
            ),
        }
        renderings: dict[str, ChartRendering] = {}
        for name in CHART_NAMES:
            surface = surfaces.get(name)
            if surface is None:
                logger.warning("No drawing surface for chart '%s'; skipping it.", name)
                continue
            renderings[name] = renderers[name](surface)
        return renderings

    def export_history(
        self,
        output_dir: Path | str,
        *,
        exported_at: datetime | None = None,
    ) -> Path:
        """Write the history export document.

        Raises:
          EmptyExportError: If there is no history; nothing is written.
        """
        try:
            document = self._history_store.export(self._diff, exported_at=exported_at)
        except EmptyExportError:
            self._announce(announcements.EXPORT_EMPTY)
            raise
        output_path = write_export_document(document, output_dir, exported_at=exported_at)
        self._announce(announcements.EXPORT_SUCCEEDED)
        return output_path

    def copy_text(
        self,
        text: str,
        primary: CopyMechanism,
        fallback: CopyMechanism | None = None,
    ) -> bool:
        copied = copy_with_fallback(text, primary, fallback)
        self._announce(announcements.COPY_SUCCEEDED if copied else announcements.COPY_FAILED)
        return copied

    def quick_fix_command(self, action: str | QuickFixAction, entity_id: str, field: str) -> str:
        """Build the quick-fix command for a field of the loaded report.

        Raises:
          QuickFixError: If the entity or field is not in the report, or the
            action does not apply to the field in its current state.
        """
        parsed_action = QuickFixAction.parse(action)
        entity = self.snapshot.entity_by_id().get(entity_id)
        if entity is None:
            raise QuickFixError(f"Unknown entity id: {entity_id}")
        status = entity.field_statuses.get(field)
        if status is None:
            raise QuickFixError(f"{entity.name} has no field '{field}'.")
        if parsed_action not in available_quick_fixes(status):
            raise QuickFixError(
                f"Quick fix '{parsed_action.value}' does not apply to {entity.name} {field}."
            )
        return quick_fix_command(parsed_action, entity.id, field)

    def copy_quick_fix(
        self,
        action: str | QuickFixAction,
        entity_id: str,
        field: str,
        primary: CopyMechanism,
        fallback: CopyMechanism | None = None,
    ) -> bool:
        return self.copy_text(self.quick_fix_command(action, entity_id, field), primary, fallback)

    def progress_summary(self) -> ProgressSummary:
        return build_progress_summary(self._diff)

    def notable_changes(self) -> NotableChanges:
        return notable_changes(self._diff)

    def change_indicators(self) -> dict[str, EntityChangeIndicator]:
        return entity_change_indicators(self._previous, self.snapshot, self._diff)

    def _handle_filter_outcome(self, outcome: FilterOutcome) -> None:
        self._last_outcome = outcome
        self._renderer.on_filter_changed(outcome.visible)
        query = self._filter_state.search_query
        if query:
            self._announce(announcements.search_results(query, outcome.visible_count))
        else:
            self._announce(announcements.filter_results(outcome.visible_count))
