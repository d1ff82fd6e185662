"""Progress summaries and change indicators derived from a diff."""

from __future__ import annotations

from validation_report_engine.snapshot_extraction.snapshot_models import Snapshot

from .diff_models import (
    DiffResult,
    EntityChangeIndicator,
    FieldBadge,
    FieldChange,
    FieldChangeIndicator,
    NotableChanges,
    ProgressSummary,
    TrendDirection,
)
from .snapshot_differ import is_regressed_transition, is_resolved_transition

MAX_NOTABLE_IMPROVEMENTS = 5
MAX_NOTABLE_REGRESSIONS = 3
MIN_TREND_DELTA = 1


def notable_changes(diff: DiffResult | None) -> NotableChanges:
    """Pick the most significant resolved fields and the fields needing attention."""
    if diff is None:
        return NotableChanges(improvements=(), regressions=())
    improvements = sorted(
        (change for change in diff.field_changes if is_resolved_transition(change)),
        key=lambda change: change.completeness_delta,
        reverse=True,
    )
    regressions = [change for change in diff.field_changes if is_regressed_transition(change)]
    return NotableChanges(
        improvements=tuple(improvements[:MAX_NOTABLE_IMPROVEMENTS]),
        regressions=tuple(regressions[:MAX_NOTABLE_REGRESSIONS]),
    )


def entity_change_indicators(
    previous: Snapshot | None,
    current: Snapshot,
    diff: DiffResult | None,
) -> dict[str, EntityChangeIndicator]:
    """Build per-entity trend arrows and field badges keyed by entity id."""
    if previous is None or diff is None:
        return {}

    previous_by_id = previous.entity_by_id()
    changes_by_entity: dict[str, list[FieldChange]] = {}
    for change in diff.field_changes:
        changes_by_entity.setdefault(change.entity_id, []).append(change)

    indicators: dict[str, EntityChangeIndicator] = {}
    for entity in current.entities:
        previous_entity = previous_by_id.get(entity.id)
        if previous_entity is None:
            continue
        delta = entity.completeness_percent - previous_entity.completeness_percent
        trend: TrendDirection | None = None
        trend_label: str | None = None
        if abs(delta) >= MIN_TREND_DELTA:
            trend = TrendDirection.UP if delta > 0 else TrendDirection.DOWN
            trend_label = f"+{delta}%" if delta > 0 else f"{delta}%"
        field_indicators = tuple(
            _field_indicator(change) for change in changes_by_entity.get(entity.id, ())
        )
        if trend is None and not field_indicators:
            continue
        indicators[entity.id] = EntityChangeIndicator(
            entity_id=entity.id,
            completeness_delta=delta,
            trend=trend,
            trend_label=trend_label,
            field_indicators=field_indicators,
        )
    return indicators


def _field_indicator(change: FieldChange) -> FieldChangeIndicator:
    badge = FieldBadge.CHANGED
    title = "Field status changed"
    transition = f"{change.previous_status.value} → {change.current_status.value}"
    if change.status_changed:
        if is_resolved_transition(change):
            badge = FieldBadge.IMPROVED
            title = f"Field improved: {transition}"
        elif is_regressed_transition(change):
            badge = FieldBadge.REGRESSED
            title = f"Field regressed: {transition}"
    if change.accepted_changed:
        badge = FieldBadge.ACCEPTED if change.accepted else FieldBadge.UNACCEPTED
        title += " (Accepted)" if change.accepted else " (No longer accepted)"
    if change.validation_flag_changed:
        badge = FieldBadge.IN_GAME
        title += " (In-game validation changed)"
    return FieldChangeIndicator(field=change.field, badge=badge, title=title)


def build_progress_summary(diff: DiffResult | None) -> ProgressSummary:
    """Describe the progress since the previous run in a few lines."""
    if diff is None:
        return ProgressSummary(
            first_run=True,
            lines=(
                "This is your first validation report!",
                "Future reports will show progress comparisons here.",
            ),
        )

    completeness = diff.overall_completeness_delta
    completeness_text = f"+{completeness:.1f}%" if completeness > 0 else f"{completeness:.1f}%"
    issues = diff.total_issues_delta
    issues_text = f"+{issues}" if issues > 0 else str(issues)
    counts = diff.per_entity_counts

    breakdown = [f"{counts.improved} improved"]
    if counts.regressed > 0:
        breakdown.append(f"{counts.regressed} regressed")
    breakdown.append(f"{counts.unchanged} unchanged")

    lines = [
        f"Progress since {diff.previous_timestamp.date().isoformat()}",
        f"Average completeness: {completeness_text}",
        f"Total issues: {issues_text}",
        ", ".join(breakdown),
    ]
    if diff.field_changes:
        lines.append(f"{len(diff.field_changes)} field status changes detected")
    return ProgressSummary(first_run=False, lines=tuple(lines))
