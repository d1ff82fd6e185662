"""Filter domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from validation_report_engine.snapshot_extraction.snapshot_models import ValidationEntity

COMPLETE_THRESHOLD = 100
HIGH_THRESHOLD = 75


class EntityFilter(str, Enum):
    """Entity-level completeness filter."""

    ALL = "all"
    COMPLETE = "complete"
    HIGH = "high"
    LOW = "low"

    @classmethod
    def parse(cls, value: str | EntityFilter) -> EntityFilter:
        try:
            return cls(value)
        except ValueError as exc:
            allowed = ", ".join(item.value for item in cls)
            raise ValueError(
                f"Unknown entity filter '{value}'. Expected one of: {allowed}."
            ) from exc


class AttributeFilter(str, Enum):
    """Field-level filter applied inside visible entities."""

    ALL = "all"
    VALIDATED = "validated"
    ISSUES = "issues"

    @classmethod
    def parse(cls, value: str | AttributeFilter) -> AttributeFilter:
        try:
            return cls(value)
        except ValueError as exc:
            allowed = ", ".join(item.value for item in cls)
            raise ValueError(
                f"Unknown attribute filter '{value}'. Expected one of: {allowed}."
            ) from exc


@dataclass
class FilterState:
    """Current search and filter predicates."""

    search_query: str = ""
    entity_filter: EntityFilter = EntityFilter.ALL
    attribute_filter: AttributeFilter = AttributeFilter.ALL


@dataclass(frozen=True)
class FilterOutcome:
    """Result of one recomputation of the visible subset."""

    visible: tuple[ValidationEntity, ...]
    visible_count: int
    total_count: int
