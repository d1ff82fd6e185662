"""Virtual window domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class WindowMode(str, Enum):
    """How the rendering collaborator should materialize the filtered list."""

    WINDOWED = "windowed"
    MATERIALIZE_ALL = "materialize_all"
    EMPTY = "empty"


@dataclass(frozen=True)
class VirtualWindow:  # pylint: disable=too-many-instance-attributes
    """Index range to materialize plus the filler sizes around it.

    ``top_spacer_size + (end_index - start_index) * item_height +
    bottom_spacer_size`` always equals ``filtered_count * item_height``.
    """

    scroll_offset: int
    item_height: int
    viewport_height: int
    visible_items_count: int
    filtered_count: int
    start_index: int
    end_index: int
    top_spacer_size: int
    bottom_spacer_size: int
    mode: WindowMode

    @property
    def materialized_count(self) -> int:
        return self.end_index - self.start_index

    @property
    def index_range(self) -> range:
        return range(self.start_index, self.end_index)
