"""Virtual window arithmetic for long filtered lists."""

from __future__ import annotations

import math
from collections.abc import Sequence

from validation_report_engine.snapshot_extraction.snapshot_models import ValidationEntity

from .window_models import VirtualWindow, WindowMode

DEFAULT_ITEM_HEIGHT = 120
DEFAULT_VIEWPORT_HEIGHT = 600
DEFAULT_ACTIVATION_THRESHOLD = 20
BUFFER_ITEMS = 2


class VirtualWindowRenderer:
    """Computes which slice of the visible entities to materialize.

    Lists shorter than the activation threshold are materialized whole. Every
    scroll update costs time proportional to the window, not to the list.
    """

    def __init__(
        self,
        *,
        item_height: int = DEFAULT_ITEM_HEIGHT,
        viewport_height: int = DEFAULT_VIEWPORT_HEIGHT,
        activation_threshold: int = DEFAULT_ACTIVATION_THRESHOLD,
    ) -> None:
        self._visible: Sequence[ValidationEntity] = ()
        self._scroll_offset: float = 0
        self.configure(item_height, viewport_height, activation_threshold)

    def configure(
        self,
        item_height: int,
        viewport_height: int,
        activation_threshold: int = DEFAULT_ACTIVATION_THRESHOLD,
    ) -> VirtualWindow:
        if item_height <= 0:
            raise ValueError("item_height must be greater than zero.")
        if viewport_height < 0:
            raise ValueError("viewport_height must not be negative.")
        if activation_threshold < 0:
            raise ValueError("activation_threshold must not be negative.")
        self._item_height = item_height
        self._viewport_height = viewport_height
        self._activation_threshold = activation_threshold
        self._visible_items_count = math.ceil(viewport_height / item_height) + BUFFER_ITEMS
        self._window = self._compute()
        return self._window

    @property
    def window(self) -> VirtualWindow:
        return self._window

    @property
    def windowing_enabled(self) -> bool:
        return len(self._visible) >= self._activation_threshold

    def on_filter_changed(self, visible_entities: Sequence[ValidationEntity]) -> VirtualWindow:
        """Adopt a new filtered list and scroll back to the top."""
        self._visible = visible_entities
        self._scroll_offset = 0
        self._window = self._compute()
        return self._window

    def on_scroll(self, scroll_offset: float) -> VirtualWindow:
        self._scroll_offset = scroll_offset
        self._window = self._compute()
        return self._window

    def entity_at(self, index: int) -> ValidationEntity:
        """Return the visible entity at ``index`` of the filtered list."""
        if not 0 <= index < len(self._visible):
            raise IndexError(f"Index {index} outside filtered list of {len(self._visible)}.")
        return self._visible[index]

    def materialized(self) -> tuple[ValidationEntity, ...]:
        """Entities at ``[start_index, end_index)``, and nothing else."""
        return tuple(self.entity_at(index) for index in self._window.index_range)

    def _compute(self) -> VirtualWindow:
        count = len(self._visible)
        if count == 0:
            return self._build(WindowMode.EMPTY, count, offset=0, start=0, end=0)
        if count < self._activation_threshold:
            return self._build(WindowMode.MATERIALIZE_ALL, count, offset=0, start=0, end=count)

        max_offset = max(0, count * self._item_height - self._viewport_height)
        offset = int(min(max(0, self._scroll_offset), max_offset))
        start = max(0, int(offset // self._item_height))
        end = min(start + self._visible_items_count, count)
        return self._build(WindowMode.WINDOWED, count, offset=offset, start=start, end=end)

    def _build(
        self,
        mode: WindowMode,
        count: int,
        *,
        offset: int,
        start: int,
        end: int,
    ) -> VirtualWindow:
        windowed = mode == WindowMode.WINDOWED
        return VirtualWindow(
            scroll_offset=offset,
            item_height=self._item_height,
            viewport_height=self._viewport_height,
            visible_items_count=self._visible_items_count,
            filtered_count=count,
            start_index=start,
            end_index=end,
            top_spacer_size=start * self._item_height if windowed else 0,
            bottom_spacer_size=(count - end) * self._item_height if windowed else 0,
            mode=mode,
        )
