"""Virtual window domain exports."""

from .window_models import VirtualWindow, WindowMode
from .window_renderer import (
    DEFAULT_ACTIVATION_THRESHOLD,
    DEFAULT_ITEM_HEIGHT,
    DEFAULT_VIEWPORT_HEIGHT,
    VirtualWindowRenderer,
)

__all__ = [
    "DEFAULT_ACTIVATION_THRESHOLD",
    "DEFAULT_ITEM_HEIGHT",
    "DEFAULT_VIEWPORT_HEIGHT",
    "VirtualWindow",
    "VirtualWindowRenderer",
    "WindowMode",
]
