"""Clipboard copy with a legacy fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

CopyMechanism = Callable[[str], None]


class ClipboardError(Exception):
    """Raised by a copy mechanism that could not place text on the clipboard."""


def copy_with_fallback(
    text: str,
    primary: CopyMechanism,
    fallback: CopyMechanism | None = None,
) -> bool:
    """Copy ``text`` with ``primary``, then ``fallback``; return whether one succeeded."""
    try:
        primary(text)
        return True
    except ClipboardError as exc:
        logger.warning("Clipboard copy failed, trying fallback: %s", exc)
    if fallback is None:
        logger.error("No fallback copy mechanism available.")
        return False
    try:
        fallback(text)
        return True
    except ClipboardError as exc:
        logger.error("Fallback copy failed: %s", exc)
        return False
