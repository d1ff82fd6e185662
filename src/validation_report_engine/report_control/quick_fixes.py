"""Quick-fix commands offered for individual entity fields.

A quick fix is never applied by the report itself. The report builds the
host tool invocation that changes the field marker, and the user copies it
to a terminal.
"""

from __future__ import annotations

import shlex
from enum import Enum

from validation_report_engine.snapshot_extraction import FieldStatus, SeverityClassification

DEFAULT_COMMAND_PREFIX = "node scripts/validation-cli.js"


class QuickFixError(ValueError):
    """Raised when a quick-fix command cannot be built."""


class QuickFixAction(str, Enum):
    """Field marker changes the host tool understands."""

    ACCEPT_ISSUE = "accept-issue"
    REMOVE_ACCEPTED = "remove-accepted"
    SET_IN_GAME_VALIDATED = "set-in-game-validated"
    REMOVE_IN_GAME_VALIDATED = "remove-in-game-validated"

    @classmethod
    def parse(cls, value: str | QuickFixAction) -> QuickFixAction:
        try:
            return cls(value)
        except ValueError as exc:
            allowed = ", ".join(item.value for item in cls)
            raise QuickFixError(
                f"Unknown quick-fix action '{value}'. Expected one of: {allowed}."
            ) from exc

    @property
    def title(self) -> str:
        return _ACTION_TITLES[self]


_ACTION_TITLES = {
    QuickFixAction.ACCEPT_ISSUE: "Accept Issue",
    QuickFixAction.REMOVE_ACCEPTED: "Remove Accepted Status",
    QuickFixAction.SET_IN_GAME_VALIDATED: "Mark as In-Game Validated",
    QuickFixAction.REMOVE_IN_GAME_VALIDATED: "Remove In-Game Validation",
}


def quick_fix_command(
    action: str | QuickFixAction,
    entity_id: str,
    field: str,
    *,
    command_prefix: str = DEFAULT_COMMAND_PREFIX,
) -> str:
    """Build the shell command that applies ``action`` to one field.

    Raises:
      QuickFixError: If the action is unknown or the id or field is blank.
    """
    parsed_action = QuickFixAction.parse(action)
    entity_id = entity_id.strip()
    field = field.strip()
    if not entity_id:
        raise QuickFixError("Quick-fix entity id must not be empty.")
    if not field:
        raise QuickFixError("Quick-fix field must not be empty.")
    arguments = shlex.join([parsed_action.value, entity_id, field])
    return f"{command_prefix} {arguments}"


def available_quick_fixes(status: FieldStatus) -> tuple[QuickFixAction, ...]:
    """Actions that make sense for a field in its current state.

    Accurate fields only toggle the in-game marker. Every other field can also
    be accepted, or have its acceptance removed.
    """
    in_game = (
        QuickFixAction.REMOVE_IN_GAME_VALIDATED
        if status.in_game_validated
        else QuickFixAction.SET_IN_GAME_VALIDATED
    )
    if status.status == SeverityClassification.ACCURATE:
        return (in_game,)
    acceptance = (
        QuickFixAction.REMOVE_ACCEPTED if status.accepted else QuickFixAction.ACCEPT_ISSUE
    )
    return (acceptance, in_game)
