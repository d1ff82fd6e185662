"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "report-config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Report configuration for validation-report-engine.
# Every section is optional; the values below are the defaults.

history:
  # JSON file holding the last 10 validation snapshots.
  # Relative paths resolve against this file's directory.
  path: ".validation-history.json"
  storage_key: "pokemonValidationHistory"

virtual_window:
  # Estimated height of one collapsed entity card, in pixels.
  item_height: 120
  viewport_height: 600
  # Lists shorter than this are rendered whole.
  activation_threshold: 20

search:
  # Quiet period after the last keystroke before the search is applied.
  debounce_ms: 300

charts:
  # Remove a chart (or set it to null) to skip rendering it.
  completion:
    width: 300
    height: 300
  issues:
    width: 400
    height: 300
  levels:
    width: 400
    height: 300
  trend:
    width: 500
    height: 300
"""


def build_placeholder_configuration() -> str:
    """Build the commented default report configuration."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the default report configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Report configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
