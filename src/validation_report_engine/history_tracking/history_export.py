"""Export document writer."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

EXPORT_FILENAME_PREFIX = "validation-history"


def write_export_document(
    document: Mapping[str, Any],
    output_dir: Path | str,
    *,
    exported_at: datetime | None = None,
) -> Path:
    """Write the export document as ``validation-history-YYYY-MM-DD.json``.

    Returns:
      The resolved path of the written file.
    """
    stamp = (exported_at or datetime.now(UTC)).strftime("%Y-%m-%d")
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    output_path = destination / f"{EXPORT_FILENAME_PREFIX}-{stamp}.json"
    output_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    return output_path.resolve()
