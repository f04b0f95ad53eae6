from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any | None:
    """
    Read a JSON document from disk.

    Returns None for missing files, empty files, or unparseable JSON so that a
    collection file which was never written reads as an empty collection.
    """
    if not path.exists():
        return None
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning("JSON LOAD: ignoring unparseable file %s: %r", path, e)
        return None


def atomic_write_json(path: Path, payload: Any, *, indent: int | None = 2) -> None:
    """
    Write JSON to a sibling temp file, then swap it into place.

    Key order is kept as-is: collection files list documents in insertion order.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=indent, ensure_ascii=False)
        f.write("\n")
    tmp_path.replace(path)
