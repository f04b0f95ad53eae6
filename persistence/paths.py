from __future__ import annotations

import re
from pathlib import Path

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_.-]")


def project_root() -> Path:
    # persistence/paths.py -> persistence -> project root
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    return ensure_dir(project_root() / "data")


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def collection_file(base_dir: Path, collection_name: str) -> Path:
    safe = _UNSAFE_CHARS_RE.sub("_", collection_name.strip()) or "default"
    return Path(base_dir) / f"{safe}.json"
