from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from json_store import read_json

DEFAULT_URI = "memory://"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Connection
    connection_uri: str
    data_dir: Path | None

    # Seed object written to an empty collection on first load
    seed_file: Path | None

    # Debug
    log_writes: bool

    def load_seed(self) -> dict[str, Any] | None:
        if self.seed_file is None:
            return None
        raw = read_json(self.seed_file)
        return raw if isinstance(raw, dict) else None


def get_settings(env_file: str | None = "local.env") -> Settings:
    if env_file:
        load_dotenv(env_file)

    connection_uri = os.getenv("QUICKMIRROR_URI", DEFAULT_URI).strip() or DEFAULT_URI

    raw_data_dir = os.getenv("QUICKMIRROR_DATA_DIR", "").strip()
    data_dir = Path(raw_data_dir).expanduser() if raw_data_dir else None

    raw_seed = os.getenv("QUICKMIRROR_SEED_FILE", "").strip()
    seed_file = Path(raw_seed).expanduser() if raw_seed else None

    log_writes = _env_bool("QUICKMIRROR_LOG_WRITES", False)

    return Settings(
        connection_uri=connection_uri,
        data_dir=data_dir,
        seed_file=seed_file,
        log_writes=log_writes,
    )
