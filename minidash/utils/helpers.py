"""Filesystem helpers."""

from __future__ import annotations

import os
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if missing and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Return the minidash data directory (``~/.minidash`` by default)."""
    override = os.environ.get("MINIDASH_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".minidash"
