"""Load and save the minidash config file."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from minidash.config.schema import Config


def get_config_path() -> Path:
    """Return the default config file path."""
    from minidash.utils.helpers import get_data_path

    return get_data_path() / "config.json"


def load_config(path: Path | None = None) -> Config:
    """Load config from disk, falling back to defaults.

    Environment variables (``MINIDASH_DASHBOARD__POLL_INTERVAL_S=5``) override
    values from the file.
    """
    target = path or get_config_path()
    if not target.exists():
        return Config()

    try:
        data = json.loads(target.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("top-level value must be an object")
        return Config(**data)
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning(f"Failed to load config from {target}: {exc}; using defaults")
        return Config()


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write config to disk and return the path written."""
    target = path or get_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(mode="json")
    target.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return target
