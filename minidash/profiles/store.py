"""Profile stores: where the list of known profiles comes from."""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path
from typing import Protocol

from loguru import logger

from minidash.errors import ProfileStoreError
from minidash.status.backend import CommandRunner, run_command


class ProfileStore(Protocol):
    def list_profiles(self) -> list[str]:
        ...


def minikube_home(configured: str = "") -> Path:
    """Resolve the ``.minikube`` directory the same way the minikube CLI does."""
    raw = (configured or os.environ.get("MINIKUBE_HOME", "")).strip()
    if not raw:
        return Path.home() / ".minikube"
    base = Path(raw).expanduser()
    if base.name != ".minikube":
        base = base / ".minikube"
    return base


class MinikubeCLIProfileStore:
    """Lists valid profiles via ``minikube profile list -o json``."""

    def __init__(
        self,
        command: str = "minikube",
        timeout_s: float = 10.0,
        runner: CommandRunner | None = None,
    ) -> None:
        self.command = command
        self.timeout_s = timeout_s
        self._runner = runner or run_command

    def list_profiles(self) -> list[str]:
        args = [self.command, "profile", "list", "-o", "json"]
        try:
            result = self._runner(args, self.timeout_s)
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise ProfileStoreError(f"{self.command} profile list failed: {exc}") from exc

        text = result.stdout.strip()
        if not text:
            raise ProfileStoreError(
                result.stderr.strip() or f"{self.command} profile list exited {result.returncode}"
            )
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ProfileStoreError(f"unreadable profile list: {exc}") from exc
        if not isinstance(payload, dict):
            raise ProfileStoreError("unexpected profile list payload")

        # Invalid profiles are reported separately and never monitored.
        valid = payload.get("valid") or []
        names = [str(p.get("Name", "")) for p in valid if isinstance(p, dict)]
        invalid = payload.get("invalid") or []
        if invalid:
            logger.debug(f"[registry] Ignoring {len(invalid)} invalid profile(s)")
        return names


class FileProfileStore:
    """Scans ``<minikube home>/profiles/*/config.json`` directly.

    Avoids spawning the CLI on every poll. A profile counts as valid when its
    config parses to an object that names a driver.
    """

    def __init__(self, home: Path | None = None) -> None:
        self.home = home or minikube_home()

    @property
    def profiles_dir(self) -> Path:
        return self.home / "profiles"

    def list_profiles(self) -> list[str]:
        root = self.profiles_dir
        if not root.exists():
            return []
        try:
            entries = sorted(p for p in root.iterdir() if p.is_dir())
        except OSError as exc:
            raise ProfileStoreError(f"cannot read {root}: {exc}") from exc

        names: list[str] = []
        for entry in entries:
            if self._is_valid(entry / "config.json"):
                names.append(entry.name)
            else:
                logger.debug(f"[registry] Skipping invalid profile dir {entry.name!r}")
        return names

    @staticmethod
    def _is_valid(config_file: Path) -> bool:
        try:
            payload = json.loads(config_file.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return False
        if not isinstance(payload, dict):
            return False
        machine = payload.get("MachineConfig") or {}
        driver = payload.get("Driver") or (machine.get("VMDriver") if isinstance(machine, dict) else "")
        return bool(driver)
