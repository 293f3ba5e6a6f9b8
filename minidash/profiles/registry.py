"""Profile registry: normalized, fault-tolerant profile listing."""

from __future__ import annotations

from loguru import logger

from minidash.profiles.store import ProfileStore


def normalize_profiles(names: list[str]) -> list[str]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for raw in names:
        name = (raw or "").strip()
        if name and name not in seen:
            seen[name] = None
    return list(seen)


class ProfileRegistry:
    """Wraps a ``ProfileStore`` so a failed listing never stops the dashboard."""

    def __init__(self, store: ProfileStore) -> None:
        self.store = store
        self.failures = 0

    def list_active_profiles(self) -> list[str]:
        try:
            names = self.store.list_profiles()
        except Exception as exc:
            # Treated as "no profiles" for this cycle; the next poll retries.
            self.failures += 1
            logger.warning(f"[registry] Profile listing failed: {exc}")
            return []
        return normalize_profiles(names)
