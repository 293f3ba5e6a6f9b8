"""Dashboard event contracts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PanelUpdate:
    """New panel text submitted by a refresh task."""

    name: str
    generation: int
    text: str


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one reconcile pass."""

    created: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()
    active: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.created or self.deleted)
