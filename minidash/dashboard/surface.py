"""Render surface contract consumed by the dashboard engine."""

from __future__ import annotations

from typing import Protocol

from minidash.dashboard.layout import Rect


class RenderSurface(Protocol):
    """Panel primitives. All calls happen on the event-loop thread."""

    def create_panel(self, name: str, rect: Rect, title: str) -> None:
        ...

    def place_panel(self, name: str, rect: Rect) -> None:
        ...

    def update_panel(self, name: str, text: str) -> None:
        ...

    def delete_panel(self, name: str) -> None:
        ...

    def list_panel_names(self) -> set[str]:
        ...
