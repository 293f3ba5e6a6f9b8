"""Textual front end: the render surface for the dashboard engine."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Optional

from loguru import logger
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.widgets import Static

from minidash.config.schema import Config
from minidash.dashboard.engine import Dashboard
from minidash.dashboard.events import ReconcileResult
from minidash.dashboard.layout import Rect, columns_for_width
from minidash.dashboard.scheduler import CheckStatus
from minidash.errors import DashboardInitError
from minidash.profiles.registry import ProfileRegistry


class ProfilePanel(Static):
    """Bordered box showing one profile's status text."""

    def __init__(self, profile: str, rect: Rect, title: str) -> None:
        super().__init__("", classes="profile-panel", markup=False)
        self.profile = profile
        self.border_title = title
        self._text = ""
        self.place(rect)

    def on_mount(self) -> None:
        self.update(self._text)

    def place(self, rect: Rect) -> None:
        self.styles.offset = (rect.x0, rect.y0)
        self.styles.width = rect.width
        self.styles.height = rect.height

    def show_status(self, text: str) -> None:
        self._text = text
        self.set_class("flags:" in text, "degraded")
        if self.is_mounted:
            self.update(text)


class DashboardApp(App):
    CSS = """
    Screen {
        background: #050a08;
        color: #b7ffc8;
    }

    #grid {
        height: 1fr;
    }

    .profile-panel {
        position: absolute;
        border: round #00ff66;
        border-title-color: #ffd400;
        border-title-style: bold;
        background: #07160f;
        padding: 0 1;
    }

    .profile-panel.degraded {
        border: round #ff5f5f;
    }

    #empty {
        color: #6b8f75;
        padding: 1 2;
    }

    #status-bar {
        dock: bottom;
        height: 1;
        background: #18331f;
        color: #e2ff6d;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("r", "poll_now", "Refresh"),
    ]

    def __init__(self, config: Config, registry: ProfileRegistry, check: CheckStatus) -> None:
        super().__init__()
        self.config = config
        self.registry = registry
        self.check = check
        self.dashboard: Optional[Dashboard] = None
        self._panels: dict[str, ProfilePanel] = {}
        self._status_note = "Looking for profiles..."

    def compose(self) -> ComposeResult:
        with ScrollableContainer(id="grid"):
            yield Static("No minikube profiles found.", id="empty")
        yield Static("", id="status-bar")

    def on_mount(self) -> None:
        cfg = self.config.dashboard
        self.dashboard = Dashboard(
            surface=self,
            registry=self.registry,
            check=self.check,
            refresh_interval_s=cfg.refresh_interval_s,
            poll_interval_s=cfg.poll_interval_s,
            max_cols=self._columns(self.size.width),
            cell_width=cfg.cell_width,
            cell_height=cfg.cell_height,
            pad=cfg.pad,
            on_reconcile=self._on_reconcile,
        )
        self.dashboard.start()
        self.refresh_status()

    async def on_unmount(self) -> None:
        if self.dashboard is not None:
            await self.dashboard.shutdown()

    def on_resize(self, event: events.Resize) -> None:
        if self.dashboard is None or self.config.dashboard.max_cols:
            return
        columns = self._columns(event.size.width)
        if columns != self.dashboard.max_cols:
            self.dashboard.relayout(columns)

    def _columns(self, width: int) -> int:
        configured = self.config.dashboard.max_cols
        if configured:
            return configured
        return columns_for_width(width, self.config.dashboard.cell_width)

    # ------------------------------------------------------------------
    # Render surface
    # ------------------------------------------------------------------

    def create_panel(self, name: str, rect: Rect, title: str) -> None:
        panel = ProfilePanel(name, rect, title)
        self._panels[name] = panel
        self.query_one("#grid", ScrollableContainer).mount(panel)

    def place_panel(self, name: str, rect: Rect) -> None:
        panel = self._panels.get(name)
        if panel is not None:
            panel.place(rect)

    def update_panel(self, name: str, text: str) -> None:
        panel = self._panels.get(name)
        if panel is None:
            logger.debug(f"[tui] Ignoring update for missing panel {name!r}")
            return
        panel.show_status(text)

    def delete_panel(self, name: str) -> None:
        panel = self._panels.pop(name, None)
        if panel is not None:
            panel.remove()

    def list_panel_names(self) -> set[str]:
        return set(self._panels)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_poll_now(self) -> None:
        if self.dashboard is None:
            return
        self._status_note = "Refreshing profiles..."
        self.refresh_status()
        self.run_worker(self.dashboard.poll_once(), group="poll")

    def _on_reconcile(self, result: ReconcileResult) -> None:
        stamp = datetime.now().strftime("%H:%M:%S")
        self._status_note = f"Last poll {stamp}"
        if result.created:
            self._status_note += f"  +{', '.join(result.created)}"
        if result.deleted:
            self._status_note += f"  -{', '.join(result.deleted)}"
        self.query_one("#empty", Static).display = not result.active
        self.refresh_status()

    def refresh_status(self) -> None:
        count = len(self._panels)
        status = f"Profiles:{count}  q quit  r refresh  |  {self._status_note}"
        self.query_one("#status-bar", Static).update(status)


def run_dashboard(config: Config, registry: ProfileRegistry, check: CheckStatus) -> int:
    """Run the TUI until the operator quits and return its exit code."""
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise DashboardInitError("minidash needs an interactive terminal")

    app = DashboardApp(config, registry, check)
    try:
        app.run()
    except Exception as exc:
        raise DashboardInitError(f"terminal UI failed: {exc}") from exc
    return app.return_code or 0
