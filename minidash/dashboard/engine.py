"""Dashboard engine: keeps rendered panels in step with the profile registry.

The ``Dashboard`` aggregate owns the last registry snapshot, the panel map, the
update queue and every background task. All of them are touched only from the
event-loop thread:

* the poll task lists profiles in a worker thread, then runs ``reconcile``;
* refresh tasks compute status in worker threads and enqueue ``PanelUpdate``s;
* the render task is the single consumer of that queue.

An update whose panel has been deleted (or deleted and re-created, which bumps
the panel generation) is dropped, so a late refresh can never resurrect or
overwrite a panel it no longer owns.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from loguru import logger

from minidash.dashboard.events import PanelUpdate, ReconcileResult
from minidash.dashboard.layout import PLACEHOLDER_RECT, Rect, compute_grid
from minidash.dashboard.scheduler import CheckStatus, RefreshScheduler
from minidash.dashboard.surface import RenderSurface
from minidash.profiles.registry import ProfileRegistry, normalize_profiles

PLACEHOLDER_TEXT = "Checking status..."

OnReconcile = Callable[[ReconcileResult], None]


@dataclass
class PanelState:
    """Engine-side record of one rendered profile panel."""

    name: str
    rect: Rect
    generation: int
    text: str = PLACEHOLDER_TEXT
    task: asyncio.Task | None = None


def diff_profiles(current: Iterable[str], snapshot: Sequence[str]) -> tuple[list[str], list[str]]:
    """Return ``(stale, fresh)``: names to remove and names to add, order kept."""
    current_list = list(current)
    wanted = set(snapshot)
    have = set(current_list)
    stale = [name for name in current_list if name not in wanted]
    fresh = [name for name in snapshot if name not in have]
    return stale, fresh


class Dashboard:
    """View lifecycle manager for profile panels."""

    def __init__(
        self,
        surface: RenderSurface,
        registry: ProfileRegistry,
        check: CheckStatus,
        *,
        refresh_interval_s: float = 10.0,
        poll_interval_s: float = 10.0,
        max_cols: int = 3,
        cell_width: int = 31,
        cell_height: int = 11,
        pad: int = 1,
        on_reconcile: OnReconcile | None = None,
    ) -> None:
        self.surface = surface
        self.registry = registry
        self.poll_interval_s = poll_interval_s
        self.max_cols = max_cols
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.pad = pad
        self.on_reconcile = on_reconcile

        self.snapshot: tuple[str, ...] = ()
        self.panels: dict[str, PanelState] = {}
        self.updates: asyncio.Queue[PanelUpdate] = asyncio.Queue()
        self.scheduler = RefreshScheduler(
            check=check,
            submit=self.updates.put_nowait,
            interval_s=refresh_interval_s,
        )
        self.dropped_updates = 0

        self._generations = itertools.count(1)
        self._reconcile_lock = asyncio.Lock()
        self._poll_task: asyncio.Task | None = None
        self._render_task: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the poll and render tasks. Must be called on the running loop."""
        if self._render_task is None:
            self._render_task = asyncio.create_task(self.run_render_loop(), name="dashboard-render")
        if self._poll_task is None:
            self._poll_task = asyncio.create_task(self.run_polling(), name="dashboard-poll")
        logger.info(
            f"[engine] Dashboard started, poll={self.poll_interval_s}s "
            f"refresh={self.scheduler.interval_s}s"
        )

    async def shutdown(self) -> None:
        """Stop polling, join every refresh task, then stop the render loop.

        A status check already running in a worker thread cannot be
        interrupted; its ``minikube`` command runs until it finishes or hits
        the backend timeout, which can delay process exit by that long.
        """
        if self._poll_task is not None:
            self._poll_task.cancel()
            await asyncio.gather(self._poll_task, return_exceptions=True)
            self._poll_task = None
        await self.scheduler.stop_all()
        for panel in self.panels.values():
            panel.task = None
        if self._render_task is not None:
            self._render_task.cancel()
            await asyncio.gather(self._render_task, return_exceptions=True)
            self._render_task = None
        logger.info("[engine] Dashboard stopped")

    # ------------------------------------------------------------------
    # Registry polling
    # ------------------------------------------------------------------

    async def poll_once(self) -> ReconcileResult:
        names = await asyncio.to_thread(self.registry.list_active_profiles)
        return await self.reconcile(names)

    async def run_polling(self) -> None:
        while True:
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("[engine] Poll cycle failed")
            await asyncio.sleep(self.poll_interval_s)

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    async def reconcile(self, registry_snapshot: Sequence[str]) -> ReconcileResult:
        """Make the panel set equal ``registry_snapshot``.

        Passes are serialized: a poll arriving mid-pass waits until the
        previous create/delete/layout pass has been fully applied.
        """
        async with self._reconcile_lock:
            snapshot = normalize_profiles(list(registry_snapshot))
            stale, fresh = diff_profiles(self.panels, snapshot)
            # Bad geometry must fail before any panel or task changes.
            self._grid([name for name in self.panels if name not in stale] + fresh, self.max_cols)

            for name in stale:
                # The task must be gone before its panel is.
                await self.scheduler.stop(name)
                self.panels.pop(name, None)
                self.surface.delete_panel(name)
                logger.info(f"[engine] Removed panel {name!r}")

            for name in fresh:
                generation = next(self._generations)
                self.surface.create_panel(name, PLACEHOLDER_RECT, title=name)
                panel = PanelState(name=name, rect=PLACEHOLDER_RECT, generation=generation)
                self.panels[name] = panel
                self.surface.update_panel(name, panel.text)
                panel.task = self.scheduler.start(name, generation)
                logger.info(f"[engine] Added panel {name!r}")

            if stale or fresh:
                self.relayout()

            self.snapshot = tuple(snapshot)
            result = ReconcileResult(
                created=tuple(fresh),
                deleted=tuple(stale),
                active=tuple(self.panels),
            )

        if self.on_reconcile is not None:
            try:
                self.on_reconcile(result)
            except Exception as exc:
                logger.debug(f"[engine] on_reconcile callback error: {exc}")
        return result

    def relayout(self, max_cols: int | None = None) -> dict[str, Rect]:
        """Recompute the grid over every active panel and apply it."""
        columns = self.max_cols if max_cols is None else max_cols
        rects = self._grid(list(self.panels), columns)
        self.max_cols = columns
        self._place(rects)
        return rects

    def _grid(self, names: list[str], max_cols: int) -> dict[str, Rect]:
        return compute_grid(names, max_cols, self.cell_width, self.cell_height, self.pad)

    def _place(self, rects: dict[str, Rect]) -> None:
        for name, rect in rects.items():
            self.panels[name].rect = rect
            self.surface.place_panel(name, rect)

    # ------------------------------------------------------------------
    # Render loop
    # ------------------------------------------------------------------

    async def run_render_loop(self) -> None:
        while True:
            update = await self.updates.get()
            try:
                self.apply_update(update)
            except Exception:
                logger.exception(f"[engine] Applying update for {update.name!r} failed")

    def apply_update(self, update: PanelUpdate) -> bool:
        """Apply one update; stale or orphaned updates are ignored."""
        panel = self.panels.get(update.name)
        if panel is None or panel.generation != update.generation:
            self.dropped_updates += 1
            logger.debug(f"[engine] Dropped update for {update.name!r} (gen {update.generation})")
            return False
        panel.text = update.text
        self.surface.update_panel(update.name, update.text)
        return True

    def drain_updates(self) -> int:
        """Apply every queued update without waiting. Returns how many applied."""
        applied = 0
        while True:
            try:
                update = self.updates.get_nowait()
            except asyncio.QueueEmpty:
                return applied
            if self.apply_update(update):
                applied += 1
