"""Per-profile refresh tasks.

Usage:
    scheduler = RefreshScheduler(check=aggregator.check_status, submit=queue.put_nowait)
    task = scheduler.start("minikube", generation=1)
    ...
    await scheduler.stop("minikube")
    await scheduler.stop_all()
"""

from __future__ import annotations

import asyncio
from typing import Callable

from loguru import logger

from minidash.dashboard.events import PanelUpdate
from minidash.status.aggregator import format_status
from minidash.status.models import StatusSnapshot

CheckStatus = Callable[[str], StatusSnapshot]
SubmitUpdate = Callable[[PanelUpdate], None]
FormatStatus = Callable[[StatusSnapshot], str]


class RefreshScheduler:
    """Owns one periodic asyncio task per active profile.

    Tasks never touch the render surface. Each tick runs the status check in a
    worker thread and hands the formatted text to ``submit``.
    """

    def __init__(
        self,
        check: CheckStatus,
        submit: SubmitUpdate,
        interval_s: float = 10.0,
        formatter: FormatStatus = format_status,
    ) -> None:
        self.check = check
        self.submit = submit
        self.interval_s = interval_s
        self.formatter = formatter
        self._tasks: dict[str, asyncio.Task] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self, name: str, generation: int) -> asyncio.Task:
        """Start the refresh task for ``name``. Must be called on the loop."""
        if name in self._tasks:
            raise RuntimeError(f"refresh task for {name!r} already running")
        task = asyncio.create_task(
            self._loop(name, generation),
            name=f"refresh-{name}",
        )
        self._tasks[name] = task
        logger.debug(f"[scheduler] Started {name!r} (gen {generation}, every {self.interval_s}s)")
        return task

    async def stop(self, name: str) -> None:
        """Cancel the task for ``name`` and wait until it has exited."""
        task = self._tasks.pop(name, None)
        if task is None:
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.debug(f"[scheduler] Stopped {name!r}")

    async def stop_all(self) -> None:
        """Broadcast cancellation to every task and join them all."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info(f"[scheduler] Joined {len(tasks)} refresh task(s)")

    def active(self) -> set[str]:
        return set(self._tasks)

    def task_for(self, name: str) -> asyncio.Task | None:
        return self._tasks.get(name)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _loop(self, name: str, generation: int) -> None:
        # First check happens immediately on start.
        while True:
            try:
                await self._tick(name, generation)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.warning(f"[scheduler] Refresh of {name!r} failed: {exc}")
            await asyncio.sleep(self.interval_s)

    async def _tick(self, name: str, generation: int) -> None:
        snapshot = await asyncio.to_thread(self.check, name)
        text = self.formatter(snapshot)
        self.submit(PanelUpdate(name=name, generation=generation, text=text))
