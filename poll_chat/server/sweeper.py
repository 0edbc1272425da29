import asyncio
from contextlib import suppress
from typing import Optional

from .logger import logger
from .stores import ChatState


class SessionSweeper:
    """Periodically evicts users whose last activity is older than ``max_idle``.

    ``interval`` and ``max_idle`` are in seconds. A failing sweep is logged
    and the next one is still scheduled.
    """

    def __init__(self, state: ChatState, interval: float = 60, max_idle: float = 900):
        self.state = state
        self.interval = interval
        self.max_idle = max_idle
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info(
            f"Session sweeper started (every {self.interval}s, idle limit {self.max_idle}s)"
        )

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def run_once(self) -> int:
        removed = await self.state.sweep_inactive(int(self.max_idle * 1000))
        if removed:
            logger.info(f"Swept {removed} inactive user(s)")
        return removed

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.run_once()
            except Exception:
                logger.exception("Session sweep failed")
