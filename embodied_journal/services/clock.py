import asyncio
import logging
from contextlib import suppress
from datetime import datetime
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class MinuteClock:
    """
    Displayed clock value, refreshed by a background task.

    The trade form stamps submissions with `current`, so the recorded
    time has the same resolution as what the user was shown.
    """

    def __init__(
        self,
        interval_seconds: float = 60.0,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.interval_seconds = interval_seconds
        self._now = now
        self.current: datetime = now()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> datetime:
        self.current = self._now()
        return self.current

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.tick()

    def start(self) -> None:
        if self.running:
            return
        self.tick()
        self._task = asyncio.create_task(self._run())
        logger.debug("Clock started (interval=%ss)", self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.debug("Clock stopped")
