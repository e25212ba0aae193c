"""Fixed-interval registry refresh loop."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from scrambler.core.constants import DEFAULT_POLL_INTERVAL_S
from scrambler.services.registry import JobRegistry

logger = logging.getLogger(__name__)


class RegistryPoller:
    def __init__(self, registry: JobRegistry, interval_s: float = DEFAULT_POLL_INTERVAL_S) -> None:
        self._registry = registry
        self._interval_s = max(0.01, float(interval_s))
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await self._registry.refresh()
            await asyncio.sleep(self._interval_s)

    def start(self) -> None:
        if self.running:
            return
        logger.debug(f"polling jobs every {self._interval_s}s")
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
