"""Single-slot, self-clearing error banner state."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from scrambler.core.constants import DEFAULT_NOTIFICATION_MS
from scrambler.services.store import Writable

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], object]


def loop_scheduler(delay_s: float, callback: Callable[[], None]) -> object:
    return asyncio.get_running_loop().call_later(delay_s, callback)


class NotificationChannel:
    """Holds at most one user-facing error message.

    Each announcement replaces the previous one. A timed clear only empties
    the slot if no newer announcement has been made since it was scheduled.
    """

    def __init__(
        self,
        default_duration_ms: int = DEFAULT_NOTIFICATION_MS,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.message: Writable[Optional[str]] = Writable(None)
        self._default_duration_ms = default_duration_ms
        self._scheduler = scheduler or loop_scheduler
        self._generation = 0

    def announce(self, message: str, duration_ms: Optional[int] = None) -> None:
        duration = self._default_duration_ms if duration_ms is None else duration_ms
        self._generation += 1
        generation = self._generation
        if duration > 0:
            try:
                self._scheduler(duration / 1000, lambda: self._expire(generation))
            except RuntimeError as exc:
                logger.warning(f"no event loop to clear notification, keeping it until cleared: {exc}")
        self.message.set(message)

    def _expire(self, generation: int) -> None:
        if generation != self._generation or self.message.get() is None:
            return
        self.message.set(None)

    def clear(self) -> None:
        self.message.set(None)

    @property
    def current(self) -> Optional[str]:
        return self.message.get()
