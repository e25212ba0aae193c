"""Observable value containers for client-side state.

``Writable`` is a single-writer cell; ``Derived`` is a read-only projection of
another container, recomputed on every read and pushed to its own subscribers
whenever the source changes. Both are meant for a single-threaded event loop
and carry no locking.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")
T_co = TypeVar("T_co", covariant=True)

Listener = Callable[[T], None]
Unsubscribe = Callable[[], None]


class Readable(Protocol[T_co]):
    def get(self) -> T_co: ...

    def subscribe(self, listener: Callable[[T_co], None]) -> Unsubscribe: ...


def _notify(listeners: list[Listener[T]], value: T) -> None:
    for listener in list(listeners):
        try:
            listener(value)
        except Exception:
            logger.exception(f"state listener {listener!r} failed")


class Writable(Generic[T]):
    def __init__(self, value: T) -> None:
        self._value = value
        self._listeners: list[Listener[T]] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        _notify(self._listeners, value)

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value))

    def subscribe(self, listener: Listener[T]) -> Unsubscribe:
        """Register ``listener`` and call it once with the current value."""
        self._listeners.append(listener)
        _notify([listener], self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


class Derived(Generic[S, T]):
    """Projection of one container, or of a tuple of containers.

    With a tuple of sources ``fn`` receives a tuple of their current values.
    """

    def __init__(self, source: Readable[S] | tuple[Readable, ...], fn: Callable[[S], T]) -> None:
        self._sources = source if isinstance(source, tuple) else (source,)
        self._combined = isinstance(source, tuple)
        self._fn = fn

    def _current(self) -> S:
        values = tuple(src.get() for src in self._sources)
        return values if self._combined else values[0]  # type: ignore[return-value]

    def get(self) -> T:
        return self._fn(self._current())

    def subscribe(self, listener: Listener[T]) -> Unsubscribe:
        ready = False

        def relay(_: object) -> None:
            if ready:
                listener(self.get())

        unsubscribers = [src.subscribe(relay) for src in self._sources]
        ready = True
        _notify([listener], self.get())

        def unsubscribe() -> None:
            for unsub in unsubscribers:
                unsub()

        return unsubscribe
