"""Explicit event channel used for status progress and change notifications.

A channel delivers zero or more values to every subscriber. There is no
buffering, no backpressure and no cancellation: emit() calls listeners
synchronously and returns.
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by EventChannel.subscribe(); dispose() unsubscribes."""

    def __init__(self, on_dispose: Callable[[], None]) -> None:
        self._on_dispose: Callable[[], None] | None = on_dispose

    @property
    def disposed(self) -> bool:
        return self._on_dispose is None

    def dispose(self) -> None:
        """Stop receiving events. Calling this more than once is a no-op."""
        if self._on_dispose is None:
            return
        on_dispose = self._on_dispose
        self._on_dispose = None
        on_dispose()


class EventChannel(Generic[T]):
    """Observable with an explicit subscriber list.

    Listener exceptions are logged and swallowed so one misbehaving
    subscriber cannot abort the producer.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._listeners: list[Callable[[T], None]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Callable[[T], None]) -> Subscription:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_remove)

    def emit(self, value: T) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.debug("Listener on %s channel raised", self._name, exc_info=True)

    def clear(self) -> None:
        self._listeners.clear()
