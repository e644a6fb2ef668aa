"""
Trailing-edge debounce on top of an event-loop style scheduler.

Any object with ``call_later(delay, callback) -> handle`` where the handle
has ``cancel()`` works; an asyncio event loop is the default.
"""

import asyncio
from typing import Any, Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class Debouncer:
    """
    Coalesces bursts of calls into one.

    Each ``trigger(value)`` replaces the pending value and re-arms the timer,
    cancelling any unfired one. When the timer fires, ``callback`` runs once
    with the latest value.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[Any], None],
        scheduler: Optional[Scheduler] = None,
    ):
        self.delay = delay
        self.callback = callback
        self._scheduler = scheduler
        self._handle: Optional[TimerHandle] = None
        self._pending: Any = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, value: Any) -> None:
        if self._closed:
            return
        if self._handle is not None:
            self._handle.cancel()
        self._pending = value
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._handle = scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None

    def flush(self) -> bool:
        """Run the pending call now. Returns False if nothing was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire()
        return True

    def close(self) -> None:
        self.cancel()
        self._closed = True

    def _fire(self) -> None:
        if self._closed or self._handle is None:
            return
        value = self._pending
        self._handle = None
        self._pending = None
        self.callback(value)
