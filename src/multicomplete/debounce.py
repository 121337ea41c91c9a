"""Debounced execution of the populate step."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Protocol


class TimerHandle(Protocol):
    """Anything with a ``stop()`` method, such as a Textual ``Timer``."""

    def stop(self) -> Any: ...


Scheduler = Callable[[float, Callable[[], Any]], TimerHandle]


class _LoopTimer:
    """Adapts an asyncio ``TimerHandle`` to the ``stop()`` protocol."""

    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def stop(self) -> None:
        self._handle.cancel()


def loop_scheduler(delay: float, callback: Callable[[], Any]) -> TimerHandle:
    """Schedule *callback* on the running asyncio loop."""
    loop = asyncio.get_running_loop()
    return _LoopTimer(loop.call_later(delay, callback))


class Debouncer:
    """Runs a callback once per burst of calls.

    With a delay of 0 the callback runs synchronously. Otherwise every
    call restarts the timer, so the callback fires once, *delay_ms* after
    the last call.

    Args:
        delay_ms: Delay in milliseconds.
        scheduler: ``scheduler(seconds, callback) -> handle`` used to start
            timers. Defaults to the running asyncio loop.
    """

    def __init__(self, delay_ms: int = 0, scheduler: Scheduler | None = None) -> None:
        self._delay_ms = delay_ms
        self._scheduler = scheduler or loop_scheduler
        self._pending: TimerHandle | None = None

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @delay_ms.setter
    def delay_ms(self, value: int) -> None:
        # A pending timer is dropped; the next call starts a fresh one.
        self.cancel()
        self._delay_ms = value

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def set_scheduler(self, scheduler: Scheduler) -> None:
        self.cancel()
        self._scheduler = scheduler

    def call(self, callback: Callable[[], Any]) -> None:
        """Run *callback* now or after the delay, superseding any pending run."""
        self.cancel()
        if self._delay_ms <= 0:
            callback()
            return

        def fire() -> None:
            self._pending = None
            callback()

        self._pending = self._scheduler(self._delay_ms / 1000, fire)

    def cancel(self) -> None:
        """Stop a pending run, if any."""
        if self._pending is not None:
            self._pending.stop()
            self._pending = None
