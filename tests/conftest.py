"""Shared test fixtures."""

from __future__ import annotations

import pytest

from multicomplete.controller import AutoCompleteController
from multicomplete.settings import AutoCompleteSettings


class FakeTimer:
    """Timer handle recorded by :class:`FakeScheduler`."""

    def __init__(self, delay: float, callback) -> None:
        self.delay = delay
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeScheduler:
    """Collects scheduled callbacks so tests decide when they fire."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.stopped]

    def fire_all(self) -> None:
        """Run every timer that has not been stopped."""
        for timer in self.pending:
            timer.stopped = True
            timer.callback()


def type_text(controller: AutoCompleteController, text: str, start: int = 0) -> None:
    """Feed *text* to *controller* one character at a time, as a user would."""
    for end in range(start + 1, len(text) + 1):
        controller.on_text_changed(text[:end], end)


@pytest.fixture
def scheduler() -> FakeScheduler:
    """A manually driven timer factory."""
    return FakeScheduler()


@pytest.fixture
def fruits() -> list[str]:
    """A small candidate list."""
    return ["apple", "apricot", "avocado", "banana", "blueberry", "cherry"]


@pytest.fixture
def multi_settings() -> AutoCompleteSettings:
    """Settings for multi-entry completion."""
    return AutoCompleteSettings(is_multi_entry=True)


@pytest.fixture
def controller(multi_settings, fruits, scheduler) -> AutoCompleteController:
    """A multi-entry controller over the fruit list."""
    return AutoCompleteController(multi_settings, fruits, scheduler=scheduler)
