"""Channel-based callback lists for controller notifications."""

from __future__ import annotations

from typing import Any, Callable


class EventBus:
    """Synchronous pub/sub with named channels.

    Handlers run in subscription order on the caller's stack; exceptions
    raised by a handler propagate to whoever emitted the event.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[..., Any]]] = {}

    def on(self, channel: str, handler: Callable[..., Any]) -> Callable[[], None]:
        """Subscribe to a channel. Returns an unsubscribe function."""
        self._handlers.setdefault(channel, []).append(handler)

        def unsubscribe() -> None:
            self.off(channel, handler)

        return unsubscribe

    def off(self, channel: str, handler: Callable[..., Any]) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(channel)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, channel: str, *args: Any) -> None:
        """Call every handler subscribed to *channel* with *args*."""
        for handler in list(self._handlers.get(channel, [])):
            handler(*args)

    def has_handlers(self, channel: str) -> bool:
        """Return True if at least one handler listens on *channel*."""
        return bool(self._handlers.get(channel))

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
