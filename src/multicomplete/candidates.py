"""A candidate list that reports its mutations to subscribers."""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any, Callable, Iterable

from multicomplete.models import CollectionAction, CollectionChange

ChangeListener = Callable[[CollectionChange], None]


class ObservableCandidates(MutableSequence):
    """A list of candidates that notifies listeners after every change.

    Listeners receive a :class:`~multicomplete.models.CollectionChange`
    describing the edit. Slice assignment and ``sort``/``reverse`` are
    reported as a reset.
    """

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items: list[Any] = list(items)
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        """Start sending change notifications to *listener*."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        """Stop notifying *listener*; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def _notify(self, change: CollectionChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._items[index] = value
            self._notify(CollectionChange(CollectionAction.RESET))
            return
        position = range(len(self._items))[index]
        old = self._items[position]
        self._items[position] = value
        self._notify(
            CollectionChange(
                CollectionAction.REPLACE, position, new_items=(value,), old_items=(old,)
            )
        )

    def __delitem__(self, index) -> None:
        if isinstance(index, slice):
            del self._items[index]
            self._notify(CollectionChange(CollectionAction.RESET))
            return
        position = range(len(self._items))[index]
        old = self._items.pop(position)
        self._notify(
            CollectionChange(CollectionAction.REMOVE, position, old_items=(old,))
        )

    def insert(self, index: int, value: Any) -> None:
        size = len(self._items)
        position = index + size if index < 0 else index
        position = max(0, min(position, size))
        self._items.insert(position, value)
        self._notify(CollectionChange(CollectionAction.ADD, position, new_items=(value,)))

    def reset(self, items: Iterable[Any]) -> None:
        """Replace the whole content and report a single reset."""
        self._items = list(items)
        self._notify(CollectionChange(CollectionAction.RESET))

    def clear(self) -> None:
        self.reset(())

    def sort(self, *, key=None, reverse: bool = False) -> None:
        self._items.sort(key=key, reverse=reverse)
        self._notify(CollectionChange(CollectionAction.RESET))

    def reverse(self) -> None:
        self._items.reverse()
        self._notify(CollectionChange(CollectionAction.RESET))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"
