"""The filtered, capped suggestion view and its incremental refresh."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

from multicomplete.filters import DEFAULT_MAX_SUGGESTIONS
from multicomplete.logger import get_logger
from multicomplete.models import RefreshResult, ViewAction, ViewChange
from multicomplete.segmenter import is_blank_char

logger = get_logger("view")

PredicateFactory = Callable[[str], "Callable[[Any], bool] | None"]


def fallback_cut(search: str) -> int:
    """Return how many leading characters to drop to reach the next word.

    Everything up to and including the first run of blank characters is
    dropped. Returns 0 when *search* contains no blank.

    Example:
        >>> fallback_cut("foo bar")
        4
    """
    for index, char in enumerate(search):
        if is_blank_char(char):
            end = index
            while end < len(search) and is_blank_char(search[end]):
                end += 1
            return end
    return 0


class CandidateView:
    """Ordered projection of the candidates that match the search string.

    The view is updated in place with positional insert, remove and
    replace edits so that a display bound to it only sees the minimal
    set of changes. The edits of the latest refresh are returned in the
    :class:`~multicomplete.models.RefreshResult`.

    Args:
        max_suggestions: Upper bound on the number of items in the view.
    """

    def __init__(self, max_suggestions: int = DEFAULT_MAX_SUGGESTIONS) -> None:
        self.max_suggestions = max_suggestions
        self._items: list[Any] = []

    @property
    def items(self) -> tuple[Any, ...]:
        """A read-only snapshot of the view."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Any:
        return self._items[index]

    def __iter__(self):
        return iter(self._items)

    def clear(self) -> list[ViewChange]:
        """Empty the view, returning the removals."""
        changes = [
            ViewChange(ViewAction.REMOVE, 0, item) for item in self._items
        ]
        self._items.clear()
        return changes

    def discard(self, items: Iterable[Any]) -> list[ViewChange]:
        """Remove the first occurrence of each of *items* if present."""
        changes: list[ViewChange] = []
        for item in items:
            if item in self._items:
                index = self._items.index(item)
                del self._items[index]
                changes.append(ViewChange(ViewAction.REMOVE, index, item))
        return changes

    def reconcile(
        self,
        source: Sequence[Any],
        predicate: Callable[[Any], bool] | None,
    ) -> list[ViewChange]:
        """Bring the view in line with *source* filtered by *predicate*.

        Walks *source* once, comparing each item with the view entry at
        the current position. Matching items already in place are kept,
        missing ones are inserted (or replace an entry that no longer
        matches), and entries that stopped matching are removed. The walk
        stops once the view holds ``max_suggestions`` confirmed entries
        and the source cursor has reached that index; any entries left
        after the cursor are removed.

        Args:
            source: The candidates, in display order.
            predicate: Match test, or None to accept everything.

        Returns:
            The edits applied, in order.
        """
        view = self._items
        changes: list[ViewChange] = []
        limit = self.max_suggestions
        position = 0

        for item in source:
            matched = predicate is None or predicate(item)
            in_place = position < len(view) and view[position] == item

            if matched and in_place:
                position += 1
            elif matched:
                if position < len(view) and not (
                    predicate is None or predicate(view[position])
                ):
                    view[position] = item
                    changes.append(ViewChange(ViewAction.REPLACE, position, item))
                else:
                    view.insert(position, item)
                    changes.append(ViewChange(ViewAction.INSERT, position, item))
                position += 1
            elif in_place:
                del view[position]
                changes.append(ViewChange(ViewAction.REMOVE, position, item))

            if len(view) >= limit and position >= limit:
                break

        while len(view) > position:
            stale = view.pop()
            changes.append(ViewChange(ViewAction.REMOVE, len(view), stale))

        return changes

    def refresh(
        self,
        source: Sequence[Any],
        search: str,
        predicate_for: PredicateFactory,
        fallback: bool = True,
    ) -> RefreshResult:
        """Filter *source* by *search*, trimming words while nothing matches.

        When the view comes out empty and *search* contains a blank, the
        leading word and the blanks after it are dropped and the filter
        runs again on the rest, until something matches or no words are
        left.

        Args:
            source: The candidates, in display order.
            search: The search string.
            predicate_for: Builds the match predicate for a search string.
            fallback: Whether to retry on later words when nothing matches.

        Returns:
            The refreshed items, the search string actually used and how
            many characters were trimmed from its front.
        """
        changes = self.reconcile(source, predicate_for(search))
        trimmed = 0
        exhausted = False

        while fallback and not self._items:
            cut = fallback_cut(search)
            if cut == 0:
                break
            trimmed += cut
            search = search[cut:]
            if not search:
                exhausted = True
                logger.debug("Fallback exhausted the search string")
                break
            logger.debug("No matches, retrying with {!r}", search)
            changes.extend(self.reconcile(source, predicate_for(search)))

        return RefreshResult(
            items=list(self._items),
            search_string=search,
            trimmed=trimmed,
            exhausted=exhausted,
            changes=changes,
        )
