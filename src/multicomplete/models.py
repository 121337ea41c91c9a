"""Data models for entries, filter modes, view changes and splice results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FilterMode(Enum):
    """How the search string is matched against a candidate's display text.

    The plain variants compare culture-aware and case-insensitive, the
    ``*_CASE_SENSITIVE`` variants culture-aware and case-sensitive, the
    ``*_ORDINAL`` variants by code point ignoring case, and the
    ``*_ORDINAL_CASE_SENSITIVE`` variants by exact code point.
    """

    NONE = "none"
    STARTS_WITH = "starts_with"
    STARTS_WITH_CASE_SENSITIVE = "starts_with_case_sensitive"
    STARTS_WITH_ORDINAL = "starts_with_ordinal"
    STARTS_WITH_ORDINAL_CASE_SENSITIVE = "starts_with_ordinal_case_sensitive"
    CONTAINS = "contains"
    CONTAINS_CASE_SENSITIVE = "contains_case_sensitive"
    CONTAINS_ORDINAL = "contains_ordinal"
    CONTAINS_ORDINAL_CASE_SENSITIVE = "contains_ordinal_case_sensitive"
    EQUALS = "equals"
    EQUALS_CASE_SENSITIVE = "equals_case_sensitive"
    EQUALS_ORDINAL = "equals_ordinal"
    EQUALS_ORDINAL_CASE_SENSITIVE = "equals_ordinal_case_sensitive"
    CUSTOM = "custom"


class CollectionAction(Enum):
    """Kind of mutation reported by an observable candidate collection."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    RESET = "reset"


class ViewAction(Enum):
    """Kind of positional edit applied to the suggestion view."""

    INSERT = "insert"
    REMOVE = "remove"
    REPLACE = "replace"


@dataclass
class EntrySpan:
    """The region of the text currently being typed as one entry."""

    start_offset: int = 0
    is_active: bool = False


@dataclass(frozen=True)
class SegmentDecision:
    """Outcome of feeding one text or caret change to the segmenter."""

    entry_active: bool
    start_offset: int
    search_string: str
    should_populate: bool


@dataclass(frozen=True)
class CommitResult:
    """New text and caret position to hand back to the host."""

    text: str
    caret: int


@dataclass(frozen=True)
class CollectionChange:
    """A single change notification from a candidate collection.

    ``index`` is the position of the first affected item; it is ``-1`` for
    a reset.
    """

    action: CollectionAction
    index: int = -1
    new_items: tuple[Any, ...] = ()
    old_items: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ViewChange:
    """A positional edit made to the view during reconciliation."""

    action: ViewAction
    index: int
    item: Any


@dataclass
class RefreshResult:
    """Outcome of one view refresh.

    ``trimmed`` is the number of characters the empty-result fallback cut
    from the front of the search string; ``exhausted`` is set when the
    fallback ran out of words without finding a match.
    """

    items: list[Any]
    search_string: str
    trimmed: int = 0
    exhausted: bool = False
    changes: list[ViewChange] = field(default_factory=list)


@dataclass
class SelectionChangingArgs:
    """Context handed to a host hook before a suggestion is spliced in."""

    item: Any
    entry_start: int
    search_string: str
    caret: int
    text: str


@dataclass
class PopulatingEvent:
    """Raised before the view is populated. Set ``cancel`` to skip it."""

    search_string: str
    cancel: bool = False


@dataclass
class DropDownEvent:
    """Raised around drop-down open/close transitions.

    Handlers of the ``*_opening``/``*_closing`` channels may set ``cancel``
    to veto the transition.
    """

    old_value: bool
    new_value: bool
    cancel: bool = False
