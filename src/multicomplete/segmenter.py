"""Token boundary detection for multi-entry completion.

The segmenter tracks which part of a free-form text is the entry being
completed. In multi-entry mode a new entry starts at the beginning of
the text or right after a delimiter; the entry then grows with the
caret until it is committed, cancelled, or the caret moves in front of
it. In single-entry mode the whole text is the entry.
"""

from __future__ import annotations

from multicomplete.logger import get_logger
from multicomplete.models import EntrySpan, SegmentDecision
from multicomplete.settings import AutoCompleteSettings

logger = get_logger("segmenter")

# Longer delimiters first only for readability; any suffix match counts.
DELIMITERS: tuple[str, ...] = (", ", ". ", ".", ",", " ", "\n", "\r")

BLANK_CHARS = frozenset(" .,\r\n\t;:-/'()")


def is_blank_char(char: str) -> bool:
    """Return True if *char* separates words rather than belonging to one."""
    return char in BLANK_CHARS


def clamp(value: int, low: int, high: int) -> int:
    """Clamp *value* into ``[low, high]``."""
    return max(low, min(value, high))


def ends_with_delimiter(text: str, position: int) -> bool:
    """Return True if ``text[:position]`` ends with an entry delimiter."""
    head = text[:position]
    return any(head.endswith(delimiter) for delimiter in DELIMITERS)


def is_new_entry_start(text: str, caret: int) -> bool:
    """Return True if typing at *caret* begins a new entry.

    Examples:
        >>> is_new_entry_start("hello ", 6)
        True
        >>> is_new_entry_start("hello", 5)
        False
    """
    if caret <= 1:
        return True
    return ends_with_delimiter(text, caret)


def skip_blanks(text: str, start: int, end: int) -> int:
    """Return the first offset in ``[start, end)`` that is not blank, else *end*."""
    while start < end and is_blank_char(text[start]):
        start += 1
    return start


class TokenSegmenter:
    """Tracks the active entry span across text and caret changes.

    Args:
        settings: Source of ``is_multi_entry`` and ``minimum_prefix_length``;
            read on every update so live changes take effect immediately.
    """

    def __init__(self, settings: AutoCompleteSettings) -> None:
        self.settings = settings
        self._span = EntrySpan()
        self._search_string = ""

    @property
    def span(self) -> EntrySpan:
        """A copy of the current entry span."""
        return EntrySpan(self._span.start_offset, self._span.is_active)

    @property
    def is_active(self) -> bool:
        return self._span.is_active

    @property
    def start_offset(self) -> int:
        return self._span.start_offset

    @property
    def search_string(self) -> str:
        return self._search_string

    def on_text_changed(
        self, text: str, caret: int, user_initiated: bool = True
    ) -> SegmentDecision:
        """Update the entry for a new text snapshot.

        Args:
            text: The full text after the change.
            caret: Caret offset after the change; clamped into the text.
            user_initiated: False for programmatic changes, which never
                start a new entry.

        Returns:
            The resulting decision, including whether to populate.
        """
        text = text or ""
        caret = clamp(caret, 0, len(text))

        if not self.settings.is_multi_entry:
            return self._whole_text(text, user_initiated)

        span = self._span
        if span.is_active and caret < span.start_offset:
            self._deactivate("caret moved before entry start")
        elif span.is_active and not text:
            # A user edit restarts the entry at 0 right below.
            self._deactivate("text emptied")

        search = ""
        if user_initiated and not span.is_active and is_new_entry_start(text, caret):
            span.is_active = True
            span.start_offset = max(caret - 1, 0)
            logger.debug("Entry started at {} (caret {})", span.start_offset, caret)

        if span.is_active:
            if not text:
                span.start_offset = 0
            elif span.start_offset > caret:
                span.start_offset = caret
            else:
                span.start_offset = skip_blanks(text, span.start_offset, caret)
                search = text[span.start_offset:caret]

        self._search_string = search
        return SegmentDecision(
            entry_active=span.is_active,
            start_offset=span.start_offset,
            search_string=search,
            should_populate=span.is_active and self._long_enough(search),
        )

    def on_caret_changed(self, caret: int) -> None:
        """Deactivate the entry if the caret moved in front of it."""
        if self._span.is_active and caret < self._span.start_offset:
            self._deactivate("caret moved before entry start")

    def current_search(self, text: str, caret: int) -> str:
        """Recompute the search string for *text* at *caret*.

        Used when a delayed populate fires, since the text may have changed
        since the last decision.
        """
        text = text or ""
        if not self.settings.is_multi_entry:
            return text
        caret = clamp(caret, 0, len(text))
        start = self._span.start_offset
        if caret <= start:
            return ""
        return text[start:caret]

    def advance(self, count: int, caret: int | None = None) -> None:
        """Move the entry start forward by *count* characters.

        When *caret* is given the start never moves past it.
        """
        if count <= 0:
            return
        start = self._span.start_offset + count
        if caret is not None:
            start = min(start, caret)
        self._span.start_offset = start
        self._search_string = self._search_string[count:]

    def move_start(self, offset: int) -> None:
        """Place the entry start at *offset*."""
        self._span.start_offset = max(offset, 0)

    def finish(self) -> None:
        """End the entry after a commit or cancel; the start offset is kept."""
        if self._span.is_active:
            logger.debug("Entry finished at {}", self._span.start_offset)
        self._span.is_active = False

    def reset(self) -> None:
        """Forget the entry entirely."""
        self._span = EntrySpan()
        self._search_string = ""

    def _deactivate(self, reason: str) -> None:
        logger.debug("Entry deactivated: {}", reason)
        self._span.is_active = False

    def _long_enough(self, search: str) -> bool:
        minimum = self.settings.minimum_prefix_length
        if minimum == -1:
            return False
        return minimum <= 0 or len(search) >= minimum

    def _whole_text(self, text: str, user_initiated: bool) -> SegmentDecision:
        span = self._span
        span.start_offset = 0
        span.is_active = bool(user_initiated)
        self._search_string = text
        return SegmentDecision(
            entry_active=span.is_active,
            start_offset=0,
            search_string=text,
            should_populate=span.is_active and self._long_enough(text),
        )
