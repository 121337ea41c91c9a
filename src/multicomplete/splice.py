"""Splicing suggestions into, and back out of, the surrounding text."""

from __future__ import annotations

from multicomplete.models import CommitResult
from multicomplete.segmenter import clamp


def _bounds(text: str, entry_start: int, caret: int) -> tuple[int, int]:
    """Clamp offsets so that ``0 <= entry_start <= caret <= len(text)``."""
    caret = clamp(caret, 0, len(text))
    entry_start = clamp(entry_start, 0, caret)
    return entry_start, caret


def splice(text: str, entry_start: int, caret: int, replacement: str) -> CommitResult:
    """Replace ``text[entry_start:caret]`` with *replacement*.

    Everything from *caret* onwards is kept unchanged and the new caret
    sits right after the inserted text.
    """
    text = text or ""
    replacement = replacement or ""
    entry_start, caret = _bounds(text, entry_start, caret)
    return CommitResult(
        text=text[:entry_start] + replacement + text[caret:],
        caret=entry_start + len(replacement),
    )


def commit(text: str, entry_start: int, caret: int, replacement: str) -> CommitResult:
    """Accept *replacement* for the entry that spans ``[entry_start, caret)``.

    Example:
        >>> commit("say ap now", 4, 6, "apple")
        CommitResult(text='say apple now', caret=9)
    """
    return splice(text, entry_start, caret, replacement)


def cancel(text: str, entry_start: int, caret: int, search_string: str) -> CommitResult:
    """Revert the entry to the raw *search_string* the user typed.

    *caret* marks the end of whatever is currently displayed for the entry
    (for example a previewed suggestion); the tail after it is preserved.
    """
    return splice(text, entry_start, caret, search_string)
