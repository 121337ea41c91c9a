"""Candidate matching predicates for every filter mode.

A *text filter* has the signature ``(search, display_text) -> bool`` and
an *item filter* ``(search, item) -> bool``; both receive the search
string first.
"""

from __future__ import annotations

import unicodedata
from typing import Any, Callable, Iterable

from multicomplete.models import FilterMode

TextFilter = Callable[[str, str], bool]
ItemFilter = Callable[[str, Any], bool]
Formatter = Callable[[Any], str]

DEFAULT_MAX_SUGGESTIONS = 500


def _culture(text: str) -> str:
    """Normalise so canonically equivalent strings compare equal."""
    return unicodedata.normalize("NFKC", text)


def _culture_fold(text: str) -> str:
    return _culture(text).casefold()


def _ordinal_fold(text: str) -> str:
    return text.upper()


def _ordinal(text: str) -> str:
    return text


# Per-mode (operation, key function) pairs.
_STARTS_WITH = "starts_with"
_CONTAINS = "contains"
_EQUALS = "equals"

_MODE_TABLE: dict[FilterMode, tuple[str, Callable[[str], str]]] = {
    FilterMode.STARTS_WITH: (_STARTS_WITH, _culture_fold),
    FilterMode.STARTS_WITH_CASE_SENSITIVE: (_STARTS_WITH, _culture),
    FilterMode.STARTS_WITH_ORDINAL: (_STARTS_WITH, _ordinal_fold),
    FilterMode.STARTS_WITH_ORDINAL_CASE_SENSITIVE: (_STARTS_WITH, _ordinal),
    FilterMode.CONTAINS: (_CONTAINS, _culture_fold),
    FilterMode.CONTAINS_CASE_SENSITIVE: (_CONTAINS, _culture),
    FilterMode.CONTAINS_ORDINAL: (_CONTAINS, _ordinal_fold),
    FilterMode.CONTAINS_ORDINAL_CASE_SENSITIVE: (_CONTAINS, _ordinal),
    FilterMode.EQUALS: (_EQUALS, _culture_fold),
    FilterMode.EQUALS_CASE_SENSITIVE: (_EQUALS, _culture),
    FilterMode.EQUALS_ORDINAL: (_EQUALS, _ordinal_fold),
    FilterMode.EQUALS_ORDINAL_CASE_SENSITIVE: (_EQUALS, _ordinal),
}


def _make_text_filter(operation: str, key: Callable[[str], str]) -> TextFilter:
    def text_filter(search: str, value: str) -> bool:
        if value is None:
            return False
        s, v = key(search or ""), key(value)
        if operation == _STARTS_WITH:
            return v.startswith(s)
        if operation == _CONTAINS:
            return s in v
        return v == s

    text_filter.__name__ = f"{operation}_{key.__name__.strip('_')}"
    return text_filter


_BUILTIN_FILTERS: dict[FilterMode, TextFilter] = {
    mode: _make_text_filter(operation, key)
    for mode, (operation, key) in _MODE_TABLE.items()
}


def get_text_filter(mode: FilterMode) -> TextFilter | None:
    """Return the built-in text filter for *mode*.

    ``NONE`` and ``CUSTOM`` have no built-in filter and return None.
    """
    return _BUILTIN_FILTERS.get(mode)


def format_value(item: Any, formatter: Formatter | None = None) -> str:
    """Return the display text used to match *item*.

    Args:
        item: The candidate.
        formatter: Optional value-member projection; ``str`` when omitted.

    Returns:
        The display text, or an empty string for ``None``.
    """
    if formatter is not None:
        return formatter(item) or ""
    return "" if item is None else str(item)


def make_predicate(
    search: str,
    mode: FilterMode,
    text_filter: TextFilter | None = None,
    item_filter: ItemFilter | None = None,
    formatter: Formatter | None = None,
) -> Callable[[Any], bool] | None:
    """Bind the active filter to *search*.

    A custom *text_filter* wins over *mode*'s built-in one; the
    *item_filter* is only consulted in ``CUSTOM`` mode without a text
    filter.

    Returns:
        A one-argument predicate, or None when every item passes.
    """
    string_filter = text_filter if text_filter is not None else get_text_filter(mode)
    if string_filter is not None:
        return lambda item: string_filter(search, format_value(item, formatter))
    if mode is FilterMode.CUSTOM and item_filter is not None:
        return lambda item: item_filter(search, item)
    return None


def apply_filter(
    candidates: Iterable[Any],
    search: str,
    mode: FilterMode = FilterMode.STARTS_WITH,
    item_filter: ItemFilter | None = None,
    text_filter: TextFilter | None = None,
    formatter: Formatter | None = None,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
) -> list[Any]:
    """Return the matching candidates in source order, capped.

    This is the stateless counterpart of
    :meth:`multicomplete.view.CandidateView.refresh`; both produce the
    same list for the same inputs.
    """
    predicate = make_predicate(search, mode, text_filter, item_filter, formatter)
    result: list[Any] = []
    for item in candidates:
        if len(result) >= max_suggestions:
            break
        if predicate is None or predicate(item):
            result.append(item)
    return result
