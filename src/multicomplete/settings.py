"""Validated completion settings with change notifications."""

from __future__ import annotations

from typing import Any, Callable

from multicomplete.errors import SettingsError
from multicomplete.filters import (
    DEFAULT_MAX_SUGGESTIONS,
    ItemFilter,
    TextFilter,
    get_text_filter,
)
from multicomplete.logger import get_logger
from multicomplete.models import FilterMode

logger = get_logger("settings")

SettingsListener = Callable[[str, Any, Any], None]


def parse_filter_mode(value: FilterMode | str) -> FilterMode:
    """Coerce *value* to a :class:`FilterMode`.

    Accepts enum members, their values (``"starts_with"``) or their names
    (``"STARTS_WITH"``).

    Raises:
        SettingsError: If *value* does not name a filter mode.
    """
    if isinstance(value, FilterMode):
        return value
    if isinstance(value, str):
        key = value.strip()
        try:
            return FilterMode(key.lower())
        except ValueError:
            pass
        try:
            return FilterMode[key.upper()]
        except KeyError:
            pass
    raise SettingsError(f"Unknown filter mode: {value!r}")


class AutoCompleteSettings:
    """Configuration for one completion control.

    Every setter validates its value first; an invalid value raises
    :class:`~multicomplete.errors.SettingsError` and leaves the previous
    value in place. Successful changes are reported to listeners
    registered with :meth:`on_change` as ``(name, old, new)``.

    ``filter_mode``, ``text_filter`` and ``item_filter`` are coupled:
    choosing a mode installs its built-in text filter, while assigning a
    custom filter switches the mode to ``CUSTOM`` and clears the other
    custom filter. The most recent assignment wins.
    """

    def __init__(
        self,
        minimum_prefix_length: int = 1,
        minimum_populate_delay: int = 0,
        filter_mode: FilterMode | str = FilterMode.STARTS_WITH,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
        is_multi_entry: bool = False,
        max_drop_down_height: int = 10,
        accepts_return: bool = False,
    ) -> None:
        self._listeners: list[SettingsListener] = []
        self._minimum_prefix_length = 1
        self._minimum_populate_delay = 0
        self._filter_mode = FilterMode.STARTS_WITH
        self._text_filter: TextFilter | None = get_text_filter(FilterMode.STARTS_WITH)
        self._item_filter: ItemFilter | None = None
        self._max_suggestions = DEFAULT_MAX_SUGGESTIONS
        self._max_drop_down_height = 10
        self._is_multi_entry = False
        self._accepts_return = False
        self.minimum_prefix_length = minimum_prefix_length
        self.minimum_populate_delay = minimum_populate_delay
        self.filter_mode = filter_mode
        self.max_suggestions = max_suggestions
        self.max_drop_down_height = max_drop_down_height
        self.is_multi_entry = is_multi_entry
        self.accepts_return = accepts_return

    # -- notifications -------------------------------------------------

    def on_change(self, listener: SettingsListener) -> Callable[[], None]:
        """Register *listener*. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self, name: str, old: Any, new: Any) -> None:
        if old == new:
            return
        logger.debug("Setting {} changed: {!r} -> {!r}", name, old, new)
        for listener in list(self._listeners):
            listener(name, old, new)

    # -- population ----------------------------------------------------

    @property
    def minimum_prefix_length(self) -> int:
        """Characters needed before suggestions appear; -1 disables them."""
        return self._minimum_prefix_length

    @minimum_prefix_length.setter
    def minimum_prefix_length(self, value: int) -> None:
        value = _require_int("minimum_prefix_length", value)
        if value < -1:
            raise SettingsError(
                f"minimum_prefix_length must be -1 or greater, got {value}"
            )
        old, self._minimum_prefix_length = self._minimum_prefix_length, value
        self._changed("minimum_prefix_length", old, value)

    @property
    def minimum_populate_delay(self) -> int:
        """Debounce delay in milliseconds before the view is populated."""
        return self._minimum_populate_delay

    @minimum_populate_delay.setter
    def minimum_populate_delay(self, value: int) -> None:
        value = _require_int("minimum_populate_delay", value)
        if value < 0:
            raise SettingsError(
                f"minimum_populate_delay must not be negative, got {value}"
            )
        old, self._minimum_populate_delay = self._minimum_populate_delay, value
        self._changed("minimum_populate_delay", old, value)

    @property
    def max_suggestions(self) -> int:
        return self._max_suggestions

    @max_suggestions.setter
    def max_suggestions(self, value: int) -> None:
        value = _require_int("max_suggestions", value)
        if value < 1:
            raise SettingsError(f"max_suggestions must be at least 1, got {value}")
        old, self._max_suggestions = self._max_suggestions, value
        self._changed("max_suggestions", old, value)

    @property
    def max_drop_down_height(self) -> int:
        """Maximum number of suggestion rows shown at once."""
        return self._max_drop_down_height

    @max_drop_down_height.setter
    def max_drop_down_height(self, value: int) -> None:
        value = _require_int("max_drop_down_height", value)
        if value <= 0:
            raise SettingsError(
                f"max_drop_down_height must be positive, got {value}"
            )
        old, self._max_drop_down_height = self._max_drop_down_height, value
        self._changed("max_drop_down_height", old, value)

    @property
    def is_multi_entry(self) -> bool:
        """Complete each delimited token separately instead of the whole text."""
        return self._is_multi_entry

    @is_multi_entry.setter
    def is_multi_entry(self, value: bool) -> None:
        value = _require_bool("is_multi_entry", value)
        old, self._is_multi_entry = self._is_multi_entry, value
        self._changed("is_multi_entry", old, value)

    @property
    def accepts_return(self) -> bool:
        """Multi-line text: Enter inserts a newline instead of committing."""
        return self._accepts_return

    @accepts_return.setter
    def accepts_return(self, value: bool) -> None:
        value = _require_bool("accepts_return", value)
        old, self._accepts_return = self._accepts_return, value
        self._changed("accepts_return", old, value)

    # -- filtering -----------------------------------------------------

    @property
    def filter_mode(self) -> FilterMode:
        return self._filter_mode

    @filter_mode.setter
    def filter_mode(self, value: FilterMode | str) -> None:
        mode = parse_filter_mode(value)
        old, self._filter_mode = self._filter_mode, mode
        self._text_filter = get_text_filter(mode)
        if mode is not FilterMode.CUSTOM:
            self._item_filter = None
        self._changed("filter_mode", old, mode)

    @property
    def text_filter(self) -> TextFilter | None:
        """The active string predicate (built-in or custom)."""
        return self._text_filter

    @text_filter.setter
    def text_filter(self, value: TextFilter | None) -> None:
        if value is None:
            self.filter_mode = FilterMode.NONE
            return
        old_mode = self._filter_mode
        self._filter_mode = FilterMode.CUSTOM
        self._text_filter = value
        self._item_filter = None
        self._changed("filter_mode", old_mode, FilterMode.CUSTOM)
        self._changed("text_filter", None, value)

    @property
    def item_filter(self) -> ItemFilter | None:
        """The custom object-level predicate, if any."""
        return self._item_filter

    @item_filter.setter
    def item_filter(self, value: ItemFilter | None) -> None:
        if value is None:
            self._item_filter = None
            self.filter_mode = FilterMode.NONE
            return
        old_mode = self._filter_mode
        self._filter_mode = FilterMode.CUSTOM
        self._text_filter = None
        self._item_filter = value
        self._changed("filter_mode", old_mode, FilterMode.CUSTOM)
        self._changed("item_filter", None, value)

    def update(self, **changes: Any) -> None:
        """Apply several settings at once, in the order given.

        Stops at the first invalid value; settings applied before it stay
        applied.
        """
        for name, value in changes.items():
            if not isinstance(getattr(type(self), name, None), property):
                raise SettingsError(f"Unknown setting: {name}")
            setattr(self, name, value)


def _require_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"{name} must be a boolean, got {value!r}")
    return value


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"{name} must be an integer, got {value!r}")
    return value
