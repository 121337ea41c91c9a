"""Framework-independent completion controller.

:class:`AutoCompleteController` ties the segmenter, the candidate view
and the splice functions into the behaviour of an autocomplete box: it
is told about text, caret, candidate and key events and answers with
search strings, view updates and new text/caret snapshots through its
:class:`~multicomplete.events.EventBus`.

Event channels (handler arguments in parentheses):

- ``search_updated`` (search_string, should_populate)
- ``populating`` (PopulatingEvent) - cancellable
- ``view_updated`` (RefreshResult)
- ``populated`` (tuple of view items)
- ``drop_down_opening`` / ``drop_down_closing`` (DropDownEvent) - cancellable
- ``drop_down_opened`` / ``drop_down_closed`` (DropDownEvent)
- ``highlight_changed`` (index or None)
- ``selection_changed`` (removed items, added items)
- ``text_changed`` (CommitResult) - the host must apply it
- ``suggestion_selected`` (item, CommitResult)
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from multicomplete.debounce import Debouncer, Scheduler
from multicomplete.events import EventBus
from multicomplete.filters import Formatter, format_value, make_predicate
from multicomplete.logger import get_logger
from multicomplete.models import (
    CollectionAction,
    CollectionChange,
    CommitResult,
    DropDownEvent,
    EntrySpan,
    PopulatingEvent,
    RefreshResult,
    SegmentDecision,
    SelectionChangingArgs,
)
from multicomplete.segmenter import TokenSegmenter, clamp
from multicomplete.settings import AutoCompleteSettings
from multicomplete.splice import cancel as cancel_splice
from multicomplete.splice import splice
from multicomplete.view import CandidateView

logger = get_logger("controller")

SelectionHook = Callable[[SelectionChangingArgs], "CommitResult | None"]
DataProvider = Callable[[str], Iterable[Any]]

_FILTER_SETTINGS = frozenset({"filter_mode", "text_filter", "item_filter", "max_suggestions"})


class AutoCompleteController:
    """State machine behind one autocomplete box.

    Args:
        settings: Completion settings; a default instance when omitted.
        items: Initial candidates (any iterable; observable collections are
            subscribed to).
        formatter: Turns a candidate into its display/insert text.
        scheduler: Timer factory for the populate delay.
    """

    def __init__(
        self,
        settings: AutoCompleteSettings | None = None,
        items: Iterable[Any] | None = None,
        formatter: Formatter | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.settings = settings or AutoCompleteSettings()
        self.events = EventBus()
        self.segmenter = TokenSegmenter(self.settings)
        self.view = CandidateView(self.settings.max_suggestions)
        self.formatter = formatter
        self.data_provider: DataProvider | None = None
        self.selection_changing: SelectionHook | None = None

        self._debouncer = Debouncer(self.settings.minimum_populate_delay, scheduler)
        self._source: Iterable[Any] | None = None
        self._subscribed = False
        self._items: list[Any] | None = None
        self._text = ""
        self._caret = 0
        self._search_string = ""
        self._selected_item: Any = None
        self._highlighted: int | None = None
        self._is_drop_down_open = False
        self._unsubscribe_settings = self.settings.on_change(self._on_setting_changed)

        if items is not None:
            self.attach_candidates(items)

    # -- read-only state -------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def search_string(self) -> str:
        """The typed text of the current entry, from its start to the caret."""
        return self._search_string

    @property
    def entry(self) -> EntrySpan:
        return self.segmenter.span

    @property
    def selected_item(self) -> Any:
        return self._selected_item

    @property
    def highlighted_index(self) -> int | None:
        return self._highlighted

    @property
    def is_drop_down_open(self) -> bool:
        return self._is_drop_down_open

    @property
    def items(self) -> tuple[Any, ...]:
        """The cached candidates, in source order."""
        return tuple(self._items or ())

    @property
    def suggestions(self) -> tuple[Any, ...]:
        """The current view."""
        return self.view.items

    def display_text(self, item: Any) -> str:
        return format_value(item, self.formatter)

    def set_scheduler(self, scheduler: Scheduler) -> None:
        """Use *scheduler* for populate delays from now on."""
        self._debouncer.set_scheduler(scheduler)

    # -- candidate source ------------------------------------------------

    def attach_candidates(self, items: Iterable[Any] | None) -> None:
        """Use *items* as the candidate source.

        A local copy is cached. Sources with ``subscribe``/``unsubscribe``
        (such as :class:`~multicomplete.candidates.ObservableCandidates`)
        are subscribed to; the previous source is unsubscribed first.
        """
        self.detach_candidates()
        if items is not None:
            self._source = items
            if callable(getattr(items, "subscribe", None)):
                items.subscribe(self.on_candidates_changed)
                self._subscribed = True
            self._items = list(items)
            logger.debug("Attached {} candidates", len(self._items))
        if self._is_drop_down_open:
            self._refresh_view()
            self._sync_drop_down()

    def detach_candidates(self) -> None:
        """Stop observing the current source and forget it."""
        if self._subscribed and self._source is not None:
            self._source.unsubscribe(self.on_candidates_changed)
        self._subscribed = False
        self._source = None
        self._items = None
        changes = self.view.clear()
        if changes:
            self.events.emit(
                "view_updated",
                RefreshResult(items=[], search_string=self._search_string, changes=changes),
            )

    def on_candidates_changed(self, change: CollectionChange) -> None:
        """Apply a collection change to the cache and re-filter."""
        if self._items is None:
            return
        action, index = change.action, change.index
        changes = []
        if action is CollectionAction.REMOVE:
            del self._items[index:index + len(change.old_items)]
        elif action is CollectionAction.ADD:
            if 0 <= index <= len(self._items):
                self._items[index:index] = list(change.new_items)
            else:
                self._items.extend(change.new_items)
        elif action is CollectionAction.REPLACE:
            for offset, item in enumerate(change.new_items):
                self._items[index + offset] = item
        elif action is CollectionAction.RESET:
            changes = self.view.clear()
            self._items = list(self._source) if self._source is not None else []

        if action in (CollectionAction.REMOVE, CollectionAction.REPLACE):
            changes = self.view.discard(change.old_items)

        result = self._refresh_view()
        result.changes[:0] = changes
        if self._is_drop_down_open and not self.view.items:
            self.close_drop_down()

    # -- text and caret --------------------------------------------------

    def on_text_changed(
        self, text: str, caret: int, user_initiated: bool = True
    ) -> SegmentDecision:
        """Handle a new text snapshot from the host.

        Results this controller pushed through ``text_changed`` must not be
        fed back here.
        """
        self._text = text or ""
        self._caret = clamp(caret, 0, len(self._text))
        decision = self.segmenter.on_text_changed(self._text, self._caret, user_initiated)
        self._search_string = decision.search_string
        self.events.emit("search_updated", decision.search_string, decision.should_populate)

        if decision.should_populate:
            self._debouncer.call(self.populate)
        else:
            self._debouncer.cancel()
            self._set_selected(None)
            self.close_drop_down()
        return decision

    def on_caret_changed(self, caret: int) -> None:
        """Handle a caret move that did not change the text."""
        caret = clamp(caret, 0, len(self._text))
        if caret == self._caret:
            return
        self._caret = caret
        was_active = self.segmenter.is_active
        self.segmenter.on_caret_changed(caret)
        if self.segmenter.is_active:
            self._search_string = self.segmenter.current_search(self._text, caret)
        elif was_active:
            self.close_drop_down()

    def set_text(self, text: str, caret: int | None = None) -> SegmentDecision:
        """Replace the text programmatically; never starts a new entry."""
        text = text or ""
        return self.on_text_changed(text, len(text) if caret is None else caret, False)

    # -- population ------------------------------------------------------

    def populate(self) -> None:
        """Recompute the search string and fill the view.

        Handlers of ``populating`` may cancel, in which case the host is
        expected to call :meth:`populate_complete` itself later.
        """
        self._search_string = self.segmenter.current_search(self._text, self._caret)
        event = PopulatingEvent(self._search_string)
        self.events.emit("populating", event)
        if event.cancel:
            logger.debug("Populate for {!r} cancelled by handler", self._search_string)
            return
        self.populate_complete()

    def populate_complete(self) -> None:
        """Refresh the view and open the drop-down iff it has items."""
        self._refresh_view()
        self.events.emit("populated", self.view.items)
        self._sync_drop_down()

    def _predicate_for(self, search: str):
        settings = self.settings
        return make_predicate(
            search,
            settings.filter_mode,
            settings.text_filter,
            settings.item_filter,
            self.formatter,
        )

    def _refresh_view(self) -> RefreshResult:
        search = self._search_string
        if self.data_provider is not None:
            # Provider results are already filtered for the search string.
            changes = self.view.reconcile(list(self.data_provider(search)), None)
            result = RefreshResult(
                items=list(self.view.items), search_string=search, changes=changes
            )
        elif self._items is None:
            result = RefreshResult(items=[], search_string=search, changes=self.view.clear())
        else:
            result = self.view.refresh(
                self._items,
                search,
                self._predicate_for,
                fallback=self.settings.is_multi_entry,
            )
            if result.exhausted:
                self.segmenter.move_start(self._caret)
            elif result.trimmed:
                self.segmenter.advance(result.trimmed, self._caret)

        self._search_string = result.search_string
        logger.debug(
            "View refreshed for {!r}: {} suggestions", result.search_string, len(result.items)
        )
        self.events.emit("view_updated", result)
        return result

    # -- drop-down -------------------------------------------------------

    def _sync_drop_down(self) -> None:
        self._set_drop_down_open(len(self.view) > 0)

    def request_drop_down(self) -> None:
        """Ask for suggestions; the drop-down opens if any are found."""
        self._debouncer.call(self.populate)

    def close_drop_down(self) -> None:
        self._set_drop_down_open(False)

    def toggle_drop_down(self) -> None:
        if self._is_drop_down_open:
            self.close_drop_down()
        else:
            self.request_drop_down()

    def _set_drop_down_open(self, value: bool) -> None:
        old = self._is_drop_down_open
        if value == old:
            return
        event = DropDownEvent(old, value)
        self.events.emit("drop_down_opening" if value else "drop_down_closing", event)
        if event.cancel:
            return
        self._is_drop_down_open = value
        if not value:
            self._set_highlight(None)
        self.events.emit(
            "drop_down_opened" if value else "drop_down_closed", DropDownEvent(old, value)
        )

    # -- selection -------------------------------------------------------

    def _set_highlight(self, index: int | None) -> None:
        if index != self._highlighted:
            self._highlighted = index
            self.events.emit("highlight_changed", index)

    def _set_selected(self, item: Any) -> None:
        old = self._selected_item
        if old is item:
            return
        self._selected_item = item
        removed = () if old is None else (old,)
        added = () if item is None else (item,)
        self.events.emit("selection_changed", removed, added)

    def _apply(self, result: CommitResult) -> CommitResult:
        self._text, self._caret = result.text, result.caret
        self.events.emit("text_changed", result)
        return result

    def select(self, item: Any) -> CommitResult:
        """Make *item* the selected item and show it in the text.

        In multi-entry mode the item's display text replaces the entry
        region, otherwise the whole text; ``None`` restores the raw search
        string. A ``selection_changing`` hook may return its own result
        to override the splice.
        """
        self._debouncer.cancel()
        start = self.segmenter.start_offset
        hook_result = None
        if self.selection_changing is not None:
            hook_result = self.selection_changing(
                SelectionChangingArgs(item, start, self._search_string, self._caret, self._text)
            )

        if hook_result is not None:
            result = hook_result
            self.segmenter.finish()
        else:
            replacement = self._search_string if item is None else self.display_text(item)
            if self.settings.is_multi_entry:
                result = splice(self._text, start, self._caret, replacement)
                self.segmenter.finish()
            else:
                result = CommitResult(replacement, len(replacement))

        self._set_selected(item)
        return self._apply(result)

    def highlight(self, index: int | None) -> CommitResult | None:
        """Highlight the suggestion at *index* and preview it.

        ``None`` (or an index outside the view) clears the highlight and
        restores the typed search string.
        """
        if index is None or not 0 <= index < len(self.view):
            had_selection = self._highlighted is not None
            self._set_highlight(None)
            return self.select(None) if had_selection else None
        self._set_highlight(index)
        return self.select(self.view[index])

    def move_highlight(self, delta: int) -> CommitResult | None:
        """Move the highlight by *delta*, cycling through "no highlight"."""
        count = len(self.view)
        if count == 0:
            return None
        current = self._highlighted
        if current is None:
            index = 0 if delta > 0 else count - 1
        else:
            index = current + delta
            if not 0 <= index < count:
                return self.highlight(None)
        return self.highlight(index)

    def commit(self, item: Any = None) -> CommitResult | None:
        """Accept *item* (or the current selection) and close the drop-down.

        Returns:
            The final text and caret, or None when nothing was selected.
        """
        if item is not None and item is not self._selected_item:
            self.select(item)
        if self._selected_item is None:
            self.close_drop_down()
            return None

        result = CommitResult(self._text, self._caret)
        self.segmenter.finish()
        self.close_drop_down()
        logger.debug("Committed {!r}", self._selected_item)
        self.events.emit("suggestion_selected", self._selected_item, result)
        return result

    def commit_index(self, index: int) -> CommitResult | None:
        """Highlight and accept the suggestion at *index*."""
        if not 0 <= index < len(self.view):
            return None
        self.highlight(index)
        return self.commit()

    def cancel(self) -> CommitResult:
        """Revert the entry to the typed search string and close the drop-down."""
        self._debouncer.cancel()
        start = self.segmenter.start_offset
        if self.settings.is_multi_entry:
            result = cancel_splice(self._text, start, self._caret, self._search_string)
        else:
            result = CommitResult(self._search_string, len(self._search_string))
        self._set_selected(None)
        self.segmenter.finish()
        self.close_drop_down()
        logger.debug("Cancelled entry, restored {!r}", self._search_string)
        if result.text == self._text and result.caret == self._caret:
            return result
        return self._apply(result)

    # -- keys ------------------------------------------------------------

    def is_caret_on_last_line(self) -> bool:
        return "\n" not in self._text[self._caret:]

    def handle_key(self, key: str) -> bool:
        """React to a navigation key.

        Returns:
            True if the key was consumed and must not reach the text field.
        """
        key = key.lower()
        if self._is_drop_down_open:
            if key == "escape":
                self.cancel()
                return True
            if key == "down":
                self.move_highlight(1)
                return True
            if key == "up":
                self.move_highlight(-1)
                return True
            if key == "enter":
                self.commit()
                return True
            if key == "tab":
                if self._highlighted is None and len(self.view):
                    self.highlight(0)
                self.commit()
                return True
        elif key == "down" and (
            not self.settings.accepts_return or self.is_caret_on_last_line()
        ):
            self.request_drop_down()
            return True

        if key == "f4":
            self.toggle_drop_down()
            return True
        return False

    # -- settings --------------------------------------------------------

    def _on_setting_changed(self, name: str, old: Any, new: Any) -> None:
        if name == "minimum_populate_delay":
            self._debouncer.delay_ms = new
        elif name == "max_suggestions":
            self.view.max_suggestions = new
        if name in _FILTER_SETTINGS and self._is_drop_down_open:
            self._refresh_view()
            self._sync_drop_down()

    def close(self) -> None:
        """Release the candidate source, timers and settings listener."""
        self._debouncer.cancel()
        self.detach_candidates()
        self._unsubscribe_settings()
        self.events.clear()
