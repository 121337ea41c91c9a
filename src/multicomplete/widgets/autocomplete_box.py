"""Text input with a drop-down list of completion suggestions."""

from __future__ import annotations

from typing import Any, Iterable

from textual import on
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, OptionList
from textual.widgets.option_list import Option

from multicomplete.controller import AutoCompleteController, DataProvider, SelectionHook
from multicomplete.filters import Formatter
from multicomplete.logger import get_logger
from multicomplete.models import CommitResult, DropDownEvent, RefreshResult
from multicomplete.settings import AutoCompleteSettings
from multicomplete.widgets.autocomplete_input import AutocompleteInput

logger = get_logger("autocomplete_box")


class AutoCompleteBox(Widget):
    """An :class:`AutocompleteInput` stacked over a suggestion list.

    The box owns an :class:`~multicomplete.controller.AutoCompleteController`
    and translates between it and Textual: input changes go in, view
    updates, highlight moves and text splices come back out and are
    applied to the child widgets.
    """

    DEFAULT_CSS = """
    AutoCompleteBox {
        height: auto;
    }
    AutoCompleteBox > OptionList {
        display: none;
        height: auto;
    }
    """

    class SelectionChanged(Message):
        """Posted when the selected suggestion changes (including to None)."""

        def __init__(self, box: AutoCompleteBox, removed: tuple, added: tuple) -> None:
            super().__init__()
            self.box = box
            self.removed = removed
            self.added = added

        @property
        def control(self) -> AutoCompleteBox:
            return self.box

    class SuggestionSelected(Message):
        """Posted when a suggestion is accepted."""

        def __init__(self, box: AutoCompleteBox, item: Any, text: str, caret: int) -> None:
            super().__init__()
            self.box = box
            self.item = item
            self.text = text
            self.caret = caret

        @property
        def control(self) -> AutoCompleteBox:
            return self.box

    def __init__(
        self,
        candidates: Iterable[Any] | None = None,
        settings: AutoCompleteSettings | None = None,
        formatter: Formatter | None = None,
        value: str = "",
        placeholder: str = "",
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the box.

        Args:
            candidates: Suggestion source; observable collections are tracked.
            settings: Completion settings shared with the controller.
            formatter: Turns a candidate into its display text.
            value: Initial text.
            placeholder: Placeholder shown while the input is empty.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.controller = AutoCompleteController(settings, candidates, formatter)
        self._initial_value = value
        self._placeholder = placeholder
        self._unsubscribers: list = []

    @property
    def settings(self) -> AutoCompleteSettings:
        return self.controller.settings

    @property
    def candidates(self) -> tuple[Any, ...]:
        return self.controller.items

    @candidates.setter
    def candidates(self, items: Iterable[Any] | None) -> None:
        self.controller.attach_candidates(items)

    @property
    def value(self) -> str:
        if not self.is_mounted:
            return self._initial_value
        return self.input.value

    @value.setter
    def value(self, text: str) -> None:
        if not self.is_mounted:
            self._initial_value = text
            return
        self.controller.set_text(text)
        self._show_text(CommitResult(text, len(text)))

    @property
    def selected_item(self) -> Any:
        return self.controller.selected_item

    @property
    def selection_changing(self) -> SelectionHook | None:
        return self.controller.selection_changing

    @selection_changing.setter
    def selection_changing(self, hook: SelectionHook | None) -> None:
        self.controller.selection_changing = hook

    @property
    def data_provider(self) -> DataProvider | None:
        return self.controller.data_provider

    @data_provider.setter
    def data_provider(self, provider: DataProvider | None) -> None:
        self.controller.data_provider = provider

    @property
    def input(self) -> AutocompleteInput:
        return self.query_one(AutocompleteInput)

    @property
    def suggestion_list(self) -> OptionList:
        return self.query_one(OptionList)

    def compose(self) -> ComposeResult:
        """Create the input and the (hidden) suggestion list."""
        yield AutocompleteInput(
            self.controller,
            value=self._initial_value,
            placeholder=self._placeholder,
        )
        suggestions = OptionList()
        suggestions.can_focus = False
        yield suggestions

    def on_mount(self) -> None:
        """Wire the controller to the child widgets."""
        controller = self.controller
        controller.set_scheduler(self.set_timer)
        if self._initial_value:
            controller.set_text(self._initial_value)
        events = controller.events
        self._unsubscribers = [
            events.on("view_updated", self._apply_view),
            events.on("drop_down_opened", self._apply_drop_down),
            events.on("drop_down_closed", self._apply_drop_down),
            events.on("highlight_changed", self._apply_highlight),
            events.on("text_changed", self._show_text),
            events.on("selection_changed", self._forward_selection),
            events.on("suggestion_selected", self._forward_suggestion),
            controller.settings.on_change(self._apply_setting),
        ]

    def on_unmount(self) -> None:
        """Release the candidate source and pending timers."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.controller.close()

    @on(Input.Changed)
    def handle_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.controller.on_text_changed(event.value, event.input.cursor_position)

    @on(OptionList.OptionSelected)
    def handle_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.controller.commit_index(event.option_index)
        self.input.focus()

    def _show_text(self, result: CommitResult) -> None:
        field = self.input
        with field.prevent(Input.Changed):
            field.value = result.text
            field.cursor_position = result.caret

    def _apply_view(self, result: RefreshResult) -> None:
        suggestions = self.suggestion_list
        suggestions.clear_options()
        suggestions.add_options(
            [Option(self.controller.display_text(item)) for item in result.items]
        )
        suggestions.highlighted = self.controller.highlighted_index

    def _apply_drop_down(self, event: DropDownEvent) -> None:
        suggestions = self.suggestion_list
        suggestions.styles.max_height = self.settings.max_drop_down_height
        suggestions.display = event.new_value
        if not event.new_value:
            suggestions.highlighted = None

    def _apply_highlight(self, index: int | None) -> None:
        self.suggestion_list.highlighted = index

    def _forward_selection(self, removed: tuple, added: tuple) -> None:
        self.post_message(self.SelectionChanged(self, removed, added))

    def _forward_suggestion(self, item: Any, result: CommitResult) -> None:
        logger.debug("Suggestion {!r} accepted", item)
        self.post_message(self.SuggestionSelected(self, item, result.text, result.caret))

    def _apply_setting(self, name: str, old: Any, new: Any) -> None:
        if name == "max_drop_down_height":
            self.suggestion_list.styles.max_height = new
