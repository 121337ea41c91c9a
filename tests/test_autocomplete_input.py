"""Tests for the AutocompleteInput widget."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.widgets import Input

from multicomplete.controller import AutoCompleteController
from multicomplete.settings import AutoCompleteSettings
from multicomplete.widgets.autocomplete_input import AutocompleteInput


class AutocompleteApp(App):
    """Minimal app to test AutocompleteInput."""

    def __init__(self, controller: AutoCompleteController | None) -> None:
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        yield AutocompleteInput(self.controller, id="ac-input")
        yield Input(id="other-input", placeholder="Other field")


class TestAutocompleteInput:
    """Tests for key routing to the controller."""

    async def test_tab_moves_focus_when_closed(self):
        app = AutocompleteApp(AutoCompleteController(items=["apple"]))
        async with app.run_test(size=(80, 10)) as pilot:
            app.query_one("#ac-input", AutocompleteInput).focus()
            await pilot.pause()
            await pilot.press("tab")
            await pilot.pause()

            assert app.focused.id == "other-input"

    async def test_tab_consumed_when_open(self):
        controller = AutoCompleteController(items=["apple"])
        app = AutocompleteApp(controller)
        async with app.run_test(size=(80, 10)) as pilot:
            app.query_one("#ac-input", AutocompleteInput).focus()
            controller.on_text_changed("a", 1)
            assert controller.is_drop_down_open
            await pilot.press("tab")
            await pilot.pause()

            assert app.focused.id == "ac-input"
            assert controller.is_drop_down_open is False
            assert controller.text == "apple"

    async def test_printable_keys_reach_input(self):
        controller = AutoCompleteController(items=["apple"])
        app = AutocompleteApp(controller)
        async with app.run_test(size=(80, 10)) as pilot:
            ac = app.query_one("#ac-input", AutocompleteInput)
            ac.focus()
            await pilot.press("x", "y")
            await pilot.pause()

            assert ac.value == "xy"

    async def test_without_controller(self):
        app = AutocompleteApp(None)
        async with app.run_test(size=(80, 10)) as pilot:
            ac = app.query_one("#ac-input", AutocompleteInput)
            ac.focus()
            await pilot.press("a", "tab")
            await pilot.pause()

            assert ac.value == "a"
            assert app.focused.id == "other-input"

    async def test_caret_synced_before_keys(self):
        controller = AutoCompleteController(
            AutoCompleteSettings(is_multi_entry=True), ["apple"]
        )
        app = AutocompleteApp(controller)
        async with app.run_test(size=(80, 10)) as pilot:
            ac = app.query_one("#ac-input", AutocompleteInput)
            ac.focus()
            ac.value = "say ap"
            controller.set_text("say ap")
            ac.cursor_position = 2
            await pilot.press("f4")
            await pilot.pause()

            assert controller.caret == 2
