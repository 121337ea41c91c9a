"""Tests for the AutoCompleteBox widget."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.widgets import Input

from multicomplete.candidates import ObservableCandidates
from multicomplete.settings import AutoCompleteSettings
from multicomplete.widgets import AutoCompleteBox


class BoxApp(App):
    """Minimal app hosting one completion box."""

    def __init__(self, words, settings: AutoCompleteSettings | None = None) -> None:
        super().__init__()
        self.words = words
        self.settings = settings or AutoCompleteSettings(is_multi_entry=True)
        self.accepted: list[AutoCompleteBox.SuggestionSelected] = []
        self.selections: list[AutoCompleteBox.SelectionChanged] = []

    def compose(self) -> ComposeResult:
        yield AutoCompleteBox(self.words, self.settings, id="box")
        yield Input(id="other-input")

    def on_auto_complete_box_suggestion_selected(
        self, event: AutoCompleteBox.SuggestionSelected
    ) -> None:
        self.accepted.append(event)

    def on_auto_complete_box_selection_changed(
        self, event: AutoCompleteBox.SelectionChanged
    ) -> None:
        self.selections.append(event)


async def _type(pilot, app: BoxApp, *keys: str) -> AutoCompleteBox:
    box = app.query_one("#box", AutoCompleteBox)
    box.input.focus()
    await pilot.press(*keys)
    await pilot.pause()
    return box


class TestAutoCompleteBox:
    """Tests for the input and drop-down working together."""

    async def test_typing_shows_suggestions(self):
        app = BoxApp(["apple", "apricot", "banana"])
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "a", "p")

            assert box.suggestion_list.display is True
            assert box.suggestion_list.option_count == 2
            assert box.controller.suggestions == ("apple", "apricot")

    async def test_no_match_hides_list(self):
        app = BoxApp(["apple"])
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "z")

            assert box.suggestion_list.display is False

    async def test_down_previews_and_enter_accepts(self):
        app = BoxApp(["apple", "apricot", "banana"])
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "a", "p", "down")
            assert box.value == "apple"
            assert box.suggestion_list.highlighted == 0

            await pilot.press("enter")
            await pilot.pause()

            assert box.value == "apple"
            assert box.suggestion_list.display is False
            assert [event.item for event in app.accepted] == ["apple"]
            assert app.selections[-1].added == ("apple",)

    async def test_escape_restores_typed_text(self):
        app = BoxApp(["apple", "apricot"])
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "a", "p", "down", "down")
            assert box.value == "apricot"

            await pilot.press("escape")
            await pilot.pause()

            assert box.value == "ap"
            assert box.input.cursor_position == 2
            assert box.suggestion_list.display is False

    async def test_second_entry(self):
        app = BoxApp(["apple", "banana"])
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "a", "tab", "space", "b", "tab")

            assert box.value == "apple banana"
            assert box.input.cursor_position == len("apple banana")

    async def test_preview_does_not_retrigger_population(self):
        app = BoxApp(["apple", "apricot"])
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "a", "down")

            assert box.controller.search_string == "a"
            assert box.controller.highlighted_index == 0

    async def test_highlight_survives_candidate_change(self):
        words = ObservableCandidates(["apple", "apricot"])
        app = BoxApp(words)
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "a", "p", "down")
            words.append("apron")
            await pilot.pause()

            assert box.suggestion_list.option_count == 3
            assert box.controller.highlighted_index == 0
            assert box.suggestion_list.highlighted == 0

    async def test_tab_moves_focus_when_closed(self):
        app = BoxApp(["apple"])
        async with app.run_test(size=(80, 20)) as pilot:
            await _type(pilot, app, "tab")

            assert app.focused.id == "other-input"

    async def test_candidates_update_live(self):
        words = ObservableCandidates(["apple"])
        app = BoxApp(words)
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "a")
            words.append("avocado")
            await pilot.pause()

            assert box.suggestion_list.option_count == 2

    async def test_unmount_releases_candidates(self):
        words = ObservableCandidates(["apple"])
        app = BoxApp(words)
        async with app.run_test(size=(80, 20)) as pilot:
            box = app.query_one("#box", AutoCompleteBox)
            assert words.subscriber_count == 1
            await box.remove()
            await pilot.pause()

            assert words.subscriber_count == 0

    async def test_delay_uses_timer(self):
        settings = AutoCompleteSettings(is_multi_entry=True, minimum_populate_delay=300)
        app = BoxApp(["apple"], settings)
        async with app.run_test(size=(80, 20)) as pilot:
            box = await _type(pilot, app, "a")
            assert box.controller.is_drop_down_open is False

            await pilot.pause(0.6)

            assert box.controller.is_drop_down_open is True
