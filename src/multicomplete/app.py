"""Demo Textual application for multicomplete."""

from __future__ import annotations

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Input, Label, Static

from multicomplete.candidates import ObservableCandidates
from multicomplete.errors import SettingsError
from multicomplete.filters import ItemFilter
from multicomplete.models import FilterMode
from multicomplete.sample import alice_words, prefix_aware_splice, word_start_filter
from multicomplete.settings import AutoCompleteSettings
from multicomplete.widgets import AutoCompleteBox

_FOOTER_TEXT = (
    "\\[Down/F4] Suggest  \\[Tab/Enter] Accept  \\[Esc] Cancel  "
    "\\[Ctrl+N] Add word  \\[Ctrl+Q] Quit"
)


class MultiCompleteApp(App):
    """Two completion boxes over the same word list, with live settings."""

    TITLE = "multicomplete"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("ctrl+n", "add_word", "Add word", show=False),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        words: list[str] | None = None,
        settings: AutoCompleteSettings | None = None,
        item_filter: ItemFilter | None = word_start_filter,
    ) -> None:
        """Initialize the app.

        Args:
            words: Candidate words; the Alice in Wonderland sample by default.
            settings: Settings for the multi-entry box.
            item_filter: Item filter for the multi-entry box; None keeps the
                configured filter mode.
        """
        super().__init__()
        self.words = ObservableCandidates(alice_words() if words is None else words)
        self.multi_settings = settings or AutoCompleteSettings(is_multi_entry=True)
        if item_filter is not None:
            self.multi_settings.item_filter = item_filter
        self.single_settings = AutoCompleteSettings(
            minimum_prefix_length=self.multi_settings.minimum_prefix_length,
            minimum_populate_delay=self.multi_settings.minimum_populate_delay,
            filter_mode=FilterMode.STARTS_WITH,
            max_drop_down_height=self.multi_settings.max_drop_down_height,
        )

    def compose(self) -> ComposeResult:
        """Create the app layout."""
        with Vertical(id="main"):
            yield Label("Multiple entries", classes="section-title")
            yield AutoCompleteBox(
                self.words,
                self.multi_settings,
                placeholder="Type several words, e.g. Alice met the White Rab...",
                id="multi-box",
            )
            yield Static("Selected: -", id="multi-selected", classes="selected")

            yield Label("Single entry", classes="section-title")
            yield AutoCompleteBox(
                self.words,
                self.single_settings,
                placeholder="Type one word",
                id="single-box",
            )
            yield Static("Selected: -", id="single-selected", classes="selected")

            with Horizontal(id="settings-bar"):
                yield Label("Delay (ms):", classes="setting-label")
                yield Input(
                    str(self.multi_settings.minimum_populate_delay),
                    id="delay-input",
                    classes="setting-input",
                )
                yield Label("Min prefix:", classes="setting-label")
                yield Input(
                    str(self.multi_settings.minimum_prefix_length),
                    id="prefix-input",
                    classes="setting-input",
                )

        yield Static(_FOOTER_TEXT, id="footer-bar")

    def on_mount(self) -> None:
        """Focus the multi-entry box and install its custom splice."""
        box = self.query_one("#multi-box", AutoCompleteBox)
        box.selection_changing = prefix_aware_splice
        box.input.focus()

    def _apply_setting(self, name: str, raw: str) -> None:
        """Apply an edited setting to both boxes, reporting bad values."""
        try:
            value = int(raw)
        except ValueError:
            self.notify(f"Not a number: {raw!r}", severity="error", timeout=8)
            return
        try:
            for settings in (self.multi_settings, self.single_settings):
                setattr(settings, name, value)
        except SettingsError as exc:
            self.notify(str(exc), severity="error", timeout=8)

    @on(Input.Submitted, "#delay-input")
    def _delay_submitted(self, event: Input.Submitted) -> None:
        self._apply_setting("minimum_populate_delay", event.value)

    @on(Input.Submitted, "#prefix-input")
    def _prefix_submitted(self, event: Input.Submitted) -> None:
        self._apply_setting("minimum_prefix_length", event.value)

    @on(AutoCompleteBox.SelectionChanged)
    def _selection_changed(self, event: AutoCompleteBox.SelectionChanged) -> None:
        target = "#multi-selected" if event.box.id == "multi-box" else "#single-selected"
        item = event.added[0] if event.added else "-"
        self.query_one(target, Static).update(f"Selected: {item}")

    def action_add_word(self) -> None:
        """Add the single-entry box's text to the candidate list."""
        word = self.query_one("#single-box", AutoCompleteBox).value.strip()
        if not word:
            return
        if word in self.words:
            self.notify(f"{word!r} is already a candidate", severity="warning")
            return
        self.words.append(word)
        self.notify(f"Added {word!r}")
