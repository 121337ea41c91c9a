"""Input widget that routes navigation keys to a completion controller."""

from __future__ import annotations

from textual.widgets import Input

from multicomplete.controller import AutoCompleteController


class AutocompleteInput(Input):
    """An Input whose Escape/Enter/Tab/Up/Down/F4 keys drive completion.

    Keys the controller consumes (Tab while suggestions are shown, Down
    to open the list, ...) never reach the Input. Everything else,
    including Tab and Enter while the list is closed, behaves as usual.
    """

    def __init__(self, controller: AutoCompleteController | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.controller = controller

    async def _on_key(self, event) -> None:
        """Offer the key to the controller before the Input sees it."""
        if self.controller is not None:
            # Left/Right and clicks move the cursor without a Changed message.
            self.controller.on_caret_changed(self.cursor_position)
            if self.controller.handle_key(event.key):
                event.prevent_default()
                event.stop()
                return
        await super()._on_key(event)
