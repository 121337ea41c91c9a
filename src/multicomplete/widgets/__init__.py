"""Textual widgets for multi-entry autocompletion."""

from __future__ import annotations

from multicomplete.widgets.autocomplete_box import AutoCompleteBox
from multicomplete.widgets.autocomplete_input import AutocompleteInput

__all__ = ["AutoCompleteBox", "AutocompleteInput"]
