"""Tests for commit and cancel splicing."""

from __future__ import annotations

from multicomplete.models import CommitResult
from multicomplete.splice import cancel, commit, splice


class TestSplice:
    """Tests for replacing the entry region."""

    def test_commit_keeps_tail(self):
        result = commit("say ap now", 4, 6, "apple")
        assert result == CommitResult("say apple now", 9)

    def test_cancel_restores_search(self):
        committed = commit("say ap now", 4, 6, "apple")
        restored = cancel(committed.text, 4, committed.caret, "ap")
        assert restored == CommitResult("say ap now", 6)

    def test_round_trip_preserves_tail(self):
        text = "first, sec; tail stays\n"
        committed = commit(text, 7, 10, "second")
        restored = cancel(committed.text, 7, committed.caret, "sec")
        assert restored.text == text
        assert restored.text[restored.caret:] == text[10:]

    def test_start_clamped_to_caret(self):
        assert splice("abc", 5, 2, "X") == CommitResult("abXc", 3)

    def test_caret_clamped_to_text(self):
        assert splice("abc", 1, 99, "Z") == CommitResult("aZ", 2)

    def test_negative_offsets(self):
        assert splice("abc", -3, -1, "Z") == CommitResult("Zabc", 1)

    def test_empty_replacement(self):
        assert splice("abc", 1, 2, "") == CommitResult("ac", 1)
