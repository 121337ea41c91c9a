"""Tests for the demo word list, item filter and splice hook."""

from __future__ import annotations

from multicomplete.models import CommitResult, SelectionChangingArgs
from multicomplete.sample import (
    alice_words,
    find_match_position,
    has_prefix,
    prefix_aware_splice,
    word_start_filter,
)


class TestFindMatchPosition:
    """Tests for word-initial matching."""

    def test_second_word(self):
        assert find_match_position("March Hare", "hare") == 6

    def test_inside_word_skipped(self):
        assert find_match_position("share", "hare") == -1

    def test_start_of_text(self):
        assert find_match_position("Hare", "ha") == 0

    def test_after_punctuation(self):
        assert find_match_position("mad-hatter", "hat") == 4

    def test_later_occurrence(self):
        assert find_match_position("chat hat", "hat") == 5

    def test_word_start_filter(self):
        assert word_start_filter("rab", "White Rabbit") is True
        assert word_start_filter("abb", "White Rabbit") is False


class TestPrefixAwareSplice:
    """Tests for inserting only the untyped part of a suggestion."""

    def _args(self, text: str, start: int, item: str) -> SelectionChangingArgs:
        return SelectionChangingArgs(
            item=item,
            entry_start=start,
            search_string=text[start:],
            caret=len(text),
            text=text,
        )

    def test_completes_remaining_words(self):
        result = prefix_aware_splice(self._args("the Queen of He", 13, "Queen of Hearts"))
        assert result == CommitResult("the Queen of Hearts", 19)

    def test_first_word_match_uses_default(self):
        assert prefix_aware_splice(self._args("the He", 4, "Hearts")) is None

    def test_prefix_not_typed(self):
        assert prefix_aware_splice(self._args("He", 0, "Queen of Hearts")) is None

    def test_sentence_break(self):
        assert prefix_aware_splice(self._args("Queen of. He", 10, "Queen of Hearts")) is None

    def test_no_item(self):
        args = SelectionChangingArgs(None, 0, "He", 2, "He")
        assert prefix_aware_splice(args) is None

    def test_has_prefix_before_limit_only(self):
        assert has_prefix("Queen of He", "Queen of", 9) is True
        assert has_prefix("Queen of He", "Queen of", 0) is False
        assert has_prefix("Queen; He", "Queen", 6) is False


class TestWordList:
    """Tests for the built-in sample words."""

    def test_contains_words_and_names(self):
        words = alice_words()
        assert "Alice" in words
        assert "White Rabbit" in words
        assert len(words) == len(set(words))

    def test_sorted_ignoring_case(self):
        words = alice_words()
        assert words == sorted(words, key=str.casefold)


class TestNonAsciiText:
    """Tests for offsets in text whose case folding changes length."""

    def test_match_after_sharp_s(self):
        assert find_match_position("Straße Hare", "ha") == 7
        assert word_start_filter("ha", "Straße Hare") is True

    def test_prefix_after_sharp_s(self):
        text = "Straße Queen of He"
        args = SelectionChangingArgs("Queen of Hearts", 16, "He", len(text), text)
        assert prefix_aware_splice(args) == CommitResult("Straße Queen of Hearts", 22)
