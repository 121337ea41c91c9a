"""Tests for the incremental suggestion view."""

from __future__ import annotations

from multicomplete.filters import make_predicate
from multicomplete.models import FilterMode, ViewAction, ViewChange
from multicomplete.view import CandidateView, fallback_cut

SOURCE = ["apple", "avocado", "banana", "apricot"]


def starts_with(search: str):
    return make_predicate(search, FilterMode.STARTS_WITH)


class TestFallbackCut:
    """Tests for dropping the leading word."""

    def test_cuts_first_word(self):
        assert fallback_cut("foo bar") == 4

    def test_cuts_whole_blank_run(self):
        assert fallback_cut("a  , b") == 5

    def test_no_blank(self):
        assert fallback_cut("foo") == 0


class TestReconcile:
    """Tests for positional view edits."""

    def test_initial_fill(self):
        view = CandidateView()
        changes = view.reconcile(SOURCE, starts_with("a"))
        assert view.items == ("apple", "avocado", "apricot")
        assert [c.action for c in changes] == [ViewAction.INSERT] * 3

    def test_narrowing_removes(self):
        view = CandidateView()
        view.reconcile(SOURCE, starts_with("a"))
        changes = view.reconcile(SOURCE, starts_with("ap"))
        assert view.items == ("apple", "apricot")
        assert changes == [ViewChange(ViewAction.REMOVE, 1, "avocado")]

    def test_widening_inserts(self):
        view = CandidateView()
        view.reconcile(SOURCE, starts_with("ap"))
        changes = view.reconcile(SOURCE, starts_with("a"))
        assert view.items == ("apple", "avocado", "apricot")
        assert changes == [ViewChange(ViewAction.INSERT, 1, "avocado")]

    def test_stale_entry_is_replaced(self):
        view = CandidateView()
        view.reconcile(SOURCE, starts_with("ap"))
        changes = view.reconcile(SOURCE, starts_with("b"))
        assert view.items == ("banana",)
        assert changes == [
            ViewChange(ViewAction.REMOVE, 0, "apple"),
            ViewChange(ViewAction.REPLACE, 0, "banana"),
        ]

    def test_same_search_is_idempotent(self):
        view = CandidateView()
        view.reconcile(SOURCE, starts_with("a"))
        before = view.items
        assert view.reconcile(SOURCE, starts_with("a")) == []
        assert view.items == before

    def test_cap(self):
        view = CandidateView(max_suggestions=2)
        view.reconcile(["a1", "a2", "a3", "a4", "a5"], starts_with("a"))
        assert view.items == ("a1", "a2")

    def test_lowering_cap_truncates(self):
        view = CandidateView()
        view.reconcile(SOURCE, starts_with("a"))
        view.max_suggestions = 1
        changes = view.reconcile(SOURCE, starts_with("a"))
        assert view.items == ("apple",)
        assert [c.action for c in changes] == [ViewAction.REMOVE, ViewAction.REMOVE]

    def test_no_predicate_accepts_all(self):
        view = CandidateView()
        view.reconcile(SOURCE, None)
        assert view.items == tuple(SOURCE)

    def test_clear_and_discard(self):
        view = CandidateView()
        view.reconcile(SOURCE, None)
        assert view.discard(["banana", "kiwi"]) == [ViewChange(ViewAction.REMOVE, 2, "banana")]
        assert len(view.clear()) == 3
        assert len(view) == 0


class TestRefresh:
    """Tests for refresh with the empty-result fallback."""

    def test_fallback_drops_leading_word(self):
        view = CandidateView()
        result = view.refresh(["bar", "baz", "qux"], "foo bar", starts_with)
        assert result.items == ["bar"]
        assert result.search_string == "bar"
        assert result.trimmed == 4
        assert result.exhausted is False

    def test_fallback_repeats(self):
        view = CandidateView()
        result = view.refresh(["qux"], "foo bar qu", starts_with)
        assert result.items == ["qux"]
        assert result.trimmed == 8

    def test_fallback_exhausted(self):
        view = CandidateView()
        result = view.refresh(["bar"], "foo ", starts_with)
        assert result.items == []
        assert result.search_string == ""
        assert result.exhausted is True

    def test_no_blank_no_fallback(self):
        view = CandidateView()
        result = view.refresh(["bar"], "foo", starts_with)
        assert result.items == []
        assert result.trimmed == 0

    def test_fallback_disabled(self):
        view = CandidateView()
        result = view.refresh(["bar"], "foo bar", starts_with, fallback=False)
        assert result.items == []
        assert result.search_string == "foo bar"
