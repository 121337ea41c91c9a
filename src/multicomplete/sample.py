"""Sample data and custom completion behaviour used by the demo app."""

from __future__ import annotations

import re
from typing import Any, Iterator

from multicomplete.models import CommitResult, SelectionChangingArgs

_ALICE = """
Alice was beginning to get very tired of sitting by her sister on the
bank and of having nothing to do once or twice she had peeped into the
book her sister was reading but it had no pictures or conversations in
it and what is the use of a book thought Alice without pictures or
conversation So she was considering in her own mind as well as she
could for the hot day made her feel very sleepy and stupid whether the
pleasure of making a daisy chain would be worth the trouble of getting
up and picking the daisies when suddenly a White Rabbit with pink eyes
ran close by her There was nothing so very remarkable in that nor did
Alice think it so very much out of the way to hear the Rabbit say to
itself Oh dear Oh dear I shall be late when she thought it over
afterwards it occurred to her that she ought to have wondered at this
but at the time it all seemed quite natural but when the Rabbit
actually took a watch out of its waistcoat pocket and looked at it and
then hurried on Alice started to her feet for it flashed across her
mind that she had never before seen a rabbit with either a waistcoat
pocket or a watch to take out of it and burning with curiosity she ran
across the field after it and fortunately was just in time to see it
pop down a large rabbit hole under the hedge Caterpillar Cheshire Cat
Duchess Dormouse Gryphon Hatter March Hare Mock Turtle Queen of Hearts
King of Hearts Knave of Hearts Dodo Lory Eaglet Bill the Lizard
Wonderland looking glass mushroom croquet flamingo hedgehog tea party
"""

# Multi-word names offered alongside the single words.
_CHARACTERS = [
    "White Rabbit",
    "Cheshire Cat",
    "March Hare",
    "Mad Hatter",
    "Mock Turtle",
    "Queen of Hearts",
    "King of Hearts",
    "Knave of Hearts",
    "Bill the Lizard",
]


def alice_words() -> list[str]:
    """Return the distinct words and character names of the sample text, sorted."""
    words = {word for word in _ALICE.split() if len(word) > 1}
    words.update(_CHARACTERS)
    return sorted(words, key=str.casefold)


def _is_word_separator(char: str) -> bool:
    """True for ASCII punctuation and space, the characters that end a word."""
    code = ord(char)
    return (
        ord(" ") <= code <= ord("/")
        or ord(":") <= code <= ord("?")
        or ord("[") <= code <= ord("`")
    )


def _occurrences(text: str, search: str) -> Iterator[int]:
    """Yield every offset where *search* occurs in *text*, ignoring case.

    Offsets index *text* itself; overlapping occurrences are included.
    """
    pattern = re.compile(f"(?={re.escape(search)})", re.IGNORECASE)
    for match in pattern.finditer(text):
        yield match.start()


def find_match_position(text: str, search: str) -> int:
    """Return where *search* occurs in *text* at the start of a word.

    Matching ignores case. Occurrences inside a word are skipped, so
    ``"hare"`` matches ``"March Hare"`` at 6 but not ``"share"``.

    Returns:
        The offset of the first word-initial match, or -1.
    """
    for position in _occurrences(text, search):
        if position == 0 or _is_word_separator(text[position - 1]):
            return position
    return -1


def word_start_filter(search: str, item: Any) -> bool:
    """Item filter accepting candidates with a word starting with *search*."""
    return find_match_position(str(item), search) != -1


def has_prefix(text: str, prefix: str, limit: int) -> bool:
    """Return True if *prefix* occurs before *limit* in the current sentence.

    An occurrence only counts when no ``.``, ``!`` or ``;`` lies between
    it and *limit*.
    """
    for position in _occurrences(text, prefix):
        if position >= limit:
            break
        if not any(mark in text[position:limit] for mark in ".!;"):
            return True
    return False


def prefix_aware_splice(args: SelectionChangingArgs) -> CommitResult | None:
    """Insert only the part of a multi-word suggestion not typed yet.

    When the user has already written the leading words of a suggestion
    earlier in the sentence (``"Queen of"`` then ``"He"`` matching
    ``"Queen of Hearts"``), only ``"Hearts"`` is inserted. Returns None to
    fall back to the default splice.
    """
    if not args.search_string or args.item is None:
        return None

    variant = str(args.item)
    position = find_match_position(variant, args.search_string)
    if position <= 0:
        return None

    prefix = variant[:position]
    if not has_prefix(args.text, prefix.rstrip(), args.entry_start):
        return None

    completion = variant[position:]
    text = args.text[:args.entry_start] + completion + args.text[args.caret:]
    return CommitResult(text=text, caret=args.entry_start + len(completion))
