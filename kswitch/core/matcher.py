"""Fuzzy matching and ranking of context names.

A query matches a candidate when its characters appear in the candidate in
order (a subsequence test, case-insensitive). Matching candidates are then
scored so that unbroken runs, word-boundary hits, early hits and literal
substrings rank higher. Scores only compare within a single query.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

WORD_BOUNDARIES = frozenset("/-_")

MATCH_BASE = 10
RUN_BONUS = 5
BOUNDARY_BONUS = 20
EARLY_WINDOW = 5
SUBSTRING_BONUS = 50


@dataclass(frozen=True)
class ScoredEntry:
    """A candidate index with its score for one query."""

    index: int
    score: int


def fold_case(text: str) -> str:
    """Lower-case one code point at a time.

    Unlike ``str.lower()`` this never changes the length of the string and
    ignores context, so a final sigma folds like any other sigma and ``İ``
    becomes ``i``. Positions in the folded text match the original.
    """
    return "".join(ch.lower()[0] for ch in text)


def _is_subsequence(text: str, query: str) -> bool:
    qi = 0
    for ch in text:
        if qi == len(query):
            break
        if ch == query[qi]:
            qi += 1
    return qi == len(query)


def score(candidate_text: str, query: str) -> int:
    """Score how well ``query`` fuzzy-matches ``candidate_text``.

    Returns 0 for no match, 1 for every candidate when the query is empty,
    and a larger positive number the better the match is.
    """
    text = fold_case(candidate_text)
    query = fold_case(query)

    if not query:
        return 1
    if not _is_subsequence(text, query):
        return 0

    total = 0
    qi = 0
    run = 0
    for pos, ch in enumerate(text):
        if qi == len(query):
            break
        if ch != query[qi]:
            run = 0
            continue

        qi += 1
        run += 1
        total += MATCH_BASE + RUN_BONUS * run
        if pos == 0 or text[pos - 1] in WORD_BOUNDARIES:
            total += BOUNDARY_BONUS
        total += max(0, EARLY_WINDOW - pos)

    if query in text:
        total += SUBSTRING_BONUS

    return total


def searchable_text(name: str, aliases: Iterable[str] = ()) -> str:
    """Text the matcher runs against: the name followed by its aliases."""
    return " ".join([name, *aliases])


def rank(texts: Sequence[str], query: str) -> list[ScoredEntry]:
    """Score every text and return the matches, best first.

    The sort is stable, so equal scores keep their input order.
    """
    results = []
    for index, text in enumerate(texts):
        value = score(text, query)
        if value > 0:
            results.append(ScoredEntry(index, value))
    return sorted(results, key=lambda entry: -entry.score)
