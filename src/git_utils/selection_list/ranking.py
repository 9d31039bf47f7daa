"""Query ranking for selection lists.

Turns a free-text query into an ordered, filtered view of the items:

1. Exact tier: the lowercased search text contains the lowercased query.
   Earlier match offsets and shorter search texts score higher.
2. Fuzzy tier: separators are stripped from both sides and every remaining
   query character must appear, in order, in the remaining text. Consecutive
   runs score higher, gaps between matched characters score lower.

Exact matches always sort before fuzzy matches. Equal scores keep their
original relative order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")

SEPARATORS = frozenset(" -_/.")

# Fuzzy scoring weights
CONSECUTIVE_BONUS = 2.0
GAP_PENALTY = 1.0


class MatchTier(IntEnum):
    """Match quality tier. Lower values sort first."""

    EXACT = 0
    FUZZY = 1


@dataclass(frozen=True)
class RankedItem(Generic[T]):
    """An item paired with its score and original position."""

    item: T
    tier: MatchTier
    score: float
    index: int


def fold_case(text: str) -> str:
    """Lowercase text without changing its length.

    Characters whose lowercase form is longer than one character are kept
    as-is so offsets found in the folded text are valid in the original.
    """
    folded = []
    for char in text:
        lowered = char.lower()
        folded.append(lowered if len(lowered) == 1 else char)
    return "".join(folded)


def is_separator(char: str) -> bool:
    return char in SEPARATORS or char.isspace()


def strip_separators(text: str) -> str:
    """Remove separator characters (space, -, _, /, .) from text."""
    return "".join(ch for ch in text if not is_separator(ch))


def fuzzy_positions(text: str, query: str) -> list[int] | None:
    """Greedy left-to-right subsequence match of query inside text.

    Both arguments are expected to be normalized already. Returns the index
    of each matched character in text, or None when the query cannot be
    matched completely.
    """
    positions: list[int] = []
    qi = 0
    for ti, char in enumerate(text):
        if qi >= len(query):
            break
        if char == query[qi]:
            positions.append(ti)
            qi += 1
    if qi < len(query):
        return None
    return positions


def exact_score(text: str, query: str) -> float | None:
    """Score an exact substring match, or None if query is not a substring.

    The match offset dominates; the text length breaks ties between matches
    at the same offset.
    """
    offset = text.find(query)
    if offset == -1:
        return None
    return -(offset + len(text) / (len(text) + 1))


def fuzzy_score(text: str, query: str) -> float | None:
    """Score a separator-insensitive subsequence match, or None if no match."""
    stripped_query = strip_separators(query)
    positions = fuzzy_positions(strip_separators(text), stripped_query)
    if not positions:
        return None
    consecutive = sum(1 for a, b in zip(positions, positions[1:]) if b == a + 1)
    span = positions[-1] - positions[0] + 1
    gaps = span - len(positions)
    return consecutive * CONSECUTIVE_BONUS - gaps * GAP_PENALTY - positions[0] * 0.01


def score_text(text: str, query: str) -> tuple[MatchTier, float] | None:
    """Classify and score one search text against a query.

    Returns (tier, score) with higher scores being better within a tier,
    or None when the text does not match at all.
    """
    normalized_text = fold_case(text)
    normalized_query = fold_case(query)

    score = exact_score(normalized_text, normalized_query)
    if score is not None:
        return MatchTier.EXACT, score

    score = fuzzy_score(normalized_text, normalized_query)
    if score is not None:
        return MatchTier.FUZZY, score
    return None


def is_blank_query(query: str) -> bool:
    """True when the query has nothing left once separators are removed."""
    return not strip_separators(query)


def rank(
    items: Sequence[T], query: str, search_text: Callable[[T], str]
) -> list[RankedItem[T]]:
    """Filter and order items by how well their search text matches query.

    An empty query, or one made only of separator characters, returns every
    item in its original order.
    """
    if is_blank_query(query):
        return [
            RankedItem(item=item, tier=MatchTier.EXACT, score=0.0, index=i)
            for i, item in enumerate(items)
        ]

    ranked: list[RankedItem[T]] = []
    for i, item in enumerate(items):
        result = score_text(search_text(item), query)
        if result is None:
            continue
        tier, score = result
        ranked.append(RankedItem(item=item, tier=tier, score=score, index=i))

    # sorted() is stable, so equal (tier, score) keep insertion order
    return sorted(ranked, key=lambda r: (r.tier, -r.score))


def filter_items(
    items: Sequence[T], query: str, search_text: Callable[[T], str]
) -> list[T]:
    """Convenience wrapper around rank() returning only the items."""
    return [r.item for r in rank(items, query, search_text)]
