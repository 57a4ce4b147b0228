"""Set-overlap helpers shared by the sub-score calculators."""

from __future__ import annotations

from typing import Sequence

from accord.scoring.tables import PairTable, pair_points


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def shared(left: Sequence[str], right: Sequence[str], *, casefold: bool = False) -> set[str]:
    """Return the values present in both lists."""
    if casefold:
        return {item.casefold() for item in left} & {item.casefold() for item in right}
    return set(left) & set(right)


def overlap_fraction(left: Sequence[str], right: Sequence[str]) -> float:
    """|intersection| / max(|left|, |right|); 0.0 when either list is empty."""
    if not left or not right:
        return 0.0
    return len(shared(left, right)) / max(len(set(left)), len(set(right)))


def overlap_or_best_pair(
    left: Sequence[str],
    right: Sequence[str],
    *,
    max_points: float,
    table: PairTable,
    default: float,
) -> float:
    """Score two multi-select lists by overlap, falling back to the best table pair.

    Any direct overlap earns ``fraction * max_points``. Without overlap the best
    cross pair from ``table`` wins, with unlisted pairs worth ``default``.
    Either list being empty contributes nothing.
    """
    if not left or not right:
        return 0.0
    fraction = overlap_fraction(left, right)
    if fraction > 0:
        return fraction * max_points
    return max(pair_points(table, a, b, default) for a in left for b in right)
