"""Goals sub-score: reasons, relationship type and children plans."""

from __future__ import annotations

from accord.schema.profile import Preferences
from accord.scoring import tables
from accord.scoring.overlap import clamp, overlap_or_best_pair

PRIMARY_REASON_EXACT = 35
PRIMARY_REASON_COMPATIBLE = 18
CHILDREN_ALIGNED = 20
CHILDREN_ONE_UNDECIDED = 12
CHILDREN_ARRANGEMENT_MAX = 15


def primary_reason_points(prefs_a: Preferences, prefs_b: Preferences) -> float:
    reasons_a, reasons_b = set(prefs_a.primary_reasons), set(prefs_b.primary_reasons)
    if reasons_a & reasons_b:
        return PRIMARY_REASON_EXACT
    for reason_a in reasons_a:
        for reason_b in reasons_b:
            if frozenset((reason_a, reason_b)) in tables.COMPATIBLE_REASON_PAIRS:
                return PRIMARY_REASON_COMPATIBLE
    return 0


def relationship_type_points(prefs_a: Preferences, prefs_b: Preferences) -> float:
    if not prefs_a.relationship_type or not prefs_b.relationship_type:
        return tables.RELATIONSHIP_TYPE_DEFAULT
    return tables.pair_points(
        tables.RELATIONSHIP_TYPE_POINTS,
        prefs_a.relationship_type,
        prefs_b.relationship_type,
        tables.RELATIONSHIP_TYPE_DEFAULT,
    )


def children_points(prefs_a: Preferences, prefs_b: Preferences) -> float:
    """Equal answers (both undecided included) align; a single undecided side is half-way."""
    if prefs_a.wants_children == prefs_b.wants_children:
        return CHILDREN_ALIGNED
    if prefs_a.wants_children is None or prefs_b.wants_children is None:
        return CHILDREN_ONE_UNDECIDED
    return 0


def children_arrangement_points(prefs_a: Preferences, prefs_b: Preferences) -> float:
    return overlap_or_best_pair(
        prefs_a.children_arrangement,
        prefs_b.children_arrangement,
        max_points=CHILDREN_ARRANGEMENT_MAX,
        table=tables.CHILDREN_ARRANGEMENT_POINTS,
        default=tables.CHILDREN_ARRANGEMENT_DEFAULT,
    )


def goals_score(prefs_a: Preferences, prefs_b: Preferences) -> float:
    score = (
        primary_reason_points(prefs_a, prefs_b)
        + relationship_type_points(prefs_a, prefs_b)
        + children_points(prefs_a, prefs_b)
        + children_arrangement_points(prefs_a, prefs_b)
    )
    return clamp(score)
