"""Compatibility scoring engine.

Invariants:
- Pure and deterministic: no I/O, no shared mutable state.
- Each sub-score lies in [0, 100]; the total is their weighted sum rounded
  half-up and lies in [0, 100].
- Sexual orientation never influences the result.
"""

from __future__ import annotations

import math

from accord.schema.compatibility import CompatibilityBreakdown
from accord.schema.profile import Preferences, Profile
from accord.scoring import weights
from accord.scoring.demographics import demographics_score
from accord.scoring.goals import goals_score
from accord.scoring.lifestyle import lifestyle_score
from accord.scoring.location import location_score
from accord.scoring.personality import personality_score


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weighted_total(sub_scores: dict[str, float]) -> int:
    """Combine category sub-scores with the configured weights."""
    total = sum(sub_scores[category] * weight for category, weight in weights.CATEGORY_WEIGHTS.items())
    return max(0, min(100, round_half_up(total)))


def get_compatibility_breakdown(
    profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
) -> CompatibilityBreakdown:
    """Return every category sub-score together with the weighted total."""
    sub_scores = {
        "goals": goals_score(prefs_a, prefs_b),
        "lifestyle": lifestyle_score(profile_a, profile_b, prefs_a, prefs_b),
        "location": location_score(profile_a, profile_b, prefs_a, prefs_b),
        "demographics": demographics_score(profile_a, profile_b, prefs_a, prefs_b),
        "personality": personality_score(profile_a, profile_b),
    }
    return CompatibilityBreakdown(**sub_scores, total=weighted_total(sub_scores))


def calculate_compatibility_score(
    profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
) -> int:
    return get_compatibility_breakdown(profile_a, profile_b, prefs_a, prefs_b).total


def describe_match(score: int) -> str:
    """Human-readable tier label for a total score."""
    for threshold, label in weights.MATCH_TIERS:
        if score >= threshold:
            return label
    return weights.LOWEST_TIER
