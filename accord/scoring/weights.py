"""Category weights for the overall compatibility score.

Sexual orientation is deliberately excluded: this product treats differing
orientations between two parties as desirable, so it carries zero weight and
no sub-score is computed for it.
"""

from __future__ import annotations

GOALS_WEIGHT = 0.35
LIFESTYLE_WEIGHT = 0.25
LOCATION_WEIGHT = 0.20
DEMOGRAPHICS_WEIGHT = 0.15
PERSONALITY_WEIGHT = 0.05
SEXUAL_ORIENTATION_WEIGHT = 0.0

CATEGORY_WEIGHTS: dict[str, float] = {
    "goals": GOALS_WEIGHT,
    "lifestyle": LIFESTYLE_WEIGHT,
    "location": LOCATION_WEIGHT,
    "demographics": DEMOGRAPHICS_WEIGHT,
    "personality": PERSONALITY_WEIGHT,
}

MATCH_TIERS: tuple[tuple[int, str], ...] = (
    (90, "Exceptional Match"),
    (80, "Excellent Match"),
    (70, "Great Match"),
    (60, "Good Match"),
    (50, "Decent Match"),
    (40, "Moderate Match"),
)
LOWEST_TIER = "Low Match"
