"""Lifestyle sub-score: living arrangements, values and habits."""

from __future__ import annotations

from accord.schema.profile import Preferences, Profile
from accord.scoring import tables
from accord.scoring.overlap import clamp, overlap_fraction, overlap_or_best_pair, shared

LIFESTYLE_BASE = 50
ARRANGEMENT_MAX = 25
RELIGION_EXACT = 15
RELIGION_FLEXIBLE = 10
RELIGION_DIFFERENT = 5
POINTS_PER_SHARED_LANGUAGE = 3
LANGUAGES_MAX = 10
ETHNICITY_MAX = 10
ETHNICITY_MULTIRACIAL = 8
ETHNICITY_BASELINE = 7


def housing_points(prefs_a: Preferences, prefs_b: Preferences) -> float:
    return overlap_or_best_pair(
        prefs_a.housing_preference,
        prefs_b.housing_preference,
        max_points=ARRANGEMENT_MAX,
        table=tables.HOUSING_POINTS,
        default=tables.HOUSING_DEFAULT,
    )


def financial_points(prefs_a: Preferences, prefs_b: Preferences) -> float:
    return overlap_or_best_pair(
        prefs_a.financial_arrangement,
        prefs_b.financial_arrangement,
        max_points=ARRANGEMENT_MAX,
        table=tables.FINANCIAL_POINTS,
        default=tables.FINANCIAL_DEFAULT,
    )


def religion_points(profile_a: Profile, profile_b: Profile) -> float:
    if not profile_a.religion or not profile_b.religion:
        return 0
    if profile_a.religion == profile_b.religion:
        return RELIGION_EXACT
    if profile_a.religion in tables.FLEXIBLE_RELIGIONS or profile_b.religion in tables.FLEXIBLE_RELIGIONS:
        return RELIGION_FLEXIBLE
    return RELIGION_DIFFERENT


def political_points(profile_a: Profile, profile_b: Profile) -> float:
    if not profile_a.political_views or not profile_b.political_views:
        return 0
    if tables.UNDISCLOSED in (profile_a.political_views, profile_b.political_views):
        return tables.POLITICAL_UNDISCLOSED
    return tables.pair_points(
        tables.POLITICAL_POINTS, profile_a.political_views, profile_b.political_views, tables.POLITICAL_DEFAULT
    )


def language_points(profile_a: Profile, profile_b: Profile) -> float:
    common = shared(profile_a.languages_spoken, profile_b.languages_spoken)
    return min(LANGUAGES_MAX, len(common) * POINTS_PER_SHARED_LANGUAGE)


def stance_points(left: str | None, right: str | None, table: tables.PairTable) -> float:
    """Smoking/drinking/pets; anything short of two known answers is neutral."""
    if not left or not right:
        return tables.STANCE_NEUTRAL
    return tables.pair_points(table, left, right, tables.STANCE_NEUTRAL)


def ethnicity_points(profile_a: Profile, profile_b: Profile) -> float:
    if not profile_a.ethnicity or not profile_b.ethnicity:
        return 0
    fraction = overlap_fraction(profile_a.ethnicity, profile_b.ethnicity)
    if fraction > 0:
        return fraction * ETHNICITY_MAX
    if tables.MULTIRACIAL in profile_a.ethnicity or tables.MULTIRACIAL in profile_b.ethnicity:
        return ETHNICITY_MULTIRACIAL
    return ETHNICITY_BASELINE


def lifestyle_score(profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences) -> float:
    score = (
        LIFESTYLE_BASE
        + housing_points(prefs_a, prefs_b)
        + financial_points(prefs_a, prefs_b)
        + religion_points(profile_a, profile_b)
        + political_points(profile_a, profile_b)
        + language_points(profile_a, profile_b)
        + stance_points(prefs_a.smoking, prefs_b.smoking, tables.SMOKING_POINTS)
        + stance_points(prefs_a.drinking, prefs_b.drinking, tables.DRINKING_POINTS)
        + stance_points(prefs_a.pets, prefs_b.pets, tables.PETS_POINTS)
        + ethnicity_points(profile_a, profile_b)
    )
    return clamp(score)
