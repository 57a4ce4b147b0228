"""Demographics sub-score: mutual age ranges and gender preferences."""

from __future__ import annotations

from accord.schema.profile import Preferences, Profile

AGE_MUTUAL = 50
AGE_RELAXED = 30
AGE_OUTSIDE = 10
AGE_RELAXATION_YEARS = 3
GENDER_MUTUAL = 50
GENDER_ONE_SIDED = 25


def _age_within(age: int, prefs: Preferences, slack: int = 0) -> bool:
    return prefs.age_min - slack <= age <= prefs.age_max + slack


def age_points(profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences) -> float:
    if _age_within(profile_a.age, prefs_b) and _age_within(profile_b.age, prefs_a):
        return AGE_MUTUAL
    if _age_within(profile_a.age, prefs_b, AGE_RELAXATION_YEARS) and _age_within(
        profile_b.age, prefs_a, AGE_RELAXATION_YEARS
    ):
        return AGE_RELAXED
    return AGE_OUTSIDE


def accepts_gender(prefs: Preferences, profile: Profile) -> bool:
    """An empty accepted-gender list accepts anyone."""
    if not prefs.gender_preference:
        return True
    return bool(set(profile.gender) & set(prefs.gender_preference))


def gender_points(profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences) -> float:
    a_accepted = accepts_gender(prefs_b, profile_a)
    b_accepted = accepts_gender(prefs_a, profile_b)
    if a_accepted and b_accepted:
        return GENDER_MUTUAL
    if a_accepted or b_accepted:
        return GENDER_ONE_SIDED
    return 0


def demographics_score(
    profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
) -> float:
    return age_points(profile_a, profile_b, prefs_a, prefs_b) + gender_points(
        profile_a, profile_b, prefs_a, prefs_b
    )
