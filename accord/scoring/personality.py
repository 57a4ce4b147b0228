"""Personality sub-score: shared interests, zodiac, type codes and bio keywords."""

from __future__ import annotations

import re
import string

from accord.schema.profile import Profile
from accord.scoring import tables
from accord.scoring.overlap import clamp, overlap_fraction, shared

PERSONALITY_BASE = 20
POINTS_PER_SHARED_HOBBY = 4
HOBBIES_MAX = 25

# interest list -> (points per match, cap)
MEDIA_INTEREST_WEIGHTS: dict[str, tuple[float, float]] = {
    "movies": (3, 10),
    "music": (3, 10),
    "books": (2.5, 8),
    "tv_shows": (2.5, 7),
}

ZODIAC_SAME = 12
ZODIAC_HIGH = 15
ZODIAC_OTHER = 7
ZODIAC_UNDISCLOSED = 8

TYPE_IDENTICAL = 12
TYPE_UNKNOWN = 8
TYPE_DEFAULT = 7

LOVE_LANGUAGE_MAX = 8
LOVE_LANGUAGE_NO_OVERLAP = 4

POINTS_PER_SHARED_KEYWORD = 2
KEYWORDS_MAX = 8
MIN_KEYWORD_LENGTH = 4

_PUNCTUATION = re.compile(f"[{re.escape(string.punctuation)}]")
_TYPE_CODE = re.compile(r"^[EI][NS][TF][JP]$")


def hobby_points(profile_a: Profile, profile_b: Profile) -> float:
    common = shared(profile_a.hobbies, profile_b.hobbies)
    return min(HOBBIES_MAX, len(common) * POINTS_PER_SHARED_HOBBY)


def media_interest_points(profile_a: Profile, profile_b: Profile) -> float:
    total = 0.0
    for field_name, (per_match, cap) in MEDIA_INTEREST_WEIGHTS.items():
        common = shared(
            getattr(profile_a.interests, field_name),
            getattr(profile_b.interests, field_name),
            casefold=True,
        )
        total += min(cap, len(common) * per_match)
    return total


def zodiac_points(sign_a: str | None, sign_b: str | None) -> float:
    if not sign_a or not sign_b:
        return 0
    if tables.UNDISCLOSED in (sign_a, sign_b):
        return ZODIAC_UNDISCLOSED
    if sign_a == sign_b:
        return ZODIAC_SAME
    if frozenset((sign_a, sign_b)) in tables.ZODIAC_HIGH_COMPATIBILITY:
        return ZODIAC_HIGH
    return ZODIAC_OTHER


def _type_code(value: str) -> str | None:
    code = value.strip().upper()
    return code if _TYPE_CODE.match(code) else None


def personality_type_points(type_a: str | None, type_b: str | None) -> float:
    """Tiered four-letter type compatibility; curated pair tables win over letter counting."""
    if not type_a or not type_b:
        return 0
    if tables.PERSONALITY_UNKNOWN in (type_a, type_b):
        return TYPE_UNKNOWN
    code_a, code_b = _type_code(type_a), _type_code(type_b)
    if code_a is None or code_b is None:
        return TYPE_UNKNOWN
    if code_a == code_b:
        return TYPE_IDENTICAL

    for table in (tables.GOLDEN_PAIRS, tables.COMPANION_PAIRS, tables.MIRROR_PAIRS):
        points = tables.pair_points(table, code_a, code_b, 0)
        if points:
            return points

    return shared_letter_points(code_a, code_b)


def shared_letter_points(code_a: str, code_b: str) -> float:
    """Fallback tier for pairs outside the curated tables, by positional letter matches."""
    matches = [left == right for left, right in zip(code_a, code_b)]
    shared_letters = sum(matches)
    if shared_letters == 3:
        return 11
    if shared_letters == 2:
        return 10 if matches[1] and matches[2] else 9
    if shared_letters == 1:
        return 8 if matches[0] else 7
    return tables.pair_points(tables.CHALLENGING_PAIRS, code_a, code_b, TYPE_DEFAULT)


def love_language_points(profile_a: Profile, profile_b: Profile) -> float:
    if not profile_a.love_language or not profile_b.love_language:
        return 0
    fraction = overlap_fraction(profile_a.love_language, profile_b.love_language)
    if fraction > 0:
        return fraction * LOVE_LANGUAGE_MAX
    return LOVE_LANGUAGE_NO_OVERLAP


def bio_keywords(bio: str | None) -> set[str]:
    if not bio:
        return set()
    words = _PUNCTUATION.sub(" ", bio.lower()).split()
    return {word for word in words if len(word) >= MIN_KEYWORD_LENGTH and word not in tables.BIO_STOPWORDS}


def bio_points(profile_a: Profile, profile_b: Profile) -> float:
    common = bio_keywords(profile_a.bio) & bio_keywords(profile_b.bio)
    return min(KEYWORDS_MAX, len(common) * POINTS_PER_SHARED_KEYWORD)


def personality_score(profile_a: Profile, profile_b: Profile) -> float:
    score = (
        PERSONALITY_BASE
        + hobby_points(profile_a, profile_b)
        + media_interest_points(profile_a, profile_b)
        + zodiac_points(profile_a.zodiac_sign, profile_b.zodiac_sign)
        + personality_type_points(profile_a.personality_type, profile_b.personality_type)
        + love_language_points(profile_a, profile_b)
        + bio_points(profile_a, profile_b)
    )
    return clamp(score)
