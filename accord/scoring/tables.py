"""Lookup tables consumed by the sub-score calculators.

Every pairwise table is keyed by an unordered pair (``frozenset``), so a
lookup never depends on which profile is "A". A same-value pair is stored as
a one-element frozenset. Pairs missing from a table fall back to the default
declared next to it; the tests enumerate which pairs are covered.
"""

from __future__ import annotations

from typing import Iterable, Mapping

PairTable = Mapping[frozenset[str], float]


def _pairs(entries: Iterable[tuple[str, str, float]]) -> dict[frozenset[str], float]:
    table: dict[frozenset[str], float] = {}
    for left, right, points in entries:
        key = frozenset((left, right))
        if key in table and table[key] != points:
            raise ValueError(f"conflicting entries for {left}/{right}")
        table[key] = points
    return table


def pair_points(table: PairTable, left: str, right: str, default: float) -> float:
    return table.get(frozenset((left, right)), default)


# --- Goals -------------------------------------------------------------------

PRIMARY_REASONS = (
    "financial",
    "immigration",
    "family_pressure",
    "legal_benefits",
    "companionship",
    "safety",
    "other",
)

COMPATIBLE_REASON_PAIRS: frozenset[frozenset[str]] = frozenset(
    frozenset(pair)
    for pair in (
        ("financial", "legal_benefits"),
        ("financial", "companionship"),
        ("legal_benefits", "immigration"),
        ("immigration", "safety"),
        ("companionship", "safety"),
        ("family_pressure", "companionship"),
        ("family_pressure", "legal_benefits"),
    )
)

RELATIONSHIP_TYPES = ("platonic", "romantic", "open")

RELATIONSHIP_TYPE_POINTS = _pairs(
    [
        ("platonic", "platonic", 30),
        ("romantic", "romantic", 30),
        ("open", "open", 30),
        ("platonic", "romantic", 20),
        ("platonic", "open", 22),
        ("romantic", "open", 25),
    ]
)
RELATIONSHIP_TYPE_DEFAULT = 15

CHILDREN_ARRANGEMENTS = (
    "biological",
    "adoption",
    "co_parenting",
    "surrogacy",
    "ivf",
    "already_have",
    "open_discussion",
)

CHILDREN_ARRANGEMENT_POINTS = _pairs(
    [
        ("biological", "ivf", 13),
        ("biological", "surrogacy", 11),
        ("biological", "adoption", 9),
        ("biological", "co_parenting", 9),
        ("biological", "open_discussion", 12),
        ("adoption", "surrogacy", 10),
        ("adoption", "ivf", 9),
        ("adoption", "co_parenting", 10),
        ("adoption", "already_have", 10),
        ("adoption", "open_discussion", 13),
        ("surrogacy", "ivf", 13),
        ("surrogacy", "co_parenting", 9),
        ("surrogacy", "open_discussion", 12),
        ("ivf", "co_parenting", 9),
        ("ivf", "open_discussion", 12),
        ("co_parenting", "already_have", 11),
        ("co_parenting", "open_discussion", 12),
        ("already_have", "open_discussion", 12),
    ]
)
CHILDREN_ARRANGEMENT_DEFAULT = 8

# --- Lifestyle ---------------------------------------------------------------

HOUSING_PREFERENCES = ("separate_spaces", "roommates", "separate_homes", "shared_bedroom", "flexible")

HOUSING_POINTS = _pairs(
    [
        ("separate_spaces", "roommates", 20),
        ("separate_spaces", "separate_homes", 22),
        ("separate_spaces", "shared_bedroom", 5),
        ("separate_spaces", "flexible", 18),
        ("roommates", "separate_homes", 15),
        ("roommates", "shared_bedroom", 10),
        ("roommates", "flexible", 20),
        ("separate_homes", "shared_bedroom", 0),
        ("separate_homes", "flexible", 15),
        ("shared_bedroom", "flexible", 15),
    ]
)
HOUSING_DEFAULT = 10

FINANCIAL_ARRANGEMENTS = ("separate", "shared_expenses", "joint", "prenup_required", "flexible")

FINANCIAL_POINTS = _pairs(
    [
        ("separate", "shared_expenses", 20),
        ("separate", "joint", 10),
        ("separate", "prenup_required", 18),
        ("separate", "flexible", 20),
        ("shared_expenses", "joint", 20),
        ("shared_expenses", "prenup_required", 15),
        ("shared_expenses", "flexible", 22),
        ("joint", "prenup_required", 15),
        ("joint", "flexible", 18),
        ("prenup_required", "flexible", 15),
    ]
)
FINANCIAL_DEFAULT = 10

FLEXIBLE_RELIGIONS = frozenset({"Prefer not to say", "Agnostic", "Spiritual but not religious"})

POLITICAL_VIEWS = ("Liberal", "Progressive", "Moderate", "Conservative", "Libertarian", "Socialist", "Apolitical")

POLITICAL_POINTS = _pairs(
    [
        ("Liberal", "Liberal", 15),
        ("Progressive", "Progressive", 15),
        ("Moderate", "Moderate", 15),
        ("Conservative", "Conservative", 15),
        ("Libertarian", "Libertarian", 15),
        ("Socialist", "Socialist", 15),
        ("Apolitical", "Apolitical", 15),
        ("Liberal", "Progressive", 12),
        ("Liberal", "Moderate", 8),
        ("Liberal", "Conservative", 2),
        ("Liberal", "Libertarian", 6),
        ("Liberal", "Socialist", 10),
        ("Liberal", "Apolitical", 7),
        ("Progressive", "Moderate", 6),
        ("Progressive", "Conservative", 1),
        ("Progressive", "Libertarian", 4),
        ("Progressive", "Socialist", 13),
        ("Progressive", "Apolitical", 5),
        ("Moderate", "Conservative", 8),
        ("Moderate", "Libertarian", 10),
        ("Moderate", "Socialist", 4),
        ("Moderate", "Apolitical", 12),
        ("Conservative", "Libertarian", 10),
        ("Conservative", "Socialist", 0),
        ("Conservative", "Apolitical", 7),
        ("Libertarian", "Socialist", 2),
        ("Libertarian", "Apolitical", 8),
        ("Socialist", "Apolitical", 3),
    ]
)
POLITICAL_DEFAULT = 7
POLITICAL_UNDISCLOSED = 10

SMOKING_POINTS = _pairs(
    [
        ("never", "never", 10),
        ("socially", "socially", 10),
        ("regularly", "regularly", 10),
        ("trying_to_quit", "trying_to_quit", 9),
        ("never", "socially", 5),
        ("never", "regularly", 1),
        ("never", "trying_to_quit", 6),
        ("socially", "regularly", 7),
        ("socially", "trying_to_quit", 6),
        ("regularly", "trying_to_quit", 5),
    ]
)

DRINKING_POINTS = _pairs(
    [
        ("never", "never", 10),
        ("socially", "socially", 10),
        ("regularly", "regularly", 10),
        ("never", "socially", 6),
        ("never", "regularly", 2),
        ("socially", "regularly", 8),
    ]
)

PETS_POINTS = _pairs(
    [
        ("love_them", "love_them", 10),
        ("like_them", "like_them", 10),
        ("indifferent", "indifferent", 9),
        ("allergic", "allergic", 10),
        ("dont_like", "dont_like", 10),
        ("love_them", "like_them", 9),
        ("love_them", "indifferent", 5),
        ("love_them", "allergic", 1),
        ("love_them", "dont_like", 0),
        ("like_them", "indifferent", 7),
        ("like_them", "allergic", 3),
        ("like_them", "dont_like", 3),
        ("indifferent", "allergic", 7),
        ("indifferent", "dont_like", 7),
        ("allergic", "dont_like", 9),
    ]
)
STANCE_NEUTRAL = 5

MULTIRACIAL = "Multiracial"

# --- Personality -------------------------------------------------------------

ZODIAC_SIGNS = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

ZODIAC_HIGH_COMPATIBILITY: frozenset[frozenset[str]] = frozenset(
    frozenset(pair)
    for pair in (
        ("Aries", "Leo"),
        ("Aries", "Sagittarius"),
        ("Aries", "Gemini"),
        ("Aries", "Aquarius"),
        ("Taurus", "Virgo"),
        ("Taurus", "Capricorn"),
        ("Taurus", "Cancer"),
        ("Taurus", "Pisces"),
        ("Gemini", "Libra"),
        ("Gemini", "Aquarius"),
        ("Gemini", "Leo"),
        ("Cancer", "Scorpio"),
        ("Cancer", "Pisces"),
        ("Cancer", "Virgo"),
        ("Leo", "Sagittarius"),
        ("Leo", "Libra"),
        ("Virgo", "Capricorn"),
        ("Virgo", "Scorpio"),
        ("Libra", "Aquarius"),
        ("Libra", "Sagittarius"),
        ("Scorpio", "Pisces"),
        ("Scorpio", "Capricorn"),
        ("Sagittarius", "Aquarius"),
        ("Capricorn", "Pisces"),
    )
)

UNDISCLOSED = "Prefer not to say"

PERSONALITY_TYPES = (
    "INTJ", "INTP", "ENTJ", "ENTP",
    "INFJ", "INFP", "ENFJ", "ENFP",
    "ISTJ", "ISFJ", "ESTJ", "ESFJ",
    "ISTP", "ISFP", "ESTP", "ESFP",
)
PERSONALITY_UNKNOWN = "Don't know"

# Complementary types whose dominant function pairs with the other's auxiliary.
GOLDEN_PAIRS = _pairs(
    (a, b, 15)
    for a, b in (
        ("INTJ", "ENFP"),
        ("INTJ", "ENTP"),
        ("INTP", "ENTJ"),
        ("INTP", "ENFJ"),
        ("INFJ", "ENFP"),
        ("INFJ", "ENTP"),
        ("INFP", "ENFJ"),
        ("INFP", "ENTJ"),
        ("ISTJ", "ESFP"),
        ("ISTJ", "ESTP"),
        ("ISFJ", "ESFP"),
        ("ISFJ", "ESTP"),
        ("ESTJ", "ISFP"),
        ("ESTJ", "ISTP"),
        ("ESFJ", "ISFP"),
        ("ESFJ", "ISTP"),
    )
)

# Same dominant function.
COMPANION_PAIRS = _pairs(
    (a, b, 14)
    for a, b in (
        ("INTJ", "INFJ"),
        ("INTP", "ISTP"),
        ("ENTP", "ENFP"),
        ("ENTJ", "ESTJ"),
        ("ENFJ", "ESFJ"),
        ("INFP", "ISFP"),
        ("ISTJ", "ISFJ"),
        ("ESTP", "ESFP"),
    )
)

# Same function stack in the opposite order (E/I flipped).
MIRROR_PAIRS = _pairs(
    (a, b, 13)
    for a, b in (
        ("INTJ", "ENTJ"),
        ("INTP", "ENTP"),
        ("INFJ", "ENFJ"),
        ("INFP", "ENFP"),
        ("ISTJ", "ESTJ"),
        ("ISFJ", "ESFJ"),
        ("ISTP", "ESTP"),
        ("ISFP", "ESFP"),
    )
)

CHALLENGING_PAIRS = _pairs(
    [
        ("INTJ", "ESFP", 4),
        ("INFJ", "ESTP", 4),
        ("ISTJ", "ENFP", 4),
        ("ISFJ", "ENTP", 4),
        ("INTP", "ESFJ", 5),
        ("INFP", "ESTJ", 5),
        ("ISTP", "ENFJ", 5),
        ("ISFP", "ENTJ", 5),
    ]
)

# Only words longer than three characters reach this filter.
BIO_STOPWORDS = frozenset(
    {
        "about", "above", "after", "again", "also", "always", "am", "an", "and", "any", "are",
        "because", "been", "before", "being", "between", "both", "but", "can", "could", "does",
        "doing", "down", "during", "each", "enjoy", "ever", "every", "from", "further", "have",
        "having", "here", "hers", "herself", "himself", "into", "just", "like", "looking", "love",
        "more", "most", "much", "myself", "never", "only", "other", "ours", "ourselves", "over",
        "really", "same", "should", "some", "someone", "something", "such", "than", "that",
        "their", "theirs", "them", "themselves", "then", "there", "these", "they", "thing",
        "things", "this", "those", "through", "time", "under", "until", "very", "want", "well",
        "were", "what", "when", "where", "which", "while", "will", "with", "would", "your",
        "yours", "yourself",
    }
)
