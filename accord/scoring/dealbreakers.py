"""Hard incompatibilities that remove a candidate before scoring."""

from __future__ import annotations

from accord.schema.profile import Preferences, Profile
from accord.scoring.demographics import accepts_gender

INCOMPATIBLE_RELATIONSHIP_TYPES = frozenset({frozenset(("platonic", "romantic"))})


def dealbreaker_reason(
    viewer: Profile, candidate: Profile, viewer_prefs: Preferences, candidate_prefs: Preferences
) -> str | None:
    """Return why the pair can never match, or None when it may be scored."""
    if not accepts_gender(candidate_prefs, viewer) or not accepts_gender(viewer_prefs, candidate):
        return "gender_preference"
    wants = {viewer_prefs.wants_children, candidate_prefs.wants_children}
    if wants == {True, False}:
        return "children"
    if viewer_prefs.relationship_type and candidate_prefs.relationship_type:
        pair = frozenset((viewer_prefs.relationship_type, candidate_prefs.relationship_type))
        if pair in INCOMPATIBLE_RELATIONSHIP_TYPES:
            return "relationship_type"
    return None


def is_dealbreaker(
    viewer: Profile, candidate: Profile, viewer_prefs: Preferences, candidate_prefs: Preferences
) -> bool:
    return dealbreaker_reason(viewer, candidate, viewer_prefs, candidate_prefs) is not None
