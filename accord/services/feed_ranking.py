"""Order discovery candidates by compatibility for one viewer."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable

from accord.schema.compatibility import ScoredCandidate
from accord.schema.profile import Preferences, Profile
from accord.scoring.dealbreakers import dealbreaker_reason
from accord.services.compatibility_cache import CompatibilityCache

logger = logging.getLogger("accord.services.feed_ranking")


@dataclass(slots=True)
class FeedCandidate:
    """A candidate profile plus the ranking signals supplied by the feed."""

    profile: Profile
    preferences: Preferences
    liked_viewer: bool = False
    boosted: bool = False


def _sort_key(candidate: ScoredCandidate) -> tuple[bool, bool, int, str]:
    return (not candidate.liked_viewer, not candidate.boosted, -candidate.score, candidate.profile_id)


async def rank_candidates(
    cache: CompatibilityCache,
    viewer: Profile,
    viewer_prefs: Preferences,
    candidates: Iterable[FeedCandidate],
    *,
    min_score: int = 0,
) -> list[ScoredCandidate]:
    """Score candidates and sort them: people who liked the viewer, then boosted, then by score.

    Dealbreaker pairs, the viewer's own profile and pairs the engine could not
    score are left out rather than failing the page.
    """
    eligible: list[FeedCandidate] = []
    for candidate in candidates:
        if str(candidate.profile.id) == str(viewer.id):
            continue
        reason = dealbreaker_reason(viewer, candidate.profile, viewer_prefs, candidate.preferences)
        if reason:
            logger.debug("Skipping candidate %s: %s", candidate.profile.id, reason)
            continue
        eligible.append(candidate)

    scores = await asyncio.gather(
        *(
            cache.try_get_or_compute(viewer, candidate.profile, viewer_prefs, candidate.preferences)
            for candidate in eligible
        )
    )

    ranked: list[ScoredCandidate] = []
    for candidate, score in zip(eligible, scores):
        if score is None or score < min_score:
            continue
        ranked.append(
            ScoredCandidate(
                profile_id=str(candidate.profile.id),
                score=score,
                liked_viewer=candidate.liked_viewer,
                boosted=candidate.boosted,
            )
        )
    ranked.sort(key=_sort_key)
    return ranked
