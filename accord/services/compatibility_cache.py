"""Read-through cache around the compatibility scoring engine.

Invariants:
- A fresh stored score is returned without invoking the engine.
- Misses are computed inline and returned before the write completes.
- Store failures degrade to computing; engine failures degrade to
  FALLBACK_SCORE and are never cached.
- Concurrent misses for one pair may each compute; the last upsert wins.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable

from accord.core.config import settings
from accord.schema.compatibility import BatchResult, CachedScore, CompatibilityBreakdown
from accord.schema.profile import Preferences, Profile
from accord.scoring.engine import get_compatibility_breakdown
from accord.services.score_store import PairKey, ScoreStore, ScoreStoreError, pair_key
from accord.services.score_writer import BackgroundScoreWriter, ScoreWriter

logger = logging.getLogger("accord.services.compatibility_cache")

FALLBACK_SCORE = 0

Scorer = Callable[[Profile, Profile, Preferences, Preferences], CompatibilityBreakdown]
Candidate = tuple[Profile, Preferences]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _canonical_order(
    profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
) -> tuple[Profile, Profile, Preferences, Preferences]:
    """Order the pair like its key so both directions compute the same value."""
    if str(profile_a.id) <= str(profile_b.id):
        return profile_a, profile_b, prefs_a, prefs_b
    return profile_b, profile_a, prefs_b, prefs_a


class CompatibilityCache:
    """Serve pairwise scores from the store, computing and persisting on miss."""

    def __init__(
        self,
        store: ScoreStore,
        writer: ScoreWriter | None = None,
        *,
        ttl: timedelta | None = None,
        timeout_seconds: float | None = None,
        scorer: Scorer = get_compatibility_breakdown,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.writer = writer or BackgroundScoreWriter(store)
        self.ttl = ttl or timedelta(days=settings.compatibility_cache_ttl_days)
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.score_store_timeout_seconds
        )
        self._scorer = scorer
        self._clock = clock

    def is_fresh(self, cached: CachedScore) -> bool:
        return cached.computed_at > self._clock() - self.ttl

    async def get_cached(
        self, profile_a_id: str, profile_b_id: str, *, allow_stale: bool = False
    ) -> CachedScore | None:
        """Return the stored entry for a pair; stale entries only when asked for as a hint."""
        cached = await self._lookup(pair_key(profile_a_id, profile_b_id))
        if cached is None:
            return None
        if allow_stale or self.is_fresh(cached):
            return cached
        return None

    async def get_or_compute(
        self, profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
    ) -> int:
        score = await self.try_get_or_compute(profile_a, profile_b, prefs_a, prefs_b)
        return FALLBACK_SCORE if score is None else score

    async def try_get_or_compute(
        self, profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
    ) -> int | None:
        """Like get_or_compute but returns None when the engine fails for this pair."""
        key = pair_key(profile_a.id, profile_b.id)
        cached = await self._lookup(key)
        if cached is not None and self.is_fresh(cached):
            return cached.score
        breakdown = self._compute(profile_a, profile_b, prefs_a, prefs_b)
        if breakdown is None:
            return None
        self._persist(key, breakdown)
        return breakdown.total

    async def get_or_compute_breakdown(
        self, profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
    ) -> CompatibilityBreakdown | None:
        key = pair_key(profile_a.id, profile_b.id)
        cached = await self._lookup(key)
        if cached is not None and cached.breakdown and self.is_fresh(cached):
            return CompatibilityBreakdown(**cached.breakdown, total=cached.score)
        breakdown = self._compute(profile_a, profile_b, prefs_a, prefs_b)
        if breakdown is not None:
            self._persist(key, breakdown)
        return breakdown

    async def invalidate(self, profile_id: str) -> int:
        """Drop every cached pair involving ``profile_id``.

        Must be called whenever a profile or its preferences change. Store
        errors propagate so the caller can retry.
        """
        deleted = await self.store.delete_for_profile(str(profile_id))
        logger.info("Invalidated %d cached scores for profile %s", deleted, profile_id)
        return deleted

    async def batch_compute(
        self, source_profile: Profile, source_prefs: Preferences, candidates: Iterable[Candidate]
    ) -> BatchResult:
        """Pre-warm scores for many candidates; each pair succeeds or fails on its own."""
        result = BatchResult(source_id=str(source_profile.id))
        pending = [item for item in candidates if str(item[0].id) != str(source_profile.id)]
        chunk_size = settings.prewarm_batch_size
        for start in range(0, len(pending), chunk_size):
            chunk = pending[start : start + chunk_size]
            outcomes = await asyncio.gather(
                *(self._prewarm_one(source_profile, source_prefs, profile, prefs) for profile, prefs in chunk),
                return_exceptions=True,
            )
            for (profile, _), outcome in zip(chunk, outcomes):
                if isinstance(outcome, BaseException):
                    result.failures[str(profile.id)] = str(outcome) or type(outcome).__name__
                else:
                    result.scores[str(profile.id)] = outcome
        logger.info(
            "Pre-warmed %d scores for profile %s (%d failed)",
            result.succeeded,
            result.source_id,
            result.failed,
        )
        return result

    async def prune_stale(self) -> int:
        deleted = await self.store.delete_older_than(self._clock() - self.ttl)
        logger.info("Pruned %d stale compatibility scores", deleted)
        return deleted

    async def _prewarm_one(
        self, source_profile: Profile, source_prefs: Preferences, profile: Profile, prefs: Preferences
    ) -> int:
        key = pair_key(source_profile.id, profile.id)
        ordered = _canonical_order(source_profile, profile, source_prefs, prefs)
        breakdown = self._scorer(*ordered)
        await self.store.upsert(key, breakdown.total, _breakdown_payload(breakdown))
        return breakdown.total

    async def _lookup(self, key: PairKey) -> CachedScore | None:
        try:
            return await asyncio.wait_for(self.store.get(key), timeout=self.timeout_seconds)
        except (ScoreStoreError, asyncio.TimeoutError) as exc:
            logger.warning("Score lookup failed for %s/%s; computing instead: %s", key[0], key[1], exc)
            return None
        except Exception as exc:
            logger.warning(
                "Score store raised %s for %s/%s; computing instead: %s", type(exc).__name__, key[0], key[1], exc
            )
            return None

    def _compute(
        self, profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
    ) -> CompatibilityBreakdown | None:
        ordered = _canonical_order(profile_a, profile_b, prefs_a, prefs_b)
        try:
            return self._scorer(*ordered)
        except Exception:
            logger.exception("Compatibility scoring failed for %s/%s", profile_a.id, profile_b.id)
            return None

    def _persist(self, key: PairKey, breakdown: CompatibilityBreakdown) -> None:
        self.writer.submit(key, breakdown.total, _breakdown_payload(breakdown))


def _breakdown_payload(breakdown: CompatibilityBreakdown) -> dict[str, float]:
    return breakdown.model_dump(exclude={"total"})


def build_cache(session_factory=None) -> CompatibilityCache:
    """Wire a cache to the SQL score store using the shared session factory."""
    from accord.db.session import async_session
    from accord.services.score_store import SQLScoreStore

    return CompatibilityCache(SQLScoreStore(session_factory or async_session))
