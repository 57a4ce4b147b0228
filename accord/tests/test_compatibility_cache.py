from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import pytest

from accord.core.config import settings
from accord.schema.compatibility import CachedScore
from accord.services.compatibility_cache import FALLBACK_SCORE, CompatibilityCache
from accord.services.score_store import ScoreStoreError, pair_key
from accord.tests.utils import CountingScorer, RecordingScoreStore, RecordingWriter, make_prefs, make_profile, matched_pair

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _cache(store=None, scorer=None, **kwargs) -> CompatibilityCache:
    return CompatibilityCache(
        store if store is not None else RecordingScoreStore(),
        scorer=scorer or CountingScorer(),
        clock=kwargs.pop("clock", lambda: NOW),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_miss_computes_then_serves_from_store():
    store, scorer = RecordingScoreStore(), CountingScorer()
    cache = CompatibilityCache(store, scorer=scorer)
    pair = matched_pair()

    assert await cache.get_or_compute(*pair) == 87
    await cache.writer.drain()
    assert store.rows[("profile-a", "profile-b")].score == 87

    assert await cache.get_or_compute(*pair) == 87
    assert scorer.calls == 1
    assert store.count("upsert") == 1


@pytest.mark.asyncio
async def test_pair_order_does_not_matter():
    store, scorer = RecordingScoreStore(), CountingScorer()
    cache = CompatibilityCache(store, scorer=scorer)
    profile_a, profile_b, prefs_a, prefs_b = matched_pair()

    forward = await cache.get_or_compute(profile_a, profile_b, prefs_a, prefs_b)
    await cache.writer.drain()
    backward = await cache.get_or_compute(profile_b, profile_a, prefs_b, prefs_a)

    assert forward == backward
    assert scorer.calls == 1
    assert list(store.rows) == [pair_key("profile-b", "profile-a")]


@pytest.mark.asyncio
async def test_miss_returns_before_the_write_lands():
    writer = RecordingWriter()
    store = RecordingScoreStore()
    cache = _cache(store, writer=writer)

    assert await cache.get_or_compute(*matched_pair()) == 87
    assert writer.submitted == [(("profile-a", "profile-b"), 87)]
    assert store.rows == {}


@pytest.mark.asyncio
async def test_fresh_entry_is_returned_without_computing():
    store = RecordingScoreStore()
    store.rows[("profile-a", "profile-b")] = CachedScore(score=42, computed_at=NOW - timedelta(days=6))
    scorer = CountingScorer()
    cache = _cache(store, scorer)

    assert await cache.get_or_compute(*matched_pair()) == 42
    assert scorer.calls == 0


@pytest.mark.asyncio
async def test_stale_entry_is_recomputed():
    store = RecordingScoreStore()
    store.rows[("profile-a", "profile-b")] = CachedScore(score=42, computed_at=NOW - timedelta(days=8))
    scorer = CountingScorer()
    cache = _cache(store, scorer)

    assert await cache.get_or_compute(*matched_pair()) == 87
    assert scorer.calls == 1
    await cache.writer.drain()
    assert store.rows[("profile-a", "profile-b")].score == 87


@pytest.mark.asyncio
async def test_get_cached_hides_stale_entries_unless_asked():
    store = RecordingScoreStore()
    stale = CachedScore(score=42, computed_at=NOW - timedelta(days=30))
    store.rows[("profile-a", "profile-b")] = stale
    cache = _cache(store)

    assert await cache.get_cached("profile-b", "profile-a") is None
    assert await cache.get_cached("profile-b", "profile-a", allow_stale=True) == stale
    assert await cache.get_cached("profile-a", "profile-z") is None


@pytest.mark.asyncio
async def test_invalidate_forces_recompute():
    store, scorer = RecordingScoreStore(), CountingScorer()
    cache = CompatibilityCache(store, scorer=scorer)
    profile_a, profile_b, prefs_a, prefs_b = matched_pair()
    profile_c = make_profile("profile-c", gender=["Man"], age=35)

    await cache.get_or_compute(profile_a, profile_b, prefs_a, prefs_b)
    await cache.get_or_compute(profile_a, profile_c, prefs_a, prefs_b)
    await cache.get_or_compute(profile_b, profile_c, prefs_b, prefs_b)
    await cache.writer.drain()
    assert len(store.rows) == 3

    assert await cache.invalidate("profile-a") == 2
    assert list(store.rows) == [("profile-b", "profile-c")]

    await cache.get_or_compute(profile_a, profile_b, prefs_a, prefs_b)
    assert scorer.calls == 4


@pytest.mark.asyncio
async def test_invalidate_propagates_store_errors():
    class BrokenDeletes(RecordingScoreStore):
        async def delete_for_profile(self, profile_id: str) -> int:
            raise ScoreStoreError("delete refused")

    cache = _cache(BrokenDeletes())
    with pytest.raises(ScoreStoreError):
        await cache.invalidate("profile-a")


@pytest.mark.asyncio
async def test_lookup_failure_degrades_to_computing(caplog):
    store = RecordingScoreStore(fail_get=True)
    cache = _cache(store)

    with caplog.at_level(logging.WARNING, logger="accord.services.compatibility_cache"):
        assert await cache.get_or_compute(*matched_pair()) == 87
    assert "Score lookup failed" in caplog.text


@pytest.mark.asyncio
async def test_slow_lookup_times_out_and_computes():
    store = RecordingScoreStore(get_delay=0.5)
    store.rows[("profile-a", "profile-b")] = CachedScore(score=42, computed_at=NOW)
    scorer = CountingScorer()
    cache = _cache(store, scorer, timeout_seconds=0.01)

    assert await cache.get_or_compute(*matched_pair()) == 87
    assert scorer.calls == 1


@pytest.mark.asyncio
async def test_write_failure_is_logged_not_raised(caplog):
    store = RecordingScoreStore(fail_upsert=True)
    cache = CompatibilityCache(store)

    with caplog.at_level(logging.WARNING, logger="accord.services.score_writer"):
        assert await cache.get_or_compute(*matched_pair()) == 87
        await cache.writer.drain()

    assert store.rows == {}
    assert "Failed to cache compatibility score for profile-a/profile-b" in caplog.text


@pytest.mark.asyncio
async def test_engine_failure_returns_fallback_and_caches_nothing(caplog):
    store = RecordingScoreStore()
    cache = _cache(store, CountingScorer(fail_for={"profile-b"}))
    pair = matched_pair()

    with caplog.at_level(logging.ERROR, logger="accord.services.compatibility_cache"):
        assert await cache.get_or_compute(*pair) == FALLBACK_SCORE
    assert await cache.try_get_or_compute(*pair) is None
    assert await cache.get_or_compute_breakdown(*pair) is None
    await cache.writer.drain()

    assert store.count("upsert") == 0
    assert "Compatibility scoring failed" in caplog.text


@pytest.mark.asyncio
async def test_breakdown_is_cached_with_the_score():
    store, scorer = RecordingScoreStore(), CountingScorer()
    cache = CompatibilityCache(store, scorer=scorer)
    pair = matched_pair()

    computed = await cache.get_or_compute_breakdown(*pair)
    await cache.writer.drain()
    cached = await cache.get_or_compute_breakdown(*pair)

    assert computed == cached
    assert cached.total == 87
    assert store.rows[("profile-a", "profile-b")].breakdown["lifestyle"] == 65
    assert scorer.calls == 1


@pytest.mark.asyncio
async def test_breakdown_recomputes_when_only_a_score_is_stored():
    store = RecordingScoreStore()
    store.rows[("profile-a", "profile-b")] = CachedScore(score=42, computed_at=NOW)
    scorer = CountingScorer()
    cache = _cache(store, scorer)

    breakdown = await cache.get_or_compute_breakdown(*matched_pair())
    assert breakdown.total == 87
    assert scorer.calls == 1


@pytest.mark.asyncio
async def test_concurrent_misses_for_one_pair_agree():
    store, scorer = RecordingScoreStore(), CountingScorer()
    cache = CompatibilityCache(store, scorer=scorer)
    pair = matched_pair()

    scores = await asyncio.gather(*(cache.get_or_compute(*pair) for _ in range(5)))
    await cache.writer.drain()

    assert set(scores) == {87}
    assert list(store.rows) == [("profile-a", "profile-b")]


@pytest.mark.asyncio
async def test_batch_compute_reports_each_candidate(monkeypatch):
    monkeypatch.setattr(settings, "prewarm_batch_size", 2)
    store = RecordingScoreStore(fail_upsert_for={"profile-c"})
    cache = _cache(store, CountingScorer(fail_for={"profile-d"}))
    source, _, source_prefs, _ = matched_pair()
    prefs = make_prefs(gender_preference=["Woman"])
    candidates = [
        (make_profile(profile_id, gender=["Man"]), prefs)
        for profile_id in ("profile-b", "profile-c", "profile-d", "profile-e")
    ]
    candidates.append((source, source_prefs))

    result = await cache.batch_compute(source, source_prefs, candidates)

    assert result.source_id == "profile-a"
    assert set(result.scores) == {"profile-b", "profile-e"}
    assert result.failures == {"profile-c": "write rejected", "profile-d": "scoring exploded"}
    assert (result.succeeded, result.failed) == (2, 2)
    assert set(store.rows) == {("profile-a", "profile-b"), ("profile-a", "profile-e")}


@pytest.mark.asyncio
async def test_batch_compute_stores_the_same_score_as_a_read():
    store = RecordingScoreStore()
    cache = _cache(store)
    profile_a, profile_b, prefs_a, prefs_b = matched_pair()

    result = await cache.batch_compute(profile_b, prefs_b, [(profile_a, prefs_a)])

    assert result.scores == {"profile-a": 87}
    assert store.rows[("profile-a", "profile-b")].score == 87


@pytest.mark.asyncio
async def test_prune_stale_removes_only_expired_rows():
    store = RecordingScoreStore()
    store.rows[("a", "b")] = CachedScore(score=10, computed_at=NOW - timedelta(days=9))
    store.rows[("a", "c")] = CachedScore(score=20, computed_at=NOW - timedelta(days=1))
    cache = _cache(store)

    assert await cache.prune_stale() == 1
    assert list(store.rows) == [("a", "c")]


def test_default_ttl_comes_from_settings():
    cache = CompatibilityCache(RecordingScoreStore(), RecordingWriter())
    assert cache.ttl == timedelta(days=settings.compatibility_cache_ttl_days)
    assert cache.is_fresh(CachedScore(score=1, computed_at=datetime.now(timezone.utc)))


@pytest.mark.asyncio
async def test_connection_errors_from_the_store_degrade_to_computing():
    class Unreachable(RecordingScoreStore):
        async def get(self, key):
            raise ConnectionRefusedError(111, "Connect call failed")

    scorer = CountingScorer()
    cache = _cache(Unreachable(), scorer, writer=RecordingWriter())

    assert await cache.get_or_compute(*matched_pair()) == 87
    assert await cache.try_get_or_compute(*matched_pair()) == 87
    assert scorer.calls == 2


@pytest.mark.asyncio
async def test_entry_exactly_one_ttl_old_is_stale():
    store = RecordingScoreStore()
    store.rows[("profile-a", "profile-b")] = CachedScore(score=42, computed_at=NOW - timedelta(days=7))
    store.rows[("profile-a", "profile-c")] = CachedScore(
        score=43, computed_at=NOW - timedelta(days=7) + timedelta(seconds=1)
    )
    scorer = CountingScorer()
    cache = _cache(store, scorer, writer=RecordingWriter())

    assert await cache.get_or_compute(*matched_pair()) == 87
    assert scorer.calls == 1
    assert (await cache.get_cached("profile-a", "profile-c")).score == 43

    assert await cache.prune_stale() == 1
    assert list(store.rows) == [("profile-a", "profile-c")]
