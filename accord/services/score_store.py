"""Persistence for cached compatibility scores.

Invariants:
- Pair keys are canonical: (a, b) and (b, a) address the same row.
- upsert overwrites any prior value for the key; last write wins.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Protocol

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from accord.models.compatibility import CompatibilityScore
from accord.schema.compatibility import CachedScore

logger = logging.getLogger("accord.services.score_store")

PairKey = tuple[str, str]
# Drivers such as asyncpg raise OSError on connect before SQLAlchemy can wrap it.
STORE_ERRORS = (SQLAlchemyError, OSError)


class ScoreStoreError(RuntimeError):
    """Raised when the backing store cannot serve a read, write, or delete."""


def pair_key(profile_a_id: Any, profile_b_id: Any) -> PairKey:
    """Return the order-independent key for two profile ids."""
    first, second = str(profile_a_id), str(profile_b_id)
    if first == second:
        raise ValueError(f"cannot score profile {first} against itself")
    return (first, second) if first < second else (second, first)


class ScoreStore(Protocol):
    async def get(self, key: PairKey) -> CachedScore | None: ...

    async def upsert(self, key: PairKey, score: int, breakdown: dict[str, float] | None = None) -> None: ...

    async def delete_for_profile(self, profile_id: str) -> int: ...

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete entries computed at or before ``cutoff``; returns the count."""
        ...


class SQLScoreStore:
    """Score store backed by the ``compatibility_scores`` table.

    Each operation opens its own session so background writes never share a
    session with the request that triggered them.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: PairKey) -> CachedScore | None:
        try:
            async with self._session_factory() as session:
                row = await session.scalar(self._select(key))
        except STORE_ERRORS as exc:
            raise ScoreStoreError(f"score lookup failed for {key}: {exc}") from exc
        if row is None:
            return None
        return CachedScore(score=row.score, breakdown=row.breakdown, computed_at=row.computed_at)

    async def upsert(self, key: PairKey, score: int, breakdown: dict[str, float] | None = None) -> None:
        try:
            await self._upsert(key, score, breakdown)
        except IntegrityError:
            # A concurrent miss inserted the same pair first; overwrite it.
            logger.debug("Concurrent insert for %s; retrying as update", key)
            try:
                await self._upsert(key, score, breakdown)
            except STORE_ERRORS as exc:
                raise ScoreStoreError(f"score upsert failed for {key}: {exc}") from exc
        except STORE_ERRORS as exc:
            raise ScoreStoreError(f"score upsert failed for {key}: {exc}") from exc

    async def delete_for_profile(self, profile_id: str) -> int:
        stmt = delete(CompatibilityScore).where(
            or_(CompatibilityScore.profile1_id == profile_id, CompatibilityScore.profile2_id == profile_id)
        )
        return await self._delete(stmt, f"invalidate {profile_id}")

    async def delete_older_than(self, cutoff: datetime) -> int:
        stmt = delete(CompatibilityScore).where(CompatibilityScore.computed_at <= cutoff)
        return await self._delete(stmt, f"prune before {cutoff.isoformat()}")

    @staticmethod
    def _select(key: PairKey):
        return (
            select(CompatibilityScore)
            .where(CompatibilityScore.profile1_id == key[0], CompatibilityScore.profile2_id == key[1])
            .limit(1)
        )

    async def _upsert(self, key: PairKey, score: int, breakdown: dict[str, float] | None) -> None:
        now = datetime.now(timezone.utc)
        async with self._session_factory() as session:
            existing = await session.scalar(self._select(key))
            if existing:
                existing.score = score
                existing.breakdown = breakdown
                existing.computed_at = now
            else:
                session.add(
                    CompatibilityScore(
                        profile1_id=key[0],
                        profile2_id=key[1],
                        score=score,
                        breakdown=breakdown,
                        computed_at=now,
                    )
                )
            await session.commit()

    async def _delete(self, stmt, description: str) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
        except STORE_ERRORS as exc:
            raise ScoreStoreError(f"{description} failed: {exc}") from exc
        return result.rowcount or 0
