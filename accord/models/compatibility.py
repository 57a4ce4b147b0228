"""Cached pairwise compatibility scores."""

from __future__ import annotations

import typing
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, CheckConstraint, DateTime, Integer, String, UniqueConstraint, event
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from accord.db.base_class import Base

JSON_COMPATIBLE = JSON().with_variant(JSONB, "postgresql")


class CompatibilityScore(Base):
    """Score for an unordered profile pair; profile1_id always sorts before profile2_id."""
    __tablename__ = "compatibility_scores"
    __table_args__ = (
        UniqueConstraint("profile1_id", "profile2_id", name="uq_compatibility_pair"),
        CheckConstraint("profile1_id < profile2_id", name="ck_compatibility_pair_order"),
        CheckConstraint("score >= 0 AND score <= 100", name="ck_compatibility_score_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile1_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    profile2_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    breakdown: Mapped[dict[str, typing.Any] | None] = mapped_column(JSON_COMPATIBLE, nullable=True)
    computed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True, default=lambda: datetime.now(timezone.utc)
    )


def _ensure_tz_aware(dt: datetime | None) -> datetime | None:
    """Normalize DB-loaded timestamps to UTC to avoid naive/aware comparisons in SQLite tests."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@event.listens_for(CompatibilityScore, "load")
@event.listens_for(CompatibilityScore, "refresh")
def _normalize_score_timestamps(target: CompatibilityScore, *_, **__) -> None:
    target.computed_at = _ensure_tz_aware(target.computed_at)  # type: ignore[assignment]


@event.listens_for(CompatibilityScore.computed_at, "set", retval=True)
def _coerce_score_dt(
    _target: CompatibilityScore, value: datetime | None, *_: object, **__: object
) -> datetime | None:
    """Coerce score timestamps to UTC on assignment."""
    return _ensure_tz_aware(value)
