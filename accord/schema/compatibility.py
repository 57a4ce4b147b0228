"""Result shapes produced by the scoring engine and score cache."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CompatibilityBreakdown(BaseModel):
    """Per-category sub-scores (unrounded, 0-100) and the rounded weighted total."""

    goals: float
    lifestyle: float
    location: float
    demographics: float
    personality: float
    total: int = Field(ge=0, le=100)


class CachedScore(BaseModel):
    """A stored score as read back from the score store."""

    score: int
    breakdown: dict[str, float] | None = None
    computed_at: datetime


class BatchResult(BaseModel):
    """Per-candidate outcome of a pre-warm fan-out."""

    source_id: str
    scores: dict[str, int] = Field(default_factory=dict)
    failures: dict[str, str] = Field(default_factory=dict)

    @property
    def succeeded(self) -> int:
        return len(self.scores)

    @property
    def failed(self) -> int:
        return len(self.failures)


class ScoredCandidate(BaseModel):
    """A feed candidate with its compatibility score and ranking signals."""

    profile_id: str
    score: int
    liked_viewer: bool = False
    boosted: bool = False
