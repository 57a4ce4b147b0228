"""Shared helpers for scoring and cache tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from accord.schema.compatibility import CachedScore, CompatibilityBreakdown
from accord.schema.profile import Preferences, Profile
from accord.scoring.engine import get_compatibility_breakdown
from accord.services.score_store import PairKey, ScoreStoreError

AUSTIN = (30.2672, -97.7431)
# One degree of latitude is ~69.09 miles at this radius.
MILES_PER_DEGREE_LAT = 69.09


def north_of(origin: tuple[float, float], miles: float) -> tuple[float, float]:
    return origin[0] + miles / MILES_PER_DEGREE_LAT, origin[1]


def make_profile(profile_id: str = "profile-a", **overrides: Any) -> Profile:
    data: dict[str, Any] = {
        "id": profile_id,
        "age": 30,
        "gender": ["Woman"],
        "sexual_orientation": ["Straight"],
        "location_city": "Austin",
        "latitude": AUSTIN[0],
        "longitude": AUSTIN[1],
    }
    data.update(overrides)
    return Profile.model_validate(data)


def make_prefs(**overrides: Any) -> Preferences:
    data: dict[str, Any] = {
        "max_distance_miles": 50,
        "primary_reasons": ["financial"],
        "relationship_type": "platonic",
        "wants_children": True,
        "children_arrangement": ["biological"],
        "age_min": 25,
        "age_max": 40,
        "gender_preference": [],
    }
    data.update(overrides)
    return Preferences.model_validate(data)


def matched_pair(distance_miles: float = 5) -> tuple[Profile, Profile, Preferences, Preferences]:
    """Two mutually compatible profiles ``distance_miles`` apart."""
    lat, lon = north_of(AUSTIN, distance_miles)
    profile_a = make_profile("profile-a", age=30, gender=["Woman"])
    profile_b = make_profile("profile-b", age=32, gender=["Man"], location_city="Round Rock", latitude=lat, longitude=lon)
    prefs_a = make_prefs(gender_preference=["Man"])
    prefs_b = make_prefs(gender_preference=["Woman"])
    return profile_a, profile_b, prefs_a, prefs_b


@dataclass
class RecordingScoreStore:
    """In-memory score store that records calls and can be told to fail."""

    rows: dict[PairKey, CachedScore] = field(default_factory=dict)
    calls: list[tuple[str, Any]] = field(default_factory=list)
    fail_get: bool = False
    fail_upsert: bool = False
    fail_upsert_for: set[str] = field(default_factory=set)
    get_delay: float = 0.0

    async def get(self, key: PairKey) -> CachedScore | None:
        self.calls.append(("get", key))
        if self.get_delay:
            await asyncio.sleep(self.get_delay)
        if self.fail_get:
            raise ScoreStoreError("store offline")
        return self.rows.get(key)

    async def upsert(self, key: PairKey, score: int, breakdown: dict[str, float] | None = None) -> None:
        self.calls.append(("upsert", key))
        if self.fail_upsert or self.fail_upsert_for.intersection(key):
            raise ScoreStoreError("write rejected")
        self.rows[key] = CachedScore(score=score, breakdown=breakdown, computed_at=datetime.now(timezone.utc))

    async def delete_for_profile(self, profile_id: str) -> int:
        self.calls.append(("delete_for_profile", profile_id))
        doomed = [key for key in self.rows if profile_id in key]
        for key in doomed:
            del self.rows[key]
        return len(doomed)

    async def delete_older_than(self, cutoff: datetime) -> int:
        self.calls.append(("delete_older_than", cutoff))
        doomed = [key for key, row in self.rows.items() if row.computed_at <= cutoff]
        for key in doomed:
            del self.rows[key]
        return len(doomed)

    def count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)


class CountingScorer:
    """Wrap the real engine and count invocations."""

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.calls = 0
        self.fail_for = fail_for or set()

    def __call__(
        self, profile_a: Profile, profile_b: Profile, prefs_a: Preferences, prefs_b: Preferences
    ) -> CompatibilityBreakdown:
        self.calls += 1
        if {profile_a.id, profile_b.id} & self.fail_for:
            raise RuntimeError("scoring exploded")
        return get_compatibility_breakdown(profile_a, profile_b, prefs_a, prefs_b)


@dataclass
class RecordingWriter:
    """Write sink that only records submissions."""

    submitted: list[tuple[PairKey, int]] = field(default_factory=list)

    def submit(self, key: PairKey, score: int, breakdown: dict[str, float] | None = None) -> None:
        self.submitted.append((key, score))
