from accord.schema.compatibility import BatchResult, CachedScore, CompatibilityBreakdown, ScoredCandidate
from accord.schema.profile import Interests, Preferences, Profile

__all__ = [
    "BatchResult",
    "CachedScore",
    "CompatibilityBreakdown",
    "Interests",
    "Preferences",
    "Profile",
    "ScoredCandidate",
]
