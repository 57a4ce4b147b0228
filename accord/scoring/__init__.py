from accord.scoring.engine import (
    calculate_compatibility_score,
    describe_match,
    get_compatibility_breakdown,
)

__all__ = ["calculate_compatibility_score", "describe_match", "get_compatibility_breakdown"]
