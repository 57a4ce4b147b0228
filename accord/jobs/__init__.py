"""Background job modules for RQ workers and schedulers."""

from .compatibility import prewarm_scores_job, prune_stale_scores_job

__all__ = [
    "prewarm_scores_job",
    "prune_stale_scores_job",
]
