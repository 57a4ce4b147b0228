"""Service-layer helpers for scoring and caching."""

from . import compatibility_cache, feed_ranking, score_store, score_writer

__all__ = [
    "compatibility_cache",
    "feed_ranking",
    "score_store",
    "score_writer",
]
