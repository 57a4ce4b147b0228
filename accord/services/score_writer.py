"""Fire-and-forget persistence of freshly computed scores.

Callers hand a score to ``submit`` and move on; the write runs as a separate
asyncio task. Failures are logged and never reach the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from accord.services.score_store import PairKey, ScoreStore

logger = logging.getLogger("accord.services.score_writer")


class ScoreWriter(Protocol):
    def submit(self, key: PairKey, score: int, breakdown: dict[str, float] | None = None) -> None: ...


class BackgroundScoreWriter:
    """Dispatch each upsert as an independent task on the running loop."""

    def __init__(self, store: ScoreStore) -> None:
        self._store = store
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, key: PairKey, score: int, breakdown: dict[str, float] | None = None) -> None:
        task = asyncio.get_running_loop().create_task(self._write(key, score, breakdown))
        # The loop only keeps weak references to tasks.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every in-flight write; used on shutdown and in tests."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _write(self, key: PairKey, score: int, breakdown: dict[str, float] | None) -> None:
        try:
            await self._store.upsert(key, score, breakdown)
        except Exception as exc:
            logger.warning("Failed to cache compatibility score for %s/%s: %s", key[0], key[1], exc)
