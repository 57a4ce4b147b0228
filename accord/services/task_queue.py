"""Dispatch score pre-warming to RQ, or run it in-process when Redis is absent."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from redis import Redis
from rq import Queue, Retry

from accord.core.config import settings
from accord.schema.profile import Preferences, Profile

logger = logging.getLogger("accord.services.task_queue")

# Pre-warm writes are idempotent upserts, so retrying a whole batch is safe.
DEFAULT_RETRY = Retry(max=3, interval=[5, 15, 30])
PREWARM_TIMEOUT_SECONDS = 300


async def _run_inline(func: Callable[..., Any], kwargs: dict[str, Any]) -> Any:
    """Run a job function without a worker; sync jobs go to a thread because they own an event loop."""
    if asyncio.iscoroutinefunction(func):
        return await func(**kwargs)
    return await asyncio.to_thread(func, **kwargs)


class TaskQueue:
    """RQ producer for scoring jobs with an inline fallback."""

    def __init__(self) -> None:
        self.queue_names: list[str] = settings.worker_queue_names or ["default"]
        self.connection: Redis | None = self._connect()

    @property
    def enabled(self) -> bool:
        return self.connection is not None

    def _connect(self) -> Redis | None:
        if settings.environment.lower() == "test":
            logger.info("Task queue disabled in test environment")
            return None
        try:
            connection = Redis.from_url(settings.redis_url)
            connection.ping()
        except Exception as exc:  # pragma: no cover - network/redis specific
            logger.warning("Redis unavailable; scoring jobs will run inline: %s", exc)
            return None
        logger.info("Task queue ready (queues: %s)", ", ".join(self.queue_names))
        return connection

    def queue_for(self, preferred: str) -> str:
        """Use ``preferred`` when a worker listens on it, else the first configured queue."""
        if preferred in self.queue_names:
            return preferred
        return self.queue_names[0] if self.queue_names else "default"

    def get_queue(self, queue_name: str | None = None) -> Queue:
        if self.connection is None:
            raise RuntimeError("Queue connection not initialized")
        return Queue(self.queue_for(queue_name or ""), connection=self.connection)

    async def enqueue_prewarm(
        self,
        source_profile: Profile,
        source_prefs: Preferences,
        candidates: list[tuple[Profile, Preferences]],
    ) -> Any:
        """Pre-warm scores for one profile against a candidate list in the background."""
        from accord.jobs.compatibility import prewarm_scores_job

        return await self.enqueue(
            prewarm_scores_job,
            queue_name=self.queue_for("scoring"),
            timeout_seconds=PREWARM_TIMEOUT_SECONDS,
            description=f"prewarm:{source_profile.id}:{len(candidates)}",
            source_profile=source_profile.model_dump(mode="json"),
            source_prefs=source_prefs.model_dump(mode="json"),
            candidates=[
                {"profile": profile.model_dump(mode="json"), "preferences": prefs.model_dump(mode="json")}
                for profile, prefs in candidates
            ],
        )

    async def enqueue(
        self,
        func: Callable[..., Any],
        *,
        queue_name: str | None = None,
        timeout_seconds: int = 60,
        retry: Retry | None = DEFAULT_RETRY,
        description: str | None = None,
        **kwargs: Any,
    ) -> Any:
        """Queue ``func`` and return the job id, or run it inline and return its result."""
        if self.connection is None:
            return await _run_inline(func, kwargs)

        def _enqueue() -> str:
            job = self.get_queue(queue_name).enqueue(
                func,
                kwargs=kwargs,
                job_timeout=timeout_seconds,
                description=description,
                retry=retry,
            )
            return job.id

        try:
            return await asyncio.to_thread(_enqueue)
        except Exception as exc:  # pragma: no cover - network/redis specific
            logger.warning("Queueing %s failed; running inline: %s", description or func.__name__, exc)
            return await _run_inline(func, kwargs)


task_queue = TaskQueue()
