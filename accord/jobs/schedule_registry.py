"""Periodic maintenance jobs registered with rq-scheduler on worker start."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from rq_scheduler import Scheduler

from accord.core.config import settings
from accord.jobs.compatibility import prune_stale_scores_job
from accord.services.task_queue import task_queue

logger = logging.getLogger("accord.jobs.schedule_registry")

PRUNE_JOB_ID = "maintenance:prune_stale_scores"
SCHEDULED_RESULT_TTL = timedelta(hours=1)


def _schedule_entries() -> list[dict]:
    hours = settings.stale_score_prune_interval_hours
    if hours <= 0:
        return []
    return [
        {
            "id": PRUNE_JOB_ID,
            "func": prune_stale_scores_job,
            "interval": hours * 3600,
            "queue_name": task_queue.queue_for("maintenance"),
        }
    ]


def ensure_schedules() -> list[str]:
    """Register missing periodic jobs; returns the ids added on this call."""
    if settings.environment.lower() == "test" or task_queue.connection is None:
        logger.info("Skipping scheduler bootstrap; queue connection is unavailable")
        return []
    scheduler = Scheduler(connection=task_queue.connection, queue_name=task_queue.queue_for("maintenance"))
    added: list[str] = []
    for entry in _schedule_entries():
        if scheduler.get_job(entry["id"]):
            continue
        # rq-scheduler compares against naive UTC timestamps.
        scheduler.schedule(
            scheduled_time=datetime.utcnow(),
            func=entry["func"],
            interval=entry["interval"],
            repeat=None,
            id=entry["id"],
            queue_name=entry["queue_name"],
            result_ttl=int(SCHEDULED_RESULT_TTL.total_seconds()),
        )
        added.append(entry["id"])
        logger.info("Scheduled %s every %ss on queue %s", entry["id"], entry["interval"], entry["queue_name"])
    return added
