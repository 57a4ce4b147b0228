"""Background jobs for pre-warming and pruning cached compatibility scores."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from accord.schema.profile import Preferences, Profile
from accord.services.compatibility_cache import build_cache

logger = logging.getLogger("accord.jobs.compatibility")


def prewarm_scores_job(
    source_profile: dict[str, Any],
    source_prefs: dict[str, Any],
    candidates: list[dict[str, Any]],
) -> dict[str, Any]:
    """Compute and persist scores for one source profile against many candidates.

    Arguments arrive as plain dicts because RQ pickles job kwargs; a candidate
    that fails validation is reported as a failure without aborting the batch.
    """
    source = Profile.model_validate(source_profile)
    prefs = Preferences.model_validate(source_prefs)

    parsed: list[tuple[Profile, Preferences]] = []
    invalid: dict[str, str] = {}
    for index, item in enumerate(candidates):
        try:
            parsed.append(
                (Profile.model_validate(item["profile"]), Preferences.model_validate(item["preferences"]))
            )
        except (KeyError, ValueError) as exc:
            candidate_id = str((item.get("profile") or {}).get("id", f"#{index}"))
            invalid[candidate_id] = f"invalid candidate: {exc}"

    async def _run():
        return await build_cache().batch_compute(source, prefs, parsed)

    result = asyncio.run(_run())
    result.failures.update(invalid)
    logger.info(
        "Pre-warm for %s finished: %d stored, %d failed", result.source_id, result.succeeded, result.failed
    )
    return result.model_dump()


def prune_stale_scores_job() -> dict[str, int]:
    """Scheduled cleanup for scores past the freshness window."""

    async def _run() -> int:
        return await build_cache().prune_stale()

    deleted = asyncio.run(_run())
    logger.info("Pruned %d stale compatibility scores", deleted)
    return {"deleted": deleted}
