"""Leaderboard use cases.

- Routers should not touch Redis directly; they call this module.
- Store errors are logged here and propagated to the caller.
"""

import asyncio
import logging

from redis.exceptions import RedisError

from dartround.load_secrets import leaderboard_default_limit, leaderboard_max_limit
from dartround.models.dc_models import (
    LeaderboardFetchRequest,
    LeaderboardResponse,
    LeaderboardSubmitRequest,
)
from dartround.services.leaderboard_store import LeaderboardStore


def clamp_limit(limit: int | None) -> int:
    """Clamp a requested leaderboard size to [1, max], default when omitted."""
    if limit is None:
        limit = leaderboard_default_limit
    return max(1, min(limit, leaderboard_max_limit))


async def _read_leaderboard(
    store: LeaderboardStore, post_id: str, user_id: str, limit: int | None, response_type: str
) -> LeaderboardResponse:
    top, caller_rank = await asyncio.gather(
        store.fetch_top_n(post_id, clamp_limit(limit)),
        store.get_rank_for_user(post_id, user_id),
    )
    return LeaderboardResponse(
        type=response_type, post_id=post_id, top=top, caller_rank=caller_rank
    )


async def submit_score(
    store: LeaderboardStore, post_id: str, request: LeaderboardSubmitRequest
) -> LeaderboardResponse:
    try:
        await store.upsert_score(post_id, request.user_id, request.score, request.metadata)
        return await _read_leaderboard(
            store, post_id, request.user_id, request.limit, "leaderboard-submit"
        )
    except RedisError as e:
        logging.error(f"Leaderboard submit failed for post {post_id}: {e}")
        raise


async def fetch_leaderboard(
    store: LeaderboardStore, post_id: str, request: LeaderboardFetchRequest
) -> LeaderboardResponse:
    try:
        return await _read_leaderboard(
            store, post_id, request.user_id, request.limit, "leaderboard-fetch"
        )
    except RedisError as e:
        logging.error(f"Leaderboard fetch failed for post {post_id}: {e}")
        raise
