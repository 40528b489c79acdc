"""Per-post best-score leaderboard on a Redis sorted set + hash.

- leaderboard:{post_id}       sorted set, member = user_id, score = composite score
- leaderboard:{post_id}:meta  hash, field = user_id, value = JSON record

The composite score packs the best score and its submission time into one
number: score * SCORE_MULTIPLIER - submitted_at. Different scores never swap
order, and among equal scores the earlier submission ranks higher.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List

from redis.asyncio import Redis
from redis.exceptions import WatchError

from dartround.converter import DataConverter
from dartround.models.dc_models import LeaderboardEntryModel
from dartround.models.schema_models import StoredLeaderboardRecord

SCORE_MULTIPLIER = 1_000_000_000_000

data_converter = DataConverter()


def leaderboard_key(post_id: str) -> str:
    return f"leaderboard:{post_id}"


def leaderboard_meta_key(post_id: str) -> str:
    return f"leaderboard:{post_id}:meta"


def to_composite_score(score: float, submitted_at: int) -> float:
    return score * SCORE_MULTIPLIER - submitted_at


def now_ms() -> int:
    return int(datetime.now().timestamp() * 1000)


class LeaderboardStore:
    def __init__(self, redis: Redis, clock: Callable[[], int] = now_ms):
        """Leaderboard operations over a Redis connection

        Args:
            redis (Redis): Client created with decode_responses=True
            clock (Callable[[], int], optional): Epoch milliseconds source. Defaults to now_ms.
        """
        self.redis: Redis = redis
        self.clock: Callable[[], int] = clock

    async def upsert_score(
        self,
        post_id: str,
        user_id: str,
        score: float,
        metadata: Dict[str, str] | None = None,
    ) -> StoredLeaderboardRecord:
        """Store score as the user's best if it beats the stored one

        The read and both writes run in one WATCH/MULTI transaction on the
        metadata hash; a concurrent write to the hash aborts EXEC and the
        comparison is retried against the new value.

        Args:
            post_id (str): Post owning the leaderboard
            user_id (str): Submitting user
            score (float): Round total
            metadata (Dict[str, str] | None, optional): Opaque strings kept with the record

        Returns:
            StoredLeaderboardRecord: The record in effect after the call
        """
        meta_key = leaderboard_meta_key(post_id)

        async with self.redis.pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(meta_key)
                    existing = data_converter.decode_record(await pipe.hget(meta_key, user_id))
                    if existing is not None and existing.score >= score:
                        logging.info(
                            f"Kept best score {existing.score} for {user_id} on {post_id} (submitted {score})"
                        )
                        return existing

                    record = StoredLeaderboardRecord(
                        score=score, submitted_at=self.clock(), metadata=metadata
                    )
                    pipe.multi()
                    pipe.hset(meta_key, mapping={user_id: data_converter.encode_record(record)})
                    pipe.zadd(
                        leaderboard_key(post_id),
                        {user_id: to_composite_score(record.score, record.submitted_at)},
                    )
                    await pipe.execute()
                    logging.info(f"New best score {score} for {user_id} on {post_id}")
                    return record
                except WatchError:
                    logging.debug(f"Leaderboard record of {user_id} changed during upsert, retrying")
                    continue

    async def fetch_top_n(self, post_id: str, limit: int) -> List[LeaderboardEntryModel]:
        """Get the best `limit` users, highest composite score first

        Args:
            post_id (str): Post owning the leaderboard
            limit (int): Number of entries, nothing is fetched when <= 0

        Returns:
            List[LeaderboardEntryModel]: Entries ranked from 1
        """
        if limit <= 0:
            return []

        top_entries = await self.redis.zrange(
            leaderboard_key(post_id), 0, limit - 1, desc=True, withscores=True
        )
        if not top_entries:
            return []

        members = [member for member, _ in top_entries]
        meta_values = await self.redis.hmget(leaderboard_meta_key(post_id), members)

        return [
            data_converter.convert_record_to_entry(
                user_id=member,
                rank=index + 1,
                composite_score=composite_score,
                record=data_converter.decode_record(meta_values[index]),
            )
            for index, (member, composite_score) in enumerate(top_entries)
        ]

    async def get_rank_for_user(self, post_id: str, user_id: str) -> int | None:
        """Get the 1-based descending rank of a user

        Args:
            post_id (str): Post owning the leaderboard
            user_id (str): User to look up

        Returns:
            int | None: Rank, None if the user has no entry
        """
        key = leaderboard_key(post_id)
        # Both reads in one MULTI so rank and cardinality come from the same snapshot
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.zrank(key, user_id)
            pipe.zcard(key)
            ascending_rank, total = await pipe.execute()
        if ascending_rank is None:
            return None
        return total - ascending_rank
