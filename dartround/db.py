from fastapi import Depends
from redis.asyncio import Redis

from dartround.load_secrets import redis_db, redis_host, redis_password, redis_port
from dartround.services.leaderboard_store import LeaderboardStore

# Centralized Redis client to avoid creating it in router modules.
redis = Redis(
    host=redis_host,
    port=redis_port,
    db=redis_db,
    password=redis_password,
    decode_responses=True,
    health_check_interval=30,
)


async def get_redis() -> Redis:
    return redis


async def get_leaderboard_store(redis: Redis = Depends(get_redis)) -> LeaderboardStore:
    return LeaderboardStore(redis)
