import os
from dotenv import load_dotenv

load_dotenv()

redis_host = os.getenv("REDIS_HOST", "redis")
redis_port = int(os.getenv("REDIS_PORT", "6379"))
redis_db = int(os.getenv("REDIS_DB", "0"))
redis_password = os.getenv("REDIS_PASSWORD") or None
leaderboard_default_limit = int(os.getenv("LEADERBOARD_DEFAULT_LIMIT", "10"))
leaderboard_max_limit = int(os.getenv("LEADERBOARD_MAX_LIMIT", "100"))
max_darts_per_round = int(os.getenv("MAX_DARTS_PER_ROUND", "10"))

if __name__ == "__main__":
    print(redis_host, redis_port, redis_db, leaderboard_default_limit, leaderboard_max_limit)
