import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from dartround.db import redis
from dartround.domain.board_rules import create_board_config, validate_board_config
from dartround.routers import leaderboard

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app):
    """Check the default board and the Redis connection.
    This function is called to start the server.
    """
    errors = validate_board_config(create_board_config())
    if errors:
        logging.error(f"Default board config is invalid: {errors}")

    await redis.ping()
    logging.info("Connected to Redis")
    try:
        yield
    finally:
        await redis.aclose()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(leaderboard.leaderboard_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
