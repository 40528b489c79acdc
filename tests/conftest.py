"""Shared test fixtures for dartround tests."""

from __future__ import annotations

import itertools
from collections.abc import AsyncGenerator, Callable

import numpy as np
import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis
from httpx import ASGITransport, AsyncClient

from dartround.aim_controller import AimController
from dartround.db import get_leaderboard_store
from dartround.domain.board_rules import create_board_config
from dartround.main import app
from dartround.models.board_models import AimSettings, BoardConfig
from dartround.services.leaderboard_store import LeaderboardStore

# Epoch ms of the first fake submission; each later one is 1 s after the previous.
CLOCK_START_MS = 1_700_000_000_000


@pytest.fixture
def board() -> BoardConfig:
    """Standard board with the default 2.05 world-unit radius."""
    return create_board_config()


@pytest.fixture
def aim() -> AimController:
    """Reticle with default settings and a seeded RNG."""
    return AimController(AimSettings(), np.random.default_rng(1234))


@pytest.fixture
def clock() -> Callable[[], int]:
    counter = itertools.count(CLOCK_START_MS, 1000)
    return lambda: next(counter)


@pytest_asyncio.fixture
async def fake_redis() -> AsyncGenerator[FakeAsyncRedis, None]:
    redis = FakeAsyncRedis(decode_responses=True)
    yield redis
    await redis.flushall()
    await redis.aclose()


@pytest_asyncio.fixture
async def store(fake_redis: FakeAsyncRedis, clock: Callable[[], int]) -> LeaderboardStore:
    return LeaderboardStore(fake_redis, clock=clock)


@pytest_asyncio.fixture
async def client(store: LeaderboardStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, with the leaderboard store on fake Redis."""
    app.dependency_overrides[get_leaderboard_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
