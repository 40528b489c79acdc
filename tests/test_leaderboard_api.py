"""Endpoint tests for the leaderboard router."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fakeredis import FakeAsyncRedis
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from dartround.db import get_leaderboard_store, get_redis
from dartround.main import app
from dartround.services.leaderboard_store import leaderboard_key

POST = "t3_post"


async def _submit(client: AsyncClient, user_id: str, score: float, **extra) -> dict:
    response = await client.post(
        f"/api/leaderboard/{POST}/submit", json={"userId": user_id, "score": score, **extra}
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_submit_returns_top_and_rank(client: AsyncClient) -> None:
    data = await _submit(client, "alice", 120, metadata={"roundId": "r1"})

    assert data["type"] == "leaderboard-submit"
    assert data["postId"] == POST
    assert data["callerRank"] == 1
    assert len(data["top"]) == 1
    entry = data["top"][0]
    assert entry["userId"] == "alice"
    assert entry["score"] == 120
    assert entry["rank"] == 1
    assert entry["metadata"] == {"roundId": "r1"}
    assert entry["submittedAt"] > 0


@pytest.mark.asyncio
async def test_fetch_after_submissions(client: AsyncClient) -> None:
    await _submit(client, "A", 100)
    await _submit(client, "B", 200)

    response = await client.post(f"/api/leaderboard/{POST}/fetch", json={"userId": "A", "limit": 1})
    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "leaderboard-fetch"
    assert [(e["userId"], e["score"], e["rank"]) for e in data["top"]] == [("B", 200, 1)]
    assert data["callerRank"] == 2


@pytest.mark.asyncio
async def test_fetch_for_user_without_entry(client: AsyncClient) -> None:
    await _submit(client, "A", 100)
    response = await client.post(f"/api/leaderboard/{POST}/fetch", json={"userId": "nobody"})
    assert response.status_code == 200
    assert response.json()["callerRank"] is None


@pytest.mark.asyncio
async def test_lower_resubmission_keeps_best(client: AsyncClient) -> None:
    await _submit(client, "alice", 100)
    data = await _submit(client, "alice", 50)
    assert data["top"][0]["score"] == 100


@pytest.mark.asyncio
async def test_limit_is_clamped(client: AsyncClient) -> None:
    for i in range(3):
        await _submit(client, f"user-{i}", 10 + i)

    low = await _submit(client, "user-0", 0, limit=0)
    assert len(low["top"]) == 1
    high = await _submit(client, "user-0", 0, limit=1000)
    assert len(high["top"]) == 3
    default = await _submit(client, "user-0", 0)
    assert len(default["top"]) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"userId": "", "score": 10},
        {"userId": "   ", "score": 10},
        {"score": 10},
        {"userId": "alice", "score": "lots"},
        {"userId": "alice"},
        {"userId": "alice", "score": "100"},
        {"userId": "alice", "score": True},
    ],
)
async def test_invalid_submit_rejected(
    client: AsyncClient, fake_redis: FakeAsyncRedis, body: dict
) -> None:
    response = await client.post(f"/api/leaderboard/{POST}/submit", json=body)
    assert response.status_code == 422
    assert await fake_redis.zcard(leaderboard_key(POST)) == 0


@pytest.mark.asyncio
async def test_blank_fetch_user_rejected(client: AsyncClient) -> None:
    response = await client.post(f"/api/leaderboard/{POST}/fetch", json={"userId": " "})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_store_failure_maps_to_503() -> None:
    failing = MagicMock()
    failing.upsert_score = AsyncMock(side_effect=RedisConnectionError("redis down"))
    failing.fetch_top_n = AsyncMock(side_effect=RedisConnectionError("redis down"))
    failing.get_rank_for_user = AsyncMock(side_effect=RedisConnectionError("redis down"))
    app.dependency_overrides[get_leaderboard_store] = lambda: failing
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            submit = await ac.post(
                f"/api/leaderboard/{POST}/submit", json={"userId": "alice", "score": 5}
            )
            fetch = await ac.post(f"/api/leaderboard/{POST}/fetch", json={"userId": "alice"})
    finally:
        app.dependency_overrides.clear()

    assert submit.status_code == 503
    assert submit.json()["detail"] == "Failed to submit leaderboard score"
    assert fetch.status_code == 503


@pytest.mark.asyncio
async def test_board_endpoint(client: AsyncClient) -> None:
    response = await client.get("/api/board")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["errors"] == []
    assert data["board"]["numbers"][0] == 20
    assert data["board"]["direction"] == "cw"


@pytest.mark.asyncio
async def test_store_built_from_redis_dependency(fake_redis: FakeAsyncRedis) -> None:
    app.dependency_overrides[get_redis] = lambda: fake_redis
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.post(
                f"/api/leaderboard/{POST}/submit", json={"userId": "alice", "score": 42}
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["callerRank"] == 1
    assert await fake_redis.zcard(leaderboard_key(POST)) == 1
