import logging

from fastapi import APIRouter, Depends, HTTPException, status
from redis.exceptions import RedisError

from dartround.db import get_leaderboard_store
from dartround.domain.board_rules import create_board_config, validate_board_config
from dartround.models.dc_models import (
    BoardConfigResponse,
    LeaderboardFetchRequest,
    LeaderboardResponse,
    LeaderboardSubmitRequest,
)
from dartround.services import leaderboard_service
from dartround.services.leaderboard_store import LeaderboardStore

leaderboard_router = APIRouter()


class LeaderboardAPI:
    @staticmethod
    @leaderboard_router.post(
        "/api/leaderboard/{post_id}/submit", response_model=LeaderboardResponse
    )
    async def submit(
        post_id: str,
        request: LeaderboardSubmitRequest,
        store: LeaderboardStore = Depends(get_leaderboard_store),
    ) -> LeaderboardResponse:
        """Store a round total and return the updated leaderboard

        Args:
            post_id (str): Post owning the leaderboard
            request (LeaderboardSubmitRequest): userId, score, optional limit and metadata

        Returns:
            LeaderboardResponse: Top entries and the caller's rank
        """
        logging.info(f"Leaderboard submit: post={post_id} user={request.user_id} score={request.score}")
        try:
            return await leaderboard_service.submit_score(store, post_id, request)
        except RedisError:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Failed to submit leaderboard score",
            )

    @staticmethod
    @leaderboard_router.post(
        "/api/leaderboard/{post_id}/fetch", response_model=LeaderboardResponse
    )
    async def fetch(
        post_id: str,
        request: LeaderboardFetchRequest,
        store: LeaderboardStore = Depends(get_leaderboard_store),
    ) -> LeaderboardResponse:
        try:
            return await leaderboard_service.fetch_leaderboard(store, post_id, request)
        except RedisError:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Failed to fetch leaderboard",
            )


class BoardAPI:
    @staticmethod
    @leaderboard_router.get("/api/board", response_model=BoardConfigResponse)
    async def get_board() -> BoardConfigResponse:
        board = create_board_config()
        errors = validate_board_config(board)
        return BoardConfigResponse(ok=not errors, errors=errors, board=board.model_dump(mode="json"))
