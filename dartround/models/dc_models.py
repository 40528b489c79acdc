import math
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, StrictFloat, field_validator
from pydantic.alias_generators import to_camel

# Models in this module are exchanged with the client, so they are (de)serialized
# with camelCase keys ("userId", "callerRank") while staying snake_case in Python.


class HitSampleModel(BaseModel):
    center_x: float
    center_y: float
    radius: float
    hit_x: float
    hit_y: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ThrowSummaryModel(BaseModel):
    label: str
    points: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RoundSummaryModel(BaseModel):
    round_id: UUID
    total_score: int
    darts_thrown: int
    throws: List[ThrowSummaryModel]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LeaderboardEntryModel(BaseModel):
    user_id: str
    score: float
    submitted_at: int
    rank: int
    metadata: Optional[Dict[str, str]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class LeaderboardFetchRequest(BaseModel):
    user_id: str
    limit: Optional[int] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("userId is required")
        return value


class LeaderboardSubmitRequest(LeaderboardFetchRequest):
    score: StrictFloat  # numbers only, "100" and true are rejected
    metadata: Optional[Dict[str, str]] = None

    @field_validator("score")
    @classmethod
    def score_is_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("score must be a finite number")
        return value


class LeaderboardResponse(BaseModel):
    type: str  # "leaderboard-submit" or "leaderboard-fetch"
    post_id: str
    top: List[LeaderboardEntryModel]
    caller_rank: Optional[int] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class BoardConfigResponse(BaseModel):
    ok: bool
    errors: List[str]
    board: dict
