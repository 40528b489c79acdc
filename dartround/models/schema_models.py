from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class RingName(str, Enum):
    MISS = "MISS"
    DBULL = "DBULL"
    SBULL = "SBULL"
    DOUBLE = "DOUBLE"
    TRIPLE = "TRIPLE"
    SINGLE = "SINGLE"


class RoundPhase(str, Enum):
    inactive = "inactive"
    active = "active"
    complete = "complete"


class ScoreResult(BaseModel):
    points: int
    label: str
    wedge: int | None
    wedge_index: int | None
    mult: int
    ring: RingName
    angle: float
    radius: float
    r_norm: float

    class Config:
        frozen = True
        from_attributes = True


class ThrowRecord(BaseModel):
    label: str
    points: int
    ring: RingName
    mult: int
    wedge: int | None

    class Config:
        from_attributes = True


class AimState(BaseModel):
    enabled: bool = False
    holding: bool = False
    hold_time: float = 0.0
    center_x: float = 0.0
    center_y: float = 0.0
    radius: float
    time: float = 0.0  # roaming clock, seconds


class RoundState(BaseModel):
    round_id: UUID
    phase: RoundPhase = RoundPhase.inactive
    darts_thrown: int = 0
    total_score: int = 0
    throw_history: List[ThrowRecord] = Field(default_factory=list)


class StoredLeaderboardRecord(BaseModel):
    """Value stored per user in the leaderboard metadata hash."""

    score: float
    submitted_at: int  # epoch ms of the submission that set the best score
    metadata: Optional[Dict[str, str]] = None

    class Config:
        from_attributes = True
