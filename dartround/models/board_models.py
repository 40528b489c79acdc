from enum import Enum
from typing import List, Optional

from pydantic import BaseModel
import numpy as np


class WedgeDirection(str, Enum):
    cw = "cw"  # wedge index increases clockwise from start_angle
    ccw = "ccw"  # wedge index increases counter-clockwise from start_angle


class RingRatios(BaseModel):
    """Ring radii normalized to board_radius."""

    outer: float
    double_inner: float
    double_outer: float
    triple_inner: float
    triple_outer: float
    bull_outer: float
    dbull_outer: float

    class Config:
        from_attributes = True


class BoardPoints(BaseModel):
    bull: int = 25
    dbull: int = 50

    class Config:
        from_attributes = True


class BoardConfig(BaseModel):
    """Scoring configuration of one dartboard.

    Fields are typed but not range-checked here, so a malformed board can
    still be represented. Use validate_board_config to list what is wrong.
    """

    segments: int = 20
    wedge_angle: float = 2 * np.pi / 20
    start_angle: float
    direction: WedgeDirection = WedgeDirection.cw
    angle_offset: float = 0.0
    numbers: List[int]
    ring_ratios: Optional[RingRatios] = None
    ring_eps_n: Optional[float] = None
    points: BoardPoints = BoardPoints()
    board_radius: Optional[float] = None

    class Config:
        from_attributes = True


class AimSettings(BaseModel):
    board_radius: float = 2.05
    max_radius: float = 0.75
    min_radius: float = 0.06
    shrink_time: float = 1.25  # seconds from max_radius to min_radius
    margin: float = 0.02
    roam_scale: float = 0.82  # roaming amplitude as a fraction of board_radius

    class Config:
        from_attributes = True
