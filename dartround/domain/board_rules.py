"""Board geometry rules that are independent from HTTP and Redis.

Rule of thumb:
- OK: constants, validation, building configs.
- Not OK: touching Redis, FastAPI, datetime.now(), etc.
"""

from typing import List

import numpy as np

from dartround.models.board_models import (
    BoardConfig,
    BoardPoints,
    RingRatios,
    WedgeDirection,
)

SEGMENTS = 20
DEFAULT_BOARD_RADIUS = 2.05
DEFAULT_RING_EPS_N = 0.01

# Clockwise wedge order starting with 20 at the top.
DARTBOARD_NUMBERS = [
    20, 1, 18, 4, 13,
    6, 10, 15, 2, 17,
    3, 19, 7, 16, 8,
    11, 14, 9, 12, 5,
]

# Face radii in pixels of the painted board, outer edge of the double ring = 512.
FACE_OUTER_PX = 512
_FACE_SCALE = FACE_OUTER_PX / 480
R_DOUBLE_INNER_PX = 445 * _FACE_SCALE
R_TRIPLE_INNER_PX = 275 * _FACE_SCALE
R_TRIPLE_OUTER_PX = 310 * _FACE_SCALE
R_BULL_OUTER_PX = 70 * _FACE_SCALE
R_DBULL_OUTER_PX = 32 * _FACE_SCALE

RING_RATIO_NAMES = (
    "outer",
    "double_inner",
    "double_outer",
    "triple_inner",
    "triple_outer",
    "bull_outer",
    "dbull_outer",
)


def default_ring_ratios() -> RingRatios:
    return RingRatios(
        outer=1.0,
        double_inner=R_DOUBLE_INNER_PX / FACE_OUTER_PX,
        double_outer=1.0,
        triple_inner=R_TRIPLE_INNER_PX / FACE_OUTER_PX,
        triple_outer=R_TRIPLE_OUTER_PX / FACE_OUTER_PX,
        bull_outer=R_BULL_OUTER_PX / FACE_OUTER_PX,
        dbull_outer=R_DBULL_OUTER_PX / FACE_OUTER_PX,
    )


def create_board_config(board_radius: float = DEFAULT_BOARD_RADIUS) -> BoardConfig:
    """Build the standard board: 20 at the top, numbers placed clockwise.

    Args:
        board_radius (float): World-unit radius used to normalize hit coordinates.

    Returns:
        BoardConfig: Scoring configuration of the standard board.
    """
    return BoardConfig(
        segments=SEGMENTS,
        wedge_angle=2 * np.pi / SEGMENTS,
        start_angle=np.pi / 2,
        direction=WedgeDirection.cw,
        angle_offset=0.0,
        numbers=list(DARTBOARD_NUMBERS),
        ring_ratios=default_ring_ratios(),
        ring_eps_n=DEFAULT_RING_EPS_N,
        points=BoardPoints(bull=25, dbull=50),
        board_radius=board_radius,
    )


def validate_board_config(config: BoardConfig) -> List[str]:
    """Return human-readable problems with the board, empty when it is usable."""
    errors: List[str] = []

    if len(config.numbers) != SEGMENTS:
        errors.append(f"numbers must have length {SEGMENTS}")
    elif sorted(config.numbers) != list(range(1, SEGMENTS + 1)):
        errors.append(f"numbers must contain each of 1..{SEGMENTS} exactly once")

    if config.segments != SEGMENTS:
        errors.append(f"segments must be {SEGMENTS}")

    if not np.isfinite(config.start_angle):
        errors.append("start_angle (center angle) must be a finite number")

    if not np.isfinite(config.angle_offset):
        errors.append("angle_offset must be a finite number")

    if not np.isfinite(config.wedge_angle) or config.wedge_angle <= 0:
        errors.append("wedge_angle must be a finite positive number")

    rr = config.ring_ratios
    if rr is None:
        errors.append("ring_ratios missing")
    else:
        for name in RING_RATIO_NAMES:
            if not np.isfinite(getattr(rr, name)):
                errors.append(f"ring_ratios.{name} must be a finite number")
        if not errors and not (
            rr.dbull_outer
            < rr.bull_outer
            < rr.triple_inner
            < rr.triple_outer
            < rr.double_inner
            <= rr.double_outer
            == rr.outer
        ):
            errors.append(
                "ring_ratios must satisfy dbull_outer < bull_outer < triple_inner"
                " < triple_outer < double_inner <= double_outer == outer"
            )

    eps = config.ring_eps_n
    if eps is not None and not (np.isfinite(eps) and eps >= 0):
        errors.append("ring_eps_n must be a finite number >= 0 if provided")

    if config.board_radius is not None and not (
        np.isfinite(config.board_radius) and config.board_radius > 0
    ):
        errors.append("board_radius must be a finite positive number if provided")

    return errors
