"""Scoring rules for a standard dartboard.

Hits are given in board-local coordinates on the board face: +x right, +y up,
origin at the board center. Everything here is pure: the same (x, y, config)
always gives the same ScoreResult, and malformed configs score as a miss
instead of raising.
"""

from typing import Tuple

import numpy as np

from dartround.domain.board_rules import DEFAULT_RING_EPS_N, SEGMENTS
from dartround.models.board_models import BoardConfig, WedgeDirection
from dartround.models.schema_models import RingName, ScoreResult

TWO_PI = 2 * np.pi

LABEL_PREFIX = {1: "S", 2: "D", 3: "T"}


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians into [0, 2π)."""
    wrapped = float(np.mod(angle, TWO_PI))
    # np.mod can round a tiny negative input up to exactly 2π
    return 0.0 if wrapped >= TWO_PI else wrapped


def ring_eps_for(config: BoardConfig) -> float:
    eps = config.ring_eps_n
    if eps is not None and np.isfinite(eps) and eps >= 0:
        return float(eps)
    return DEFAULT_RING_EPS_N


def _miss(radius: float = 0.0, r_norm: float = 0.0) -> ScoreResult:
    return ScoreResult(
        points=0,
        label=RingName.MISS.value,
        wedge=None,
        wedge_index=None,
        mult=0,
        ring=RingName.MISS,
        angle=0.0,
        radius=radius,
        r_norm=r_norm,
    )


def _is_scorable(config: BoardConfig) -> bool:
    return (
        len(config.numbers) == SEGMENTS
        and config.ring_ratios is not None
        and bool(np.isfinite(config.wedge_angle))
        and config.wedge_angle > 0
        and bool(np.isfinite(config.start_angle))
        and bool(np.isfinite(config.angle_offset))
    )


def wedge_index_from_angle(theta: float, config: BoardConfig) -> int:
    """Map an angle to the wedge index (0..19) whose center is nearest.

    start_angle is the center of wedge 0. The delta from it is measured in the
    configured direction, and wedge_angle / 2 is added before flooring so that
    the index rounds to the nearest wedge center instead of truncating.

    Args:
        theta (float): Hit angle in radians, math convention.
        config (BoardConfig): Board configuration.

    Returns:
        int: Wedge index in 0..19.
    """
    wedge_angle = config.wedge_angle
    a = normalize_angle(theta + config.angle_offset)

    if config.direction == WedgeDirection.cw:
        delta = normalize_angle(config.start_angle - a)
    else:
        delta = normalize_angle(a - config.start_angle)

    return int(np.floor((delta + wedge_angle / 2) / wedge_angle)) % SEGMENTS


def ring_from_radius_ratio(r_norm: float, config: BoardConfig) -> Tuple[RingName, int]:
    """Classify a normalized radius into a ring and its multiplier.

    Bands are widened by ring_eps_n and checked in a fixed order; the first
    match wins, so a hit within tolerance of both the rim and the double band
    is a double, and bulls win over everything inside the board.
    """
    rr = config.ring_ratios
    eps = ring_eps_for(config)

    if r_norm > rr.outer + eps:
        return RingName.MISS, 0
    if r_norm <= rr.dbull_outer + eps:
        return RingName.DBULL, 0
    if r_norm <= rr.bull_outer + eps:
        return RingName.SBULL, 0
    if rr.double_inner - eps <= r_norm <= rr.double_outer + eps:
        return RingName.DOUBLE, 2
    if rr.triple_inner - eps <= r_norm <= rr.triple_outer + eps:
        return RingName.TRIPLE, 3
    return RingName.SINGLE, 1


def score_from_board_xy(x: float, y: float, config: BoardConfig) -> ScoreResult:
    """Score a hit at board-local (x, y).

    Args:
        x (float): Horizontal hit position, same units as config.board_radius.
        y (float): Vertical hit position.
        config (BoardConfig): Board configuration.

    Returns:
        ScoreResult: Points, label, wedge and ring of the hit. A board that
            cannot be scored yields a MISS with zero radius.
    """
    if not _is_scorable(config):
        return _miss()

    board_radius = config.board_radius
    has_board_radius = (
        board_radius is not None and bool(np.isfinite(board_radius)) and board_radius > 0
    )

    r = float(np.hypot(x, y))
    r_norm = r / board_radius if has_board_radius else r

    ring, mult = ring_from_radius_ratio(r_norm, config)

    if ring == RingName.MISS:
        return _miss(r, r_norm)

    if ring in (RingName.DBULL, RingName.SBULL):
        points = config.points.dbull if ring == RingName.DBULL else config.points.bull
        return ScoreResult(
            points=points,
            label=ring.value,
            wedge=None,
            wedge_index=None,
            mult=0,
            ring=ring,
            angle=0.0,
            radius=r,
            r_norm=r_norm,
        )

    theta = normalize_angle(float(np.arctan2(y, x)))
    wedge_index = wedge_index_from_angle(theta, config)
    wedge = config.numbers[wedge_index]

    return ScoreResult(
        points=wedge * mult,
        label=f"{LABEL_PREFIX[mult]}{wedge}",
        wedge=wedge,
        wedge_index=wedge_index,
        mult=mult,
        ring=ring,
        angle=theta,
        radius=r,
        r_norm=r_norm,
    )


def format_hit_for_hud(result: ScoreResult | None) -> str:
    """Format a hit as "T20 (+60)", "DBULL (+50)" or "MISS (+0)"."""
    if result is None:
        return "—"
    if result.ring == RingName.MISS:
        return "MISS (+0)"
    return f"{result.label} (+{result.points})"
