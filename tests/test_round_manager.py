"""Tests for dartround.round_manager."""

from __future__ import annotations

import pytest

from dartround.domain.scoring_rules import score_from_board_xy
from dartround.models.board_models import BoardConfig
from dartround.models.schema_models import RingName, RoundPhase, ScoreResult
from dartround.round_manager import RoundManager

R = 2.05


@pytest.fixture
def t20(board: BoardConfig) -> ScoreResult:
    return score_from_board_xy(0.0, R * 0.61, board)


@pytest.fixture
def miss(board: BoardConfig) -> ScoreResult:
    return score_from_board_xy(0.0, R * 1.5, board)


def test_starts_inactive() -> None:
    manager = RoundManager()
    assert manager.state.phase == RoundPhase.inactive
    assert not manager.is_active
    assert manager.summary is None


def test_throw_ignored_before_reset(t20: ScoreResult) -> None:
    manager = RoundManager()
    assert manager.register_throw(t20) is None
    assert manager.state.darts_thrown == 0


def test_reset_round_activates() -> None:
    manager = RoundManager()
    state = manager.reset_round()
    assert state.phase == RoundPhase.active
    assert (state.darts_thrown, state.total_score, state.throw_history) == (0, 0, [])


def test_register_throw_records_history(t20: ScoreResult, miss: ScoreResult) -> None:
    manager = RoundManager()
    manager.reset_round()
    record = manager.register_throw(t20)
    manager.register_throw(miss)

    assert (record.label, record.points, record.ring, record.mult, record.wedge) == (
        "T20",
        60,
        RingName.TRIPLE,
        3,
        20,
    )
    state = manager.state
    assert state.darts_thrown == 2
    assert state.total_score == 60
    assert [t.label for t in state.throw_history] == ["T20", "MISS"]
    assert state.total_score == sum(t.points for t in state.throw_history)


def test_round_completes_after_max_darts(t20: ScoreResult) -> None:
    manager = RoundManager(max_darts=10)
    manager.reset_round()
    for _ in range(10):
        manager.register_throw(t20)

    assert manager.state.darts_thrown == 10
    assert manager.is_complete
    assert manager.summary.total_score == 600

    assert manager.register_throw(t20) is None
    assert manager.state.total_score == 600
    assert manager.state.darts_thrown == 10


def test_summary_contents(t20: ScoreResult, miss: ScoreResult) -> None:
    manager = RoundManager(max_darts=2)
    state = manager.reset_round()
    manager.register_throw(t20)
    manager.register_throw(miss)

    summary = manager.summary
    assert summary.round_id == state.round_id
    assert summary.darts_thrown == 2
    assert summary.total_score == 60
    assert [(t.label, t.points) for t in summary.throws] == [("T20", 60), ("MISS", 0)]


def test_end_round_is_idempotent(t20: ScoreResult) -> None:
    manager = RoundManager()
    manager.reset_round()
    manager.register_throw(t20)
    first = manager.end_round()
    second = manager.end_round()
    assert first is second
    assert manager.register_throw(t20) is None
    assert manager.state.total_score == 60


def test_reset_after_complete_starts_new_round(t20: ScoreResult) -> None:
    manager = RoundManager(max_darts=1)
    old = manager.reset_round()
    manager.register_throw(t20)
    assert manager.is_complete

    new = manager.reset_round()
    assert new.round_id != old.round_id
    assert manager.is_active
    assert manager.summary is None
    assert manager.state.total_score == 0


def test_state_is_a_copy(t20: ScoreResult) -> None:
    manager = RoundManager()
    manager.reset_round()
    manager.state.throw_history.append(manager.register_throw(t20))
    assert len(manager.state.throw_history) == 1


def test_max_darts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RoundManager(max_darts=0)
