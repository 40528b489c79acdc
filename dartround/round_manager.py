import logging

from uuid6 import uuid7

from dartround.models.dc_models import RoundSummaryModel, ThrowSummaryModel
from dartround.models.schema_models import (
    RoundPhase,
    RoundState,
    ScoreResult,
    ThrowRecord,
)

MAX_DARTS_PER_ROUND = 10


class RoundManager:
    """Sequences the throws of one round and keeps its running total.

    Inactive -> Active (reset_round) -> Complete (max_darts reached or
    end_round) -> Active again on the next reset_round.
    """

    def __init__(self, max_darts: int = MAX_DARTS_PER_ROUND):
        if max_darts < 1:
            raise ValueError("max_darts must be at least 1")
        self.max_darts: int = max_darts
        self._state = RoundState(round_id=uuid7())
        self._summary: RoundSummaryModel | None = None

    @property
    def state(self) -> RoundState:
        return self._state.model_copy(deep=True)

    @property
    def is_active(self) -> bool:
        return self._state.phase == RoundPhase.active

    @property
    def is_complete(self) -> bool:
        return self._state.phase == RoundPhase.complete

    @property
    def summary(self) -> RoundSummaryModel | None:
        """Summary of the finished round, None until end_round."""
        return self._summary

    def reset_round(self) -> RoundState:
        """Start a fresh round, whatever the current phase is."""
        self._state = RoundState(round_id=uuid7(), phase=RoundPhase.active)
        self._summary = None
        logging.info(f"Round started: {self._state.round_id}")
        return self.state

    def register_throw(self, score_result: ScoreResult) -> ThrowRecord | None:
        """Record one throw. Ignored unless the round is active.

        Args:
            score_result (ScoreResult): Classified hit of the throw

        Returns:
            ThrowRecord | None: History record appended, None when ignored
        """
        if not self.is_active:
            logging.debug(f"Throw ignored, round phase is {self._state.phase.value}")
            return None

        record = ThrowRecord(
            label=score_result.label,
            points=score_result.points,
            ring=score_result.ring,
            mult=score_result.mult,
            wedge=score_result.wedge,
        )
        self._state.darts_thrown += 1
        self._state.total_score += record.points
        self._state.throw_history.append(record)

        if self._state.darts_thrown >= self.max_darts:
            self.end_round()
        return record

    def end_round(self) -> RoundSummaryModel:
        """Finish the round and return its summary. Repeated calls return the same summary."""
        if self._summary is not None and self.is_complete:
            return self._summary

        self._state.phase = RoundPhase.complete
        self._summary = RoundSummaryModel(
            round_id=self._state.round_id,
            total_score=self._state.total_score,
            darts_thrown=self._state.darts_thrown,
            throws=[
                ThrowSummaryModel(label=t.label, points=t.points)
                for t in self._state.throw_history
            ],
        )
        logging.info(
            f"Round complete: {self._state.round_id} total_score={self._state.total_score}"
        )
        return self._summary
