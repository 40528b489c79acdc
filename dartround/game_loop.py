from pydantic import BaseModel

from dartround.aim_controller import AimController
from dartround.domain.board_rules import create_board_config
from dartround.domain.scoring_rules import format_hit_for_hud, score_from_board_xy
from dartround.models.board_models import AimSettings, BoardConfig
from dartround.models.dc_models import HitSampleModel, RoundSummaryModel
from dartround.models.schema_models import ScoreResult
from dartround.round_manager import MAX_DARTS_PER_ROUND, RoundManager

# Frame deltas above this (hitches, suspended tabs) are cut down to it.
MAX_FRAME_DELTA = 0.1


class ThrowOutcome(BaseModel):
    hit: HitSampleModel
    result: ScoreResult
    hud_text: str
    darts_thrown: int
    total_score: int
    round_summary: RoundSummaryModel | None = None


class DartGame:
    """One board in play: reticle, scoring and round bookkeeping.

    The renderer drives it once per frame with update(delta). A released dart
    is scored immediately, then stays "in flight" until the renderer calls
    finish_flight(), which hands the outcome back for the landing effects.
    """

    def __init__(
        self,
        board: BoardConfig | None = None,
        aim: AimController | None = None,
        max_darts: int = MAX_DARTS_PER_ROUND,
    ):
        self.board: BoardConfig = board or create_board_config()
        if aim is None:
            settings = AimSettings()
            if self.board.board_radius:
                settings = AimSettings(board_radius=self.board.board_radius)
            aim = AimController(settings)
        self.aim: AimController = aim
        self.round: RoundManager = RoundManager(max_darts)
        self._in_flight: ThrowOutcome | None = None

    @property
    def throw_in_flight(self) -> bool:
        return self._in_flight is not None

    def start_round(self):
        self._in_flight = None
        self.round.reset_round()
        self.aim.set_enabled(True)

    def update(self, delta: float):
        delta = min(max(delta, 0.0), MAX_FRAME_DELTA)
        # Leave the reticle alone mid-hold so the release frame keeps it enabled.
        if not self.aim.is_holding:
            self.aim.set_enabled(self.round.is_active and not self.throw_in_flight)
        self.aim.update(delta)

    def begin_aim(self) -> bool:
        if not self.round.is_active or self.throw_in_flight:
            return False
        return self.aim.begin_hold()

    def cancel_aim(self):
        self.aim.cancel_hold()

    def release_aim(self) -> ThrowOutcome | None:
        """Release the held reticle, score the landing point and record the throw.

        Returns:
            ThrowOutcome | None: The scored throw, None when nothing was held
        """
        if not self.aim.is_holding:
            return None

        hit = self.aim.release_and_sample_hit()
        self.aim.set_enabled(False)

        result = score_from_board_xy(hit.hit_x, hit.hit_y, self.board)
        self.round.register_throw(result)
        round_state = self.round.state

        outcome = ThrowOutcome(
            hit=hit,
            result=result,
            hud_text=format_hit_for_hud(result),
            darts_thrown=round_state.darts_thrown,
            total_score=round_state.total_score,
            round_summary=self.round.summary,
        )
        self._in_flight = outcome
        return outcome

    def finish_flight(self) -> ThrowOutcome | None:
        """Mark the dart in flight as landed and return its outcome."""
        outcome = self._in_flight
        self._in_flight = None
        return outcome
