import argparse
import asyncio
import logging

import numpy as np

from dartround.aim_controller import AimController
from dartround.converter import DataConverter
from dartround.domain.board_rules import create_board_config
from dartround.game_loop import DartGame, ThrowOutcome
from dartround.load_secrets import max_darts_per_round
from dartround.models.board_models import AimSettings
from dartround.models.dc_models import RoundSummaryModel

FRAME_DELTA = 1 / 60


def play_round(game: DartGame, hold_seconds: float, roam_seconds: float) -> RoundSummaryModel:
    """Play a whole round with the same roam and hold durations for every dart

    Args:
        game (DartGame): Board to play on
        hold_seconds (float): How long each hold lasts before release
        roam_seconds (float): How long the reticle roams before each hold

    Returns:
        RoundSummaryModel: Summary of the finished round
    """
    game.start_round()
    while not game.round.is_complete:
        for _ in range(max(1, int(roam_seconds / FRAME_DELTA))):
            game.update(FRAME_DELTA)
        game.begin_aim()
        for _ in range(int(hold_seconds / FRAME_DELTA)):
            game.update(FRAME_DELTA)
        outcome: ThrowOutcome = game.release_aim()
        game.finish_flight()
        print(f"Dart {outcome.darts_thrown}: {outcome.hud_text}  total={outcome.total_score}")
    return game.round.summary


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate one round of darts")
    parser.add_argument("--seed", type=int, help="Random seed for landing points", default=None)
    parser.add_argument("--hold", type=float, help="Hold time per dart in seconds", default=1.0)
    parser.add_argument("--roam", type=float, help="Roam time before each hold in seconds", default=0.5)
    parser.add_argument("--darts", type=int, help="Darts per round", default=max_darts_per_round)
    parser.add_argument("--post-id", type=str, help="Submit the total to this post's leaderboard")
    parser.add_argument("--user-id", type=str, help="User id used for the submission")
    return parser


async def main(args: argparse.Namespace):
    board = create_board_config()
    aim = AimController(AimSettings(board_radius=board.board_radius), np.random.default_rng(args.seed))
    game = DartGame(board, aim, max_darts=args.darts)
    summary = play_round(game, args.hold, args.roam)
    print(f"Round {summary.round_id}: {summary.total_score} points")

    if args.post_id and args.user_id:
        from dartround.db import redis
        from dartround.services.leaderboard_service import submit_score
        from dartround.services.leaderboard_store import LeaderboardStore

        request = DataConverter().convert_round_summary_to_submit_request(args.user_id, summary)
        try:
            response = await submit_score(LeaderboardStore(redis), args.post_id, request)
        finally:
            await redis.aclose()
        print(f"Rank on {args.post_id}: {response.caller_rank}")
        for entry in response.top:
            print(f"  {entry.rank}. {entry.user_id} {entry.score:g}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    parser = get_parser()
    asyncio.run(main(parser.parse_args()))
