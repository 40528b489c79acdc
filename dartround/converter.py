import json
import logging
from typing import Dict

from pydantic import ValidationError

from dartround.models.dc_models import (
    LeaderboardEntryModel,
    LeaderboardSubmitRequest,
    RoundSummaryModel,
)
from dartround.models.schema_models import StoredLeaderboardRecord


class DataConverter:
    """This class is used to convert data between different formats."""

    def encode_record(self, record: StoredLeaderboardRecord) -> str:
        """Encode a leaderboard record for the metadata hash

        Args:
            record (StoredLeaderboardRecord): Best score record of one user

        Returns:
            str: JSON text stored as the hash value
        """
        return json.dumps(
            {
                "score": record.score,
                "submittedAt": record.submitted_at,
                "metadata": record.metadata,
            }
        )

    def decode_record(self, value: str | None) -> StoredLeaderboardRecord | None:
        """Decode a hash value written by encode_record

        Args:
            value (str | None): Raw hash value, None if the field does not exist

        Returns:
            StoredLeaderboardRecord | None: The record, None if missing or corrupt
        """
        if not value:
            return None
        try:
            data = json.loads(value)
            return StoredLeaderboardRecord(
                score=data["score"],
                submitted_at=data["submittedAt"],
                metadata=data.get("metadata"),
            )
        except (ValueError, TypeError, KeyError, ValidationError) as e:
            logging.warning(f"Failed to parse leaderboard metadata: {e}")
            return None

    def convert_record_to_entry(
        self,
        user_id: str,
        rank: int,
        composite_score: float,
        record: StoredLeaderboardRecord | None,
    ) -> LeaderboardEntryModel:
        """Convert a sorted set member and its stored record to the entry sent to the client

        Args:
            user_id (str): Sorted set member
            rank (int): 1-based rank in descending order
            composite_score (float): Raw sorted set score, used when the record is missing
            record (StoredLeaderboardRecord | None): Decoded record of the member

        Returns:
            LeaderboardEntryModel: Entry for the leaderboard response
        """
        if record is None:
            return LeaderboardEntryModel(
                user_id=user_id,
                score=composite_score,
                submitted_at=0,
                rank=rank,
                metadata=None,
            )
        return LeaderboardEntryModel(
            user_id=user_id,
            score=record.score,
            submitted_at=record.submitted_at,
            rank=rank,
            metadata=record.metadata,
        )

    def convert_round_summary_to_submit_request(
        self, user_id: str, summary: RoundSummaryModel, limit: int | None = None
    ) -> LeaderboardSubmitRequest:
        """Build the leaderboard submission for a finished round

        The round id and dart count travel as metadata, which only holds strings.
        """
        metadata: Dict[str, str] = {
            "roundId": str(summary.round_id),
            "darts": str(summary.darts_thrown),
        }
        if summary.throws:
            best = max(summary.throws, key=lambda t: t.points)
            metadata["bestThrow"] = best.label
        return LeaderboardSubmitRequest(
            user_id=user_id,
            score=summary.total_score,
            limit=limit,
            metadata=metadata,
        )
