"""
Leaderboard Aggregator

Ranks students in a contest by the sum of all their submission scores.
Recomputed from the submissions table on every request.
"""

from typing import Dict, Iterable, List, Tuple
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from codeclash.core.exceptions import StorageError
from codeclash.models.submission import LeaderboardEntry, Submission

logger = logging.getLogger(__name__)


def rank_scores(rows: Iterable[Tuple[UUID, int]]) -> List[LeaderboardEntry]:
    """
    Fold (student_id, score) rows into totals, highest first.

    Every row counts, so resubmissions to the same question add up.
    Equal totals keep the order in which students first appeared.
    """
    totals: Dict[UUID, int] = {}
    for student_id, score in rows:
        totals[student_id] = totals.get(student_id, 0) + score

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        LeaderboardEntry(student_id=student_id, total_score=total)
        for student_id, total in ranked
    ]


class LeaderboardAggregator:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_leaderboard(self, contest_id: UUID) -> List[LeaderboardEntry]:
        try:
            result = await self.db.execute(
                select(Submission.student_id, Submission.score)
                .where(Submission.contest_id == contest_id)
            )
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error(f"Leaderboard query failed for contest {contest_id}: {e}")
            raise StorageError("Failed to fetch submissions") from e

        return rank_scores(rows)
