"""
Submission and leaderboard API routes
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from codeclash.core.dependencies import get_leaderboard_aggregator, get_submission_service
from codeclash.models.submission import LeaderboardEntry, SubmissionCreate, SubmissionResponse
from codeclash.services.leaderboard import LeaderboardAggregator
from codeclash.services.submission_service import SubmissionService

router = APIRouter()


@router.post("/submissions", response_model=SubmissionResponse)
async def submit_code(
    submission: SubmissionCreate,
    service: SubmissionService = Depends(get_submission_service),
):
    """
    Judge a code submission and record the result

    - Runs the code once on Judge0 with the given stdin / expected output
    - "Accepted" scores 100, every other verdict scores 0
    """
    return await service.submit(submission)


@router.get("/leaderboard/{contest_id}", response_model=list[LeaderboardEntry])
async def get_leaderboard(
    contest_id: UUID,
    aggregator: LeaderboardAggregator = Depends(get_leaderboard_aggregator),
):
    """Total score per student in a contest, highest first"""
    return await aggregator.get_leaderboard(contest_id)
