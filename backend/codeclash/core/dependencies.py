"""
FastAPI dependencies for shared per-process resources and services
"""

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from codeclash.core.database import get_session
from codeclash.services.judge_client import Judge0Client
from codeclash.services.leaderboard import LeaderboardAggregator
from codeclash.services.submission_service import SubmissionService


def get_judge_client(request: Request) -> Judge0Client:
    return request.app.state.judge_client


def get_submission_service(
    session: AsyncSession = Depends(get_session),
    judge: Judge0Client = Depends(get_judge_client),
) -> SubmissionService:
    return SubmissionService(session, judge)


def get_leaderboard_aggregator(
    session: AsyncSession = Depends(get_session),
) -> LeaderboardAggregator:
    return LeaderboardAggregator(session)
