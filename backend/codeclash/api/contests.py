"""
Contest API routes
Contest creation (teachers only), listing, and contest pages for
teachers and students.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select

from codeclash.core.database import get_session, storage_errors
from codeclash.core.exceptions import AuthorizationError, NotFoundError
from codeclash.core.validation import require_fields
from codeclash.models.contest import (
    Contest,
    ContestCreate,
    ContestDetailResponse,
    ContestResponse,
    StudentContestResponse,
)
from codeclash.models.question import Question, QuestionResponse, QuestionSummary
from codeclash.models.user import Profile, ProfileRole

logger = logging.getLogger(__name__)

router = APIRouter()


def _as_utc(value: datetime) -> datetime:
    """Naive input is taken as UTC; aware input is converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


async def _get_contest(session: AsyncSession, contest_id: UUID) -> Contest:
    async with storage_errors(session, "Failed to fetch contest"):
        contest = await session.get(Contest, contest_id)
    if not contest:
        raise NotFoundError("Contest not found")
    return contest


@router.get("/contests", response_model=list[ContestResponse])
async def list_contests(
    teacher_id: Optional[UUID] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """List contests by start time, optionally only those one teacher created"""
    stmt = select(Contest).order_by(Contest.start_time)
    if teacher_id is not None:
        stmt = stmt.where(Contest.created_by == teacher_id)

    async with storage_errors(session, "Failed to fetch contests"):
        result = await session.execute(stmt)
        return result.scalars().all()


@router.post("/contests", response_model=ContestResponse, status_code=status.HTTP_201_CREATED)
async def create_contest(
    contest_data: ContestCreate,
    session: AsyncSession = Depends(get_session),
):
    """
    Create a new contest

    - teacher_id must belong to a teacher profile
    """
    require_fields(contest_data, "title", "description", "teacher_id", "start_time", "end_time")

    async with storage_errors(session, "Failed to create contest"):
        teacher = await session.get(Profile, contest_data.teacher_id)
        if not teacher or teacher.role != ProfileRole.TEACHER:
            raise AuthorizationError("Not authorized: not a teacher")

        contest = Contest(
            title=contest_data.title,
            description=contest_data.description,
            start_time=_as_utc(contest_data.start_time),
            end_time=_as_utc(contest_data.end_time),
            created_by=contest_data.teacher_id,
        )
        session.add(contest)
        await session.commit()
        await session.refresh(contest)

    logger.info(f"Contest {contest.id} created by teacher {contest.created_by}")
    return contest


@router.get("/contests/{contest_id}", response_model=ContestDetailResponse)
async def get_contest(
    contest_id: UUID,
    session: AsyncSession = Depends(get_session),
):
    """Contest with all of its questions, for the teacher's contest page"""
    contest = await _get_contest(session, contest_id)

    async with storage_errors(session, "Failed to fetch questions"):
        result = await session.execute(
            select(Question).where(Question.contest_id == contest_id)
        )
        questions = result.scalars().all()

    return ContestDetailResponse(
        contest=ContestResponse.model_validate(contest),
        questions=[QuestionResponse.model_validate(q) for q in questions],
    )


@router.get("/student/contest/{contest_id}", response_model=StudentContestResponse)
async def get_student_contest(
    contest_id: UUID,
    session: AsyncSession = Depends(get_session),
):
    """Contest with its question list (id, title, description only)"""
    contest = await _get_contest(session, contest_id)

    async with storage_errors(session, "Failed to fetch questions"):
        result = await session.execute(
            select(Question.id, Question.title, Question.description)
            .where(Question.contest_id == contest_id)
        )
        rows = result.all()

    return StudentContestResponse(
        contest=ContestResponse.model_validate(contest),
        questions=[
            QuestionSummary(id=qid, title=title, description=description)
            for qid, title, description in rows
        ],
    )
