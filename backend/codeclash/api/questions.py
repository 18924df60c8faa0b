"""
Question and testcase API routes
"""

from uuid import UUID
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import delete
from sqlmodel.ext.asyncio.session import AsyncSession

from codeclash.core.database import get_session, storage_errors
from codeclash.core.exceptions import NotFoundError
from codeclash.core.validation import require_fields
from codeclash.models.question import (
    Question,
    QuestionCreate,
    QuestionResponse,
    StudentQuestionResponse,
)
from codeclash.models.testcase import Testcase, TestcaseCreate, TestcaseResponse
from codeclash.models.user import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# QUESTIONS
# ============================================================================

@router.get("/student/question/{question_id}", response_model=StudentQuestionResponse)
async def get_student_question(
    question_id: UUID,
    session: AsyncSession = Depends(get_session),
):
    """Public fields of one question; hidden test data is never included"""
    async with storage_errors(session, "Failed to fetch question"):
        question = await session.get(Question, question_id)

    if not question:
        raise NotFoundError("Question not found")

    return StudentQuestionResponse.from_question(question)


@router.post("/questions", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    question_data: QuestionCreate,
    session: AsyncSession = Depends(get_session),
):
    """Add a question to a contest"""
    require_fields(question_data, "contest_id", "title", "description", "sample_input", "sample_output")

    question = Question(**question_data.model_dump())

    async with storage_errors(session, "Failed to create question"):
        session.add(question)
        await session.commit()
        await session.refresh(question)

    logger.info(f"Question {question.id} added to contest {question.contest_id}")
    return question


@router.delete("/questions/{question_id}", response_model=MessageResponse)
async def delete_question(
    question_id: UUID,
    session: AsyncSession = Depends(get_session),
):
    """Delete a question by id. Deleting an unknown id is not an error."""
    async with storage_errors(session, "Failed to delete question"):
        await session.execute(delete(Question).where(Question.id == question_id))
        await session.commit()

    return MessageResponse(message="Question deleted successfully")


# ============================================================================
# TESTCASES
# ============================================================================

@router.post("/testcases", response_model=TestcaseResponse, status_code=status.HTTP_201_CREATED)
async def add_testcase(
    testcase_data: TestcaseCreate,
    session: AsyncSession = Depends(get_session),
):
    require_fields(testcase_data, "question_id", "input", "output")

    testcase = Testcase(
        question_id=testcase_data.question_id,
        input=testcase_data.input,
        output=testcase_data.output,
        is_hidden=testcase_data.is_hidden or False,
    )

    async with storage_errors(session, "Failed to add testcase"):
        session.add(testcase)
        await session.commit()
        await session.refresh(testcase)

    return testcase
