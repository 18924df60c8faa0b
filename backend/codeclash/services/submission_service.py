"""
Submission Service

Validates a code submission, runs it on the judge, classifies the verdict
and records the attempt.
"""

from typing import Any, Dict, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from codeclash.core.exceptions import StorageError
from codeclash.core.validation import require_fields
from codeclash.models.submission import (
    Submission,
    SubmissionCreate,
    SubmissionResponse,
    SubmissionStatus,
)
from codeclash.services.judge_client import Judge0Client, resolve_language

logger = logging.getLogger(__name__)

ACCEPTED = "Accepted"
UNKNOWN_VERDICT = "Failed"

SCORES = {
    SubmissionStatus.SOLVED: 100,
    SubmissionStatus.FAILED: 0,
}

REQUIRED_FIELDS = ("student_id", "contest_id", "question_id", "code", "language")


def verdict_of(judge_result: Dict[str, Any]) -> str:
    """Judge status description, or "Failed" when the judge sent none."""
    status = judge_result.get("status")
    description: Optional[str] = None
    if isinstance(status, dict):
        description = status.get("description")
    return description or UNKNOWN_VERDICT


def classify_verdict(verdict: Optional[str]) -> SubmissionStatus:
    # Only an exact "Accepted" counts; compile/runtime errors and timeouts all fail
    if verdict == ACCEPTED:
        return SubmissionStatus.SOLVED
    return SubmissionStatus.FAILED


class SubmissionService:
    """
    Orchestrates one submission:
    1. Validate required fields
    2. Resolve language to a judge language id
    3. Run the code on the judge (no retry)
    4. Map the verdict to solved/failed
    5. Insert one submission row
    """

    def __init__(self, db: AsyncSession, judge: Judge0Client):
        self.db = db
        self.judge = judge

    async def submit(self, request: SubmissionCreate) -> SubmissionResponse:
        require_fields(request, *REQUIRED_FIELDS)
        language, language_id = resolve_language(request.language)

        judge_result = await self.judge.submit(
            source_code=request.code,
            language_id=language_id,
            stdin=request.input or "",
            expected_output=request.expected_output or "",
        )

        verdict = verdict_of(judge_result)
        status = classify_verdict(verdict)

        submission = Submission(
            student_id=request.student_id,
            contest_id=request.contest_id,
            question_id=request.question_id,
            code=request.code,
            language=language,
            status=status,
            score=SCORES[status],
        )

        try:
            self.db.add(submission)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to save submission for student {request.student_id}: {e}")
            # The judge already ran; hand its result back with the error
            raise StorageError(
                "Failed to save submission",
                details={"judge0_result": judge_result, "verdict": verdict},
            ) from e

        logger.info(
            f"Submission {submission.id}: student={request.student_id} "
            f"question={request.question_id} verdict={verdict!r} score={submission.score}"
        )
        return SubmissionResponse(judge0_result=judge_result, verdict=verdict)
