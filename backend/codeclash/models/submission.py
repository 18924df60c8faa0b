"""
Submission models: Submission, plus request/response shapes for judging
and the leaderboard
Maps to: submissions table
"""

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Any, Optional
from datetime import datetime, timezone
from uuid import UUID, uuid4
from enum import Enum


# ============================================================================
# ENUMS
# ============================================================================

class Language(str, Enum):
    CPP = "cpp"
    JAVA = "java"
    PYTHON = "python"
    JAVASCRIPT = "javascript"


class SubmissionStatus(str, Enum):
    SOLVED = "solved"
    FAILED = "failed"


# ============================================================================
# SUBMISSION MODEL
# ============================================================================

class Submission(SQLModel, table=True):
    """
    One judged attempt. Rows are append-only; score follows status
    (solved -> 100, failed -> 0).
    """
    __tablename__ = "submissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    student_id: UUID = Field(foreign_key="profiles.id", index=True)
    contest_id: UUID = Field(foreign_key="contests.id", index=True)
    # Kept when the question is deleted; the row still counts toward the leaderboard
    question_id: Optional[UUID] = Field(default=None, foreign_key="questions.id", ondelete="SET NULL")
    code: str
    language: Language
    status: SubmissionStatus
    score: int = Field(default=0, ge=0)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True)
    )


# ============================================================================
# REQUEST/RESPONSE MODELS (Pydantic)
# ============================================================================

class SubmissionCreate(SQLModel):
    """Code submission request. input/expected_output are passed to the judge as-is."""
    student_id: Optional[UUID] = None
    contest_id: Optional[UUID] = None
    question_id: Optional[UUID] = None
    code: Optional[str] = None
    language: Optional[str] = None
    input: Optional[str] = None
    expected_output: Optional[str] = None


class SubmissionResponse(SQLModel):
    judge0_result: dict[str, Any]
    verdict: str


class LeaderboardEntry(SQLModel):
    student_id: UUID
    total_score: int
