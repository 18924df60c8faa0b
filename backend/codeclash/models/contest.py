"""
Contest model for coding competitions
Maps to: contests table
"""
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4
from pydantic import field_validator
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from codeclash.models.question import QuestionResponse, QuestionSummary


class Contest(SQLModel, table=True):
    """Time-bounded set of questions created by a teacher"""
    __tablename__ = "contests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(index=True, max_length=200)
    description: str
    start_time: datetime = Field(index=True, sa_type=DateTime(timezone=True))
    end_time: datetime = Field(sa_type=DateTime(timezone=True))
    created_by: UUID = Field(foreign_key="profiles.id", index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True)
    )


class ContestResponse(SQLModel):
    """Contest response model"""
    id: UUID
    title: str
    description: str
    start_time: datetime
    end_time: datetime
    created_by: UUID
    created_at: datetime

    @field_validator("start_time", "end_time", "created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands stored timestamps back without tzinfo
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ContestCreate(SQLModel):
    """Contest creation request"""
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    teacher_id: Optional[UUID] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


class ContestDetailResponse(SQLModel):
    """Teacher contest page: contest plus full question rows"""
    contest: ContestResponse
    questions: list[QuestionResponse]


class StudentContestResponse(SQLModel):
    """Student contest page: contest plus question titles"""
    contest: ContestResponse
    questions: list[QuestionSummary]
