"""
Testcase model
Maps to: testcases table
"""
from typing import Optional
from uuid import UUID, uuid4
from sqlmodel import Field, SQLModel


class Testcase(SQLModel, table=True):
    __tablename__ = "testcases"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    question_id: UUID = Field(foreign_key="questions.id", index=True, ondelete="CASCADE")
    input: str
    output: str
    is_hidden: bool = Field(default=False)


class TestcaseResponse(SQLModel):
    id: UUID
    question_id: UUID
    input: str
    output: str
    is_hidden: bool


class TestcaseCreate(SQLModel):
    """Testcase creation request"""
    question_id: Optional[UUID] = None
    input: Optional[str] = None
    output: Optional[str] = None
    is_hidden: Optional[bool] = None
