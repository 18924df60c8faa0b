"""
Question model: one coding problem inside a contest
Maps to: questions table
"""
from typing import Optional
from uuid import UUID, uuid4
from sqlmodel import Field, SQLModel


class Question(SQLModel, table=True):
    __tablename__ = "questions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    contest_id: UUID = Field(foreign_key="contests.id", index=True)
    title: str = Field(max_length=200)
    description: str
    difficulty: Optional[str] = Field(default=None, max_length=20)
    points: Optional[int] = Field(default=None, ge=0)
    sample_input: str
    sample_output: str
    hidden_input: Optional[str] = None
    hidden_output: Optional[str] = None
    starter_code: Optional[str] = None


class QuestionResponse(SQLModel):
    """Full question row, teacher facing"""
    id: UUID
    contest_id: UUID
    title: str
    description: str
    difficulty: Optional[str] = None
    points: Optional[int] = None
    sample_input: str
    sample_output: str
    hidden_input: Optional[str] = None
    hidden_output: Optional[str] = None
    starter_code: Optional[str] = None


class QuestionSummary(SQLModel):
    """Question as listed on the student contest page"""
    id: UUID
    title: str
    description: str


class StudentQuestionResponse(SQLModel):
    """Student-facing question; field names follow the frontend's camelCase"""
    id: UUID
    title: str
    description: str
    difficulty: Optional[str] = None
    points: Optional[int] = None
    sampleInput: str
    sampleOutput: str
    starterCode: Optional[str] = None

    @classmethod
    def from_question(cls, question: Question) -> "StudentQuestionResponse":
        return cls(
            id=question.id,
            title=question.title,
            description=question.description,
            difficulty=question.difficulty,
            points=question.points,
            sampleInput=question.sample_input,
            sampleOutput=question.sample_output,
            starterCode=question.starter_code,
        )


class QuestionCreate(SQLModel):
    """Question creation request"""
    contest_id: Optional[UUID] = None
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    sample_input: Optional[str] = None
    sample_output: Optional[str] = None
    hidden_input: Optional[str] = None
    hidden_output: Optional[str] = None
    difficulty: Optional[str] = Field(default=None, max_length=20)
    points: Optional[int] = Field(default=None, ge=0)
    starter_code: Optional[str] = None
