"""Schemas for quiz submission."""

from uuid import UUID

from pydantic import BaseModel, Field


class QuizSubmitRequest(BaseModel):
    """Answers keyed by question id."""

    lesson_id: UUID = Field(..., description="Lesson ID")
    answers: dict[str, str] = Field(default_factory=dict, description="Answer text keyed by question ID")


class QuestionFeedback(BaseModel):
    is_correct: bool
    explanation: str = ""


class QuizSubmitResponse(BaseModel):
    """Graded submission in the shape the quiz widget consumes."""

    score: int
    total: int
    passed: bool
    feedback: dict[str, QuestionFeedback] = Field(default_factory=dict)
