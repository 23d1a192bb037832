"""Quiz grading and attempt storage."""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.config.settings import get_settings

from .models import QuizAttempt, QuizQuestion


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class QuestionResult:
    question_id: UUID
    response: str
    correct: bool
    explanation: str


@dataclass(slots=True)
class GradeResult:
    score: int
    max_score: int
    passed: bool
    results: list[QuestionResult] = field(default_factory=list)


def grade_answers(questions: list[QuizQuestion], answers: dict[str, str], passing_ratio: float) -> GradeResult:
    """Compare trimmed answers with trimmed correct answers, question by question.

    A quiz without questions never passes.
    """
    score = 0
    results: list[QuestionResult] = []
    for question in questions:
        response = answers.get(str(question.id), "")
        correct = response.strip() == question.correct_answer.strip()
        if correct:
            score += 1
        results.append(
            QuestionResult(
                question_id=question.id,
                response=response,
                correct=correct,
                explanation=question.explanation,
            )
        )

    max_score = len(questions)
    passed = max_score > 0 and score / max_score >= passing_ratio
    return GradeResult(score=score, max_score=max_score, passed=passed, results=results)


class QuizService:
    """Service for grading quizzes and recording attempts."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._passing_ratio = get_settings().QUIZ_PASSING_SCORE_RATIO

    async def grade(self, lesson_id: UUID, answers: dict[str, str]) -> GradeResult:
        """Grade answers against the lesson's questions."""
        result = await self.session.execute(
            select(QuizQuestion).where(QuizQuestion.lesson_id == lesson_id).order_by(QuizQuestion.order_index.asc())
        )
        questions = list(result.scalars().all())
        return grade_answers(questions, answers, self._passing_ratio)

    async def save_attempt(
        self,
        *,
        user_id: UUID,
        lesson_id: UUID,
        grade: GradeResult,
        answers: dict[str, str],
    ) -> QuizAttempt:
        """Persist a graded attempt."""
        attempt = QuizAttempt(
            user_id=user_id,
            lesson_id=lesson_id,
            score=grade.score,
            max_score=grade.max_score,
            passed=grade.passed,
            answers=answers,
        )
        self.session.add(attempt)
        await self.session.commit()
        await self.session.refresh(attempt)

        logger.info(
            f"Quiz attempt for user {user_id}, lesson {lesson_id}: {grade.score}/{grade.max_score} passed={grade.passed}"
        )
        return attempt
