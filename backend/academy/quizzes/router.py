"""Quiz submission endpoint."""

from fastapi import APIRouter

from academy.auth import CurrentAuth
from academy.curriculum.service import CurriculumService
from academy.exceptions import ResourceNotFoundError

from .schemas import QuestionFeedback, QuizSubmitRequest, QuizSubmitResponse
from .service import QuizService


router = APIRouter(prefix="/api/v1/quizzes", tags=["quizzes"])


@router.post("/submit")
async def submit_quiz(request: QuizSubmitRequest, auth: CurrentAuth) -> QuizSubmitResponse:
    """Grade a quiz submission and store the attempt."""
    if await CurriculumService(auth.session).get_lesson(request.lesson_id) is None:
        raise ResourceNotFoundError("Lesson", str(request.lesson_id))

    service = QuizService(auth.session)
    grade = await service.grade(request.lesson_id, request.answers)
    await service.save_attempt(
        user_id=auth.user_id,
        lesson_id=request.lesson_id,
        grade=grade,
        answers=request.answers,
    )

    return QuizSubmitResponse(
        score=grade.score,
        total=grade.max_score,
        passed=grade.passed,
        feedback={
            str(item.question_id): QuestionFeedback(is_correct=item.correct, explanation=item.explanation or "")
            for item in grade.results
        },
    )
