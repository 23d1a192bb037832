"""Business logic for lesson progress tracking."""

import logging
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.config.settings import get_settings
from academy.curriculum.models import CurriculumLesson
from academy.exceptions import QuizNotPassedError, ResourceNotFoundError
from academy.quizzes.models import QuizAttempt, QuizQuestion

from .models import LessonProgress, LessonStatus


logger = logging.getLogger(__name__)

STREAK_LOOKBACK = 30


def _utc_date(moment: datetime) -> date:
    # SQLite hands back naive datetimes; they were written as UTC
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(UTC).date()


def count_streak(completion_days: set[date], today: date) -> int:
    """Count consecutive days ending at `today` that appear in `completion_days`."""
    streak = 0
    cursor = today
    while cursor in completion_days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


class ProgressService:
    """Service for managing lesson progress."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize progress service."""
        self.session = session

    async def upsert_progress(self, user_id: UUID, lesson_id: UUID, status: str, percent: int) -> LessonProgress:
        """Create or update progress for a lesson.

        Completing a lesson that has quiz questions requires a passed attempt.
        """
        lesson = await self.session.get(CurriculumLesson, lesson_id)
        if lesson is None:
            raise ResourceNotFoundError("Lesson", str(lesson_id))

        if status == LessonStatus.COMPLETED:
            await self._ensure_quiz_passed(user_id, lesson_id)

        now = datetime.now(UTC)
        completed_at = now if status == LessonStatus.COMPLETED else None

        result = await self.session.execute(
            select(LessonProgress).where(LessonProgress.user_id == user_id, LessonProgress.lesson_id == lesson_id)
        )
        progress = result.scalar_one_or_none()
        if progress is None:
            progress = LessonProgress(user_id=user_id, lesson_id=lesson_id)
            self.session.add(progress)

        progress.status = status
        progress.percent = percent
        progress.last_seen_at = now
        progress.completed_at = completed_at

        await self.session.commit()
        await self.session.refresh(progress)

        logger.info(f"Updated progress for user {user_id}, lesson {lesson_id}: {status} {percent}%")
        return progress

    async def get_streak(self, user_id: UUID, today: date | None = None) -> int:
        """Number of consecutive UTC days, ending today, with a completed lesson."""
        result = await self.session.execute(
            select(LessonProgress.completed_at)
            .where(
                LessonProgress.user_id == user_id,
                LessonProgress.status == LessonStatus.COMPLETED,
                LessonProgress.completed_at.is_not(None),
            )
            .order_by(LessonProgress.completed_at.desc())
            .limit(STREAK_LOOKBACK)
        )
        days = {_utc_date(completed_at) for completed_at in result.scalars()}
        return count_streak(days, today or datetime.now(UTC).date())

    async def _ensure_quiz_passed(self, user_id: UUID, lesson_id: UUID) -> None:
        question_count = await self.session.scalar(
            select(func.count()).select_from(QuizQuestion).where(QuizQuestion.lesson_id == lesson_id)
        )
        if not question_count:
            return

        passed_attempt = await self.session.scalar(
            select(QuizAttempt.id)
            .where(
                QuizAttempt.user_id == user_id,
                QuizAttempt.lesson_id == lesson_id,
                QuizAttempt.passed.is_(True),
            )
            .limit(1)
        )
        if passed_attempt is None:
            passing_percent = round(get_settings().QUIZ_PASSING_SCORE_RATIO * 100)
            raise QuizNotPassedError(str(lesson_id), passing_percent)
