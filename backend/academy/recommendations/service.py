"""Recommendation orchestrator: gathers signals, runs the engine, stores a snapshot."""

import logging
from dataclasses import asdict
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.config.settings import Settings, get_settings
from academy.curriculum.service import CurriculumService
from academy.exercises.models import Exercise, ExerciseAttempt
from academy.profiles.models import LearnerProfile
from academy.progress.models import LessonProgress
from academy.quizzes.models import QuizAttempt

from .engine import RecommendationInput, ScoringWeights, choose_recommendation
from .models import RecommendationSnapshot
from .signals import (
    ExerciseOutcome,
    ProgressRecord,
    QuizOutcome,
    build_lesson_signals,
    failed_attempt_counts,
    latest_quiz_ratios,
    normalize_goals,
)


logger = logging.getLogger(__name__)


def weights_from_settings(settings: Settings) -> ScoringWeights:
    """Build engine weights from the RECOMMENDATION_* settings."""
    return ScoringWeights(
        quiz_weight=settings.RECOMMENDATION_QUIZ_WEIGHT,
        exercise_weight=settings.RECOMMENDATION_EXERCISE_WEIGHT,
        completion_weight=settings.RECOMMENDATION_COMPLETION_WEIGHT,
        failed_attempt_decay=settings.RECOMMENDATION_FAILED_ATTEMPT_DECAY,
        struggle_penalty=settings.RECOMMENDATION_STRUGGLE_PENALTY,
        struggle_threshold=settings.RECOMMENDATION_STRUGGLE_THRESHOLD,
        failed_attempt_threshold=settings.RECOMMENDATION_FAILED_ATTEMPT_THRESHOLD,
        short_week_hours=settings.RECOMMENDATION_SHORT_WEEK_HOURS,
    )


class RecommendationService:
    """Compute and persist next-lesson recommendations for a learner."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._settings = get_settings()
        self._weights = weights_from_settings(self._settings)
        self._curriculum = CurriculumService(session)

    async def calculate_and_store(self, user_id: UUID) -> RecommendationSnapshot:
        """Recompute the recommendation from current state and store a new snapshot."""
        profile = await self.session.get(LearnerProfile, user_id)
        lessons = await self._curriculum.list_published_lessons(self._settings.RECOMMENDATION_TRACK)
        lesson_ids = [lesson.id for lesson in lessons]

        prerequisites = await self._curriculum.get_prerequisite_map(lesson_ids)
        progress = await self._load_progress(user_id)
        quiz_ratios = latest_quiz_ratios(await self._load_quiz_outcomes(user_id))
        failed_attempts = failed_attempt_counts(await self._load_exercise_outcomes(user_id))

        goals = normalize_goals(profile.goals if profile else None)
        weekly_hours = (
            profile.weekly_time_commitment_h if profile else self._settings.DEFAULT_WEEKLY_TIME_COMMITMENT_H
        )

        signals = build_lesson_signals(
            lessons,
            prerequisites=prerequisites,
            progress=progress,
            quiz_ratios=quiz_ratios,
            failed_attempts=failed_attempts,
            goals=goals,
        )
        result = choose_recommendation(
            RecommendationInput(lessons=signals, weekly_time_commitment_h=weekly_hours),
            self._weights,
        )

        snapshot = RecommendationSnapshot(
            user_id=user_id,
            lesson_id=result.lesson_id,
            module_id=result.module_id,
            reason=result.reason,
            personalized_path=[
                {**asdict(step), "lesson_id": str(step.lesson_id)} for step in result.personalized_path
            ],
        )
        self.session.add(snapshot)
        await self.session.commit()
        await self.session.refresh(snapshot)

        logger.info(
            f"Stored recommendation {snapshot.id} for user {user_id}: "
            f"lesson={result.lesson_id} from {len(signals)} candidate lessons"
        )
        return snapshot

    async def get_latest(self, user_id: UUID) -> RecommendationSnapshot | None:
        """Return the newest snapshot for the learner, if any."""
        result = await self.session.execute(
            select(RecommendationSnapshot)
            .where(RecommendationSnapshot.user_id == user_id)
            .order_by(RecommendationSnapshot.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def _load_progress(self, user_id: UUID) -> dict[UUID, ProgressRecord]:
        result = await self.session.execute(
            select(LessonProgress.lesson_id, LessonProgress.status, LessonProgress.percent).where(
                LessonProgress.user_id == user_id
            )
        )
        return {row.lesson_id: ProgressRecord(status=row.status, percent=row.percent) for row in result}

    async def _load_quiz_outcomes(self, user_id: UUID) -> list[QuizOutcome]:
        result = await self.session.execute(
            select(QuizAttempt.lesson_id, QuizAttempt.score, QuizAttempt.max_score)
            .where(QuizAttempt.user_id == user_id)
            .order_by(QuizAttempt.created_at.desc())
        )
        return [QuizOutcome(lesson_id=row.lesson_id, score=row.score, max_score=row.max_score) for row in result]

    async def _load_exercise_outcomes(self, user_id: UUID) -> list[ExerciseOutcome]:
        result = await self.session.execute(
            select(Exercise.lesson_id, ExerciseAttempt.result)
            .join(Exercise, ExerciseAttempt.exercise_id == Exercise.id)
            .where(ExerciseAttempt.user_id == user_id)
            .order_by(ExerciseAttempt.created_at.desc())
        )
        return [ExerciseOutcome(lesson_id=row.lesson_id, result=row.result) for row in result]
