"""Rule-based next-lesson recommendation engine.

The engine is a pure function of a list of per-lesson signals and the
learner's weekly time commitment. Rules are evaluated in a fixed order and the
first one that matches decides the recommendation:

1. Unmet prerequisite: the first not-completed lesson, in input order, that
   lists a prerequisite outside the completed set. The lesson itself is
   recommended, not the prerequisite. This is the only input-order-sensitive
   rule; callers that want a different tie-break must order the input.
2. Struggling lesson: the single lowest mastery score among not-completed
   lessons, if that score is below the struggle threshold or the lesson has
   reached the failed-attempt threshold. Other weak lessons are never
   escalated in the same call. Equal scores go to the lesson earliest in
   curriculum order (`order_index`), not input order.
3. Next by goals and sequence: highest goal overlap first, curriculum order
   breaking ties.
4. Completion: nothing left to recommend.

Prerequisite ids that do not belong to any lesson in the input can never be in
the completed set, so lessons depending on them stay blocked under rule 1.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypeAlias
from uuid import UUID


LessonKey: TypeAlias = UUID | str

PREREQUISITE_REASON = "You have a missing prerequisite. Completing it first will make the next lessons easier."
PREREQUISITE_PATH_REASON = "Prerequisite lesson is required before moving ahead."
STRUGGLE_REASON = (
    "You’ve had a few difficult attempts here. "
    "A remediation mini-lesson and extra practice will strengthen your fundamentals."
)
STRUGGLE_PATH_REASON = "Low mastery score detected from quiz/exercise signals."
NEXT_REASON = "Recommended next based on your goals and current progress."
NEXT_PATH_REASON = "Best next lesson by prerequisite completion and goal alignment."
SHORT_WEEK_NOTE = "Your weekly time commitment suggests shorter lessons first."
FULL_WEEK_NOTE = "You can handle the next full lesson sequence this week."
COMPLETED_REASON = "Great work. You completed all currently published lessons in this track."


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Weights and thresholds used by the mastery score and the rule checks."""

    quiz_weight: float = 0.45
    exercise_weight: float = 0.35
    completion_weight: float = 0.20
    failed_attempt_decay: float = 0.1
    struggle_penalty: float = 0.15
    struggle_threshold: float = 0.7
    failed_attempt_threshold: int = 3
    short_week_hours: int = 2


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True, slots=True)
class LessonSignal:
    """Everything the engine knows about one candidate lesson."""

    lesson_id: LessonKey
    title: str
    module_id: LessonKey
    order_index: int
    prerequisites: frozenset[LessonKey] = frozenset()
    completed: bool = False
    completion_percent: int = 0
    quiz_score_ratio: float = 0.0
    failed_attempts: int = 0
    goals_overlap_score: int = 0


@dataclass(frozen=True, slots=True)
class RecommendationInput:
    lessons: Sequence[LessonSignal]
    weekly_time_commitment_h: int


@dataclass(frozen=True, slots=True)
class PathStep:
    lesson_id: LessonKey
    title: str
    reason: str


@dataclass(frozen=True, slots=True)
class RecommendationResult:
    lesson_id: LessonKey | None
    module_id: LessonKey | None
    reason: str
    personalized_path: tuple[PathStep, ...] = field(default_factory=tuple)


def mastery_score(lesson: LessonSignal, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Blend quiz, exercise and completion signals into an unclamped score.

    Only used to rank lessons for struggle detection; it may drop below 0.
    """
    completion_score = lesson.completion_percent / 100
    if lesson.failed_attempts > 0:
        exercise_score = max(0.0, 1 - lesson.failed_attempts * weights.failed_attempt_decay)
    else:
        exercise_score = 1.0
    penalty = weights.struggle_penalty if lesson.failed_attempts >= weights.failed_attempt_threshold else 0.0

    return (
        weights.quiz_weight * lesson.quiz_score_ratio
        + weights.exercise_weight * exercise_score
        + weights.completion_weight * completion_score
        - penalty
    )


def _result_for(lesson: LessonSignal, reason: str, path_reason: str) -> RecommendationResult:
    return RecommendationResult(
        lesson_id=lesson.lesson_id,
        module_id=lesson.module_id,
        reason=reason,
        personalized_path=(PathStep(lesson_id=lesson.lesson_id, title=lesson.title, reason=path_reason),),
    )


def _first_blocked(pending: Sequence[LessonSignal], completed_ids: set[LessonKey]) -> LessonSignal | None:
    for lesson in pending:
        if any(prereq not in completed_ids for prereq in lesson.prerequisites):
            return lesson
    return None


def _worst_struggling(pending: Sequence[LessonSignal], weights: ScoringWeights) -> LessonSignal | None:
    if not pending:
        return None
    # Equal scores fall back to curriculum order so the pick does not depend on input order
    ranked = sorted(pending, key=lambda lesson: (mastery_score(lesson, weights), lesson.order_index))
    worst = ranked[0]
    score = mastery_score(worst, weights)
    if score < weights.struggle_threshold or worst.failed_attempts >= weights.failed_attempt_threshold:
        return worst
    return None


def _time_note(weekly_time_commitment_h: int, weights: ScoringWeights) -> str:
    if weekly_time_commitment_h <= weights.short_week_hours:
        return SHORT_WEEK_NOTE
    return FULL_WEEK_NOTE


def choose_recommendation(
    recommendation_input: RecommendationInput,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> RecommendationResult:
    """Pick the next lesson for a learner and explain why."""
    lessons = recommendation_input.lessons
    completed_ids = {lesson.lesson_id for lesson in lessons if lesson.completed}
    pending = [lesson for lesson in lessons if not lesson.completed]

    blocked = _first_blocked(pending, completed_ids)
    if blocked is not None:
        return _result_for(blocked, PREREQUISITE_REASON, PREREQUISITE_PATH_REASON)

    struggling = _worst_struggling(pending, weights)
    if struggling is not None:
        return _result_for(struggling, STRUGGLE_REASON, STRUGGLE_PATH_REASON)

    if not pending:
        return RecommendationResult(lesson_id=None, module_id=None, reason=COMPLETED_REASON)

    # Goal overlap dominates; curriculum order breaks ties, then input order (stable sort)
    next_lesson = sorted(pending, key=lambda lesson: (-lesson.goals_overlap_score, lesson.order_index))[0]
    note = _time_note(recommendation_input.weekly_time_commitment_h, weights)
    return _result_for(next_lesson, f"{NEXT_REASON} {note}", NEXT_PATH_REASON)


__all__ = [
    "DEFAULT_WEIGHTS",
    "LessonKey",
    "LessonSignal",
    "PathStep",
    "RecommendationInput",
    "RecommendationResult",
    "ScoringWeights",
    "choose_recommendation",
    "mastery_score",
]
