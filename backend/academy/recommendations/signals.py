"""Turn persisted learner state into engine signals.

Everything here is synchronous and free of I/O so the orchestrator can load
rows however it likes and hand them over.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from uuid import UUID

from academy.curriculum.models import CurriculumLesson
from academy.exercises.models import ExerciseResult
from academy.progress.models import LessonStatus

from .engine import LessonSignal


@dataclass(frozen=True, slots=True)
class ProgressRecord:
    status: str
    percent: int


@dataclass(frozen=True, slots=True)
class QuizOutcome:
    lesson_id: UUID
    score: int
    max_score: int


@dataclass(frozen=True, slots=True)
class ExerciseOutcome:
    lesson_id: UUID
    result: str


def normalize_goals(goals: Iterable[str] | None) -> list[str]:
    """Lower-case goals and drop blanks; blank goals would match every tag."""
    if not goals:
        return []
    return [goal.strip().lower() for goal in goals if isinstance(goal, str) and goal.strip()]


def goals_overlap_score(tags: Iterable[str] | None, goals: Sequence[str]) -> int:
    """Count tags that contain a goal or are contained in one, ignoring case.

    `goals` must already be normalized with `normalize_goals`.
    """
    if not tags or not goals:
        return 0
    score = 0
    for tag in tags:
        needle = str(tag).lower()
        if any(needle in goal or goal in needle for goal in goals):
            score += 1
    return score


def latest_quiz_ratios(attempts_newest_first: Iterable[QuizOutcome]) -> dict[UUID, float]:
    """Score ratio of the most recent attempt per lesson."""
    ratios: dict[UUID, float] = {}
    for attempt in attempts_newest_first:
        if attempt.lesson_id in ratios:
            continue
        ratios[attempt.lesson_id] = attempt.score / attempt.max_score if attempt.max_score > 0 else 0.0
    return ratios


def failed_attempt_counts(attempts: Iterable[ExerciseOutcome]) -> dict[UUID, int]:
    """Count non-passing exercise attempts per lesson (FAIL and ERROR both count)."""
    counts: dict[UUID, int] = defaultdict(int)
    for attempt in attempts:
        if attempt.result != ExerciseResult.PASS:
            counts[attempt.lesson_id] += 1
    return dict(counts)


def build_lesson_signals(
    lessons: Sequence[CurriculumLesson],
    *,
    prerequisites: Mapping[UUID, Iterable[UUID]],
    progress: Mapping[UUID, ProgressRecord],
    quiz_ratios: Mapping[UUID, float],
    failed_attempts: Mapping[UUID, int],
    goals: Sequence[str],
) -> list[LessonSignal]:
    """Build one signal per lesson.

    `lessons` must already be in track order (module order, then lesson order);
    the position in that list becomes the global `order_index`.
    """
    signals: list[LessonSignal] = []
    for index, lesson in enumerate(lessons):
        record = progress.get(lesson.id)
        signals.append(
            LessonSignal(
                lesson_id=lesson.id,
                title=lesson.title,
                module_id=lesson.module_id,
                order_index=index,
                prerequisites=frozenset(prerequisites.get(lesson.id, ())),
                completed=record is not None and record.status == LessonStatus.COMPLETED,
                completion_percent=record.percent if record is not None else 0,
                quiz_score_ratio=quiz_ratios.get(lesson.id, 0.0),
                failed_attempts=failed_attempts.get(lesson.id, 0),
                goals_overlap_score=goals_overlap_score(lesson.tags, goals),
            )
        )
    return signals
