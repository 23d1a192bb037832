"""Load the curriculum from a JSON file.

Modules and lessons are matched by slug, quiz questions by their position in
the lesson and exercises by title, so running the loader again updates rows in
place instead of duplicating them. Prerequisite edges of every lesson in the
file are replaced with the ones listed there.

Usage:
    python -m academy.scripts.seed_curriculum [path/to/curriculum.json]
"""

import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

from pydantic import BaseModel, Field
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.config.logging import setup_logging
from academy.curriculum.models import CurriculumLesson, CurriculumModule, LessonPrerequisite
from academy.database.engine import engine
from academy.database.init import init_database
from academy.database.session import async_session_maker
from academy.exercises.models import Exercise
from academy.quizzes.models import QuizQuestion


logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "curriculum.json"


class QuizQuestionSeed(BaseModel):
    question: str
    options: list[str] = Field(default_factory=list)
    correct_answer: str
    explanation: str = ""


class ExerciseSeed(BaseModel):
    title: str
    prompt: str = ""


class LessonSeed(BaseModel):
    slug: str
    title: str
    summary: str = ""
    order_index: int = 0
    difficulty: int = 1
    estimated_minutes: int = 15
    tags: list[str] = Field(default_factory=list)
    published: bool = True
    requires: list[str] = Field(default_factory=list, description="Slugs of prerequisite lessons")
    quiz: list[QuizQuestionSeed] = Field(default_factory=list)
    exercises: list[ExerciseSeed] = Field(default_factory=list)


class ModuleSeed(BaseModel):
    slug: str
    title: str
    description: str = ""
    order_index: int = 0
    published: bool = False
    coming_soon: bool = False
    lessons: list[LessonSeed] = Field(default_factory=list)


class CurriculumSeed(BaseModel):
    track: str = "WEB"
    modules: list[ModuleSeed] = Field(default_factory=list)


@dataclass(slots=True)
class SeedSummary:
    modules: int = 0
    lessons: int = 0
    prerequisites: int = 0
    quiz_questions: int = 0
    exercises: int = 0


def load_seed_file(path: Path = DEFAULT_DATA_PATH) -> CurriculumSeed:
    """Parse and validate a curriculum file."""
    return CurriculumSeed.model_validate_json(path.read_text(encoding="utf-8"))


async def seed_curriculum(session: AsyncSession, seed: CurriculumSeed) -> SeedSummary:
    """Upsert everything in `seed` and commit once at the end.

    Raises ValueError when a lesson requires itself or a slug that exists
    neither in the file nor in the database; nothing is committed then.
    """
    summary = SeedSummary()
    lesson_ids: dict[str, UUID] = {}
    lesson_seeds: list[LessonSeed] = []

    for module_seed in seed.modules:
        module = await _upsert_module(session, module_seed, seed.track)
        summary.modules += 1
        for lesson_seed in module_seed.lessons:
            lesson = await _upsert_lesson(session, lesson_seed, module.id)
            lesson_ids[lesson_seed.slug] = lesson.id
            lesson_seeds.append(lesson_seed)
            summary.lessons += 1

    # Edges go in after all lessons exist so a lesson may require one listed later
    for lesson_seed in lesson_seeds:
        lesson_id = lesson_ids[lesson_seed.slug]
        summary.prerequisites += await _replace_prerequisites(session, lesson_seed, lesson_id, lesson_ids)
        summary.quiz_questions += await _sync_quiz(session, lesson_id, lesson_seed.quiz)
        summary.exercises += await _upsert_exercises(session, lesson_id, lesson_seed.exercises)

    await session.commit()

    logger.info(
        f"Seeded track {seed.track}: {summary.modules} modules, {summary.lessons} lessons, "
        f"{summary.prerequisites} prerequisites, {summary.quiz_questions} quiz questions, "
        f"{summary.exercises} exercises"
    )
    return summary


async def _upsert_module(session: AsyncSession, data: ModuleSeed, track: str) -> CurriculumModule:
    module = await session.scalar(select(CurriculumModule).where(CurriculumModule.slug == data.slug))
    if module is None:
        module = CurriculumModule(slug=data.slug)
        session.add(module)

    module.title = data.title
    module.description = data.description
    module.track = track
    module.order_index = data.order_index
    module.published = data.published
    module.coming_soon = data.coming_soon

    await session.flush()
    return module


async def _upsert_lesson(session: AsyncSession, data: LessonSeed, module_id: UUID) -> CurriculumLesson:
    lesson = await session.scalar(select(CurriculumLesson).where(CurriculumLesson.slug == data.slug))
    if lesson is None:
        lesson = CurriculumLesson(slug=data.slug)
        session.add(lesson)

    lesson.module_id = module_id
    lesson.title = data.title
    lesson.summary = data.summary
    lesson.order_index = data.order_index
    lesson.difficulty = data.difficulty
    lesson.estimated_minutes = data.estimated_minutes
    lesson.tags = list(data.tags)
    lesson.published = data.published

    await session.flush()
    return lesson


async def _replace_prerequisites(
    session: AsyncSession,
    data: LessonSeed,
    lesson_id: UUID,
    lesson_ids: dict[str, UUID],
) -> int:
    required_ids: list[UUID] = []
    for slug in dict.fromkeys(data.requires):
        if slug == data.slug:
            msg = f"Lesson {data.slug} cannot require itself"
            raise ValueError(msg)
        required_id = lesson_ids.get(slug) or await session.scalar(
            select(CurriculumLesson.id).where(CurriculumLesson.slug == slug)
        )
        if required_id is None:
            msg = f"Lesson {data.slug} requires unknown lesson {slug}"
            raise ValueError(msg)
        required_ids.append(required_id)

    await session.execute(delete(LessonPrerequisite).where(LessonPrerequisite.lesson_id == lesson_id))
    session.add_all(
        LessonPrerequisite(lesson_id=lesson_id, prerequisite_lesson_id=required_id) for required_id in required_ids
    )
    return len(required_ids)


async def _sync_quiz(session: AsyncSession, lesson_id: UUID, questions: list[QuizQuestionSeed]) -> int:
    result = await session.execute(
        select(QuizQuestion).where(QuizQuestion.lesson_id == lesson_id).order_by(QuizQuestion.order_index.asc())
    )
    existing = list(result.scalars().all())

    for index, data in enumerate(questions):
        if index < len(existing):
            question = existing[index]
        else:
            question = QuizQuestion(lesson_id=lesson_id)
            session.add(question)
        question.question = data.question
        question.options = list(data.options)
        question.correct_answer = data.correct_answer
        question.explanation = data.explanation
        question.order_index = index

    for stale in existing[len(questions) :]:
        await session.delete(stale)

    return len(questions)


async def _upsert_exercises(session: AsyncSession, lesson_id: UUID, exercises: list[ExerciseSeed]) -> int:
    result = await session.execute(select(Exercise).where(Exercise.lesson_id == lesson_id))
    by_title = {exercise.title: exercise for exercise in result.scalars().all()}

    for data in exercises:
        exercise = by_title.get(data.title)
        if exercise is None:
            exercise = Exercise(lesson_id=lesson_id, title=data.title)
            session.add(exercise)
        exercise.prompt = data.prompt

    return len(exercises)


async def main(path: Path) -> None:
    seed = load_seed_file(path)
    await init_database(engine)
    async with async_session_maker() as session:
        await seed_curriculum(session, seed)
    await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    data_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DATA_PATH
    asyncio.run(main(data_path))
