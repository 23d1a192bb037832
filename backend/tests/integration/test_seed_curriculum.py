"""Curriculum loader: bundled data file, idempotent re-runs, prerequisite checks."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.curriculum.models import CurriculumLesson, CurriculumModule, LessonPrerequisite
from academy.exercises.models import Exercise
from academy.quizzes.models import QuizQuestion
from academy.scripts.seed_curriculum import (
    CurriculumSeed,
    LessonSeed,
    ModuleSeed,
    QuizQuestionSeed,
    load_seed_file,
    seed_curriculum,
)


pytestmark = pytest.mark.integration


async def _count(session: AsyncSession, model) -> int:
    return await session.scalar(select(func.count()).select_from(model))


async def _lesson_id(session: AsyncSession, slug: str):
    return await session.scalar(select(CurriculumLesson.id).where(CurriculumLesson.slug == slug))


def _small_seed(title: str = "Intro", quiz_size: int = 2) -> CurriculumSeed:
    return CurriculumSeed(
        track="WEB",
        modules=[
            ModuleSeed(
                slug="basics",
                title="Basics",
                published=True,
                lessons=[
                    LessonSeed(
                        slug="intro",
                        title=title,
                        tags=["html"],
                        quiz=[
                            QuizQuestionSeed(question=f"Q{index}", correct_answer=str(index))
                            for index in range(quiz_size)
                        ],
                    ),
                    LessonSeed(slug="next", title="Next", order_index=1, requires=["intro"]),
                ],
            )
        ],
    )


@pytest.mark.asyncio
async def test_bundled_curriculum_feeds_recommendations(client_factory, db_session: AsyncSession) -> None:
    summary = await seed_curriculum(db_session, load_seed_file())

    assert (summary.modules, summary.lessons, summary.prerequisites) == (4, 8, 3)
    assert summary.quiz_questions == 14
    assert summary.exercises == 2

    client = await client_factory()
    recommendation = (await client.post("/api/v1/recommendations")).json()["recommendation"]

    # First published lesson, in curriculum order, whose prerequisite is not completed
    assert recommendation["lesson_id"] == str(await _lesson_id(db_session, "algorithms-in-everyday-life"))
    assert "missing prerequisite" in recommendation["reason"]


@pytest.mark.asyncio
async def test_reseeding_bundled_curriculum_is_idempotent(db_session: AsyncSession) -> None:
    seed = load_seed_file()
    await seed_curriculum(db_session, seed)
    question_ids = set((await db_session.execute(select(QuizQuestion.id))).scalars())

    await seed_curriculum(db_session, seed)

    assert await _count(db_session, CurriculumModule) == 4
    assert await _count(db_session, CurriculumLesson) == 8
    assert await _count(db_session, LessonPrerequisite) == 3
    assert await _count(db_session, Exercise) == 2
    assert set((await db_session.execute(select(QuizQuestion.id))).scalars()) == question_ids


@pytest.mark.asyncio
async def test_reseeding_updates_rows_in_place(db_session: AsyncSession) -> None:
    await seed_curriculum(db_session, _small_seed(quiz_size=3))
    intro_id = await _lesson_id(db_session, "intro")

    await seed_curriculum(db_session, _small_seed(title="Introduction", quiz_size=1))

    assert await _lesson_id(db_session, "intro") == intro_id
    title = await db_session.scalar(select(CurriculumLesson.title).where(CurriculumLesson.id == intro_id))
    assert title == "Introduction"
    questions = (await db_session.execute(select(QuizQuestion.question))).scalars().all()
    assert questions == ["Q0"]
    edges = (await db_session.execute(select(LessonPrerequisite.prerequisite_lesson_id))).scalars().all()
    assert edges == [intro_id]


@pytest.mark.asyncio
@pytest.mark.parametrize("requires", [["missing-lesson"], ["next"]])
async def test_invalid_prerequisite_is_rejected(db_session: AsyncSession, requires: list[str]) -> None:
    seed = _small_seed()
    seed.modules[0].lessons[1].requires = requires

    with pytest.raises(ValueError, match="next"):
        await seed_curriculum(db_session, seed)
    await db_session.rollback()

    assert await _count(db_session, CurriculumLesson) == 0
