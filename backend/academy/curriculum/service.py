"""Read-side queries over the published curriculum."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import CurriculumLesson, CurriculumModule, LessonPrerequisite


logger = logging.getLogger(__name__)


class CurriculumService:
    """Service for looking up lessons, modules and prerequisite edges."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize curriculum service."""
        self.session = session

    async def list_published_lessons(self, track: str) -> list[CurriculumLesson]:
        """Published lessons of published modules in a track, in curriculum order."""
        result = await self.session.execute(
            select(CurriculumLesson)
            .join(CurriculumModule, CurriculumLesson.module_id == CurriculumModule.id)
            .where(
                CurriculumLesson.published.is_(True),
                CurriculumModule.published.is_(True),
                CurriculumModule.track == track,
            )
            .order_by(CurriculumModule.order_index.asc(), CurriculumLesson.order_index.asc())
        )
        return list(result.scalars().all())

    async def get_prerequisite_map(self, lesson_ids: Sequence[UUID]) -> dict[UUID, list[UUID]]:
        """Map each lesson id to the ids it requires."""
        if not lesson_ids:
            return {}

        result = await self.session.execute(
            select(LessonPrerequisite.lesson_id, LessonPrerequisite.prerequisite_lesson_id).where(
                LessonPrerequisite.lesson_id.in_(list(lesson_ids))
            )
        )
        prerequisites: dict[UUID, list[UUID]] = defaultdict(list)
        for lesson_id, prerequisite_id in result.all():
            prerequisites[lesson_id].append(prerequisite_id)
        return dict(prerequisites)

    async def get_lesson(self, lesson_id: UUID) -> CurriculumLesson | None:
        """Fetch a single lesson by id."""
        return await self.session.get(CurriculumLesson, lesson_id)
