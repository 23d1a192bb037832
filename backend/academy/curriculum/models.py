"""SQLAlchemy models for curriculum modules, lessons and prerequisite edges."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    PrimaryKeyConstraint,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academy.database.base import Base, JSONType


__all__ = ["CurriculumLesson", "CurriculumModule", "LessonPrerequisite"]


class CurriculumModule(Base):
    """A published group of lessons within a track."""

    __tablename__ = "curriculum_modules"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    track: Mapped[str] = mapped_column(String(40), nullable=False, default="WEB", index=True)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    coming_soon: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    lessons: Mapped[list[CurriculumLesson]] = relationship(
        "CurriculumLesson",
        back_populates="module",
        cascade="all, delete-orphan",
    )


class CurriculumLesson(Base):
    """A lesson inside a module. Tags feed goal matching for recommendations."""

    __tablename__ = "curriculum_lessons"
    __table_args__ = (
        Index("idx_curriculum_lessons_module_order", "module_id", "order_index"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    module_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("curriculum_modules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    estimated_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    tags: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    module: Mapped[CurriculumModule] = relationship("CurriculumModule", back_populates="lessons")
    prerequisites: Mapped[list[LessonPrerequisite]] = relationship(
        "LessonPrerequisite",
        back_populates="lesson",
        cascade="all, delete-orphan",
        foreign_keys="LessonPrerequisite.lesson_id",
    )


class LessonPrerequisite(Base):
    """Directed edge: `lesson_id` requires `prerequisite_lesson_id` to be completed first."""

    __tablename__ = "lesson_prerequisites"
    __table_args__ = (
        PrimaryKeyConstraint("lesson_id", "prerequisite_lesson_id"),
        CheckConstraint("lesson_id <> prerequisite_lesson_id", name="ck_lesson_prereq_no_self"),
    )

    lesson_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("curriculum_lessons.id", ondelete="CASCADE"),
        nullable=False,
    )
    prerequisite_lesson_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("curriculum_lessons.id", ondelete="CASCADE"),
        nullable=False,
    )

    lesson: Mapped[CurriculumLesson] = relationship(
        "CurriculumLesson",
        back_populates="prerequisites",
        foreign_keys=[lesson_id],
    )
