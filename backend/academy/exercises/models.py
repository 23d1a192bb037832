"""Code exercises and the attempts learners record against them."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academy.database.base import Base


__all__ = ["Exercise", "ExerciseAttempt", "ExerciseResult"]


class ExerciseResult:
    """Outcome reported by the sandbox harness."""

    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"


class Exercise(Base):
    """A sandboxed coding exercise attached to a lesson."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    lesson_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("curriculum_lessons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False, default="")

    attempts: Mapped[list[ExerciseAttempt]] = relationship(
        "ExerciseAttempt",
        back_populates="exercise",
        cascade="all, delete-orphan",
    )


class ExerciseAttempt(Base):
    """Snapshot of learner code plus the harness verdict."""

    __tablename__ = "exercise_attempts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("exercises.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    html_snapshot: Mapped[str] = mapped_column(Text, nullable=False, default="")
    css_snapshot: Mapped[str] = mapped_column(Text, nullable=False, default="")
    js_snapshot: Mapped[str] = mapped_column(Text, nullable=False, default="")
    result: Mapped[str] = mapped_column(String(10), nullable=False)
    feedback: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        index=True,
    )

    exercise: Mapped[Exercise] = relationship("Exercise", back_populates="attempts")
