"""
Progress tracking models for TeachHub.

Defines LessonCompletion, the record that a user finished a lesson.
"""

from datetime import datetime
from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base


class LessonCompletion(Base):
    """
    One row per (user, lesson) pair.

    The unique constraint on ``(user_id, lesson_id)`` is what makes
    completion idempotent: writes go through an INSERT ... ON CONFLICT
    upsert keyed on it.
    """
    __tablename__ = "lesson_completions"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    # No ON DELETE cascade: lessons cannot be deleted through the API.
    lesson_id: Mapped[int] = mapped_column(Integer, ForeignKey("lessons.id"), nullable=False)

    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # Relationships
    user = relationship("User", back_populates="lesson_completions")
    lesson = relationship("Lesson")

    # Table constraints
    __table_args__ = (
        UniqueConstraint("user_id", "lesson_id", name="uq_user_lesson_completion"),
        Index("idx_completion_lesson", "lesson_id"),
    )

    def __repr__(self) -> str:
        return f"<LessonCompletion(user_id={self.user_id}, lesson_id={self.lesson_id})>"
