"""
Course models for TeachHub.

Defines Course and Lesson. A course is owned by the user who created it
and holds any number of lessons; a lesson belongs to exactly one course.
"""

from datetime import datetime
from typing import Optional, Any, Dict
from enum import Enum
from sqlalchemy import (
    Integer, String, DateTime, Text, ForeignKey, Index, CheckConstraint, JSON
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base


class ContentStatus(str, Enum):
    """Publication state of a course. Advisory only."""
    DRAFT = "draft"
    PUBLISHED = "published"


class LessonType(str, Enum):
    """Presentation type of a lesson. Does not affect completion."""
    VIDEO = "video"
    TEXT = "text"
    GAME = "game"


class Course(Base):
    """
    Course model representing a collection of lessons.
    """
    __tablename__ = "courses"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Basic information
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # in minutes

    # Publishing
    status: Mapped[str] = mapped_column(
        String(20),
        default=ContentStatus.DRAFT.value,
        nullable=False
    )

    # Owner
    created_by: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    lessons = relationship("Lesson", back_populates="course", order_by="Lesson.id")
    creator = relationship("User", back_populates="courses")

    # Table constraints
    __table_args__ = (
        CheckConstraint("duration IS NULL OR duration >= 0", name="check_duration_positive"),
        Index("idx_course_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title='{self.title}', created_by={self.created_by})>"

    @property
    def is_published(self) -> bool:
        return self.status == ContentStatus.PUBLISHED.value


class Lesson(Base):
    """
    Lesson model. ``course_id`` is set at creation and never changes.
    """
    __tablename__ = "lessons"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Course relationship
    course_id: Mapped[int] = mapped_column(Integer, ForeignKey("courses.id"), nullable=False, index=True)

    # Basic information
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    type: Mapped[str] = mapped_column(
        String(20),
        default=LessonType.TEXT.value,
        nullable=False
    )

    # Opaque payload (video URLs, game embeds, flashcards...)
    content: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # Relationships
    course = relationship("Course", back_populates="lessons")

    __table_args__ = (
        CheckConstraint("type IN ('video', 'text', 'game')", name="check_lesson_type"),
    )

    def __repr__(self) -> str:
        return f"<Lesson(id={self.id}, title='{self.title}', course_id={self.course_id})>"
