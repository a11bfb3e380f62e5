"""Root pytest configuration.

Every test gets its own in-memory SQLite database. The application is
built around the same session factory, so rows created through ``db``
are visible to requests made with ``client``.
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from app.core.database import create_all_tables, create_db_engine, create_session_factory
from app.core.security import create_access_token, get_password_hash
from app.main import create_app
from app.models.course import Course, Lesson, ContentStatus
from app.models.user import User, UserRole


@pytest.fixture
def db_engine():
    engine = create_db_engine("sqlite://", echo=False)
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def db(session_factory):
    """Session for arranging and inspecting test data."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Test client for an app wired to the test database."""
    app = create_app(session_factory)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    """Create users directly in the database.

    Passwords are only hashed when given, since bcrypt is slow.
    """
    counter = itertools.count(1)

    def _make_user(role=UserRole.STUDENT, is_approved=True, email=None, password=None):
        n = next(counter)
        user = User(
            first_name=f"{role.value.title()}{n}",
            last_name="Tester",
            email=email or f"{role.value}{n}@example.com",
            hashed_password=get_password_hash(password) if password else "unusable",
            role=role.value,
            is_approved=is_approved,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_course(db):
    def _make_course(owner, title="Course", status=ContentStatus.DRAFT):
        course = Course(
            title=title,
            description=f"{title} description",
            created_by=owner.id,
            status=status.value,
        )
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make_course


@pytest.fixture
def make_lesson(db):
    def _make_lesson(course, title="Lesson", lesson_type="text"):
        lesson = Lesson(
            course_id=course.id,
            title=title,
            type=lesson_type,
            content={"body": f"{title} body"},
        )
        db.add(lesson)
        db.commit()
        db.refresh(lesson)
        return lesson

    return _make_lesson


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user without going through login."""

    def _auth_headers(user):
        token = create_access_token(
            subject=str(user.id), additional_claims={"role": user.role}
        )
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
