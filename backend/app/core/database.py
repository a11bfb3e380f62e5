"""
Database configuration and session management for TeachHub.

Builds SQLAlchemy engines and session factories on demand. Nothing here
holds a process-wide connection: the application stores its session
factory on ``app.state`` and every request opens its own session.
"""

from typing import Generator, Optional, Type, TypeVar
from fastapi import Request
from sqlalchemy import create_engine, event, select, MetaData
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session
from sqlalchemy.pool import StaticPool
import logging

from .config import settings


logger = logging.getLogger(__name__)


# SQLAlchemy metadata conventions for better constraint naming
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class Base(DeclarativeBase):
    """Base class for models."""
    metadata = metadata


ModelT = TypeVar("ModelT", bound=Base)

# Primary keys are 32-bit INTEGER columns
MAX_ROW_ID = 2_147_483_647


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite URLs (used for local runs and tests) share a single connection
    so that in-memory databases survive across sessions.

    Args:
        database_url: Database URL, defaults to settings.DATABASE_URL
        echo: Log SQL statements, defaults to settings.DEBUG

    Returns:
        Engine: The configured engine
    """
    url = database_url or settings.DATABASE_URL
    echo = settings.DEBUG if echo is None else echo

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )
        # SQLite leaves foreign key enforcement off per connection
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=10,
        max_overflow=20,
        echo=echo,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine
    )


def id_in_range(row_id: int) -> bool:
    return 1 <= row_id <= MAX_ROW_ID


def get_by_id(db: Session, model: Type[ModelT], row_id: int) -> Optional[ModelT]:
    """
    Fetch a row by primary key.

    Ids outside the column's range cannot exist, so they return None
    instead of reaching the driver.
    """
    if not id_in_range(row_id):
        return None
    return db.get(model, row_id)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    The session factory is injected into the application at creation time.

    Yields:
        Session: SQLAlchemy database session
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def create_all_tables(engine: Engine) -> None:
    """Create all database tables."""
    # Import models to ensure they're registered
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("All database tables created successfully")


def init_db(db: Session) -> None:
    """
    Initialize database with required data.

    Creates the first admin account when FIRST_ADMIN_PASSWORD is set and
    no user with FIRST_ADMIN_EMAIL exists yet.

    Args:
        db: Database session
    """
    from app.models.user import User, UserRole
    from app.core.security import get_password_hash

    if not settings.FIRST_ADMIN_PASSWORD:
        logger.info("FIRST_ADMIN_PASSWORD not set, skipping admin seed")
        return

    admin_user = db.scalars(
        select(User).where(User.email == settings.FIRST_ADMIN_EMAIL)
    ).first()

    if not admin_user:
        admin_user = User(
            first_name="Admin",
            last_name="User",
            email=settings.FIRST_ADMIN_EMAIL,
            hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
            role=UserRole.ADMIN.value,
            is_approved=True
        )
        db.add(admin_user)
        db.commit()
        logger.info(f"Admin user created: {settings.FIRST_ADMIN_EMAIL}")
