"""
TeachHub API entry point.

Builds the FastAPI application around an injected session factory.

Run with: uvicorn app.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.database import (
    create_all_tables,
    create_db_engine,
    create_session_factory,
    init_db
)
from app.core.errors import DomainError, UnauthenticatedError
from app.routers import api_router


logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers
    )


def create_app(session_factory: Optional[sessionmaker] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        session_factory: Session factory for request sessions. When omitted,
            one is built from settings.DATABASE_URL and the schema is created
            and seeded on startup.

    Returns:
        FastAPI: The configured application
    """
    bootstrap = session_factory is None
    if bootstrap:
        configure_logging()
        session_factory = create_session_factory(create_db_engine())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if bootstrap:
            create_all_tables(session_factory.kw["bind"])
            db = session_factory()
            try:
                init_db(db)
            finally:
                db.close()
        logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")
        yield
        logger.info(f"{settings.PROJECT_NAME} shutting down")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan
    )
    app.state.session_factory = session_factory

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    @app.get(settings.API_PREFIX)
    async def root() -> dict:
        return {"message": "Welcome to TeachHub API", "docs": app.docs_url}

    return app


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run("app.main:create_app", factory=True, host="0.0.0.0", port=8000)
