"""SQLModel database engine and session management.

The engine is owned by whoever starts the process (the FastAPI lifespan or
the CLI) and handed to request handlers through ``app.state``.
"""

import logging

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine for ``database_url``."""
    # SQLite needs check_same_thread=False; PostgreSQL does not
    connect_args = kwargs.pop("connect_args", {})
    if database_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)

    return create_engine(
        database_url,
        echo=False,
        connect_args=connect_args,
        **kwargs,
    )


def create_db_and_tables(engine: Engine):
    """Create all tables. Called on startup."""
    # Import models so their tables are registered on the metadata
    import backend.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")


def get_session(request: Request) -> Session:
    """Dependency that yields a database session bound to the app's engine."""
    with Session(request.app.state.engine) as session:
        yield session
