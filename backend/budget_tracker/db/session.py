"""
Database session management.
"""
import logging
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from budget_tracker.core.config import settings
from budget_tracker.core.exceptions import PersistenceError
from budget_tracker.db.base import Base

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    """Build create_engine keyword arguments for the configured backend."""
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live on a single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True, "pool_recycle": 3600}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    **_engine_options(settings.DATABASE_URL)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    # Register every model on the metadata before creating tables
    import budget_tracker.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def commit_changes(db: Session, action: str):
    """
    Commit the current unit of work.

    On failure the session is rolled back and the store error is surfaced as a
    PersistenceError; nothing is retried.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {e}", exc_info=True)
        raise PersistenceError(f"Failed to {action}") from e


def flush_changes(db: Session, action: str):
    """Flush pending writes so generated ids are available, rolling back on failure."""
    try:
        db.flush()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {e}", exc_info=True)
        raise PersistenceError(f"Failed to {action}") from e
