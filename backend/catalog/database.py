"""Database configuration and session management"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from contextlib import contextmanager
from typing import Generator, Iterator
import logging

from catalog.config import settings

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.database_url.startswith("sqlite") else {},
    echo=settings.database_echo
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# Backends whose plain LIKE compares case-sensitively
CASE_SENSITIVE_DIALECTS = {"postgresql"}


def get_db() -> Generator:
    """
    Dependency function to get database session.

    Yields:
        Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run a block of writes as one unit of work.

    Commits when the block finishes, rolls back and re-raises on any error.

    Args:
        db: Database session
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def is_case_sensitive_backend(db: Session) -> bool:
    """Whether LIKE on the session's backend distinguishes letter case"""
    return db.get_bind().dialect.name in CASE_SENSITIVE_DIALECTS


def init_db():
    """Initialize database tables."""
    # Register the mappers on Base.metadata
    import catalog.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ready on {engine.url.render_as_string(hide_password=True)}")
