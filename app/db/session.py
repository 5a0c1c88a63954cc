from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from fastapi import HTTPException
from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import settings
from app.trainer.errors import TrainerError

# Lazy initialization to avoid import-time database connections
_engine = None
_SessionLocal = None


def _get_engine():
    """Get or create the database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        logger.info(f"Initializing database engine: {settings.database_url}")

        connect_args = {}
        if "sqlite" in settings.database_url.lower():
            connect_args = {"check_same_thread": False}
        else:
            connect_args = {
                "connect_timeout": 10,
                "application_name": "longevity-coach",
            }

        _engine = create_engine(
            settings.database_url,
            connect_args=connect_args,
            echo=False,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        logger.info("Database engine initialized")
    return _engine


def get_engine():
    """Get or create the database engine (public API)."""
    return _get_engine()


def _get_session_local():
    """Get or create the session factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
        logger.info("Database session factory initialized")
    return _SessionLocal


def _handle_session_commit(session: Session) -> None:
    """Commit the open transaction, including rows already flushed for their ids."""
    if session.in_transaction():
        logger.debug(f"Committing session: dirty={len(session.dirty)}, new={len(session.new)}, deleted={len(session.deleted)}")
        session.commit()
    else:
        logger.debug("No transaction to commit, skipping commit")


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get database session context manager.

    Handles database errors vs expected errors separately:
    - HTTPException and TrainerError: rolled back and re-raised without logging
    - Other exceptions: logged as database errors, rolled back and re-raised
    """
    session = _get_session_local()()
    try:
        yield session
        _handle_session_commit(session)
    except (HTTPException, TrainerError):
        session.rollback()
        raise
    except Exception as e:
        logger.error(
            f"Database session error, rolling back: {e}. "
            f"Error type: {type(e).__name__}, session state: "
            f"dirty={len(session.dirty)}, new={len(session.new)}, deleted={len(session.deleted)}"
        )
        session.rollback()
        raise
    finally:
        session.close()
