"""SQLAlchemy engine, session factory and declarative base."""

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./eventreg.db"

_ENGINE: Optional[Engine] = None
_SESSION_LOCAL: Optional[sessionmaker] = None

Base = declarative_base()


def get_engine() -> Engine:
    """Lazily create and return the SQLAlchemy engine (DATABASE_URL)."""
    global _ENGINE
    if _ENGINE is None:
        url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
        _ENGINE = create_engine(
            url,
            pool_pre_ping=True,
            echo=os.getenv("DATABASE_ECHO", "false").lower() == "true",
        )
        logger.info(f"Database engine created for {_ENGINE.url.render_as_string()}")
    return _ENGINE


def get_session_factory() -> sessionmaker:
    global _SESSION_LOCAL
    if _SESSION_LOCAL is None:
        _SESSION_LOCAL = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SESSION_LOCAL


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Session for one unit of work: commit on success, rollback on error.

    Examples:
        >>> with session_scope() as session:
        ...     session.execute(select(Order)).scalars().first()
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def check_database_connection() -> bool:
    """Check database connection health."""
    try:
        with get_engine().connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1
    except SQLAlchemyError as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def reset_engine() -> None:
    """Dispose the engine so the next call re-reads DATABASE_URL."""
    global _ENGINE, _SESSION_LOCAL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _SESSION_LOCAL = None
