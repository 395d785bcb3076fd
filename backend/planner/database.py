import logging
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine

from .models import Base

logger = logging.getLogger(__name__)

# Global state for current book
_current_engine: Engine | None = None
_current_session_factory: sessionmaker | None = None


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign keys for SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def open_book(db_path: Path) -> None:
    """
    Open a book (SQLite database file).

    Creates the file and tables if it doesn't exist.
    """
    global _current_engine, _current_session_factory

    if _current_engine is not None:
        close_book()

    db_url = f"sqlite:///{db_path}"
    # Requests are served from FastAPI's thread pool
    _current_engine = create_engine(
        db_url, echo=False, connect_args={"check_same_thread": False}
    )
    _current_session_factory = sessionmaker(bind=_current_engine)

    Base.metadata.create_all(_current_engine)
    logger.info("Opened book %s", db_path)


def close_book() -> None:
    """Close the current book."""
    global _current_engine, _current_session_factory

    if _current_engine is not None:
        _current_engine.dispose()
        _current_engine = None
        _current_session_factory = None


def get_session() -> Session:
    """Get a database session for the current book."""
    if _current_session_factory is None:
        raise RuntimeError("No book is currently open")
    return _current_session_factory()


def get_db():
    """FastAPI dependency for database sessions."""
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def is_book_open() -> bool:
    """Check if a book is currently open."""
    return _current_engine is not None


def get_current_book_path() -> Path | None:
    """Get the path of the currently open book."""
    if _current_engine is None:
        return None
    database = _current_engine.url.database
    return Path(database) if database else None
