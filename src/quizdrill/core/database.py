"""
Database Connection and Session Management

SQLAlchemy engine caching, session management and schema creation
for the local key-value store.
"""

from typing import Dict, Optional, Generator
from contextlib import contextmanager
from pathlib import Path
from sqlalchemy import create_engine, Engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .config import get_config
from .exceptions import StorageError
from ..utils.logging import get_logger

logger = get_logger(__name__)

# SQLAlchemy declarative base for ORM models
Base = declarative_base()

# Engines and session factories, one per database URL
_engines: Dict[str, Engine] = {}
_session_factories: Dict[str, sessionmaker] = {}


def get_engine(url: Optional[str] = None) -> Engine:
    """Get or create the SQLAlchemy engine for a database URL."""
    if url is None:
        url = get_config().storage.url

    if url not in _engines:
        logger.info(f"Creating database engine with URL: {url}")
        try:
            if url.startswith('sqlite:'):
                engine = _create_sqlite_engine(url)
            else:
                engine = create_engine(url, echo=get_config().storage.echo, pool_pre_ping=True)
            Base.metadata.create_all(engine)
        except (ArgumentError, SQLAlchemyError, OSError) as e:
            raise StorageError(
                f"Failed to create database engine: {str(e)}",
                operation="create_engine",
                url=url
            ) from e
        _engines[url] = engine

    return _engines[url]


def _create_sqlite_engine(url: str) -> Engine:
    """Create a SQLAlchemy engine for SQLite databases."""
    database = make_url(url).database
    if database and database != ':memory:':
        Path(database).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(
        url,
        echo=get_config().storage.echo,
        poolclass=StaticPool,
        connect_args={
            'check_same_thread': False,
            'timeout': 20,
        }
    )


def get_session_factory(url: Optional[str] = None) -> sessionmaker:
    """Get the session factory bound to the engine for a database URL."""
    if url is None:
        url = get_config().storage.url

    if url not in _session_factories:
        _session_factories[url] = sessionmaker(bind=get_engine(url), expire_on_commit=False)
    return _session_factories[url]


@contextmanager
def get_db_session(url: Optional[str] = None) -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Commits on success and rolls back on any exception, which is re-raised.
    """
    session = get_session_factory(url)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dispose_engines() -> None:
    """Dispose every cached engine (used by tests and at shutdown)."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
    _session_factories.clear()
