"""
Key-Value Store

Small persistent store for JSON-serializable values. Loading never raises
and saving is best-effort: the store holds convenience state (the question
bank and the active session), not a system of record, so failures are
logged and callers carry on with in-memory values.
"""

import json
from typing import Any, List, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .models import StoredValue
from ..core.database import get_db_session
from ..core.exceptions import StorageError
from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class KeyValueStore:
    """JSON values keyed by string, persisted through SQLAlchemy."""

    def __init__(self, database_url: Optional[str] = None):
        """
        Args:
            database_url: SQLAlchemy URL; defaults to ``storage.url`` from config
        """
        if database_url is None:
            from ..core.config import get_config
            database_url = get_config().storage.url
        self.database_url = database_url

    def load(self, key: str, fallback: T) -> T:
        """
        Load the value stored under ``key``.

        Returns ``fallback`` when the key is missing, the stored value is not
        valid JSON, or the database cannot be read.
        """
        try:
            with get_db_session(self.database_url) as session:
                entry = session.get(StoredValue, key)
                raw_value = entry.value if entry is not None else None
        except (SQLAlchemyError, StorageError) as e:
            logger.warning(f"Failed to load key '{key}', returning fallback: {e}")
            return fallback

        if raw_value is None:
            return fallback

        try:
            return json.loads(raw_value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Stored value for key '{key}' is malformed, returning fallback: {e}")
            return fallback

    def save(self, key: str, value: Any) -> bool:
        """
        Serialize ``value`` as JSON and store it under ``key``.

        Returns:
            True when the value was written, False when it was not (the
            failure is logged).
        """
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Failed to serialize value for key '{key}': {e}")
            return False

        try:
            with get_db_session(self.database_url) as session:
                entry = session.get(StoredValue, key)
                if entry is None:
                    session.add(StoredValue(key=key, value=serialized))
                else:
                    entry.value = serialized
        except (SQLAlchemyError, StorageError) as e:
            logger.warning(f"Failed to save key '{key}': {e}")
            return False

        logger.debug(f"Saved key '{key}' ({len(serialized)} bytes)")
        return True

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if something was deleted."""
        try:
            with get_db_session(self.database_url) as session:
                entry = session.get(StoredValue, key)
                if entry is None:
                    return False
                session.delete(entry)
        except (SQLAlchemyError, StorageError) as e:
            logger.warning(f"Failed to delete key '{key}': {e}")
            return False
        return True

    def keys(self) -> List[str]:
        try:
            with get_db_session(self.database_url) as session:
                return list(session.scalars(select(StoredValue.key).order_by(StoredValue.key)))
        except (SQLAlchemyError, StorageError) as e:
            logger.warning(f"Failed to list keys: {e}")
            return []
