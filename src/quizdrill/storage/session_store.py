"""
Active Session Slot

Persists the single active test session. Starting a new session simply
overwrites the slot.
"""

from typing import Optional

from .kv_store import KeyValueStore
from ..core.exceptions import ValidationError
from ..core.session import TestSession
from ..utils.logging import get_logger

logger = get_logger(__name__)

ACTIVE_SESSION_KEY = "activeTestSession_v1"


class SessionStore:
    """Load, save and clear the active test session."""

    def __init__(self, store: KeyValueStore, storage_key: str = ACTIVE_SESSION_KEY):
        self.store = store
        self.storage_key = storage_key

    def load_active(self) -> Optional[TestSession]:
        """The active session, or None if there is none or it cannot be read."""
        data = self.store.load(self.storage_key, None)
        if data is None:
            return None

        try:
            return TestSession.from_dict(data)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable active session: {e}")
            return None

    def save_active(self, session: TestSession) -> bool:
        return self.store.save(self.storage_key, session.to_dict())

    def clear_active(self) -> None:
        self.store.save(self.storage_key, None)
        logger.info("Cleared active session")
