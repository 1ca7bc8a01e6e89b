# Call Registry
"""
Tracks the calls currently relayed by this server process.
Each socket owns its controller; the registry only indexes them.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Dict, List, Optional

from practice_interview.call import CallController

logger = logging.getLogger(__name__)


@dataclass
class CallEntry:
    """A registered call and its controller."""
    call_id: str
    controller: CallController
    user_id: Optional[str]
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def mode(self) -> str:
        return self.controller.mode.value

    @property
    def status(self) -> str:
        return self.controller.status.value


class CallRegistry:
    """
    Thread-safe registry of active calls.

    Provides:
    - Call registration and retrieval
    - Listing calls per user
    - Removal when the socket closes
    """

    _instance: Optional['CallRegistry'] = None
    _lock = Lock()

    def __new__(cls):
        """Singleton pattern for the call registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._calls: Dict[str, CallEntry] = {}
        self._calls_lock = Lock()
        self._initialized = True
        logger.info("CallRegistry initialized")

    def register(self, controller: CallController, user_id: Optional[str] = None) -> CallEntry:
        """Register a controller under a new call id."""
        entry = CallEntry(
            call_id=f"call_{uuid.uuid4().hex}",
            controller=controller,
            user_id=user_id,
        )
        with self._calls_lock:
            self._calls[entry.call_id] = entry
        logger.info(f"Registered {entry.mode} call {entry.call_id} for {user_id}")
        return entry

    def get(self, call_id: str) -> Optional[CallEntry]:
        with self._calls_lock:
            return self._calls.get(call_id)

    def get_or_raise(self, call_id: str) -> CallEntry:
        entry = self.get(call_id)
        if entry is None:
            raise KeyError(f"Call not found: {call_id}")
        return entry

    def remove(self, call_id: str) -> bool:
        with self._calls_lock:
            if call_id in self._calls:
                del self._calls[call_id]
                logger.info(f"Removed call {call_id}")
                return True
            return False

    def list_calls(self, user_id: Optional[str] = None) -> List[CallEntry]:
        with self._calls_lock:
            calls = list(self._calls.values())
        if user_id is None:
            return calls
        return [entry for entry in calls if entry.user_id == user_id]

    @property
    def active_call_count(self) -> int:
        with self._calls_lock:
            return len(self._calls)


# Global call registry instance
call_registry = CallRegistry()
