"""
Shared fixtures: in-memory stand-ins for Firestore, the voice session and
client navigation, plus a no-op Langfuse client.
"""

import itertools
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest

import practice_interview.services.feedback_service as feedback_service_module
import practice_interview.services.interview_generation as interview_generation_module
from practice_interview.call import InterviewRecord, Navigator, VoiceSession
from practice_interview.services import FeedbackResult

# ============================================================
# Fakes
# ============================================================


class InMemoryRepository:
    """Dict-backed repository with the same surface as InterviewRepository."""

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.interviews: Dict[str, Dict[str, Any]] = {}
        self.feedback: Dict[str, Dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def get_user(self, uid: str) -> Optional[Dict[str, Any]]:
        user = self.users.get(uid)
        return {**user, "id": uid} if user is not None else None

    def save_user(self, uid: str, data: Dict[str, Any]) -> None:
        self.users[uid] = {**self.users.get(uid, {}), **data}

    def save_interview(self, data: Dict[str, Any]) -> str:
        interview_id = self._next_id("interview")
        self.interviews[interview_id] = dict(data)
        return interview_id

    def get_interview(self, interview_id: str) -> Optional[Dict[str, Any]]:
        interview = self.interviews.get(interview_id)
        return {**interview, "id": interview_id} if interview is not None else None

    def list_user_interviews(self, user_id: str) -> List[Dict[str, Any]]:
        owned = [
            {**data, "id": interview_id}
            for interview_id, data in self.interviews.items()
            if data.get("userId") == user_id
        ]
        return sorted(owned, key=lambda doc: doc.get("createdAt", ""), reverse=True)

    def save_feedback(self, data: Dict[str, Any], feedback_id: Optional[str] = None) -> str:
        feedback_id = feedback_id or self._next_id("feedback")
        self.feedback[feedback_id] = dict(data)
        return feedback_id

    def get_feedback_by_id(self, feedback_id: str) -> Optional[Dict[str, Any]]:
        feedback = self.feedback.get(feedback_id)
        return {**feedback, "id": feedback_id} if feedback is not None else None

    def get_feedback(self, interview_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        for feedback_id, data in self.feedback.items():
            if data.get("interviewId") == interview_id and data.get("userId") == user_id:
                return {**data, "id": feedback_id}
        return None


class FakeVoiceSession(VoiceSession):
    """Records start/stop commands; events are injected with ``emit``."""

    def __init__(self, fail_on_start: bool = False):
        super().__init__()
        self.fail_on_start = fail_on_start
        self.starts: List[Tuple[Dict[str, Any], Dict[str, Any]]] = []
        self.stop_calls = 0

    async def start(self, assistant: Dict[str, Any], variables: Dict[str, Any]) -> None:
        if self.fail_on_start:
            raise ConnectionError("voice agent unreachable")
        self.starts.append((assistant, variables))

    async def stop(self) -> None:
        self.stop_calls += 1


class FakeNavigator(Navigator):
    """Records navigation requests and toasts."""

    def __init__(self):
        self.paths: List[str] = []
        self.toasts: List[Tuple[str, str]] = []

    async def navigate(self, path: str) -> None:
        self.paths.append(path)

    async def notify(self, message: str, level: str = "info") -> None:
        self.toasts.append((level, message))


def final_transcript(role: str, text: str) -> Dict[str, Any]:
    return {"type": "transcript", "role": role, "transcriptType": "final", "transcript": text}


def partial_transcript(role: str, text: str) -> Dict[str, Any]:
    return {"type": "transcript", "role": role, "transcriptType": "partial", "transcript": text}


# ============================================================
# Fixtures
# ============================================================


@pytest.fixture(autouse=True)
def no_langfuse(monkeypatch):
    """Replace the module-level Langfuse clients so nothing is exported."""
    monkeypatch.setattr(feedback_service_module, "langfuse", MagicMock())
    monkeypatch.setattr(feedback_service_module, "propagate_attributes", MagicMock())
    monkeypatch.setattr(interview_generation_module, "langfuse", MagicMock())
    monkeypatch.setattr(interview_generation_module, "propagate_attributes", MagicMock())


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def navigator() -> FakeNavigator:
    return FakeNavigator()


@pytest.fixture
def voice_session() -> FakeVoiceSession:
    return FakeVoiceSession()


@pytest.fixture
def feedback_service() -> MagicMock:
    service = MagicMock()
    service.create_feedback = AsyncMock(return_value=FeedbackResult(success=True, feedback_id="f1"))
    return service


@pytest.fixture
def interview() -> InterviewRecord:
    return InterviewRecord(
        interview_id="interview-42",
        owner_id="user-1",
        questions=("What is closures?", "Explain event loop"),
    )
