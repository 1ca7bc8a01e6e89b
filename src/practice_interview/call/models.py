# Call Models
"""
Data types shared by the call controller, the transcript and the voice session.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


# ============================================================================
# Enums
# ============================================================================

class CallStatus(str, Enum):
    """Lifecycle state of a single call."""
    INACTIVE = "inactive"
    CONNECTING = "connecting"
    ACTIVE = "active"
    FINISHED = "finished"


class CallMode(str, Enum):
    """Which flow a call runs."""
    GENERATE = "generate"
    INTERVIEW = "interview"


class Speaker(str, Enum):
    """Who produced an utterance."""
    USER = "user"
    SYSTEM = "system"
    ASSISTANT = "assistant"


class SessionEvent(str, Enum):
    """Events emitted by the voice session."""
    CALL_START = "call-start"
    CALL_END = "call-end"
    MESSAGE = "message"
    SPEECH_START = "speech-start"
    SPEECH_END = "speech-end"
    ERROR = "error"


# ============================================================================
# Data Models
# ============================================================================

@dataclass(frozen=True)
class Utterance:
    """One finalized spoken turn."""
    speaker: Speaker
    text: str

    def as_message(self) -> Dict[str, str]:
        return {"role": self.speaker.value, "content": self.text}


@dataclass(frozen=True)
class InterviewSpec:
    """Parameters for generating a new interview."""
    role: str
    level: str
    techstack: Tuple[str, ...]
    amount: int
    user_id: str

    REQUIRED_FIELDS = ("role", "level", "techstack", "amount", "user_id")

    @classmethod
    def missing_fields(cls, **params: Any) -> List[str]:
        """Names of required parameters that are absent or empty."""
        return [name for name in cls.REQUIRED_FIELDS if not params.get(name)]

    @classmethod
    def from_params(
        cls,
        role: Optional[str] = None,
        level: Optional[str] = None,
        techstack: Optional[Sequence[str] | str] = None,
        amount: Optional[int] = None,
        user_id: Optional[str] = None,
    ) -> Optional["InterviewSpec"]:
        """
        Build an InterviewSpec from caller-supplied parameters.

        Returns None when any required parameter is missing.
        """
        if cls.missing_fields(role=role, level=level, techstack=techstack,
                              amount=amount, user_id=user_id):
            return None

        if isinstance(techstack, str):
            stack = tuple(item.strip() for item in techstack.split(",") if item.strip())
        else:
            stack = tuple(techstack)

        return cls(role=role, level=level, techstack=stack,
                   amount=int(amount), user_id=user_id)

    def to_request_body(self, interview_type: str) -> Dict[str, Any]:
        """JSON body for the generation endpoint."""
        return {
            "type": interview_type,
            "role": self.role,
            "level": self.level,
            "techstack": ",".join(self.techstack),
            "amount": self.amount,
            "userid": self.user_id,
        }


@dataclass(frozen=True)
class InterviewRecord:
    """An existing interview a live call is run against."""
    interview_id: str
    owner_id: str
    questions: Tuple[str, ...] = field(default_factory=tuple)
    feedback_id: Optional[str] = None

    @classmethod
    def from_document(cls, interview_id: str, document: Dict[str, Any],
                      feedback_id: Optional[str] = None) -> "InterviewRecord":
        return cls(
            interview_id=interview_id,
            owner_id=document.get("userId", ""),
            questions=tuple(document.get("questions") or ()),
            feedback_id=feedback_id,
        )
