# Call Package
"""
Call lifecycle core: the controller state machine, the transcript it
accumulates and the collaborators it drives.
"""

from .controller import (
    CallController,
    GenerateCallController,
    InterviewCallController,
    create_call_controller,
    format_questions,
)
from .generation_client import GenerationError, GenerationResult, InterviewGenerationClient
from .models import (
    CallMode,
    CallStatus,
    InterviewRecord,
    InterviewSpec,
    SessionEvent,
    Speaker,
    Utterance,
)
from .navigation import Navigator, WebSocketNavigator
from .transcript import TranscriptAccumulator
from .voice_session import Subscription, VoiceSession, WebSocketVoiceSession

__all__ = [
    "CallController",
    "GenerateCallController",
    "InterviewCallController",
    "create_call_controller",
    "format_questions",
    "GenerationError",
    "GenerationResult",
    "InterviewGenerationClient",
    "CallMode",
    "CallStatus",
    "InterviewRecord",
    "InterviewSpec",
    "SessionEvent",
    "Speaker",
    "Utterance",
    "Navigator",
    "WebSocketNavigator",
    "TranscriptAccumulator",
    "Subscription",
    "VoiceSession",
    "WebSocketVoiceSession",
]
