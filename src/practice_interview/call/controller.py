# Call Controller
"""
Call lifecycle state machine.

A controller drives one call: INACTIVE -> CONNECTING -> ACTIVE -> FINISHED.
FINISHED is terminal, so every new call needs a fresh controller. Entering
FINISHED runs exactly one follow-up action.

Two variants share the lifecycle:
- GenerateCallController asks the generation endpoint for a new interview
  and never opens a voice session.
- InterviewCallController runs a live voice call over a question set and
  hands the transcript to the feedback service when it ends.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

import httpx

from practice_interview.config import INTERVIEWER_ASSISTANT, SESSION_ENDED_MARKER
from practice_interview.services.feedback_service import CreateFeedbackParams, FeedbackService

from .generation_client import GenerationError, InterviewGenerationClient
from .models import CallMode, CallStatus, InterviewRecord, InterviewSpec, SessionEvent
from .navigation import Navigator, feedback_path, home_path
from .transcript import TranscriptAccumulator
from .voice_session import Subscription, VoiceSession

logger = logging.getLogger(__name__)


TRANSITIONS = {
    CallStatus.INACTIVE: frozenset({CallStatus.CONNECTING}),
    CallStatus.CONNECTING: frozenset({CallStatus.ACTIVE, CallStatus.FINISHED, CallStatus.INACTIVE}),
    CallStatus.ACTIVE: frozenset({CallStatus.FINISHED}),
    CallStatus.FINISHED: frozenset(),
}


def format_questions(questions: Optional[Sequence[str]]) -> str:
    """Render questions as one prompt line each, prefixed with ``- ``."""
    if not questions:
        logger.warning("No questions provided for interview call.")
        return ""
    return "\n".join(f"- {question}" for question in questions)


class CallController(ABC):
    """
    Shared lifecycle for both call variants.

    Subclasses implement ``start_call`` and ``_on_finished``; the base class
    owns the status, the transcript and the single-shot finish handling.
    """

    mode: CallMode

    def __init__(self, navigator: Navigator, user_id: Optional[str] = None,
                 user_name: Optional[str] = None):
        self.navigator = navigator
        self.user_id = user_id
        self.user_name = user_name

        self.status = CallStatus.INACTIVE
        self.transcript = TranscriptAccumulator()
        self.is_speaking = False

    # ========================================================================
    # Public actions
    # ========================================================================

    @abstractmethod
    async def start_call(self) -> bool:
        """Begin the call. Returns False if the call did not get going."""

    async def disconnect(self) -> bool:
        """
        End the call at the user's request.

        Only valid while CONNECTING or ACTIVE; otherwise nothing happens.
        """
        if self.status not in (CallStatus.CONNECTING, CallStatus.ACTIVE):
            logger.debug(f"Disconnect ignored while {self.status.value}")
            return False

        logger.info("Disconnect requested by user.")
        self._transition(CallStatus.FINISHED)
        self.close()
        await self._teardown()
        await self._on_finished()
        return True

    def close(self) -> None:
        """Release any resources held for the call."""

    @property
    def last_message(self) -> str:
        return self.transcript.latest()

    # ========================================================================
    # State handling
    # ========================================================================

    def _transition(self, target: CallStatus) -> bool:
        if target not in TRANSITIONS[self.status]:
            logger.debug(f"Ignoring transition {self.status.value} -> {target.value}")
            return False
        logger.info(f"Call status: {self.status.value} -> {target.value}")
        self.status = target
        return True

    def _reset(self) -> None:
        self._transition(CallStatus.INACTIVE)

    async def _finish(self) -> None:
        """Enter FINISHED from a session event and run the follow-up once."""
        if not self._transition(CallStatus.FINISHED):
            return
        self.close()
        await self._on_finished()

    async def _teardown(self) -> None:
        """Tell collaborators the call is over. Does not wait for confirmation."""

    @abstractmethod
    async def _on_finished(self) -> None:
        """Follow-up action for entering FINISHED."""


class GenerateCallController(CallController):
    """Requests a new interview. No audio call takes place in this mode."""

    mode = CallMode.GENERATE

    def __init__(
        self,
        navigator: Navigator,
        generation_client: InterviewGenerationClient,
        role: Optional[str] = None,
        level: Optional[str] = None,
        techstack: Optional[Sequence[str] | str] = None,
        amount: Optional[int] = None,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
    ):
        super().__init__(navigator, user_id=user_id, user_name=user_name)
        self.generation_client = generation_client
        self.params: Dict[str, Any] = {
            "role": role,
            "level": level,
            "techstack": techstack,
            "amount": amount,
            "user_id": user_id,
        }

    async def start_call(self) -> bool:
        if not self._transition(CallStatus.CONNECTING):
            logger.warning(f"Cannot start a call while {self.status.value}")
            return False

        spec = InterviewSpec.from_params(**self.params)
        if spec is None:
            missing = ", ".join(InterviewSpec.missing_fields(**self.params))
            logger.error(f"Missing required data for interview generation: {missing}")
            self._reset()
            return False

        logger.info("Attempting to generate interview via API...")
        try:
            result = await self.generation_client.request_generation(spec)
        except (GenerationError, httpx.HTTPError) as e:
            logger.error(f"Failed to generate interview: {e}")
            return await self._generation_failed()

        if self.status is not CallStatus.CONNECTING:
            logger.info("Generation response arrived after the call was closed; ignoring it.")
            return False

        if not result.success:
            logger.error(f"API indicated failure to generate interview: {result.error or 'Unknown API error'}")
            return await self._generation_failed()

        logger.info("✅ Interview generated successfully via API")
        self._transition(CallStatus.FINISHED)
        await self._on_finished()
        await self.navigator.notify("Interview generation request sent successfully!", level="success")
        await self.navigator.navigate(home_path())
        return True

    async def _generation_failed(self) -> bool:
        if self.status is CallStatus.CONNECTING:
            self._reset()
            await self.navigator.notify("Failed to generate interview. Please try again.", level="error")
        return False

    async def _on_finished(self) -> None:
        logger.info("Generation process finished.")


class InterviewCallController(CallController):
    """Runs a live voice interview and requests feedback when it ends."""

    mode = CallMode.INTERVIEW

    def __init__(
        self,
        navigator: Navigator,
        voice_session: VoiceSession,
        feedback_service: FeedbackService,
        interview: InterviewRecord,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
        assistant: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(navigator, user_id=user_id or interview.owner_id, user_name=user_name)
        self.voice_session = voice_session
        self.feedback_service = feedback_service
        self.interview = interview
        self.assistant = assistant or INTERVIEWER_ASSISTANT
        self._subscription: Optional[Subscription] = None

    def build_variables(self) -> Dict[str, Any]:
        variables: Dict[str, Any] = {"questions": format_questions(self.interview.questions)}
        if self.user_name:
            variables["username"] = self.user_name
        return variables

    async def start_call(self) -> bool:
        if not self._transition(CallStatus.CONNECTING):
            logger.warning(f"Cannot start a call while {self.status.value}")
            return False

        logger.info(f"Starting interview call for {self.interview.interview_id}...")
        variables = self.build_variables()
        self._subscription = self.voice_session.subscribe({
            SessionEvent.CALL_START: self._on_call_start,
            SessionEvent.CALL_END: self._on_call_end,
            SessionEvent.MESSAGE: self._on_message,
            SessionEvent.SPEECH_START: self._on_speech_start,
            SessionEvent.SPEECH_END: self._on_speech_end,
            SessionEvent.ERROR: self._on_error,
        })

        try:
            await self.voice_session.start(self.assistant, variables)
        except Exception as e:
            logger.exception(f"Error starting voice call for interview: {e}")
            self.close()
            self._reset()
            return False
        return True

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.close()

    async def _teardown(self) -> None:
        try:
            await self.voice_session.stop()
        except Exception as e:
            logger.warning(f"Voice session stop failed: {e}")

    # ========================================================================
    # Voice session listeners
    # ========================================================================

    def _on_call_start(self, _payload: Any = None) -> None:
        self._transition(CallStatus.ACTIVE)

    async def _on_call_end(self, _payload: Any = None) -> None:
        await self._finish()

    def _on_message(self, message: Any) -> None:
        if self.status is not CallStatus.ACTIVE:
            return
        self.transcript.record(message)

    def _on_speech_start(self, _payload: Any = None) -> None:
        self.is_speaking = True

    def _on_speech_end(self, _payload: Any = None) -> None:
        self.is_speaking = False

    async def _on_error(self, error: Any) -> None:
        message = error.get("message", "") if isinstance(error, dict) else str(error or "")
        if SESSION_ENDED_MARKER in message:
            logger.info("Remote session ended.")
            await self._finish()
            return
        logger.warning(f"Voice session error: {message}")

    # ========================================================================
    # Feedback
    # ========================================================================

    async def _on_finished(self) -> None:
        if self.transcript.is_empty:
            logger.info("Call finished without a transcript; nothing to grade.")
            await self.navigator.navigate(home_path())
            return

        if not self.interview.interview_id or not self.user_id:
            logger.error("Missing interview id or user id for feedback generation.")
            await self.navigator.navigate(home_path())
            return

        logger.info(f"🔍 Generating feedback for interview {self.interview.interview_id}...")
        try:
            result = await self.feedback_service.create_feedback(CreateFeedbackParams(
                interview_id=self.interview.interview_id,
                user_id=self.user_id,
                transcript=self.transcript.as_messages(),
                feedback_id=self.interview.feedback_id,
            ))
        except Exception as e:
            logger.exception(f"Error saving feedback: {e}")
            result = None

        if result is not None and result.success and result.feedback_id:
            await self.navigator.navigate(feedback_path(self.interview.interview_id))
        else:
            logger.error("Error saving feedback")
            await self.navigator.navigate(home_path())


def create_call_controller(mode: CallMode | str, **kwargs: Any) -> CallController:
    """Build the controller variant for a call mode."""
    mode = CallMode(mode)
    if mode is CallMode.GENERATE:
        return GenerateCallController(**kwargs)
    return InterviewCallController(**kwargs)
