# Call Relay Routes
"""
WebSocket relay between the browser's voice agent SDK and a call controller.

Client -> server:
    {"type": "start", "mode": "generate", "role": ..., "level": ..., "techstack": ..., "amount": ...}
    {"type": "start", "mode": "interview", "interviewId": ..., "feedbackId": ...}
    {"type": "event", "event": "call-start" | "message" | ..., "data": {...}}
    {"type": "disconnect"}

Server -> client:
    {"type": "call", "callId": ...}
    {"type": "status", "status": ..., "lastMessage": ..., "isSpeaking": ...}
    {"type": "voice.start" | "voice.stop" | "navigate" | "toast" | "error", ...}
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import TypeAdapter, ValidationError

from practice_interview.call import (
    CallController,
    CallStatus,
    GenerateCallController,
    InterviewCallController,
    InterviewGenerationClient,
    InterviewRecord,
    WebSocketNavigator,
    WebSocketVoiceSession,
)
from practice_interview.services import FeedbackService
from practice_interview.store import InterviewRepository

from .call_registry import CallRegistry
from .dependencies import (
    get_call_registry,
    get_feedback_service,
    get_generation_client,
    get_interview_repository,
    get_optional_user,
)
from .models import GenerateCallStart, StartCallMessage

logger = logging.getLogger(__name__)

calls_router = APIRouter(prefix="/api/v1", tags=["calls"])

start_message_adapter = TypeAdapter(StartCallMessage)


async def _reject(websocket: WebSocket, code: int, message: str) -> None:
    await websocket.send_json({"type": "error", "message": message})
    await websocket.close(code=code)


async def _send_status(websocket: WebSocket, controller: CallController) -> None:
    await websocket.send_json({
        "type": "status",
        "status": controller.status.value,
        "lastMessage": controller.last_message,
        "isSpeaking": controller.is_speaking,
    })


async def _start(websocket: WebSocket, controller: CallController) -> None:
    """Start the call and report the resulting status."""
    await controller.start_call()
    await _send_status(websocket, controller)


async def _stop_start_task(start_task: Optional[asyncio.Task]) -> None:
    if start_task is None:
        return
    start_task.cancel()
    try:
        await start_task
    except asyncio.CancelledError:
        pass
    except Exception as e:
        logger.warning(f"Call start ended with an error: {e}")


@calls_router.websocket("/calls/ws")
async def call_socket(
    websocket: WebSocket,
    user: Optional[Dict[str, Any]] = Depends(get_optional_user),
    repository: InterviewRepository = Depends(get_interview_repository),
    feedback_service: FeedbackService = Depends(get_feedback_service),
    generation_client: InterviewGenerationClient = Depends(get_generation_client),
    registry: CallRegistry = Depends(get_call_registry),
):
    """Run one call for the signed-in user over this socket."""
    await websocket.accept()

    if user is None:
        await _reject(websocket, 4401, "Not authenticated")
        return

    try:
        start = start_message_adapter.validate_python(await websocket.receive_json())
    except (ValidationError, ValueError) as e:
        logger.warning(f"Invalid start message: {e}")
        await _reject(websocket, 4400, "Invalid start message")
        return
    except WebSocketDisconnect:
        return

    navigator = WebSocketNavigator(websocket)
    voice_session: Optional[WebSocketVoiceSession] = None

    if isinstance(start, GenerateCallStart):
        controller: CallController = GenerateCallController(
            navigator,
            generation_client,
            role=start.role,
            level=start.level,
            techstack=start.techstack,
            amount=start.amount,
            user_id=user["id"],
            user_name=user.get("name"),
        )
    else:
        document = await asyncio.to_thread(repository.get_interview, start.interview_id)
        if document is None or document.get("userId") != user["id"]:
            await _reject(websocket, 4404, f"Interview not found: {start.interview_id}")
            return

        voice_session = WebSocketVoiceSession(websocket)
        controller = InterviewCallController(
            navigator,
            voice_session,
            feedback_service,
            InterviewRecord.from_document(start.interview_id, document, start.feedback_id),
            user_id=user["id"],
            user_name=user.get("name"),
        )

    entry = registry.register(controller, user_id=user["id"])
    await websocket.send_json({"type": "call", "callId": entry.call_id})

    # Starting runs alongside the receive loop so a disconnect can land while CONNECTING
    start_task: Optional[asyncio.Task] = asyncio.create_task(_start(websocket, controller))

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except (ValueError, TypeError, KeyError) as e:
                logger.warning(f"Call {entry.call_id}: ignoring unparseable message: {e}")
                continue

            if not isinstance(message, dict):
                logger.warning(f"Call {entry.call_id}: ignoring non-object message {message!r}")
                continue

            kind = message.get("type")

            if kind == "event" and voice_session is not None:
                try:
                    await voice_session.dispatch(message)
                except Exception as e:
                    logger.exception(f"Call {entry.call_id}: error handling voice event: {e}")
            elif kind == "disconnect":
                await controller.disconnect()
            elif kind == "start" and controller.status is CallStatus.INACTIVE and start_task.done():
                start_task = asyncio.create_task(_start(websocket, controller))
                continue
            else:
                logger.warning(f"Call {entry.call_id}: ignoring {kind!r} message while {controller.status.value}")
                continue

            await _send_status(websocket, controller)
    except WebSocketDisconnect:
        logger.info(f"Call {entry.call_id}: client disconnected")
    finally:
        await _stop_start_task(start_task)
        controller.close()
        registry.remove(entry.call_id)
