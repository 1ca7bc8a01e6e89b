# Voice Session
"""
Voice session collaborator.

The real-time audio runs in the voice agent SDK on the client. On the
server a VoiceSession is the handle the call controller drives: it sends
start/stop commands and delivers the SDK's events to registered listeners.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from fastapi import WebSocket

from .models import SessionEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Union[None, Awaitable[None]]]


class Subscription:
    """
    A set of listeners registered on a voice session.

    Released with ``close()`` or by leaving the ``with`` block; releasing
    twice is harmless.
    """

    def __init__(self, session: "VoiceSession", handlers: Mapping[SessionEvent, EventHandler]):
        self._session = session
        self._handlers = dict(handlers)
        self._active = True
        for event, handler in self._handlers.items():
            session.on(event, handler)

    @property
    def active(self) -> bool:
        return self._active

    def close(self) -> None:
        if not self._active:
            return
        for event, handler in self._handlers.items():
            self._session.off(event, handler)
        self._active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class VoiceSession(ABC):
    """Base class for voice session transports."""

    def __init__(self):
        self._listeners: Dict[SessionEvent, List[EventHandler]] = defaultdict(list)

    # ========================================================================
    # Commands
    # ========================================================================

    @abstractmethod
    async def start(self, assistant: Dict[str, Any], variables: Dict[str, Any]) -> None:
        """Open a call with the given assistant and template variables."""

    @abstractmethod
    async def stop(self) -> None:
        """Ask the remote side to end the call."""

    # ========================================================================
    # Listeners
    # ========================================================================

    def on(self, event: SessionEvent, handler: EventHandler) -> None:
        self._listeners[SessionEvent(event)].append(handler)

    def off(self, event: SessionEvent, handler: EventHandler) -> None:
        handlers = self._listeners.get(SessionEvent(event), [])
        if handler in handlers:
            handlers.remove(handler)

    def subscribe(self, handlers: Mapping[SessionEvent, EventHandler]) -> Subscription:
        """Register several listeners at once."""
        return Subscription(self, handlers)

    def listener_count(self, event: Optional[SessionEvent] = None) -> int:
        if event is not None:
            return len(self._listeners.get(SessionEvent(event), []))
        return sum(len(handlers) for handlers in self._listeners.values())

    async def emit(self, event: SessionEvent, payload: Any = None) -> None:
        """Deliver an event to its listeners in registration order."""
        for handler in list(self._listeners.get(SessionEvent(event), [])):
            result = handler(payload)
            if inspect.isawaitable(result):
                await result


class WebSocketVoiceSession(VoiceSession):
    """
    Voice session relayed over the client's WebSocket.

    Outgoing commands:
        {"type": "voice.start", "assistant": {...}, "assistantOverrides": {"variableValues": {...}}}
        {"type": "voice.stop"}

    Incoming events (passed to ``dispatch``):
        {"type": "event", "event": "call-start" | "message" | ..., "data": {...}}
    """

    def __init__(self, websocket: WebSocket):
        super().__init__()
        self.websocket = websocket

    async def start(self, assistant: Dict[str, Any], variables: Dict[str, Any]) -> None:
        await self.websocket.send_json({
            "type": "voice.start",
            "assistant": assistant,
            "assistantOverrides": {"variableValues": variables},
        })

    async def stop(self) -> None:
        await self.websocket.send_json({"type": "voice.stop"})

    async def dispatch(self, message: Dict[str, Any]) -> None:
        """Emit an event message received from the client SDK."""
        try:
            event = SessionEvent(message.get("event"))
        except ValueError:
            logger.warning(f"Ignoring unknown voice event: {message.get('event')!r}")
            return
        await self.emit(event, message.get("data"))
