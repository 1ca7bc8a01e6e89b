# Navigation
"""
Navigation collaborator: where the user is sent next, plus short toasts.
"""

import logging
from abc import ABC, abstractmethod

from fastapi import WebSocket

from practice_interview.config import ROUTES

logger = logging.getLogger(__name__)


def home_path() -> str:
    return ROUTES["home"]


def feedback_path(interview_id: str) -> str:
    return ROUTES["feedback"].format(interview_id=interview_id)


class Navigator(ABC):
    """Routing is owned by the client; the controller only issues requests."""

    @abstractmethod
    async def navigate(self, path: str) -> None:
        ...

    @abstractmethod
    async def notify(self, message: str, level: str = "info") -> None:
        ...


class WebSocketNavigator(Navigator):
    """Sends navigation and toast requests to the client over its WebSocket."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    async def navigate(self, path: str) -> None:
        logger.info(f"➡️ Navigating client to {path}")
        await self.websocket.send_json({"type": "navigate", "path": path})

    async def notify(self, message: str, level: str = "info") -> None:
        await self.websocket.send_json({"type": "toast", "level": level, "message": message})
