"""
Tests for practice_interview/call/voice_session.py
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import WebSocket

from practice_interview.call import SessionEvent, WebSocketVoiceSession

from conftest import FakeVoiceSession


def create_mock_websocket() -> MagicMock:
    """Create a mock WebSocket with async methods."""
    ws = MagicMock(spec=WebSocket)
    ws.send_json = AsyncMock()
    return ws


class TestListeners:
    @pytest.mark.asyncio
    async def test_emit_runs_sync_and_async_handlers_in_order(self):
        session = FakeVoiceSession()
        calls = []

        async def async_handler(payload):
            calls.append(("async", payload))

        session.on(SessionEvent.MESSAGE, lambda payload: calls.append(("sync", payload)))
        session.on(SessionEvent.MESSAGE, async_handler)

        await session.emit(SessionEvent.MESSAGE, {"type": "transcript"})

        assert calls == [("sync", {"type": "transcript"}), ("async", {"type": "transcript"})]

    @pytest.mark.asyncio
    async def test_emit_without_listeners_is_harmless(self):
        session = FakeVoiceSession()
        await session.emit(SessionEvent.CALL_END)
        assert session.listener_count() == 0

    def test_subscription_close_removes_every_listener(self):
        session = FakeVoiceSession()
        subscription = session.subscribe({
            SessionEvent.CALL_START: lambda _: None,
            SessionEvent.CALL_END: lambda _: None,
        })
        assert session.listener_count() == 2

        subscription.close()
        subscription.close()

        assert session.listener_count() == 0
        assert not subscription.active

    def test_subscription_as_context_manager(self):
        session = FakeVoiceSession()

        with session.subscribe({SessionEvent.ERROR: lambda _: None}):
            assert session.listener_count(SessionEvent.ERROR) == 1

        assert session.listener_count(SessionEvent.ERROR) == 0

    @pytest.mark.asyncio
    async def test_handler_may_unsubscribe_during_emit(self):
        session = FakeVoiceSession()
        seen = []
        subscription = None

        def first(payload):
            seen.append("first")
            subscription.close()

        subscription = session.subscribe({SessionEvent.CALL_END: first})
        session.on(SessionEvent.CALL_END, lambda _: seen.append("second"))

        await session.emit(SessionEvent.CALL_END)
        await session.emit(SessionEvent.CALL_END)

        assert seen == ["first", "second", "second"]


class TestWebSocketVoiceSession:
    @pytest.mark.asyncio
    async def test_start_sends_assistant_and_variables(self):
        ws = create_mock_websocket()
        session = WebSocketVoiceSession(ws)

        await session.start({"name": "Interviewer"}, {"questions": "- Q1"})

        ws.send_json.assert_awaited_once_with({
            "type": "voice.start",
            "assistant": {"name": "Interviewer"},
            "assistantOverrides": {"variableValues": {"questions": "- Q1"}},
        })

    @pytest.mark.asyncio
    async def test_stop_sends_stop_command(self):
        ws = create_mock_websocket()
        session = WebSocketVoiceSession(ws)

        await session.stop()

        ws.send_json.assert_awaited_once_with({"type": "voice.stop"})

    @pytest.mark.asyncio
    async def test_dispatch_emits_event_data(self):
        session = WebSocketVoiceSession(create_mock_websocket())
        received = []
        session.on(SessionEvent.SPEECH_START, received.append)

        await session.dispatch({"type": "event", "event": "speech-start", "data": {"x": 1}})

        assert received == [{"x": 1}]

    @pytest.mark.asyncio
    async def test_dispatch_ignores_unknown_events(self):
        session = WebSocketVoiceSession(create_mock_websocket())
        handler = MagicMock()
        session.on(SessionEvent.MESSAGE, handler)

        await session.dispatch({"type": "event", "event": "volume-level", "data": 0.4})

        handler.assert_not_called()
