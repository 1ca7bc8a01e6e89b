"""
Tests for practice_interview/call/generation_client.py
"""

import json

import httpx
import pytest

from practice_interview.call import GenerationError, InterviewGenerationClient, InterviewSpec

SPEC = InterviewSpec(
    role="Backend Developer",
    level="Senior",
    techstack=("Python", "PostgreSQL"),
    amount=4,
    user_id="user-1",
)


def create_client(handler) -> InterviewGenerationClient:
    return InterviewGenerationClient("http://testserver/", transport=httpx.MockTransport(handler))


class TestInterviewSpec:
    def test_from_params_splits_comma_separated_stack(self):
        spec = InterviewSpec.from_params(
            role="Backend Developer", level="Senior", techstack=" Python, ,PostgreSQL ",
            amount="4", user_id="user-1")

        assert spec == SPEC

    def test_from_params_reports_missing_fields(self):
        params = {"role": "Dev", "level": "", "techstack": [], "amount": 2, "user_id": None}

        assert InterviewSpec.from_params(**params) is None
        assert InterviewSpec.missing_fields(**params) == ["level", "techstack", "user_id"]


class TestRequestGeneration:
    @pytest.mark.asyncio
    async def test_posts_request_body_to_generation_endpoint(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "interviewId": "interview-3"})

        result = await create_client(handler).request_generation(SPEC)

        assert seen["url"] == "http://testserver/api/vapi/generate"
        assert seen["body"] == {
            "type": "behavioural",
            "role": "Backend Developer",
            "level": "Senior",
            "techstack": "Python,PostgreSQL",
            "amount": 4,
            "userid": "user-1",
        }
        assert result.success is True
        assert result.interview_id == "interview-3"

    @pytest.mark.asyncio
    async def test_unsuccessful_body_is_returned_not_raised(self):
        def handler(request):
            return httpx.Response(200, json={"success": False, "error": "quota exceeded"})

        result = await create_client(handler).request_generation(SPEC)

        assert result.success is False
        assert result.error == "quota exceeded"

    @pytest.mark.asyncio
    async def test_non_2xx_status_raises(self):
        def handler(request):
            return httpx.Response(500, text="upstream exploded")

        with pytest.raises(GenerationError, match="500"):
            await create_client(handler).request_generation(SPEC)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["success"]),
        httpx.Response(200, json={"success": "yes"}),
    ])
    async def test_malformed_body_raises(self, response):
        with pytest.raises(GenerationError, match="Malformed"):
            await create_client(lambda request: response).request_generation(SPEC)

    @pytest.mark.asyncio
    async def test_transport_failure_propagates_as_http_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(httpx.HTTPError):
            await create_client(handler).request_generation(SPEC)
