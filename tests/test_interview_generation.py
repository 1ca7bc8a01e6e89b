"""
Tests for practice_interview/services/interview_generation.py

The flow itself is replaced with a stub; these tests cover the helpers the
flow steps rely on and the service wrapper around it.
"""

from types import SimpleNamespace

import pytest

import practice_interview.services.interview_generation as interview_generation_module
from practice_interview.crews.question_crew.question_crew import InterviewQuestions
from practice_interview.services import InterviewGenerationService
from practice_interview.services.interview_generation import (
    GenerationState,
    build_interview_document,
    parse_questions,
    split_techstack,
)


def test_split_techstack():
    assert split_techstack("React, Next.js ,, TypeScript ") == ["React", "Next.js", "TypeScript"]
    assert split_techstack(" , ") == []


class TestParseQuestions:
    def test_structured_output(self):
        result = SimpleNamespace(
            pydantic=InterviewQuestions(questions=[" What is JSX? ", "", "Explain hooks"]),
            raw="ignored",
        )
        assert parse_questions(result) == ["What is JSX?", "Explain hooks"]

    def test_json_list_in_raw_output(self):
        result = SimpleNamespace(pydantic=None, raw='["What is JSX?", "Explain hooks"]')
        assert parse_questions(result) == ["What is JSX?", "Explain hooks"]

    def test_json_object_in_raw_output(self):
        result = SimpleNamespace(pydantic=None, raw='{"questions": ["What is JSX?"]}')
        assert parse_questions(result) == ["What is JSX?"]

    def test_plain_lines_fall_back(self):
        result = SimpleNamespace(pydantic=None, raw="- What is JSX?\n\n- Explain hooks\n")
        assert parse_questions(result) == ["What is JSX?", "Explain hooks"]


def test_build_interview_document():
    state = GenerationState(
        type="technical",
        role="Frontend Developer",
        level="Junior",
        techstack="React, TypeScript",
        amount=2,
        user_id="user-1",
        questions=["What is JSX?", "Explain hooks"],
    )

    document = build_interview_document(state)

    assert document["techstack"] == ["React", "TypeScript"]
    assert document["questions"] == ["What is JSX?", "Explain hooks"]
    assert document["userId"] == "user-1"
    assert document["finalized"] is True
    assert document["createdAt"]


class StubFlow:
    """Runs the same storage step as GenerateInterviewFlow without the crew."""

    instances = []

    def __init__(self, repository):
        self.repository = repository
        self.state = GenerationState()
        StubFlow.instances.append(self)

    async def kickoff_async(self, inputs):
        self.inputs = inputs
        self.state = GenerationState(**inputs, questions=["Why this role?"])
        self.state.interview_id = self.repository.save_interview(build_interview_document(self.state))


class TestInterviewGenerationService:
    @pytest.mark.asyncio
    async def test_generate_returns_stored_interview_id(self, monkeypatch, repository):
        StubFlow.instances = []
        monkeypatch.setattr(interview_generation_module, "GenerateInterviewFlow", StubFlow)

        interview_id = await InterviewGenerationService(repository).generate(
            type="behavioural", role="Designer", level="Senior",
            techstack="Figma", amount=1, user_id="user-1")

        flow, = StubFlow.instances
        assert flow.inputs == {
            "type": "behavioural",
            "role": "Designer",
            "level": "Senior",
            "techstack": "Figma",
            "amount": 1,
            "user_id": "user-1",
        }
        assert repository.get_interview(interview_id)["questions"] == ["Why this role?"]

    @pytest.mark.asyncio
    async def test_flow_errors_propagate(self, monkeypatch, repository):
        class FailingFlow(StubFlow):
            async def kickoff_async(self, inputs):
                raise ValueError("Question crew returned no questions")

        monkeypatch.setattr(interview_generation_module, "GenerateInterviewFlow", FailingFlow)

        with pytest.raises(ValueError, match="no questions"):
            await InterviewGenerationService(repository).generate(
                type="behavioural", role="Designer", level="Senior",
                techstack="Figma", amount=1, user_id="user-1")
