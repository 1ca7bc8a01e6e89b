# Interview Generation Flow
"""
CrewAI Flow-based interview generation for the FastAPI backend.
"""
from langfuse import get_client, propagate_attributes

langfuse = get_client()

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel
from crewai.flow import Flow, listen, start

from practice_interview.crews.question_crew.question_crew import QuestionCrew

logger = logging.getLogger(__name__)

# ============================================================================
# Helpers
# ============================================================================


def split_techstack(techstack: str) -> List[str]:
    """Split a comma-separated tech stack into trimmed names."""
    return [item.strip() for item in techstack.split(",") if item.strip()]


def parse_questions(result: Any) -> List[str]:
    """Extract the question list from a QuestionCrew result."""
    structured = getattr(result, "pydantic", None)
    if structured is not None and getattr(structured, "questions", None):
        return [q.strip() for q in structured.questions if q.strip()]

    raw = result.raw if hasattr(result, "raw") else str(result)
    raw = raw.strip()
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None

    if isinstance(parsed, dict):
        parsed = parsed.get("questions")
    if isinstance(parsed, list):
        return [str(q).strip() for q in parsed if str(q).strip()]

    return [line.strip().lstrip("-").strip() for line in raw.splitlines() if line.strip()]


# ============================================================================
# State Models
# ============================================================================


class GenerationState(BaseModel):
    """State for one interview generation request."""
    # Input data
    type: str = ""
    role: str = ""
    level: str = ""
    techstack: str = ""
    amount: int = 0
    user_id: str = ""

    # Output
    questions: List[str] = []
    interview_id: str = ""


def build_interview_document(state: GenerationState) -> Dict[str, Any]:
    """Interview document as stored in the interviews collection."""
    return {
        "role": state.role,
        "type": state.type,
        "level": state.level,
        "techstack": split_techstack(state.techstack),
        "questions": state.questions,
        "userId": state.user_id,
        "finalized": True,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }


# ============================================================================
# Generation Flow
# ============================================================================


class GenerateInterviewFlow(Flow[GenerationState]):
    """
    CrewAI Flow for generating a mock interview.

    1. Validate the request
    2. Prepare the questions with the QuestionCrew
    3. Store the interview document
    """

    def __init__(self, repository, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.repository = repository

    @start()
    def prepare_request(self):
        """Check the request before spending an LLM call on it."""
        logger.info("🚀 Preparing interview generation...")

        if not self.state.role or not self.state.level or not self.state.user_id:
            raise ValueError("role, level and userid are required")
        if not split_techstack(self.state.techstack):
            raise ValueError("techstack must name at least one technology")
        if self.state.amount < 1:
            raise ValueError("amount must be a positive number of questions")

        logger.info(f"📋 {self.state.amount} {self.state.type} questions for "
                    f"{self.state.level} {self.state.role} ({self.state.techstack})")

    @listen(prepare_request)
    async def generate_questions(self):
        """Prepare the interview questions with the QuestionCrew."""
        logger.info("❓ Generating interview questions...")

        inputs = {
            "role": self.state.role,
            "level": self.state.level,
            "techstack": self.state.techstack,
            "type": self.state.type,
            "amount": self.state.amount,
        }

        with langfuse.start_as_current_observation(
                as_type="span", name="generate_questions") as span:
            with propagate_attributes(user_id=self.state.user_id,
                                      trace_name="Generate Interview Flow"):
                result = await QuestionCrew().crew().kickoff_async(inputs=inputs)
                self.state.questions = parse_questions(result)
                span.update(input=inputs,
                            output={
                                "questions": self.state.questions,
                                "status": "success"
                            })

        if not self.state.questions:
            raise ValueError("Question crew returned no questions")

        logger.info(f"✅ {len(self.state.questions)} questions generated")
        for question in self.state.questions:
            logger.info(f"   • {question}")

    @listen(generate_questions)
    async def save_interview(self):
        """Persist the generated interview."""
        self.state.interview_id = await asyncio.to_thread(
            self.repository.save_interview,
            build_interview_document(self.state))
        logger.info(f"💾 Interview saved: {self.state.interview_id}")


# ============================================================================
# Generation Service (Wrapper for Flow)
# ============================================================================


class InterviewGenerationService:
    """Runs a GenerateInterviewFlow per request."""

    def __init__(self, repository):
        self.repository = repository

    async def generate(self, type: str, role: str, level: str, techstack: str,
                       amount: int, user_id: str) -> str:
        """
        Generate and store an interview.

        Returns:
            The new interview document id

        Raises:
            ValueError: invalid request or empty crew output
        """
        flow = GenerateInterviewFlow(self.repository)
        await flow.kickoff_async(inputs={
            "type": type,
            "role": role,
            "level": level,
            "techstack": techstack,
            "amount": amount,
            "user_id": user_id,
        })
        return flow.state.interview_id
