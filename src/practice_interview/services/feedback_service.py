# Feedback Service
"""
Service for grading interview transcripts using the FeedbackCrew.

The crew turns a finished call's transcript into a structured assessment,
which is stored as a feedback document for the interview.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from langfuse import get_client, propagate_attributes

from practice_interview.crews.feedback_crew.feedback_crew import FeedbackAssessment, FeedbackCrew

logger = logging.getLogger(__name__)

langfuse = get_client()


# ============================================================================
# Data Models
# ============================================================================

@dataclass
class CreateFeedbackParams:
    """Input for a feedback request."""
    interview_id: str
    user_id: str
    transcript: List[Dict[str, str]] = field(default_factory=list)
    feedback_id: Optional[str] = None


@dataclass
class FeedbackResult:
    """Outcome of a feedback request."""
    success: bool
    feedback_id: Optional[str] = None


# ============================================================================
# Feedback Service
# ============================================================================

class FeedbackService:
    """
    Grades transcripts and persists the resulting feedback.

    Failures never propagate: they are logged and reported as
    ``FeedbackResult(success=False)``.

    Usage:
        service = FeedbackService(repository)
        result = await service.create_feedback(CreateFeedbackParams(
            interview_id="abc",
            user_id="user-1",
            transcript=[{"role": "assistant", "content": "Tell me about..."}],
        ))
    """

    def __init__(self, repository):
        self.repository = repository
        logger.info("FeedbackService initialized")

    @staticmethod
    def format_transcript(transcript: List[Dict[str, str]]) -> str:
        """
        Format transcript messages as ``- role: content`` lines.

        Args:
            transcript: Messages with "role" and "content" keys

        Returns:
            Transcript text for the feedback crew
        """
        return "".join(
            f"- {message['role']}: {message['content']}\n" for message in transcript
        )

    async def assess(self, transcript: List[Dict[str, str]]) -> FeedbackAssessment:
        """Run the feedback crew over a transcript."""
        result = await (
            FeedbackCrew()
            .crew()
            .kickoff_async(inputs={"transcript": self.format_transcript(transcript)})
        )

        assessment = getattr(result, "pydantic", None)
        if not isinstance(assessment, FeedbackAssessment):
            raise ValueError("Feedback crew returned no structured assessment")
        return assessment

    @staticmethod
    def build_document(params: CreateFeedbackParams, assessment: FeedbackAssessment) -> Dict[str, Any]:
        return {
            "interviewId": params.interview_id,
            "userId": params.user_id,
            "totalScore": assessment.total_score,
            "categoryScores": [score.model_dump() for score in assessment.category_scores],
            "strengths": assessment.strengths,
            "areasForImprovement": assessment.areas_for_improvement,
            "finalAssessment": assessment.final_assessment,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }

    async def create_feedback(self, params: CreateFeedbackParams) -> FeedbackResult:
        """
        Grade a transcript and store the feedback.

        Args:
            params: Interview id, user id, transcript and optional existing feedback id

        Returns:
            FeedbackResult with the stored feedback id on success
        """
        if not params.transcript:
            logger.warning(f"Empty transcript for interview {params.interview_id}; skipping feedback")
            return FeedbackResult(success=False)

        logger.info(
            f"🔍 Generating feedback for interview {params.interview_id} "
            f"from {len(params.transcript)} messages..."
        )

        try:
            with langfuse.start_as_current_observation(
                    as_type="span", name="create_feedback") as span:
                with propagate_attributes(session_id=params.interview_id,
                                          user_id=params.user_id,
                                          trace_name="Create Feedback"):
                    assessment = await self.assess(params.transcript)
                    span.update(input={"messages": len(params.transcript)},
                                output={"total_score": assessment.total_score})

            feedback_id = await asyncio.to_thread(
                self.repository.save_feedback,
                self.build_document(params, assessment),
                feedback_id=params.feedback_id,
            )
        except Exception as e:
            logger.exception(f"❌ Error saving feedback: {e}")
            return FeedbackResult(success=False)

        logger.info(f"✅ Feedback {feedback_id} stored for interview {params.interview_id}")
        return FeedbackResult(success=True, feedback_id=feedback_id)
