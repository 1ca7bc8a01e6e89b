# Services Package
"""
LLM-backed services: interview generation and transcript feedback.
"""

from .feedback_service import CreateFeedbackParams, FeedbackResult, FeedbackService
from .interview_generation import GenerateInterviewFlow, InterviewGenerationService

__all__ = [
    "CreateFeedbackParams",
    "FeedbackResult",
    "FeedbackService",
    "GenerateInterviewFlow",
    "InterviewGenerationService",
]
