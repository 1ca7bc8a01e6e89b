# API Request/Response Models
"""
Pydantic models for API request and response schemas.
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Interview Generation
# ============================================================================

class GenerateInterviewRequest(BaseModel):
    """Request to generate a new interview."""
    type: str = Field(default="behavioural", description="Balance of behavioural vs technical questions")
    role: str = Field(..., min_length=1, description="Job role, e.g. Frontend Developer")
    level: str = Field(..., min_length=1, description="Experience level, e.g. Junior")
    techstack: str = Field(..., min_length=1, description="Comma-separated technologies")
    amount: int = Field(..., ge=1, le=20, description="Number of questions")
    userid: str = Field(..., min_length=1, description="Owner of the generated interview")

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "behavioural",
                "role": "Frontend Developer",
                "level": "Junior",
                "techstack": "React,TypeScript,Next.js",
                "amount": 5,
                "userid": "Yz3kq0aB7cS1",
            }
        }
    }


class GenerateInterviewResponse(BaseModel):
    """Outcome of a generation request."""
    success: bool
    error: Optional[str] = None
    interviewId: Optional[str] = None


# ============================================================================
# Feedback
# ============================================================================

class TranscriptMessage(BaseModel):
    """One finalized turn of a call."""
    role: Literal["user", "system", "assistant"]
    content: str


class CreateFeedbackRequest(BaseModel):
    """Request to grade a finished interview call."""
    model_config = ConfigDict(populate_by_name=True)

    interview_id: str = Field(..., alias="interviewId")
    user_id: str = Field(..., alias="userId")
    transcript: List[TranscriptMessage] = Field(..., min_length=1)
    feedback_id: Optional[str] = Field(None, alias="feedbackId")


class CreateFeedbackResponse(BaseModel):
    success: bool
    feedbackId: Optional[str] = None


# ============================================================================
# Auth
# ============================================================================

class SignUpRequest(BaseModel):
    """Profile data for a user created with the Firebase client SDK."""
    uid: str = Field(..., min_length=1)
    name: str = Field(..., min_length=3)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    photoURL: Optional[str] = None


class SignInRequest(BaseModel):
    idToken: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    success: bool
    message: str


# ============================================================================
# Call Relay Messages
# ============================================================================

class GenerateCallStart(BaseModel):
    """First socket message for a generate-mode call."""
    type: Literal["start"] = "start"
    mode: Literal["generate"]
    role: Optional[str] = None
    level: Optional[str] = None
    techstack: Optional[str] = None
    amount: Optional[int] = None


class InterviewCallStart(BaseModel):
    """First socket message for an interview-mode call."""
    type: Literal["start"] = "start"
    mode: Literal["interview"]
    interview_id: str = Field(..., alias="interviewId")
    feedback_id: Optional[str] = Field(None, alias="feedbackId")

    model_config = ConfigDict(populate_by_name=True)


StartCallMessage = Annotated[Union[GenerateCallStart, InterviewCallStart], Field(discriminator="mode")]


class CallSummary(BaseModel):
    """Status of a call registered with the server."""
    call_id: str
    mode: str
    status: str
    user_id: Optional[str]
    created_at: datetime
    transcript_length: int


# ============================================================================
# System
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: str

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "NotFound",
                "detail": "Interview not found: abc123",
            }
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: datetime
    active_calls: int
