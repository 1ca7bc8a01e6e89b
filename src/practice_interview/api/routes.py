# API Routes
"""
FastAPI route handlers for interview generation, feedback and interview documents.
"""

import asyncio
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from practice_interview.services import (
    CreateFeedbackParams,
    FeedbackService,
    InterviewGenerationService,
)
from practice_interview.store import InterviewRepository

from .call_registry import CallRegistry
from .dependencies import (
    get_call_registry,
    get_feedback_service,
    get_generation_service,
    get_interview_repository,
    require_user,
)
from .models import (
    CallSummary,
    CreateFeedbackRequest,
    CreateFeedbackResponse,
    ErrorResponse,
    GenerateInterviewRequest,
    GenerateInterviewResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["interview"])
generation_router = APIRouter(prefix="/api/vapi", tags=["generation"])


# ============================================================================
# Generation Endpoint
# ============================================================================

@generation_router.post(
    "/generate",
    response_model=GenerateInterviewResponse,
    responses={500: {"model": GenerateInterviewResponse}},
    summary="Generate a new interview",
    description="Prepare interview questions with the LLM and store the interview for the user."
)
async def generate_interview(
    request: GenerateInterviewRequest,
    service: InterviewGenerationService = Depends(get_generation_service)
):
    """
    Generate an interview.

    This endpoint:
    1. Prepares `amount` questions for the role, level and tech stack
    2. Stores the interview under the requesting user
    3. Returns the new interview id
    """
    try:
        interview_id = await service.generate(
            type=request.type,
            role=request.role,
            level=request.level,
            techstack=request.techstack,
            amount=request.amount,
            user_id=request.userid,
        )
    except Exception as e:
        logger.exception(f"Error generating interview: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e) or "Failed to generate interview"}
        )

    return GenerateInterviewResponse(success=True, interviewId=interview_id)


# ============================================================================
# Feedback Endpoints
# ============================================================================

@router.post(
    "/feedback",
    response_model=CreateFeedbackResponse,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": CreateFeedbackResponse},
    },
    summary="Grade a finished interview",
    description="Generate structured feedback from a call transcript and store it."
)
async def create_feedback(
    request: CreateFeedbackRequest,
    user: Dict[str, Any] = Depends(require_user),
    repository: InterviewRepository = Depends(get_interview_repository),
    service: FeedbackService = Depends(get_feedback_service)
):
    if request.user_id != user["id"]:
        raise HTTPException(status_code=403, detail="Cannot submit feedback for another user")

    interview = await asyncio.to_thread(repository.get_interview, request.interview_id)
    if interview is None or interview.get("userId") != user["id"]:
        raise HTTPException(status_code=404, detail=f"Interview not found: {request.interview_id}")

    if request.feedback_id:
        existing = await asyncio.to_thread(repository.get_feedback_by_id, request.feedback_id)
        if existing is not None and existing.get("userId") != user["id"]:
            raise HTTPException(status_code=403, detail="Cannot overwrite another user's feedback")

    result = await service.create_feedback(CreateFeedbackParams(
        interview_id=request.interview_id,
        user_id=request.user_id,
        transcript=[message.model_dump() for message in request.transcript],
        feedback_id=request.feedback_id,
    ))

    if not result.success:
        return JSONResponse(status_code=500, content={"success": False, "feedbackId": None})

    return CreateFeedbackResponse(success=True, feedbackId=result.feedback_id)


# ============================================================================
# Interview Documents
# ============================================================================

@router.get(
    "/interviews",
    summary="List my interviews",
    description="Interviews owned by the signed-in user, newest first."
)
async def list_my_interviews(
    user: Dict[str, Any] = Depends(require_user),
    repository: InterviewRepository = Depends(get_interview_repository)
) -> List[Dict[str, Any]]:
    return await asyncio.to_thread(repository.list_user_interviews, user["id"])


@router.get(
    "/interviews/{interview_id}",
    responses={404: {"model": ErrorResponse}},
    summary="Get an interview"
)
async def get_interview(
    interview_id: str,
    user: Dict[str, Any] = Depends(require_user),
    repository: InterviewRepository = Depends(get_interview_repository)
) -> Dict[str, Any]:
    interview = await asyncio.to_thread(repository.get_interview, interview_id)
    if interview is None or interview.get("userId") != user["id"]:
        raise HTTPException(status_code=404, detail=f"Interview not found: {interview_id}")
    return interview


@router.get(
    "/interviews/{interview_id}/feedback",
    responses={404: {"model": ErrorResponse}},
    summary="Get my feedback for an interview"
)
async def get_interview_feedback(
    interview_id: str,
    user: Dict[str, Any] = Depends(require_user),
    repository: InterviewRepository = Depends(get_interview_repository)
) -> Dict[str, Any]:
    feedback = await asyncio.to_thread(repository.get_feedback, interview_id, user["id"])
    if feedback is None:
        raise HTTPException(status_code=404, detail=f"No feedback for interview: {interview_id}")
    return feedback


# ============================================================================
# Calls
# ============================================================================

@router.get(
    "/calls",
    response_model=List[CallSummary],
    summary="List my active calls"
)
async def list_my_calls(
    user: Dict[str, Any] = Depends(require_user),
    registry: CallRegistry = Depends(get_call_registry)
) -> List[CallSummary]:
    return [
        CallSummary(
            call_id=entry.call_id,
            mode=entry.mode,
            status=entry.status,
            user_id=entry.user_id,
            created_at=entry.created_at,
            transcript_length=len(entry.controller.transcript),
        )
        for entry in registry.list_calls(user_id=user["id"])
    ]
