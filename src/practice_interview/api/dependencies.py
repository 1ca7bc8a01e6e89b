# API Dependencies
"""
FastAPI dependency providers. Tests swap these out via dependency_overrides.
"""

from typing import Any, Dict, Optional

from fastapi import Cookie, Depends, HTTPException

from practice_interview.auth import AuthService
from practice_interview.call import InterviewGenerationClient
from practice_interview.config import SESSION_CONFIG
from practice_interview.services import FeedbackService, InterviewGenerationService
from practice_interview.store import InterviewRepository, get_repository

from .call_registry import CallRegistry, call_registry


def get_interview_repository() -> InterviewRepository:
    """Dependency to get the process-wide Firestore repository."""
    return get_repository()


def get_auth_service(
    repository: InterviewRepository = Depends(get_interview_repository)
) -> AuthService:
    return AuthService(repository)


def get_feedback_service(
    repository: InterviewRepository = Depends(get_interview_repository)
) -> FeedbackService:
    return FeedbackService(repository)


def get_generation_service(
    repository: InterviewRepository = Depends(get_interview_repository)
) -> InterviewGenerationService:
    return InterviewGenerationService(repository)


def get_generation_client() -> InterviewGenerationClient:
    """Client the generate-mode controller uses to reach the generation endpoint."""
    return InterviewGenerationClient()


def get_call_registry() -> CallRegistry:
    return call_registry


def get_session_cookie(
    session: Optional[str] = Cookie(None, alias=SESSION_CONFIG["cookie_name"])
) -> Optional[str]:
    return session


def get_optional_user(
    session_cookie: Optional[str] = Depends(get_session_cookie),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[Dict[str, Any]]:
    return auth_service.get_current_user(session_cookie)


def require_user(
    user: Optional[Dict[str, Any]] = Depends(get_optional_user)
) -> Dict[str, Any]:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
