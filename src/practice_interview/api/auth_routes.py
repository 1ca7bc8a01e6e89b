# Auth Routes
"""
Sign-up, sign-in and session endpoints.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from practice_interview.auth import AuthService, SignUpParams
from practice_interview.config import APP_CONFIG, SESSION_CONFIG

from .dependencies import get_auth_service, require_user
from .models import AuthResponse, SignInRequest, SignUpRequest

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(response: Response, session_cookie: str) -> None:
    response.set_cookie(
        key=SESSION_CONFIG["cookie_name"],
        value=session_cookie,
        max_age=SESSION_CONFIG["duration_seconds"],
        httponly=True,
        secure=APP_CONFIG["environment"] == "production",
        path=SESSION_CONFIG["path"],
        samesite=SESSION_CONFIG["same_site"],
    )


@auth_router.post(
    "/sign-up",
    response_model=AuthResponse,
    responses={400: {"model": AuthResponse}},
    summary="Create or refresh the user profile"
)
async def sign_up(
    request: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    result = auth_service.sign_up(SignUpParams(
        uid=request.uid,
        name=request.name,
        email=request.email,
        photo_url=request.photoURL,
    ))
    if not result.success:
        return JSONResponse(status_code=400, content={"success": False, "message": result.message})
    return AuthResponse(success=True, message=result.message)


@auth_router.post(
    "/sign-in",
    response_model=AuthResponse,
    responses={401: {"model": AuthResponse}},
    summary="Exchange an ID token for a session cookie"
)
async def sign_in(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    result = auth_service.sign_in(request.idToken)
    if not result.success:
        return JSONResponse(status_code=401, content={"success": False, "message": result.message})

    response = JSONResponse(content={"success": True, "message": result.message})
    _set_session_cookie(response, result.session_cookie)
    return response


@auth_router.post(
    "/sign-out",
    response_model=AuthResponse,
    summary="Clear the session cookie"
)
async def sign_out():
    response = JSONResponse(content={"success": True, "message": "Signed out."})
    response.delete_cookie(SESSION_CONFIG["cookie_name"], path=SESSION_CONFIG["path"])
    return response


@auth_router.get(
    "/me",
    responses={401: {"model": AuthResponse}},
    summary="Current user"
)
async def me(user: Dict[str, Any] = Depends(require_user)) -> Dict[str, Any]:
    return user
