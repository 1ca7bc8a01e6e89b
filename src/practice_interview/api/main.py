# FastAPI Application
"""
Main FastAPI application for the Practice Interview API.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from practice_interview.config import APP_CONFIG

from .auth_routes import auth_router
from .call_registry import call_registry
from .call_routes import calls_router
from .models import HealthResponse
from .routes import generation_router, router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("🚀 Practice Interview API starting up...")
    yield
    logger.info("👋 Practice Interview API shutting down...")


# Create FastAPI app
app = FastAPI(
    title=APP_CONFIG["name"],
    description="""
    Backend for AI mock interviews conducted over a real-time voice agent.

    ## Features

    - **Interview Generation**: Questions prepared by an LLM for a role, level and tech stack
    - **Live Calls**: Voice agent events relayed over a WebSocket to a call state machine
    - **Feedback**: Structured grading of the call transcript
    - **Sessions**: Firebase session-cookie authentication

    ## Workflow

    1. **POST /api/auth/sign-in** - Exchange a Firebase ID token for a session cookie
    2. **WS /api/v1/calls/ws** `mode=generate` - Request a new interview
    3. **WS /api/v1/calls/ws** `mode=interview` - Take the interview as a voice call
    4. **GET /api/v1/interviews/{id}/feedback** - Read your feedback
    """,
    version=APP_CONFIG["version"],
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=APP_CONFIG["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(router)
app.include_router(generation_router)
app.include_router(auth_router)
app.include_router(calls_router)


# ============================================================================
# Root Endpoints
# ============================================================================

@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with API info."""
    return {
        "name": APP_CONFIG["name"],
        "version": APP_CONFIG["version"],
        "docs": "/docs",
        "health": "/health"
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health check",
    description="Check if the API is running and healthy."
)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=APP_CONFIG["version"],
        timestamp=datetime.now(),
        active_calls=call_registry.active_call_count
    )


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "detail": "An unexpected error occurred. Please try again later."
        }
    )


@app.exception_handler(KeyError)
async def key_error_handler(request: Request, exc: KeyError):
    """Handler for KeyError (usually a document or call that does not exist)."""
    return JSONResponse(
        status_code=404,
        content={
            "error": "NotFound",
            "detail": str(exc)
        }
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handler for ValueError (usually validation errors)."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "BadRequest",
            "detail": str(exc)
        }
    )


# ============================================================================
# Entry point for running directly
# ============================================================================

def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(
        "practice_interview.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


if __name__ == "__main__":
    run_server(reload=True)
