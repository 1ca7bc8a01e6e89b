# Practice Interview API Package
"""
FastAPI backend for the Practice Interview system.

Provides endpoints for:
- Generating interviews
- Relaying live voice calls to the call controller
- Creating and reading interview feedback
- Session-cookie sign-in and sign-up
"""

from .main import app
from .call_registry import CallRegistry, call_registry

__all__ = [
    "app",
    "CallRegistry",
    "call_registry",
]
