# Auth Package
"""
Firebase session-cookie authentication.
"""

from .service import AuthResult, AuthService, SignUpParams

__all__ = ["AuthResult", "AuthService", "SignUpParams"]
