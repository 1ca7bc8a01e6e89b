# Auth Service
"""
Session-cookie authentication on top of Firebase Auth.

The browser signs in with the Firebase client SDK and sends the resulting
ID token here; the server exchanges it for a long-lived session cookie and
keeps a profile document per user in Firestore.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions
from google.api_core import exceptions as google_exceptions

from practice_interview.config import SESSION_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class SignUpParams:
    uid: str
    name: str
    email: str
    photo_url: Optional[str] = None


@dataclass
class AuthResult:
    success: bool
    message: str
    session_cookie: Optional[str] = None
    user: Optional[Dict[str, Any]] = None


class AuthService:
    """
    Sign-up, sign-in and session verification.

    Every public method reports failure through its return value; errors are
    logged, never raised.
    """

    def __init__(self, repository, auth_client=firebase_auth):
        self.repository = repository
        self.auth_client = auth_client
        self.session_duration = timedelta(seconds=SESSION_CONFIG["duration_seconds"])

    # ========================================================================
    # Sign up
    # ========================================================================

    def sign_up(self, params: SignUpParams) -> AuthResult:
        """Create or refresh the user's profile document."""
        logger.info(f"🔵 Starting user creation in Firestore: uid={params.uid} email={params.email}")
        now = datetime.now(timezone.utc).isoformat()

        try:
            existing = self.repository.get_user(params.uid)
            if existing:
                logger.info("⚠️ User document already exists, updating...")

            user_data = {
                "uid": params.uid,
                "name": params.name,
                "email": params.email,
                "photoURL": params.photo_url,
                "updatedAt": now,
                "lastLoginAt": now,
            }
            if not existing:
                user_data.update({
                    "createdAt": now,
                    "isOnboarded": False,
                    "role": "user",
                    "status": "active",
                    "preferences": {"emailNotifications": True, "theme": "light"},
                    "profile": {"bio": "", "location": "", "skills": []},
                })

            self.repository.save_user(params.uid, user_data)
        except google_exceptions.PermissionDenied as e:
            logger.error(f"❌ Firestore permission denied: {e}")
            return AuthResult(success=False, message="Permission denied. Please check Firestore rules.")
        except Exception as e:
            logger.exception(f"❌ Error in sign_up: {e}")
            return AuthResult(success=False,
                              message=str(e) or "Failed to create account. Please try again.")

        logger.info("✅ Successfully wrote user data to Firestore")
        return AuthResult(success=True, message="Account created successfully.",
                          user={**(existing or {}), **user_data})

    # ========================================================================
    # Sessions
    # ========================================================================

    def sign_in(self, id_token: str) -> AuthResult:
        """Exchange an ID token for a verified session cookie."""
        logger.info("🔵 Starting sign_in with token")
        try:
            session_cookie = self.auth_client.create_session_cookie(
                id_token, expires_in=self.session_duration)
            if not session_cookie:
                raise ValueError("Failed to create session cookie")

            self.auth_client.verify_session_cookie(session_cookie)
        except firebase_auth.InvalidIdTokenError as e:
            logger.error(f"❌ Invalid ID token: {e}")
            return AuthResult(success=False,
                              message="Invalid authentication token. Please sign in again.")
        except (firebase_exceptions.FirebaseError, ValueError) as e:
            logger.error(f"❌ Error creating session cookie: {e}")
            return AuthResult(success=False,
                              message=str(e) or "Failed to sign in. Please try again.")

        logger.info("✅ Session cookie created and verified")
        return AuthResult(success=True, message="Successfully signed in!", session_cookie=session_cookie)

    def get_current_user(self, session_cookie: Optional[str]) -> Optional[Dict[str, Any]]:
        """The signed-in user's profile, or None."""
        if not session_cookie:
            return None

        try:
            claims = self.auth_client.verify_session_cookie(session_cookie, check_revoked=True)
            return self.repository.get_user(claims["uid"])
        except (firebase_exceptions.FirebaseError, google_exceptions.GoogleAPIError,
                ValueError, KeyError) as e:
            logger.warning(f"Get current user error: {e}")
            return None

    def is_authenticated(self, session_cookie: Optional[str]) -> bool:
        return self.get_current_user(session_cookie) is not None
