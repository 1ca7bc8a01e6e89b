# Store Package
"""
Firebase Admin setup and Firestore document access.
"""

from functools import lru_cache

from .firebase import FirebaseConfigError, init_firebase_admin
from .repository import InterviewRepository


@lru_cache(maxsize=1)
def get_repository() -> InterviewRepository:
    """Process-wide repository bound to the configured Firestore database."""
    _, db = init_firebase_admin()
    return InterviewRepository(db)


__all__ = [
    "FirebaseConfigError",
    "InterviewRepository",
    "get_repository",
    "init_firebase_admin",
]
