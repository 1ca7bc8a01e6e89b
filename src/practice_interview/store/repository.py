# Interview Repository
"""
Firestore-backed storage for users, interviews and feedback.
"""

import logging
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1 import FieldFilter, Query

logger = logging.getLogger(__name__)

USERS = "users"
INTERVIEWS = "interviews"
FEEDBACK = "feedback"


class InterviewRepository:
    """
    Thin document layer over a Firestore client.

    Documents are returned as plain dicts with their document id under "id".
    """

    def __init__(self, db):
        self.db = db

    @staticmethod
    def _to_dict(snapshot) -> Optional[Dict[str, Any]]:
        if not snapshot.exists:
            return None
        return {**(snapshot.to_dict() or {}), "id": snapshot.id}

    # ========================================================================
    # Users
    # ========================================================================

    def get_user(self, uid: str) -> Optional[Dict[str, Any]]:
        return self._to_dict(self.db.collection(USERS).document(uid).get())

    def save_user(self, uid: str, data: Dict[str, Any]) -> None:
        """Create or merge into the user document."""
        self.db.collection(USERS).document(uid).set(data, merge=True)

    # ========================================================================
    # Interviews
    # ========================================================================

    def save_interview(self, data: Dict[str, Any]) -> str:
        _, ref = self.db.collection(INTERVIEWS).add(data)
        logger.info(f"Stored interview {ref.id}")
        return ref.id

    def get_interview(self, interview_id: str) -> Optional[Dict[str, Any]]:
        return self._to_dict(self.db.collection(INTERVIEWS).document(interview_id).get())

    def list_user_interviews(self, user_id: str) -> List[Dict[str, Any]]:
        query = (
            self.db.collection(INTERVIEWS)
            .where(filter=FieldFilter("userId", "==", user_id))
            .order_by("createdAt", direction=Query.DESCENDING)
        )
        return [self._to_dict(snapshot) for snapshot in query.stream()]

    # ========================================================================
    # Feedback
    # ========================================================================

    def save_feedback(self, data: Dict[str, Any], feedback_id: Optional[str] = None) -> str:
        """Overwrite ``feedback_id`` when given, otherwise create a new document."""
        collection = self.db.collection(FEEDBACK)
        ref = collection.document(feedback_id) if feedback_id else collection.document()
        ref.set(data)
        logger.info(f"Stored feedback {ref.id} for interview {data.get('interviewId')}")
        return ref.id

    def get_feedback_by_id(self, feedback_id: str) -> Optional[Dict[str, Any]]:
        return self._to_dict(self.db.collection(FEEDBACK).document(feedback_id).get())

    def get_feedback(self, interview_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        query = (
            self.db.collection(FEEDBACK)
            .where(filter=FieldFilter("interviewId", "==", interview_id))
            .where(filter=FieldFilter("userId", "==", user_id))
            .limit(1)
        )
        for snapshot in query.stream():
            return self._to_dict(snapshot)
        return None
