# Firebase Admin
"""
Firebase Admin SDK initialization.

The app is initialized once per process from service-account credentials
held in the environment; later calls reuse it.
"""

import logging
from typing import Tuple

import firebase_admin
from firebase_admin import credentials, firestore

from practice_interview.config import FIREBASE_CONFIG

logger = logging.getLogger(__name__)


class FirebaseConfigError(RuntimeError):
    """Firebase Admin credentials are missing or unusable."""


def _service_account_info() -> dict:
    private_key = (FIREBASE_CONFIG["private_key"] or "").replace("\\n", "\n")

    if not FIREBASE_CONFIG["project_id"] or not FIREBASE_CONFIG["client_email"] or not private_key:
        raise FirebaseConfigError("Missing Firebase Admin credentials")

    return {
        "type": "service_account",
        "project_id": FIREBASE_CONFIG["project_id"],
        "client_email": FIREBASE_CONFIG["client_email"],
        "private_key": private_key,
        "token_uri": FIREBASE_CONFIG["token_uri"],
    }


def init_firebase_admin() -> Tuple[firebase_admin.App, "firestore.Client"]:
    """Initialize (or reuse) the default Firebase app and its Firestore client."""
    try:
        app = firebase_admin.get_app()
    except ValueError:
        logger.info(
            f"Firebase Admin initialization: project={FIREBASE_CONFIG['project_id']}, "
            f"client_email={FIREBASE_CONFIG['client_email']}, "
            f"has_private_key={bool(FIREBASE_CONFIG['private_key'])}"
        )
        app = firebase_admin.initialize_app(credentials.Certificate(_service_account_info()))
        logger.info("✅ Firebase Admin initialized successfully")

    db = firestore.client(app=app, database_id=FIREBASE_CONFIG["database_id"])
    logger.info(f"Firestore Admin client initialized for database: {FIREBASE_CONFIG['database_id']}")
    return app, db
