"""
Application Configuration

Centralized configuration for the Practice Interview backend.
Values are read from the environment (a local .env file is loaded first).
"""

import os

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


# ============================================================================
# Application Configuration
# ============================================================================

APP_CONFIG = {
    "name": "Practice Interview API",
    "version": "1.0.0",

    # "production" enables secure cookies
    "environment": os.getenv("APP_ENV", "development"),

    # Base URL the call controller uses to reach the generation endpoint
    "public_base_url": os.getenv("APP_BASE_URL", "http://127.0.0.1:8000"),

    "cors_origins": os.getenv("CORS_ORIGINS", "*").split(","),
}

# ============================================================================
# Firebase Configuration
# ============================================================================

FIREBASE_CONFIG = {
    "project_id": os.getenv("FIREBASE_PROJECT_ID"),
    "client_email": os.getenv("FIREBASE_CLIENT_EMAIL"),
    "private_key": os.getenv("FIREBASE_PRIVATE_KEY"),

    # Named Firestore database
    "database_id": os.getenv("FIRESTORE_DATABASE_ID", "appdatabase"),

    "token_uri": "https://oauth2.googleapis.com/token",
}

# ============================================================================
# Session Cookie Configuration
# ============================================================================

SESSION_CONFIG = {
    "cookie_name": "session",

    # One week, in seconds
    "duration_seconds": 60 * 60 * 24 * 7,

    "same_site": "lax",
    "path": "/",
}

# ============================================================================
# Interview Generation Configuration
# ============================================================================

GENERATION_CONFIG = {
    "endpoint_path": "/api/vapi/generate",

    # Interview type sent by the call controller
    "interview_type": "behavioural",
}

# ============================================================================
# Navigation Destinations
# ============================================================================

ROUTES = {
    "home": "/",
    "feedback": "/interview/{interview_id}/feedback",
}

# ============================================================================
# LLM Configuration
# ============================================================================

LLM_CONFIG = {
    "model": os.getenv("LLM_MODEL", "gemini/gemini-2.5-flash-lite"),
}

# ============================================================================
# Voice Agent Configuration
# ============================================================================

# Marker the voice SDK puts in its error message when the remote meeting closed
SESSION_ENDED_MARKER = "Meeting has ended"

INTERVIEWER_ASSISTANT = {
    "name": "Interviewer",
    "firstMessage": (
        "Hello! Thank you for taking the time to speak with me today. "
        "I'm looking forward to learning more about you and your experience."
    ),
    "transcriber": {
        "provider": "deepgram",
        "model": "nova-2",
        "language": "en",
    },
    "voice": {
        "provider": "11labs",
        "voiceId": "sarah",
        "stability": 0.4,
        "similarityBoost": 0.8,
        "speed": 0.9,
        "style": 0.5,
        "useSpeakerBoost": True,
    },
    "model": {
        "provider": "openai",
        "model": "gpt-4",
        "messages": [
            {
                "role": "system",
                "content": (
                    "You are a professional job interviewer conducting a real-time "
                    "voice interview with a candidate. Your goal is to assess their "
                    "qualifications, motivation, and fit for the role.\n\n"
                    "Interview Guidelines:\n"
                    "Follow the structured question flow:\n"
                    "{{questions}}\n\n"
                    "Engage naturally and react appropriately. Listen actively to "
                    "responses and acknowledge them before moving forward. Ask brief "
                    "follow-up questions if a response is vague.\n\n"
                    "Be professional, yet warm and welcoming. Keep all your responses "
                    "short and simple, as in a real voice conversation.\n\n"
                    "Conclude the interview properly: thank the candidate for their "
                    "time and let them know the company will reach out soon with "
                    "feedback."
                ),
            }
        ],
    },
}
