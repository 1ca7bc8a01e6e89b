#!/usr/bin/env python
"""
Practice Interview - Main Module

Runs the interview generation flow from the command line. For live calls
and feedback, use the FastAPI server instead:
    python -m practice_interview.main serve
    # or: uvicorn practice_interview.api.main:app --reload
"""

import asyncio
import json
import sys
from typing import Optional

from practice_interview.services import InterviewGenerationService
from practice_interview.store import get_repository


DEMO_PAYLOAD = {
    "type": "technical",
    "role": "Frontend Developer",
    "level": "Junior",
    "techstack": "React,TypeScript,Next.js",
    "amount": 5,
    "user_id": "demo-user",
}


def run_with_trigger(payload: Optional[dict] = None) -> str:
    """
    Generate and store an interview.

    Args:
        payload: Dictionary containing:
            - type: behavioural, technical or mixed
            - role: Job role
            - level: Experience level
            - techstack: Comma-separated technologies
            - amount: Number of questions
            - user_id: Owner of the interview

    Returns:
        The new interview id
    """
    if not payload:
        print("⚠️  No payload provided. Using demo mode.")
    request = {**DEMO_PAYLOAD, **(payload or {})}

    service = InterviewGenerationService(get_repository())
    interview_id = asyncio.run(service.generate(**request))
    print(f"✅ Interview stored: {interview_id}")
    return interview_id


def generate():
    """
    Run the generation flow with a JSON payload from argv, or demo mode.
    """
    args = [arg for arg in sys.argv[1:] if arg != "generate"]
    payload = json.loads(args[0]) if args else None
    run_with_trigger(payload)


def serve(host: str = "0.0.0.0", port: int = 8000):
    """
    Start the FastAPI server for live calls.
    """
    from practice_interview.api.main import run_server
    run_server(host=host, port=port, reload=False)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "generate":
        generate()
    else:
        serve()
