#!/usr/bin/env python3
"""
Manual end-to-end run of the generation flow against the configured
Firestore database and LLM. Not collected by pytest.

    python tests/run.py
"""
import asyncio
import os
import sys

from practice_interview.services import InterviewGenerationService
from practice_interview.store import FirebaseConfigError, get_repository


REQUEST = {
    "type": "mixed",
    "role": "AI/ML Engineer",
    "level": "Mid-level",
    "techstack": "Python,AWS Bedrock,Terraform,LangChain",
    "amount": 5,
    "user_id": os.getenv("RUN_USER_ID", "manual-run"),
}


def main():
    try:
        repository = get_repository()
    except FirebaseConfigError as e:
        print(f"ERROR: {e}. Set FIREBASE_PROJECT_ID, FIREBASE_CLIENT_EMAIL and FIREBASE_PRIVATE_KEY in .env.")
        sys.exit(1)

    print(f"Generating {REQUEST['amount']} questions for {REQUEST['level']} {REQUEST['role']}...")
    print("Starting GenerateInterviewFlow... this may take a while depending on agent configuration.")

    interview_id = asyncio.run(InterviewGenerationService(repository).generate(**REQUEST))

    interview = repository.get_interview(interview_id)
    print(f"Flow finished. Interview {interview_id} stored:")
    for question in interview["questions"]:
        print(f"  - {question}")


if __name__ == "__main__":
    main()
