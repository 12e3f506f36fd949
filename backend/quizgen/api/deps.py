"""
Shared dependencies: the process-wide quiz session and the generation config.
The session lives on app.state so tests can swap in a fresh one per client.
"""
from fastapi import Request

from quizgen.services.generation_service import GenerationConfig
from quizgen.services.quiz_session import QuizSession


def get_quiz_session(request: Request) -> QuizSession:
    session = getattr(request.app.state, "quiz_session", None)
    if session is None:
        session = QuizSession()
        request.app.state.quiz_session = session
    return session


def get_generation_config() -> GenerationConfig:
    """Built from settings per request so env overrides in tests take effect."""
    return GenerationConfig.from_settings()
