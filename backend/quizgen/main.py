"""
FastAPI application entrypoint. Run with: uvicorn quizgen.main:app --reload --port 8000

Routes are mounted at root:
  - Questions: POST /questions/generate
  - Quiz: POST /quiz/upload, GET /quiz, POST /quiz/answer, POST /quiz/proceed,
    GET /quiz/results, POST /quiz/restart
  - GET /health

Remote generation is optional: set QUIZGEN_PROVIDER and QUIZGEN_API_KEY in backend/.env.
Without them every request uses the local pipeline.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizgen import metrics
from quizgen.api.questions import router as questions_router
from quizgen.api.quiz import router as quiz_router
from quizgen.config import settings
from quizgen.services.quiz_session import QuizSession

app = FastAPI(
    title="Quizgen API",
    description="Upload a document, get multiple-choice questions, take the quiz.",
    version="0.1.0",
)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins else ["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(questions_router)
app.include_router(quiz_router)

app.state.quiz_session = QuizSession()


@app.on_event("startup")
def startup():
    """Configure logging and report which generation backend is active."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _log = logging.getLogger("quizgen.main")
    if settings.remote_enabled:
        _log.info("Remote generation: provider=%s model=%s", settings.provider, settings.active_model)
    elif settings.provider != "local":
        _log.warning(
            "Provider %s configured without QUIZGEN_API_KEY; using local pipeline only.", settings.provider
        )
    else:
        _log.info("Using local generation pipeline.")


@app.get("/health")
def health():
    """Health check (JSON) with fallback counters."""
    return {
        "status": "ok",
        "provider": settings.provider if settings.remote_enabled else "local",
        **metrics.snapshot(),
    }
