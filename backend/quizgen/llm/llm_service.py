"""
Remote call wrapper: tenacity retries on 429/5xx, then a single RemoteBackendError for anything that still fails.
"""
import logging
import time

from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from quizgen.errors import RemoteBackendError
from quizgen.llm.base import QuestionBackend, parse_questions_json
from quizgen.schemas.question import QuestionItem

logger = logging.getLogger(__name__)

RETRY_ATTEMPTS = 3


def _is_retryable(exc: BaseException) -> bool:
    """Retry on 429 (rate limit) and 5xx-like errors."""
    msg = str(exc).lower()
    if "429" in msg or "rate limit" in msg or "rate_limit" in msg:
        return True
    if "500" in msg or "502" in msg or "503" in msg or "overloaded" in msg or "resource exhausted" in msg:
        return True
    return False


def complete_with_retry(backend: QuestionBackend, prompt: str) -> str:
    """Run backend.complete with tenacity retry on 429/5xx."""

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    def _do():
        return backend.complete(prompt)

    return _do()


def request_questions(backend: QuestionBackend, prompt: str) -> list[QuestionItem]:
    """
    Call the backend and parse its reply. Raises RemoteBackendError on API failure, an unparseable reply
    or zero valid questions.
    """
    t0 = time.perf_counter()
    try:
        raw = complete_with_retry(backend, prompt)
    except Exception as e:
        raise RemoteBackendError(f"{backend.name} request failed: {e}") from e
    logger.info("%s: response len=%s in %.2fs", backend.name, len(raw or ""), time.perf_counter() - t0)
    try:
        questions = parse_questions_json(raw)
    except Exception as e:  # e.g. RecursionError on pathologically nested JSON
        raise RemoteBackendError(f"{backend.name} reply could not be parsed: {type(e).__name__}: {e}") from e
    if not questions:
        raise RemoteBackendError(f"{backend.name} returned no usable questions")
    return questions
