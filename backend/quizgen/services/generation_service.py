"""
Question generation facade: the single entry point generate(text, question_count).

Local pipeline: chunk -> analyze -> synthesize -> balance, each stage returning an Outcome. A failed
or empty pipeline falls back to the simplified generator. When a remote provider is configured
(provider != local and an API key is set) it is tried first with a hard timeout; any remote failure
is logged and recovered by the local pipeline. The result always has exactly question_count items.
"""
import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import dataclass

from quizgen import metrics
from quizgen.config import BalanceStrategy, Provider, Settings, settings as app_settings
from quizgen.errors import (
    GenerationFailure,
    InsufficientContentError,
    InvalidQuestionCountError,
    RemoteBackendError,
)
from quizgen.llm import get_backend
from quizgen.llm.llm_service import request_questions
from quizgen.schemas.question import QuestionItem
from quizgen.services.analysis_service import analyze_chunks
from quizgen.services.balancing_service import balance
from quizgen.services.chunking_service import chunk_document
from quizgen.services.outcome import Outcome, run_stage
from quizgen.services.prompt_helpers import build_generation_prompt
from quizgen.services.simple_generation import generate_simple_questions
from quizgen.services.synthesis_service import item_key, synthesize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationConfig:
    """Everything one generate() call needs. Immutable; build per call or once per generator."""

    provider: Provider = "local"
    api_key: str = ""
    model: str = ""
    remote_timeout_seconds: float = 30.0
    remote_prompt_chars: int = 4000
    balance_strategy: BalanceStrategy = "truncate"
    chunk_window: int = 5
    chunk_stride: int = 3
    min_sentence_chars: int = 20
    min_chunk_chars: int = 100
    min_content_chars: int = 100
    min_questions: int = 5
    max_questions: int = 30

    @property
    def remote_enabled(self) -> bool:
        return self.provider != "local" and bool(self.api_key.strip())

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "GenerationConfig":
        s = s or app_settings
        return cls(
            provider=s.provider,
            api_key=s.api_key,
            model=s.active_model,
            remote_timeout_seconds=s.remote_timeout_seconds,
            remote_prompt_chars=s.remote_prompt_chars,
            balance_strategy=s.balance_strategy,
            chunk_window=s.chunk_window,
            chunk_stride=s.chunk_stride,
            min_sentence_chars=s.min_sentence_chars,
            min_chunk_chars=s.min_chunk_chars,
            min_content_chars=s.min_content_chars,
            min_questions=s.min_questions,
            max_questions=s.max_questions,
        )


def normalize_text(text: str) -> str:
    """Collapse all whitespace runs to single spaces."""
    return " ".join(text.split())


def run_local_pipeline(
    document: str,
    question_count: int,
    config: GenerationConfig,
    rng: random.Random,
) -> Outcome[list[QuestionItem]]:
    t0 = time.perf_counter()
    chunks = run_stage(
        "chunk",
        chunk_document,
        document,
        config.chunk_window,
        config.chunk_stride,
        config.min_sentence_chars,
        config.min_chunk_chars,
    )
    if chunks.ok and not chunks.value:
        return Outcome.failure("no chunks produced", stage="chunk")
    analyzed = chunks.then("analyze", analyze_chunks)
    synthesized = analyzed.then("synthesize", lambda a: synthesize(a, question_count, rng))
    if synthesized.ok and not synthesized.value:
        return Outcome.failure("no items synthesized", stage="synthesize")
    balanced = synthesized.then(
        "balance",
        lambda items: balance(items, question_count, analyzed.value, rng, config.balance_strategy),
    )
    if balanced.ok:
        logger.info(
            "run_local_pipeline: %.2fs chunks=%s items=%s",
            time.perf_counter() - t0, len(chunks.value), len(balanced.value),
        )
    return balanced


def request_remote_questions(document: str, question_count: int, config: GenerationConfig) -> list[QuestionItem]:
    """
    One remote generation bounded by config.remote_timeout_seconds. Raises RemoteBackendError on
    timeout, API/parse failure or an unavailable backend.
    """
    backend = get_backend(config)
    if backend is None:
        raise RemoteBackendError(f"no backend available for provider {config.provider!r}")
    prompt = build_generation_prompt(document, question_count, config.remote_prompt_chars)
    pool = ThreadPoolExecutor(max_workers=1)
    try:
        future = pool.submit(request_questions, backend, prompt)
        return future.result(timeout=config.remote_timeout_seconds)
    except (FuturesTimeoutError, TimeoutError) as e:
        raise RemoteBackendError(
            f"{backend.name} timed out after {config.remote_timeout_seconds}s"
        ) from e
    finally:
        pool.shutdown(wait=False, cancel_futures=True)  # return immediately on timeout


def _remote_outcome(document: str, question_count: int, config: GenerationConfig) -> Outcome[list[QuestionItem]]:
    try:
        return Outcome.success(request_remote_questions(document, question_count, config), stage="remote")
    except RemoteBackendError as e:
        return Outcome.failure(str(e), stage="remote")
    except Exception as e:
        # SDK client construction or anything else unexpected; never surfaced to the caller
        logger.warning("Remote generation raised unexpectedly: %s", e, exc_info=True)
        return Outcome.failure(f"{type(e).__name__}: {e}", stage="remote")


def _local_or_simple(
    document: str,
    question_count: int,
    config: GenerationConfig,
    rng: random.Random,
) -> list[QuestionItem]:
    local = run_local_pipeline(document, question_count, config, rng)
    if local.ok:
        return local.value
    total = metrics.increment_local_fallbacks_total()
    logger.warning(
        "Local pipeline failed at %s (%s); using simplified generator (local_fallbacks_total=%s)",
        local.stage, local.error, total,
    )
    simple = run_stage("simplified", generate_simple_questions, document, question_count)
    return simple.value if simple.ok else []


def _fill_from_local(
    remote_items: list[QuestionItem],
    document: str,
    question_count: int,
    config: GenerationConfig,
    rng: random.Random,
) -> list[QuestionItem]:
    """Keep the first question_count remote items; make up any shortfall with local items."""
    items = list(remote_items[:question_count])
    if len(items) < question_count:
        logger.info("Remote returned %s/%s questions; topping up locally", len(items), question_count)
        seen = {item_key(i) for i in items}
        for local_item in _local_or_simple(document, question_count, config, rng):
            if len(items) >= question_count:
                break
            if item_key(local_item) not in seen:
                seen.add(item_key(local_item))
                items.append(local_item)
        if len(items) < question_count:
            items.extend(generate_simple_questions(document, question_count)[: question_count - len(items)])
    return [item.model_copy(update={"id": i}) for i, item in enumerate(items, start=1)]


def generate(
    text: str,
    question_count: int,
    config: GenerationConfig | None = None,
    rng: random.Random | None = None,
) -> list[QuestionItem]:
    """
    Generate exactly question_count questions from text.
    Raises InvalidQuestionCountError for counts outside [min_questions, max_questions] and
    InsufficientContentError when the trimmed text is shorter than min_content_chars.
    """
    config = config or GenerationConfig.from_settings()
    if not config.min_questions <= question_count <= config.max_questions:
        raise InvalidQuestionCountError(
            f"Number of questions must be between {config.min_questions} and {config.max_questions}."
        )
    if len((text or "").strip()) < config.min_content_chars:
        raise InsufficientContentError()
    rng = rng or random.Random()
    document = normalize_text(text)
    t0 = time.perf_counter()

    items: list[QuestionItem] | None = None
    if config.remote_enabled:
        remote = _remote_outcome(document, question_count, config)
        if remote.ok:
            items = _fill_from_local(remote.value, document, question_count, config, rng)
        else:
            total = metrics.increment_remote_fallbacks_total()
            logger.warning(
                "Remote generation failed (%s); falling back to local pipeline (remote_fallbacks_total=%s)",
                remote.error, total,
            )
    if items is None:
        items = _local_or_simple(document, question_count, config, rng)

    if len(items) != question_count:
        logger.error("generate: produced %s/%s questions", len(items), question_count)
        raise GenerationFailure()
    logger.info("generate: %s questions in %.2fs (provider=%s)", len(items), time.perf_counter() - t0, config.provider)
    return items
