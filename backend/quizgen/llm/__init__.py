"""
Remote generation backends: openai, anthropic, gemini. Selected per call from an explicit GenerationConfig;
no module-level client. Returns None (local pipeline only) when the provider is local, the key is missing,
or the provider SDK cannot be imported.
"""
import logging
from typing import TYPE_CHECKING

from quizgen.llm.base import QuestionBackend, parse_questions_json

if TYPE_CHECKING:
    from quizgen.services.generation_service import GenerationConfig

logger = logging.getLogger(__name__)


def get_backend(config: "GenerationConfig") -> QuestionBackend | None:
    """Build the remote backend named by config.provider, or None."""
    if not config.remote_enabled:
        return None
    provider = config.provider
    try:
        if provider == "openai":
            from quizgen.llm.openai_impl import OpenAIBackend
            return OpenAIBackend(config.api_key, config.model, timeout=config.remote_timeout_seconds)
        if provider == "anthropic":
            from quizgen.llm.claude_impl import ClaudeBackend
            return ClaudeBackend(config.api_key, config.model, timeout=config.remote_timeout_seconds)
        if provider == "gemini":
            from quizgen.llm.gemini_impl import GeminiBackend
            return GeminiBackend(config.api_key, config.model, timeout=config.remote_timeout_seconds)
    except ImportError as e:
        logger.warning("%s SDK not available, using local pipeline: %s", provider, e)
        return None
    logger.warning("Unsupported provider %r; using local pipeline", provider)
    return None


__all__ = ["QuestionBackend", "get_backend", "parse_questions_json"]
