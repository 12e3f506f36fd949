"""
Claude (Anthropic) backend: single Messages API call.
"""
import logging

from anthropic import Anthropic

from quizgen.services.prompt_helpers import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

MAX_TOKENS = 4096


class ClaudeBackend:
    name = "anthropic"

    def __init__(self, api_key: str, model: str, timeout: float = 30.0) -> None:
        self._client = Anthropic(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model

    def complete(self, prompt: str) -> str:
        logger.info("Claude API request: model=%s, prompt_len=%s", self._model, len(prompt))
        response = self._client.messages.create(
            model=self._model,
            max_tokens=MAX_TOKENS,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        inp = getattr(response.usage, "input_tokens", 0) or 0
        out = getattr(response.usage, "output_tokens", 0) or 0
        logger.info("Claude API response: input_tokens=%s, output_tokens=%s", inp, out)
        raw = ""
        for block in response.content or []:
            text = getattr(block, "text", None)
            if text:
                raw += str(text)
        return raw.strip()
