"""
OpenAI backend: chat completions in JSON mode.
"""
import logging

from openai import OpenAI

from quizgen.services.prompt_helpers import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class OpenAIBackend:
    name = "openai"

    def __init__(self, api_key: str, model: str, timeout: float = 30.0) -> None:
        self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.model = model

    def complete(self, prompt: str) -> str:
        logger.info("OpenAI API request: model=%s, prompt_len=%s", self.model, len(prompt))
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.3,
            response_format={"type": "json_object"},
        )
        return (response.choices[0].message.content or "").strip()
