"""
Gemini (Google) backend via google.genai with JSON response mime type.
"""
import logging

from google import genai
from google.genai import types

from quizgen.services.prompt_helpers import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 8192


class GeminiBackend:
    name = "gemini"

    def __init__(self, api_key: str, model: str, timeout: float = 30.0) -> None:
        # HttpOptions.timeout is in milliseconds
        self._client = genai.Client(api_key=api_key, http_options=types.HttpOptions(timeout=int(timeout * 1000)))
        self._model_name = model

    def complete(self, prompt: str) -> str:
        config = types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            max_output_tokens=MAX_OUTPUT_TOKENS,
            temperature=0.3,
            response_mime_type="application/json",
        )
        logger.info("Gemini API request: model=%s, prompt_len=%s", self._model_name, len(prompt))
        response = self._client.models.generate_content(
            model=self._model_name,
            contents=prompt,
            config=config,
        )
        um = getattr(response, "usage_metadata", None)
        if um:
            logger.info(
                "Gemini API response: input_tokens=%s, output_tokens=%s",
                getattr(um, "prompt_token_count", 0) or 0,
                getattr(um, "candidates_token_count", 0) or 0,
            )
        return (getattr(response, "text", None) or "").strip()
