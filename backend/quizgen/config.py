"""
Application configuration from environment variables (prefix QUIZGEN_).
Loads .env from the backend directory so API keys are found regardless of cwd.
"""
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Provider = Literal["local", "openai", "anthropic", "gemini"]
BalanceStrategy = Literal["truncate", "difficulty_quota"]

# .env next to backend/ (parent of quizgen/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZGEN_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote generation is attempted only when provider != "local" and api_key is set.
    provider: Provider = "local"
    api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-3-5-haiku-latest"
    gemini_model: str = "gemini-2.5-flash"
    # Hard bound on one remote call; on timeout the local pipeline runs instead.
    remote_timeout_seconds: float = 30.0
    remote_prompt_chars: int = 4000

    # Local pipeline
    balance_strategy: BalanceStrategy = "truncate"
    chunk_window: int = 5
    chunk_stride: int = 3
    min_sentence_chars: int = 20
    min_chunk_chars: int = 100

    # Generation request limits
    min_content_chars: int = 100
    min_questions: int = 5
    max_questions: int = 30
    default_question_count: int = 15

    # Quiz session
    feedback_delay_seconds: float = 1.0
    # Shuffle options at the API boundary (synthesized items keep the answer at index 0).
    shuffle_options: bool = False

    # Uploads: 10 MB, .txt / .md / .pdf
    max_upload_bytes: int = 10 * 1024 * 1024

    # CORS: comma-separated origins
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    debug: bool = False

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, v: str) -> str:
        return (v or "local").strip().lower() if isinstance(v, str) else v

    @field_validator("chunk_window", "chunk_stride")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("chunk window and stride must be >= 1")
        return v

    @property
    def remote_enabled(self) -> bool:
        return self.provider != "local" and bool(self.api_key.strip())

    @property
    def active_model(self) -> str:
        """Model name for the configured provider (display/logging)."""
        if self.provider == "openai":
            return self.openai_model
        if self.provider == "anthropic":
            return self.anthropic_model
        if self.provider == "gemini":
            return self.gemini_model
        return "local"


settings = Settings()
