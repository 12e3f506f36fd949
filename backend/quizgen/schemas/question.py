"""
Question and quiz settings schemas.
QuestionItem serializes with camelCase (correctAnswer) to match the remote JSON shape {"questions": [...]}.
"""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Difficulty = Literal["easy", "medium", "hard"]
QuizMode = Literal["immediate", "end"]

OPTION_COUNT = 4


class QuestionItem(BaseModel):
    """One MCQ. Immutable once returned to the caller."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(ge=1)
    question: str
    options: tuple[str, ...]
    correct_answer: int = Field(0, alias="correctAnswer")
    explanation: str = ""
    difficulty: Difficulty = "medium"

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question must not be empty")
        return v

    @field_validator("options", mode="before")
    @classmethod
    def options_exactly_four(cls, v):
        if not isinstance(v, (list, tuple)):
            raise ValueError("options must be a list")
        if len(v) != OPTION_COUNT:
            raise ValueError(f"options must have exactly {OPTION_COUNT} items")
        if not all(isinstance(o, str) and o.strip() for o in v):
            raise ValueError("options must be non-empty strings")
        if len({o.strip().lower() for o in v}) != OPTION_COUNT:
            raise ValueError("options must be distinct")
        return tuple(v)

    @model_validator(mode="after")
    def correct_answer_in_range(self) -> "QuestionItem":
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError("correctAnswer must index into options")
        return self

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer]


class QuizSettings(BaseModel):
    """Caller-supplied settings; read-only during a session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question_count: int = Field(15, ge=5, le=30, alias="questionCount")
    mode: QuizMode = "immediate"


class GenerateRequest(BaseModel):
    text: str
    question_count: int = Field(15, alias="questionCount")

    model_config = ConfigDict(populate_by_name=True)


class QuestionListResponse(BaseModel):
    questions: list[QuestionItem]
    total: int
