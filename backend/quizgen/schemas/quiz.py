"""
Quiz session request/response schemas.
"""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from quizgen.schemas.question import Difficulty, QuestionItem, QuizSettings

QuizStateName = Literal["upload", "quiz", "results"]


class AnswerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    option_index: int = Field(alias="optionIndex")


class AnswerFeedback(BaseModel):
    """What the UI needs to show after an answer: the recorded choice and whether it was right."""

    question_index: int
    selected: int
    correct_answer: int
    is_correct: bool
    explanation: str = ""
    advanced: bool = False  # True when the session moved on (end mode)
    quiz_state: QuizStateName


class QuestionReview(BaseModel):
    id: int
    question: str
    options: list[str]
    selected: int | None
    correct_answer: int
    is_correct: bool
    explanation: str = ""
    difficulty: Difficulty


class QuizResults(BaseModel):
    correct_count: int
    total: int
    percentage: int
    grade_message: str
    review: list[QuestionReview]


class QuizStateResponse(BaseModel):
    quiz_state: QuizStateName
    current_index: int
    total_questions: int
    answers: dict[int, int]
    settings: QuizSettings
    is_processing: bool
    awaiting_confirmation: bool
    current_question: QuestionItem | None = None
    error: str | None = None
