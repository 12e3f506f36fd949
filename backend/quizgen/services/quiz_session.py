"""
Quiz session state machine: upload -> quiz -> results, restart() back to upload.

In "end" mode an answer is final and the session advances at once. In "immediate" mode the first
answer is recorded, feedback is shown, and the session only advances on proceed() once the
feedback interval has passed. All mutations go through one lock so the session can be shared by
request threads.
"""
import logging
import math
import threading
import time
from typing import Callable, Sequence

from quizgen.config import settings as app_settings
from quizgen.errors import (
    AnswerAlreadyRecordedError,
    FeedbackNotReadyError,
    GenerationInProgressError,
    InvalidAnswerError,
    SessionStateError,
)
from quizgen.schemas.question import QuestionItem, QuizSettings
from quizgen.schemas.quiz import AnswerFeedback, QuestionReview, QuizResults, QuizStateName

logger = logging.getLogger(__name__)

GRADE_MESSAGES = (
    (90, "Outstanding!"),
    (80, "Great job!"),
    (70, "Good work!"),
    (60, "Keep practicing!"),
)
DEFAULT_GRADE_MESSAGE = "Room for improvement!"


def grade_message(percentage: int) -> str:
    for threshold, message in GRADE_MESSAGES:
        if percentage >= threshold:
            return message
    return DEFAULT_GRADE_MESSAGE


class QuizSession:
    def __init__(
        self,
        feedback_delay_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.Lock()
        self._feedback_delay = (
            app_settings.feedback_delay_seconds if feedback_delay_seconds is None else feedback_delay_seconds
        )
        self._clock = clock
        self._reset()

    def _reset(self) -> None:
        self._quiz_state: QuizStateName = "upload"
        self._questions: tuple[QuestionItem, ...] = ()
        self._current_index = 0
        self._answers: dict[int, int] = {}
        self._settings = QuizSettings()
        self._processing = False
        self._error: str | None = None
        self._answered_at: float | None = None

    # Read accessors

    @property
    def quiz_state(self) -> QuizStateName:
        return self._quiz_state

    @property
    def questions(self) -> tuple[QuestionItem, ...]:
        return self._questions

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def answers(self) -> dict[int, int]:
        with self._lock:
            return dict(self._answers)

    @property
    def settings(self) -> QuizSettings:
        return self._settings

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def current_question(self) -> QuestionItem | None:
        with self._lock:
            if self._quiz_state != "quiz":
                return None
            return self._questions[self._current_index]

    @property
    def awaiting_confirmation(self) -> bool:
        """Immediate mode: current question answered, waiting for proceed()."""
        with self._lock:
            return (
                self._quiz_state == "quiz"
                and self._settings.mode == "immediate"
                and self._current_index in self._answers
            )

    # Generation guard

    def begin_processing(self) -> None:
        """Mark a generation as in flight. Only one at a time, and only before a quiz starts."""
        with self._lock:
            self._require("upload")
            if self._processing:
                raise GenerationInProgressError()
            self._processing = True
            self._error = None

    def fail_processing(self, message: str) -> None:
        with self._lock:
            self._processing = False
            self._error = message

    # Transitions

    def start_session(self, questions: Sequence[QuestionItem], settings: QuizSettings | None = None) -> None:
        """upload -> quiz."""
        with self._lock:
            self._require("upload")
            if not questions:
                raise SessionStateError("Cannot start a quiz without questions.")
            self._questions = tuple(questions)
            self._settings = settings or QuizSettings()
            self._current_index = 0
            self._answers = {}
            self._answered_at = None
            self._processing = False
            self._error = None
            self._quiz_state = "quiz"
            logger.info("Quiz started: questions=%s mode=%s", len(self._questions), self._settings.mode)

    def answer(self, option_index: int) -> AnswerFeedback:
        with self._lock:
            self._require("quiz")
            index = self._current_index
            question = self._questions[index]
            if not 0 <= option_index < len(question.options):
                raise InvalidAnswerError(
                    f"option_index must be between 0 and {len(question.options) - 1}"
                )
            if index in self._answers:
                if self._settings.mode == "end":
                    # End mode advances on every recorded answer, so answer() alone never lands here.
                    raise AnswerAlreadyRecordedError(f"Question {index + 1} has already been answered.")
                # Immediate mode: later clicks only re-show feedback for the first answer.
                return self._feedback(index, advanced=False)
            self._answers[index] = option_index
            if self._settings.mode == "end":
                self._advance()
                return self._feedback(index, advanced=True)
            self._answered_at = self._clock()
            return self._feedback(index, advanced=False)

    def proceed(self) -> QuizStateName:
        """Immediate mode: move past the answered question once feedback has been shown."""
        with self._lock:
            self._require("quiz")
            if self._settings.mode != "immediate":
                raise SessionStateError("proceed() is only used in immediate feedback mode.")
            if self._current_index not in self._answers:
                raise SessionStateError("Answer the current question first.")
            elapsed = self._clock() - (self._answered_at or 0.0)
            if elapsed < self._feedback_delay:
                raise FeedbackNotReadyError(
                    f"Feedback is still showing; try again in {self._feedback_delay - elapsed:.1f}s."
                )
            self._advance()
            return self._quiz_state

    def restart(self) -> None:
        """Any state -> upload, clearing questions, answers and settings."""
        with self._lock:
            self._reset()
            logger.info("Quiz restarted")

    def results(self) -> QuizResults:
        with self._lock:
            self._require("results")
            review = []
            for i, q in enumerate(self._questions):
                selected = self._answers.get(i)
                review.append(QuestionReview(
                    id=q.id,
                    question=q.question,
                    options=list(q.options),
                    selected=selected,
                    correct_answer=q.correct_answer,
                    is_correct=selected == q.correct_answer,
                    explanation=q.explanation,
                    difficulty=q.difficulty,
                ))
            correct = sum(1 for r in review if r.is_correct)
            total = len(review)
            percentage = math.floor(correct * 100 / total + 0.5) if total else 0
            return QuizResults(
                correct_count=correct,
                total=total,
                percentage=percentage,
                grade_message=grade_message(percentage),
                review=review,
            )

    # Internals

    def _require(self, state: QuizStateName) -> None:
        if self._quiz_state != state:
            raise SessionStateError(f"Not allowed in '{self._quiz_state}' state (requires '{state}').")

    def _advance(self) -> None:
        if self._current_index < len(self._questions) - 1:
            self._current_index += 1
        else:
            self._quiz_state = "results"
            logger.info("Quiz finished: answered=%s/%s", len(self._answers), len(self._questions))
        self._answered_at = None

    def _feedback(self, index: int, advanced: bool) -> AnswerFeedback:
        question = self._questions[index]
        selected = self._answers[index]
        return AnswerFeedback(
            question_index=index,
            selected=selected,
            correct_answer=question.correct_answer,
            is_correct=selected == question.correct_answer,
            explanation=question.explanation,
            advanced=advanced,
            quiz_state=self._quiz_state,
        )
