"""
Tests for the quiz session state machine: end mode, immediate mode with proceed, restart, results.
A fake clock drives the feedback interval.
"""
import pytest

from quizgen.errors import (
    FeedbackNotReadyError,
    GenerationInProgressError,
    InvalidAnswerError,
    SessionStateError,
)
from quizgen.schemas.question import QuestionItem, QuizSettings
from quizgen.services.quiz_session import QuizSession, grade_message


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _questions(n: int = 2) -> list[QuestionItem]:
    return [
        QuestionItem(
            id=i,
            question=f"Question {i}?",
            options=[f"right {i}", "wrong a", "wrong b", "wrong c"],
            explanation=f"Because {i}.",
        )
        for i in range(1, n + 1)
    ]


def _started(mode: str, n: int = 2, delay: float = 0.0, clock=None) -> QuizSession:
    session = QuizSession(feedback_delay_seconds=delay, clock=clock or FakeClock())
    session.start_session(_questions(n), QuizSettings(question_count=5, mode=mode))
    return session


def test_new_session_is_in_upload_state():
    session = QuizSession(feedback_delay_seconds=0)
    assert session.quiz_state == "upload"
    assert session.questions == ()
    assert session.current_question is None
    assert not session.is_processing


def test_end_mode_scenario():
    """Each answer advances; the second answer ends the quiz without moving past the last index."""
    session = _started("end")
    first = session.answer(0)
    assert first.advanced
    assert first.is_correct
    assert session.current_index == 1
    assert session.quiz_state == "quiz"

    second = session.answer(1)
    assert second.advanced
    assert not second.is_correct
    assert second.quiz_state == "results"
    assert session.quiz_state == "results"
    assert session.answers == {0: 0, 1: 1}
    assert session.current_index == 1


def test_immediate_mode_does_not_advance_until_proceed():
    session = _started("immediate")
    feedback = session.answer(2)
    assert not feedback.advanced
    assert feedback.correct_answer == 0
    assert feedback.explanation == "Because 1."
    assert session.current_index == 0
    assert session.awaiting_confirmation

    session.proceed()
    assert session.current_index == 1
    assert not session.awaiting_confirmation
    session.answer(0)
    assert session.proceed() == "results"
    assert session.answers == {0: 2, 1: 0}
    assert session.current_index == 1


def test_immediate_mode_first_answer_sticks():
    session = _started("immediate")
    session.answer(1)
    again = session.answer(0)
    assert again.selected == 1
    assert session.answers == {0: 1}


def test_proceed_waits_for_feedback_delay():
    clock = FakeClock()
    session = _started("immediate", delay=1.0, clock=clock)
    session.answer(0)
    with pytest.raises(FeedbackNotReadyError):
        session.proceed()
    clock.now += 1.0
    session.proceed()
    assert session.current_index == 1


def test_proceed_requires_answer_and_immediate_mode():
    with pytest.raises(SessionStateError):
        _started("immediate").proceed()
    with pytest.raises(SessionStateError):
        _started("end").proceed()


def test_answer_out_of_range():
    session = _started("end")
    with pytest.raises(InvalidAnswerError):
        session.answer(4)
    with pytest.raises(InvalidAnswerError):
        session.answer(-1)
    assert session.answers == {}


def test_answer_outside_quiz_state():
    session = QuizSession(feedback_delay_seconds=0)
    with pytest.raises(SessionStateError):
        session.answer(0)


def test_end_mode_answer_is_final():
    """A second answer goes to the next question; the first recorded answer never changes."""
    session = _started("end", n=2)
    session.answer(2)
    session.answer(0)
    assert session.answers == {0: 2, 1: 0}
    with pytest.raises(SessionStateError):
        session.answer(1)
    assert session.answers == {0: 2, 1: 0}


def test_restart_scenario():
    session = _started("end")
    session.answer(0)
    session.answer(0)
    assert session.quiz_state == "results"
    session.restart()
    assert session.quiz_state == "upload"
    assert session.questions == ()
    assert session.answers == {}
    assert session.current_index == 0
    assert session.settings == QuizSettings()


def test_restart_mid_quiz():
    session = _started("immediate", n=3)
    session.answer(1)
    session.restart()
    assert session.quiz_state == "upload"
    assert not session.awaiting_confirmation


def test_start_session_requires_upload_state_and_questions():
    session = _started("end")
    with pytest.raises(SessionStateError):
        session.start_session(_questions(), QuizSettings())
    with pytest.raises(SessionStateError):
        QuizSession(feedback_delay_seconds=0).start_session([], QuizSettings())


def test_begin_processing_guards_concurrent_generation():
    session = QuizSession(feedback_delay_seconds=0)
    session.begin_processing()
    assert session.is_processing
    with pytest.raises(GenerationInProgressError):
        session.begin_processing()
    session.fail_processing("Document is too short")
    assert not session.is_processing
    assert session.error == "Document is too short"
    session.begin_processing()
    assert session.error is None
    session.start_session(_questions(), QuizSettings())
    assert not session.is_processing


def test_results_summary():
    session = _started("end", n=3)
    session.answer(0)
    session.answer(1)
    session.answer(0)
    results = session.results()
    assert results.correct_count == 2
    assert results.total == 3
    assert results.percentage == 67
    assert results.grade_message == "Keep practicing!"
    assert [r.is_correct for r in results.review] == [True, False, True]
    assert results.review[1].selected == 1
    assert results.review[1].options[results.review[1].correct_answer] == "right 2"


def test_results_only_after_quiz():
    with pytest.raises(SessionStateError):
        _started("end").results()


@pytest.mark.parametrize(
    "percentage,message",
    [
        (100, "Outstanding!"),
        (90, "Outstanding!"),
        (89, "Great job!"),
        (80, "Great job!"),
        (75, "Good work!"),
        (60, "Keep practicing!"),
        (59, "Room for improvement!"),
        (0, "Room for improvement!"),
    ],
)
def test_grade_message(percentage, message):
    assert grade_message(percentage) == message
