"""
Quiz API over the single in-process session:
upload (extract + generate + start), state, answer, proceed, results, restart.
Session state errors map to 409, bad option indexes to 400.
"""
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from quizgen.api.deps import get_generation_config, get_quiz_session
from quizgen.config import settings
from quizgen.errors import (
    DocumentReadError,
    GenerationFailure,
    InsufficientContentError,
    InvalidAnswerError,
    InvalidQuestionCountError,
    SessionStateError,
    UnsupportedDocumentError,
)
from quizgen.schemas.question import QuizMode, QuizSettings
from quizgen.schemas.quiz import AnswerFeedback, AnswerRequest, QuizResults, QuizStateResponse
from quizgen.services.generation_service import GenerationConfig, generate
from quizgen.services.presentation import shuffle_all
from quizgen.services.quiz_session import QuizSession
from quizgen.services.text_extract import extract_text

router = APIRouter(prefix="/quiz", tags=["quiz"])
logger = logging.getLogger(__name__)

FILE_TOO_LARGE_MESSAGE = "File size must be less than 10MB"
UPLOAD_FAILED_MESSAGE = "Could not process this document. Please try again or upload a different file."


def _state_response(session: QuizSession) -> QuizStateResponse:
    return QuizStateResponse(
        quiz_state=session.quiz_state,
        current_index=session.current_index,
        total_questions=len(session.questions),
        answers=session.answers,
        settings=session.settings,
        is_processing=session.is_processing,
        awaiting_confirmation=session.awaiting_confirmation,
        current_question=session.current_question,
        error=session.error,
    )


def _conflict(e: SessionStateError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/upload", response_model=QuizStateResponse, status_code=status.HTTP_201_CREATED)
def upload_document(
    file: UploadFile = File(...),
    question_count: int = Form(settings.default_question_count),
    mode: QuizMode = Form("immediate"),
    session: QuizSession = Depends(get_quiz_session),
    config: GenerationConfig = Depends(get_generation_config),
):
    """
    Read the document, generate question_count MCQs and start the quiz.
    409 while another upload is processing or a quiz is running; 413 over max_upload_bytes;
    400 for unsupported/unreadable files or content too short.
    """
    if not config.min_questions <= question_count <= config.max_questions:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Number of questions must be between {config.min_questions} and {config.max_questions}.",
        )
    try:
        session.begin_processing()
    except SessionStateError as e:
        raise _conflict(e)

    try:
        contents = file.file.read()
        if len(contents) > settings.max_upload_bytes:
            raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=FILE_TOO_LARGE_MESSAGE)
        text = extract_text(file.filename or "", contents)
        questions = generate(text, question_count, config)
    except HTTPException as e:
        session.fail_processing(str(e.detail))
        raise
    except (UnsupportedDocumentError, DocumentReadError, InsufficientContentError, InvalidQuestionCountError) as e:
        session.fail_processing(str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except GenerationFailure as e:
        session.fail_processing(str(e))
        logger.error("upload_document: generation failed for %s: %s", file.filename, e)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except Exception as e:
        # Unexpected failure: release the processing flag before reporting it.
        session.fail_processing(UPLOAD_FAILED_MESSAGE)
        logger.exception("upload_document: unexpected error for %s: %s", file.filename, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UPLOAD_FAILED_MESSAGE)

    if settings.shuffle_options:
        questions = shuffle_all(questions)
    session.start_session(questions, QuizSettings(question_count=question_count, mode=mode))
    logger.info("upload_document: %s -> %s questions (mode=%s)", file.filename, len(questions), mode)
    return _state_response(session)


@router.get("", response_model=QuizStateResponse)
def get_state(session: QuizSession = Depends(get_quiz_session)):
    return _state_response(session)


@router.post("/answer", response_model=AnswerFeedback)
def answer_question(body: AnswerRequest, session: QuizSession = Depends(get_quiz_session)):
    """Record an answer for the current question. End mode advances immediately."""
    try:
        return session.answer(body.option_index)
    except InvalidAnswerError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SessionStateError as e:
        raise _conflict(e)


@router.post("/proceed", response_model=QuizStateResponse)
def proceed(session: QuizSession = Depends(get_quiz_session)):
    """Immediate mode: move on after feedback has been shown."""
    try:
        session.proceed()
    except SessionStateError as e:
        raise _conflict(e)
    return _state_response(session)


@router.get("/results", response_model=QuizResults)
def get_results(session: QuizSession = Depends(get_quiz_session)):
    try:
        return session.results()
    except SessionStateError as e:
        raise _conflict(e)


@router.post("/restart", response_model=QuizStateResponse)
def restart(session: QuizSession = Depends(get_quiz_session)):
    session.restart()
    return _state_response(session)
