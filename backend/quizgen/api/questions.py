"""
Questions API: stateless generation. POST /questions/generate returns exactly question_count MCQs.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from quizgen.api.deps import get_generation_config
from quizgen.config import settings
from quizgen.errors import GenerationFailure, InsufficientContentError, InvalidQuestionCountError
from quizgen.schemas.question import GenerateRequest, QuestionListResponse
from quizgen.services.generation_service import GenerationConfig, generate
from quizgen.services.presentation import shuffle_all

router = APIRouter(prefix="/questions", tags=["questions"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=QuestionListResponse)
def generate_questions(body: GenerateRequest, config: GenerationConfig = Depends(get_generation_config)):
    """Generate MCQs from raw text. 400 for short text or a count outside the allowed range."""
    try:
        questions = generate(body.text, body.question_count, config)
    except (InsufficientContentError, InvalidQuestionCountError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except GenerationFailure as e:
        logger.error("generate_questions failed: %s", e)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if settings.shuffle_options:
        questions = shuffle_all(questions)
    return QuestionListResponse(questions=questions, total=len(questions))
