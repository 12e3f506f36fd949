"""
Simplified generator used when the local pipeline fails or yields nothing:
one question per sentence, padded with a fixed general question.
"""
from quizgen.schemas.question import QuestionItem
from quizgen.services.chunking_service import sentence_texts
from quizgen.services.synthesis_service import FACT_QUESTION, truncate

SENTENCE_DISTRACTORS = (
    "This information is not mentioned in the document",
    "The document contradicts this statement",
    "This is only partially correct according to the document",
)

GENERAL_QUESTION = "Based on the document, what is the main focus of the content?"
GENERAL_OPTIONS = (
    "The document provides comprehensive information on the topic",
    "The document only covers basic introductory material",
    "The document focuses on unrelated topics",
    "The document contains contradictory information",
)


def generate_simple_questions(text: str, question_count: int) -> list[QuestionItem]:
    """Always returns exactly question_count items (question_count >= 0)."""
    questions: list[QuestionItem] = []
    for sentence in sentence_texts(" ".join(text.split()))[:question_count]:
        questions.append(QuestionItem(
            id=len(questions) + 1,
            question=FACT_QUESTION,
            options=[truncate(sentence), *SENTENCE_DISTRACTORS],
            correct_answer=0,
            explanation="This information is directly stated in the document.",
            difficulty="medium",
        ))
    while len(questions) < question_count:
        questions.append(QuestionItem(
            id=len(questions) + 1,
            question=GENERAL_QUESTION,
            options=GENERAL_OPTIONS,
            correct_answer=0,
            explanation="The document is designed to provide informative content on its subject matter.",
            difficulty="easy",
        ))
    return questions
