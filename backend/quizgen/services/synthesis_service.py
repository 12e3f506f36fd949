"""
Item synthesis: turn analyzed chunks into templated MCQs.
Each chunk offers candidates in a fixed order (concept, fact, key term, inference, then one generic item per
sentence) and contributes its quota of them. The correct option is always placed first (correctAnswer=0);
shuffling for display happens at the presentation boundary, never here.
Distractor picks for concept/fact/inference items come from the injected random.Random, the only source
of run-to-run variation; seed it for reproducible output.
"""
import itertools
import logging
import random
import re
from typing import Iterable, Iterator

from quizgen.schemas.question import QuestionItem
from quizgen.services.analysis_service import AnalyzedChunk
from quizgen.services.chunking_service import sentence_texts

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

EXCERPT_CHARS = 100
EXPLANATION_CONTEXT_CHARS = 150
DISTRACTORS_PER_ITEM = 3

DISTRACTOR_POOLS: dict[str, tuple[str, ...]] = {
    "concept": (
        "A concept that sounds related but is not mentioned in the document",
        "A general idea that doesn't specifically relate to the content",
        "A misconception that might arise from superficial reading",
    ),
    "fact": (
        "A statement that sounds factual but contradicts the document",
        "Information that is partially correct but missing key details",
        "A fact from a different context that doesn't apply here",
    ),
    "inference": (
        "A conclusion that goes beyond what the evidence supports",
        "An assumption that isn't backed by the provided information",
        "A logical fallacy that might seem reasonable but is incorrect",
    ),
}

GENERIC_DISTRACTORS = (
    "This information is not found in the document",
    "The document contradicts this statement",
    "This statement is unrelated to the document's content",
)

CONCEPT_FALLBACK_ANSWER = "A key concept that is central to understanding the document's main theme"
INFERENCE_ANSWER = "Based on the evidence presented, this represents a logical conclusion from the given information"

FACT_QUESTION = "What does the document state about this topic?"
INFERENCE_QUESTION = "Based on the information provided, what can be inferred?"
GENERIC_QUESTION = "Which of the following statements is taken from the document?"


def truncate(text: str, limit: int = EXCERPT_CHARS) -> str:
    text = text.strip()
    return text[:limit] + ("..." if len(text) > limit else "")


def item_key(item: QuestionItem) -> tuple[str, str]:
    """Identity used to avoid emitting the same question twice."""
    return (item.question, item.correct_option)


def sample_distractors(category: str, rng: random.Random) -> list[str]:
    return rng.sample(DISTRACTOR_POOLS[category], DISTRACTORS_PER_ITEM)


def key_term_distractors(term: str) -> list[str]:
    return [
        f'"{term}" is not mentioned anywhere in the document',
        f'"{term}" appears only in passing and is not significant',
        f'"{term}" refers to a topic unrelated to the document',
    ]


def concept_answer(concept: str, content: str) -> str:
    """First sentence mentioning the concept, truncated; fixed phrase if none does."""
    needle = concept.lower()
    for part in _SENTENCE_SPLIT_RE.split(content):
        if needle in part.lower():
            return truncate(part)
    return CONCEPT_FALLBACK_ANSWER


def concept_item(chunk: AnalyzedChunk, rng: random.Random, item_id: int = 1) -> QuestionItem:
    concept = chunk.concepts[0]
    return QuestionItem(
        id=item_id,
        question=f'According to the document, what is the main concept related to "{concept}"?',
        options=[concept_answer(concept, chunk.content), *sample_distractors("concept", rng)],
        correct_answer=0,
        explanation=f'This concept is explained in the document: "{chunk.content[:EXPLANATION_CONTEXT_CHARS]}..."',
        difficulty=chunk.difficulty,
    )


def fact_item(chunk: AnalyzedChunk, rng: random.Random, item_id: int = 1) -> QuestionItem:
    return QuestionItem(
        id=item_id,
        question=FACT_QUESTION,
        options=[chunk.facts[0], *sample_distractors("fact", rng)],
        correct_answer=0,
        explanation="This information is directly stated in the document.",
        difficulty=chunk.difficulty,
    )


def key_term_item(chunk: AnalyzedChunk, item_id: int = 1) -> QuestionItem:
    term = chunk.key_terms[0]
    return QuestionItem(
        id=item_id,
        question=f'What does the document indicate about "{term}"?',
        options=[f'"{term}" is a significant term discussed in the document', *key_term_distractors(term)],
        correct_answer=0,
        explanation=f'"{term}" is mentioned in the document: "{chunk.content[:EXPLANATION_CONTEXT_CHARS]}..."',
        difficulty=chunk.difficulty,
    )


def inference_item(rng: random.Random, item_id: int = 1) -> QuestionItem:
    return QuestionItem(
        id=item_id,
        question=INFERENCE_QUESTION,
        options=[INFERENCE_ANSWER, *sample_distractors("inference", rng)],
        correct_answer=0,
        explanation="This inference can be drawn from the context provided in the document.",
        difficulty="hard",
    )


def generic_item(excerpt: str, difficulty: str, item_id: int = 1) -> QuestionItem:
    return QuestionItem(
        id=item_id,
        question=GENERIC_QUESTION,
        options=[truncate(excerpt), *GENERIC_DISTRACTORS],
        correct_answer=0,
        explanation="This statement is taken directly from the document.",
        difficulty=difficulty,
    )


def chunk_candidates(chunk: AnalyzedChunk, rng: random.Random) -> Iterator[QuestionItem]:
    """
    Lazily yield every item a chunk can produce, in priority order. Lazy so that distractor sampling
    only consumes randomness for items actually taken.
    """
    if chunk.concepts:
        yield concept_item(chunk, rng)
    if chunk.facts:
        yield fact_item(chunk, rng)
    if chunk.key_terms:
        yield key_term_item(chunk)
    if chunk.difficulty == "hard":
        yield inference_item(rng)
    for sentence in sentence_texts(chunk.content):
        yield generic_item(sentence, chunk.difficulty)


def chunk_quotas(num_chunks: int, requested_count: int) -> list[int]:
    """
    Items per chunk: requested // k each (k = min(chunks, requested)), one extra for the first
    (requested - base * k) chunks. Chunks beyond k get no quota.
    """
    if num_chunks <= 0 or requested_count <= 0:
        return []
    k = min(num_chunks, requested_count)
    base = requested_count // k
    remainder = requested_count - base * k
    return [base + 1 if i < remainder else base for i in range(k)]


def synthesize(
    analyzed_chunks: Iterable[AnalyzedChunk],
    requested_count: int,
    rng: random.Random | None = None,
) -> list[QuestionItem]:
    """
    Produce up to requested_count items, each chunk contributing its quota. Candidates already emitted by
    an overlapping chunk are skipped. May return fewer items when chunks run out of candidates.
    """
    rng = rng or random.Random()
    chunks = list(analyzed_chunks)
    items: list[QuestionItem] = []
    seen: set[tuple[str, str]] = set()
    for chunk, quota in zip(chunks, chunk_quotas(len(chunks), requested_count)):
        fresh = (c for c in chunk_candidates(chunk, rng) if item_key(c) not in seen)
        for candidate in itertools.islice(fresh, quota):
            seen.add(item_key(candidate))
            items.append(candidate.model_copy(update={"id": len(items) + 1}))
        if len(items) >= requested_count:
            break
    logger.debug("synthesize: chunks=%s requested=%s items=%s", len(chunks), requested_count, len(items))
    return items
