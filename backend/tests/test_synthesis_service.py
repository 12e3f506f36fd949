"""
Unit tests for item synthesis: per-chunk quotas, candidate order, seeded distractors, dedupe.
"""
import random

from quizgen.services.analysis_service import AnalyzedChunk
from quizgen.services.synthesis_service import (
    CONCEPT_FALLBACK_ANSWER,
    DISTRACTOR_POOLS,
    FACT_QUESTION,
    GENERIC_DISTRACTORS,
    GENERIC_QUESTION,
    INFERENCE_ANSWER,
    INFERENCE_QUESTION,
    chunk_candidates,
    chunk_quotas,
    concept_answer,
    item_key,
    synthesize,
    truncate,
)

RICH_CONTENT = (
    "Photosynthesis is the process that converts light into chemical energy. "
    "The Calvin Cycle fixes carbon dioxide in the stroma of the chloroplast"
)


def _rich_chunk(difficulty="medium") -> AnalyzedChunk:
    return AnalyzedChunk(
        content=RICH_CONTENT,
        key_terms=("Photosynthesis", "The Calvin Cycle"),
        concepts=("Photosynthesis",),
        facts=("Photosynthesis is the process that converts light into chemical energy",),
        difficulty=difficulty,
    )


def _plain_chunk(content: str) -> AnalyzedChunk:
    return AnalyzedChunk(content=content, key_terms=(), concepts=(), facts=(), difficulty="easy")


def test_chunk_quotas_split_remainder_to_first_chunks():
    assert chunk_quotas(3, 10) == [4, 3, 3]
    assert chunk_quotas(5, 5) == [1, 1, 1, 1, 1]


def test_chunk_quotas_more_chunks_than_requested():
    """Only the first `requested` chunks get a quota."""
    assert chunk_quotas(12, 5) == [1, 1, 1, 1, 1]


def test_chunk_quotas_degenerate():
    assert chunk_quotas(0, 5) == []
    assert chunk_quotas(3, 0) == []


def test_truncate_adds_ellipsis_only_when_cut():
    assert truncate("  short  ") == "short"
    assert truncate("a" * 120) == "a" * 100 + "..."


def test_concept_answer_uses_first_mentioning_sentence():
    assert concept_answer("calvin cycle", RICH_CONTENT).startswith("The Calvin Cycle fixes carbon")
    assert concept_answer("mitochondria", RICH_CONTENT) == CONCEPT_FALLBACK_ANSWER


def test_chunk_candidates_priority_order():
    """concept, fact, key term, then one generic item per sentence; no inference below hard."""
    items = list(chunk_candidates(_rich_chunk(), random.Random(0)))
    questions = [i.question for i in items]
    assert "Photosynthesis" in questions[0]
    assert questions[1] == FACT_QUESTION
    assert questions[2] == 'What does the document indicate about "Photosynthesis"?'
    assert questions[3:] == [GENERIC_QUESTION, GENERIC_QUESTION]
    assert INFERENCE_QUESTION not in questions


def test_chunk_candidates_hard_chunk_adds_inference():
    items = list(chunk_candidates(_rich_chunk("hard"), random.Random(0)))
    inference = [i for i in items if i.question == INFERENCE_QUESTION]
    assert len(inference) == 1
    assert inference[0].difficulty == "hard"
    assert inference[0].options[0] == INFERENCE_ANSWER
    assert set(inference[0].options[1:]) == set(DISTRACTOR_POOLS["inference"])


def test_items_have_correct_answer_first():
    for item in chunk_candidates(_rich_chunk("hard"), random.Random(3)):
        assert len(item.options) == 4
        assert item.correct_answer == 0


def test_generic_item_options():
    content = "the small river runs past the old mill. children walk along the bank every morning"
    items = list(chunk_candidates(_plain_chunk(content), random.Random(0)))
    assert [i.options[0] for i in items] == [
        "the small river runs past the old mill",
        "children walk along the bank every morning",
    ]
    assert all(i.options[1:] == GENERIC_DISTRACTORS for i in items)
    assert all(i.difficulty == "easy" for i in items)


def test_synthesize_same_seed_same_output():
    chunks = [_rich_chunk(), _rich_chunk("hard")]
    first = synthesize(chunks, 6, random.Random(42))
    second = synthesize(chunks, 6, random.Random(42))
    assert first == second


def test_synthesize_respects_quota_and_numbering():
    chunks = [
        _rich_chunk(),
        _plain_chunk("the small river runs past the old mill. children walk along the bank every morning"),
    ]
    items = synthesize(chunks, 4, random.Random(1))
    assert [i.id for i in items] == [1, 2, 3, 4]
    # quota 2 each: concept + fact from the rich chunk, two generic items from the plain chunk
    assert items[1].question == FACT_QUESTION
    assert [i.question for i in items[2:]] == [GENERIC_QUESTION, GENERIC_QUESTION]


def test_synthesize_skips_duplicates_from_overlapping_chunks():
    """Identical chunks can't contribute the same question twice."""
    chunks = [_rich_chunk(), _rich_chunk()]
    items = synthesize(chunks, 6, random.Random(7))
    keys = [item_key(i) for i in items]
    assert len(keys) == len(set(keys))


def test_synthesize_may_return_fewer_items():
    items = synthesize([_plain_chunk("one sentence that is long enough to keep")], 5, random.Random(0))
    assert len(items) == 1


def test_synthesize_no_chunks():
    assert synthesize([], 5) == []
