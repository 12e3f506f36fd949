"""
Unit tests for chunk analysis: key terms, concepts, facts, difficulty scoring.
"""
import pytest

from quizgen.services.analysis_service import (
    analyze_chunk,
    assess_difficulty,
    complexity_score,
    extract_concepts,
    extract_facts,
    extract_key_terms,
)
from quizgen.services.chunking_service import Chunk


def _chunk(text: str) -> Chunk:
    return Chunk(text, 0, len(text))


def test_extract_key_terms_capitalized_runs_deduped():
    text = "The Supreme Court met in Delhi. Parliament debated. The Supreme Court ruled. Sun rose."
    # "Sun" is shorter than 4 chars
    assert extract_key_terms(text) == ["The Supreme Court", "Delhi", "Parliament"]


def test_extract_key_terms_capped_at_five():
    text = "Alpha met Bravo, Charlie, Delta, Echoes, Foxtrot and Golfer."
    assert extract_key_terms(text) == ["Alpha", "Bravo", "Charlie", "Delta", "Echoes"]


def test_extract_concepts_meta_words_first():
    text = "Newton described a theory of motion; the method relied on Observation."
    assert extract_concepts(text) == ["theory", "method", "Newton"]


def test_extract_facts_requires_length_and_stative_verb():
    text = (
        "Water is short. "
        "Water is essential for every known form of life on Earth. "
        "Rivers flow downhill toward the sea over long distances. "
        "The ocean contains most of the water on the planet."
    )
    assert extract_facts(text) == [
        "Water is essential for every known form of life on Earth",
        "The ocean contains most of the water on the planet",
    ]


def test_extract_facts_capped_at_three():
    sentence = "This sentence is long enough to be considered a fact"
    assert len(extract_facts(". ".join([sentence] * 5))) == 3


@pytest.mark.parametrize(
    "text,expected",
    [
        ("plain words without any indicator at all", "easy"),
        ("however the result changed", "medium"),
        ("however, the analysis of the data", "medium"),
        ("however the analysis implies a change", "hard"),
        ("therefore, therefore, therefore and more", "hard"),
    ],
)
def test_assess_difficulty_thresholds(text, expected):
    """>=3 indicator matches is hard, 1-2 medium, 0 easy."""
    assert assess_difficulty(text) == expected


def test_complexity_score_counts_every_occurrence_case_insensitive():
    assert complexity_score("However, HOWEVER, comparison and Contrast suggests") == 5


def test_analyze_chunk_is_idempotent():
    chunk = _chunk(
        "The Calvin Cycle is a concept in biology. However, the method demonstrates carbon fixation in plants."
    )
    first = analyze_chunk(chunk)
    second = analyze_chunk(chunk)
    assert first == second
    assert first.key_terms == ("The Calvin Cycle", "However")
    assert first.concepts[:2] == ("concept", "method")
    assert first.difficulty == "medium"
