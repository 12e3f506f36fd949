"""
Chunk analysis: key terms, concepts, factual sentences and a lexical difficulty label.
Pure functions, no cross-chunk state. Word lists and thresholds are fixed for output compatibility.
"""
import re
from dataclasses import dataclass
from typing import Iterable, Literal

from quizgen.services.chunking_service import Chunk

Difficulty = Literal["easy", "medium", "hard"]

MAX_KEY_TERMS = 5
MAX_CONCEPTS = 3
MAX_FACTS = 3
MIN_KEY_TERM_CHARS = 4  # keep terms longer than 3 chars
MIN_FACT_CHARS = 30

# Runs of capitalized words, e.g. "Supreme Court", "Photosynthesis".
CAPITALIZED_PHRASE_RE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")
CONCEPT_WORD_RE = re.compile(r"\b(concept|principle|theory|method|approach|strategy|technique)\b", re.IGNORECASE)
STATIVE_VERB_RE = re.compile(r"\b(is|are|was|were|has|have|contains|shows|indicates|demonstrates)\b", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

COMPLEXITY_INDICATORS = (
    re.compile(r"\b(however|nevertheless|furthermore|consequently|therefore)\b", re.IGNORECASE),
    re.compile(r"\b(analysis|synthesis|evaluation|comparison|contrast)\b", re.IGNORECASE),
    re.compile(r"\b(implies|suggests|indicates|demonstrates|establishes)\b", re.IGNORECASE),
)
HARD_THRESHOLD = 3
MEDIUM_THRESHOLD = 1


@dataclass(frozen=True)
class AnalyzedChunk:
    content: str
    key_terms: tuple[str, ...]
    concepts: tuple[str, ...]
    facts: tuple[str, ...]
    difficulty: Difficulty


def _dedupe(items: Iterable[str]) -> list[str]:
    """First-seen order preserved."""
    return list(dict.fromkeys(items))


def extract_key_terms(text: str) -> list[str]:
    terms = _dedupe(m.group() for m in CAPITALIZED_PHRASE_RE.finditer(text))
    return [t for t in terms if len(t) >= MIN_KEY_TERM_CHARS][:MAX_KEY_TERMS]


def extract_concepts(text: str) -> list[str]:
    """Concept meta-words first, then capitalized phrases."""
    found = [m.group() for m in CONCEPT_WORD_RE.finditer(text)]
    found.extend(m.group() for m in CAPITALIZED_PHRASE_RE.finditer(text))
    return _dedupe(found)[:MAX_CONCEPTS]


def extract_facts(text: str) -> list[str]:
    facts = []
    for part in _SENTENCE_SPLIT_RE.split(text):
        sentence = part.strip()
        if len(sentence) > MIN_FACT_CHARS and STATIVE_VERB_RE.search(sentence):
            facts.append(sentence)
            if len(facts) >= MAX_FACTS:
                break
    return facts


def complexity_score(text: str) -> int:
    return sum(len(pattern.findall(text)) for pattern in COMPLEXITY_INDICATORS)


def assess_difficulty(text: str) -> Difficulty:
    score = complexity_score(text)
    if score >= HARD_THRESHOLD:
        return "hard"
    if score >= MEDIUM_THRESHOLD:
        return "medium"
    return "easy"


def analyze_chunk(chunk: Chunk) -> AnalyzedChunk:
    text = chunk.content
    return AnalyzedChunk(
        content=text,
        key_terms=tuple(extract_key_terms(text)),
        concepts=tuple(extract_concepts(text)),
        facts=tuple(extract_facts(text)),
        difficulty=assess_difficulty(text),
    )


def analyze_chunks(chunks: Iterable[Chunk]) -> list[AnalyzedChunk]:
    return [analyze_chunk(c) for c in chunks]
