"""
Chunking service: sentence-aligned sliding windows with overlap.
Adjacent windows share sentences so one sentence can feed several candidate questions.
"""
import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Defaults
DEFAULT_WINDOW = 5  # sentences per chunk
DEFAULT_STRIDE = 3  # sentences between chunk starts
DEFAULT_MIN_SENTENCE_CHARS = 20
DEFAULT_MIN_CHUNK_CHARS = 100

SENTENCE_JOINER = ". "

# A sentence is a run of text between sentence-ending punctuation.
_SENTENCE_RE = re.compile(r"[^.!?]+")


@dataclass(frozen=True)
class Chunk:
    content: str
    start_index: int
    end_index: int


@dataclass(frozen=True)
class Sentence:
    text: str
    start: int
    end: int


def split_sentences(text: str, min_chars: int = DEFAULT_MIN_SENTENCE_CHARS) -> list[Sentence]:
    """
    Split on runs of . ! ? and keep stripped fragments longer than min_chars.
    Offsets point into text and exclude surrounding whitespace.
    """
    if not text:
        return []
    out: list[Sentence] = []
    for m in _SENTENCE_RE.finditer(text):
        raw = m.group()
        stripped = raw.strip()
        if len(stripped) <= min_chars:
            continue
        lead = len(raw) - len(raw.lstrip())
        start = m.start() + lead
        out.append(Sentence(stripped, start, start + len(stripped)))
    return out


def sentence_texts(text: str, min_chars: int = DEFAULT_MIN_SENTENCE_CHARS) -> list[str]:
    return [s.text for s in split_sentences(text, min_chars)]


def chunk_document(
    text: str,
    window: int = DEFAULT_WINDOW,
    stride: int = DEFAULT_STRIDE,
    min_sentence_chars: int = DEFAULT_MIN_SENTENCE_CHARS,
    min_chunk_chars: int = DEFAULT_MIN_CHUNK_CHARS,
) -> list[Chunk]:
    """
    Build overlapping chunks of `window` consecutive sentences, one starting every `stride` sentences.
    Chunks whose joined text is not longer than min_chunk_chars are dropped. Empty input gives [].
    """
    sentences = split_sentences(text, min_sentence_chars)
    if not sentences:
        return []
    chunks: list[Chunk] = []
    for i in range(0, len(sentences), stride):
        group = sentences[i : i + window]
        content = SENTENCE_JOINER.join(s.text for s in group).strip()
        if len(content) > min_chunk_chars:
            chunks.append(Chunk(content, group[0].start, group[-1].end))
    logger.debug("chunk_document: sentences=%s chunks=%s", len(sentences), len(chunks))
    return chunks
