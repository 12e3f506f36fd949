"""
Count/difficulty balancing: reconcile synthesized items with the requested count.
Two selection strategies (config option balance_strategy):
  - truncate: first N in synthesis order.
  - difficulty_quota: 40% easy / 40% medium / 20% hard buckets, then backfilled in synthesis order.
Shortfall is topped up from random chunks, then with a fixed filler item. Output is always exactly N.
"""
import logging
import random
from collections import defaultdict
from typing import Sequence

from quizgen.config import BalanceStrategy
from quizgen.schemas.question import QuestionItem
from quizgen.services.analysis_service import AnalyzedChunk
from quizgen.services.synthesis_service import chunk_candidates, item_key

logger = logging.getLogger(__name__)

EASY_SHARE = 0.4
MEDIUM_SHARE = 0.4

FILLER_QUESTION = "Based on the document content, what is a key point mentioned?"
FILLER_OPTIONS = (
    "The document presents information relevant to its main subject",
    "The document does not contain any meaningful information",
    "The document focuses entirely on unrelated topics",
    "The document consists only of contradictory statements",
)


def difficulty_quotas(n: int) -> dict[str, int]:
    easy = int(n * EASY_SHARE)
    medium = int(n * MEDIUM_SHARE)
    return {"easy": easy, "medium": medium, "hard": n - easy - medium}


def select_by_difficulty_quota(items: Sequence[QuestionItem], n: int) -> list[QuestionItem]:
    """
    Bucket by difficulty, slice each bucket to its quota (easy, medium, hard order), then backfill any
    gap with the remaining items in synthesis order.
    """
    if n <= 0:
        return []
    quotas = difficulty_quotas(n)
    buckets: dict[str, list[QuestionItem]] = defaultdict(list)
    for item in items:
        buckets[item.difficulty].append(item)
    selected: list[QuestionItem] = []
    for level in ("easy", "medium", "hard"):
        selected.extend(buckets[level][: quotas[level]])
    if len(selected) < n:
        chosen = {id(i) for i in selected}
        leftovers = [i for i in items if id(i) not in chosen]
        selected.extend(leftovers[: n - len(selected)])
    return selected[:n]


def top_up_from_chunks(
    items: Sequence[QuestionItem],
    n: int,
    analyzed_chunks: Sequence[AnalyzedChunk],
    rng: random.Random,
) -> list[QuestionItem]:
    """
    Draw one new item at a time from a random chunk. A chunk that yields nothing new is dropped from the
    draw; the loop ends when n is reached or every chunk is exhausted.
    """
    out = list(items)
    seen = {item_key(i) for i in out}
    live = list(range(len(analyzed_chunks)))
    while len(out) < n and live:
        idx = rng.choice(live)
        new = next((c for c in chunk_candidates(analyzed_chunks[idx], rng) if item_key(c) not in seen), None)
        if new is None:
            live.remove(idx)
            continue
        seen.add(item_key(new))
        out.append(new)
    return out


def filler_item(item_id: int = 1) -> QuestionItem:
    return QuestionItem(
        id=item_id,
        question=FILLER_QUESTION,
        options=FILLER_OPTIONS,
        correct_answer=0,
        explanation="The document is written to inform the reader about its main subject.",
        difficulty="easy",
    )


def balance(
    items: Sequence[QuestionItem],
    requested_count: int,
    analyzed_chunks: Sequence[AnalyzedChunk] = (),
    rng: random.Random | None = None,
    strategy: BalanceStrategy = "truncate",
) -> list[QuestionItem]:
    """Return exactly requested_count items with ids renumbered 1..N."""
    rng = rng or random.Random()
    if strategy == "difficulty_quota":
        selected = select_by_difficulty_quota(items, requested_count)
    elif strategy == "truncate":
        selected = list(items[:requested_count])
    else:
        raise ValueError(f"Unknown balance strategy: {strategy!r}")

    if len(selected) < requested_count and analyzed_chunks:
        before = len(selected)
        selected = top_up_from_chunks(selected, requested_count, analyzed_chunks, rng)
        logger.info("balance: topped up %s item(s) from chunks", len(selected) - before)
    if len(selected) < requested_count:
        missing = requested_count - len(selected)
        logger.info("balance: padding with %s filler item(s)", missing)
        selected.extend(filler_item() for _ in range(missing))
    return [item.model_copy(update={"id": i}) for i, item in enumerate(selected, start=1)]
