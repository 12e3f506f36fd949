"""
Presentation-boundary helpers. Synthesized items always carry the correct option at index 0;
callers that display options in random order shuffle here and get correctAnswer remapped.
"""
import random

from quizgen.schemas.question import QuestionItem


def shuffle_options(item: QuestionItem, rng: random.Random | None = None) -> QuestionItem:
    """Return a copy with options permuted and correct_answer pointing at the same text."""
    rng = rng or random.Random()
    order = list(range(len(item.options)))
    rng.shuffle(order)
    return item.model_copy(update={
        "options": tuple(item.options[i] for i in order),
        "correct_answer": order.index(item.correct_answer),
    })


def shuffle_all(items: list[QuestionItem], rng: random.Random | None = None) -> list[QuestionItem]:
    rng = rng or random.Random()
    return [shuffle_options(item, rng) for item in items]
