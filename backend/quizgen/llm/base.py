"""
Remote backend interface: complete(prompt) -> raw model text.
Responses are expected as {"questions": [QuestionItem, ...]}; parse_questions_json normalizes and validates them.
"""
import json
import logging
from typing import Protocol

import json_repair
from pydantic import ValidationError

from quizgen.schemas.question import OPTION_COUNT, QuestionItem

logger = logging.getLogger(__name__)

_LETTERS = "ABCD"


class QuestionBackend(Protocol):
    """A remote text-generation provider."""

    name: str

    def complete(self, prompt: str) -> str:
        """Send the prompt, return the raw response text. Raises on network/API errors."""
        ...


def strip_json_fences(text: str) -> str:
    """Remove markdown code fences and leading/trailing non-JSON around the object."""
    t = text.strip()
    if t.startswith("```"):
        lines = t.split("\n")
        if lines[0].strip().startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        t = "\n".join(lines)
    start = t.find("{")
    end = t.rfind("}")
    if start != -1 and end != -1 and end > start:
        t = t[start : end + 1]
    return t.strip()


def _load_json(raw: str):
    text = strip_json_fences(raw)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.info("Question JSON invalid (%s); attempting repair", e)
    data = json_repair.loads(text)
    return data if data not in ("", None) else None


def _normalize_options(options) -> list[str]:
    if isinstance(options, dict):
        return [str(options.get(k, "")) for k in _LETTERS]
    if isinstance(options, list):
        return [str(o.get("text", "") if isinstance(o, dict) else o) for o in options]
    return []


def _normalize_correct(value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    s = str(value if value is not None else "0").strip().upper()
    if s in tuple(_LETTERS):
        return _LETTERS.index(s)
    try:
        return int(s)
    except ValueError:
        return -1


def parse_questions_json(raw: str) -> list[QuestionItem]:
    """
    Parse a remote response into QuestionItems. Accepts {"questions": [...]} or a bare list,
    options as a list or an A-D dict, correctAnswer as an index or a letter.
    Items that fail validation (e.g. not exactly 4 options) are dropped. Returns [] on unusable input.
    """
    if not raw or not raw.strip():
        logger.warning("Question JSON parse: empty raw response")
        return []
    data = _load_json(raw)
    items = data.get("questions") if isinstance(data, dict) else (data if isinstance(data, list) else [])
    if not isinstance(items, list):
        return []
    out: list[QuestionItem] = []
    for m in items:
        if not isinstance(m, dict):
            continue
        options = _normalize_options(m.get("options"))
        if len(options) != OPTION_COUNT:
            logger.info("Dropping remote question with %s options", len(options))
            continue
        difficulty = str(m.get("difficulty") or "medium").strip().lower()
        if difficulty not in ("easy", "medium", "hard"):
            difficulty = "medium"
        try:
            out.append(QuestionItem(
                id=len(out) + 1,
                question=str(m.get("question") or ""),
                options=options,
                correct_answer=_normalize_correct(m.get("correctAnswer", m.get("correct_answer", 0))),
                explanation=str(m.get("explanation") or ""),
                difficulty=difficulty,
            ))
        except ValidationError as e:
            logger.info("Dropping invalid remote question: %s", e.errors()[0].get("msg", e))
    return out
