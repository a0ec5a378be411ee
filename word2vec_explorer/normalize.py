"""Turn free-form model output into a validated ``RelatedWordSet``."""

from __future__ import annotations

import json
import math
import re
from typing import Any, List

from .errors import InvalidShape, MalformedResponse
from .logger import get_logger
from .models import RelatedWord, RelatedWordSet
from .prompts import EXPECTED_WORD_COUNT

MIN_EXPECTED_WORDS = 40

_FENCE_PATTERN = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)

logger = get_logger()


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON.
    raise ValueError(f"Non-standard JSON constant {name}")


def strip_fence(text: str) -> str:
    """Return the payload of a ```-fenced block, or ``text`` unchanged when unfenced."""
    match = _FENCE_PATTERN.match(text)
    if match is None:
        return text
    return match.group(2).strip()


def _is_number(value: Any) -> bool:
    # bool subclasses int but JSON true/false are not coordinates.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def _validate_item(index: int, item: Any) -> RelatedWord:
    if not isinstance(item, dict):
        raise InvalidShape(f"Item {index} is {type(item).__name__}, expected an object")
    word = item.get("word")
    if not isinstance(word, str):
        raise InvalidShape(f"Item {index} has a non-string 'word': {word!r}")
    for key in ("x", "y"):
        if not _is_number(item.get(key)):
            raise InvalidShape(f"Item {index} has a non-numeric '{key}': {item.get(key)!r}")
    return RelatedWord(word=word, x=item["x"], y=item["y"])


def normalize(raw_text: str) -> RelatedWordSet:
    """Parse and validate a model response into related words.

    The whole response is rejected when any element is invalid. Order is
    preserved exactly and nothing is deduplicated or clamped. A short result
    only logs a warning.
    """
    if not isinstance(raw_text, str):
        raise MalformedResponse(f"Expected response text, got {type(raw_text).__name__}")

    payload = strip_fence(raw_text.strip())
    try:
        parsed = json.loads(payload, parse_constant=_reject_constant)
    except ValueError as err:
        raise MalformedResponse(f"Response is not valid JSON: {err}") from err

    if not isinstance(parsed, list):
        raise InvalidShape(f"Expected a JSON array, got {type(parsed).__name__}")

    words: List[RelatedWord] = [_validate_item(i, item) for i, item in enumerate(parsed)]

    if len(words) < MIN_EXPECTED_WORDS:
        logger.warning(
            "Expected around %d words, but received %d. The model might not have "
            "fully adhered to the count request.",
            EXPECTED_WORD_COUNT,
            len(words),
        )
    return words
