"""Pull an embedded JSON block out of LLM text and merge it into stored state."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json[ \t]*\r?\n(.*?)\r?\n[ \t]*```", re.DOTALL)
_ANY_FENCE = re.compile(r"```[^\n`]*\r?\n(.*?)\r?\n[ \t]*```", re.DOTALL)
_LAZY_BRACES = re.compile(r"\{.*?\}", re.DOTALL)
_EXCESS_BLANK_LINES = re.compile(r"\n\s*\n\s*\n")

BOILERPLATE_PHRASES: tuple[str, ...] = (
    "I'll format this as JSON for you:",
    "Here's the JSON representation:",
    "I've updated the JSON with your information:",
)

_decoder = json.JSONDecoder()


def _first_json_object(text: str) -> tuple[int, int] | None:
    """Return the ``(start, end)`` span of the first decodable JSON object."""
    start = text.find("{")
    while start != -1:
        try:
            _, end = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        return start, end
    return None


def find_json_block(response: str) -> str | None:
    """Locate the JSON payload in ``response``.

    Preference order: a fenced block labelled ``json``, any fenced block,
    then the first brace-delimited object.
    """
    for pattern in (_JSON_FENCE, _ANY_FENCE):
        match = pattern.search(response)
        if match:
            return match.group(1)

    span = _first_json_object(response)
    if span:
        return response[span[0] : span[1]]

    # Unbalanced or invalid braces: hand back the first brace pair so the
    # caller sees the parse failure.
    match = _LAZY_BRACES.search(response)
    return match.group(0) if match else None


def extract_structured_data(
    response: str,
    existing: dict[str, Any],
    schema: type[BaseModel],
) -> dict[str, Any]:
    """Merge the JSON embedded in ``response`` over ``existing``.

    The payload is validated against ``schema`` (a partial-update model that
    forbids unknown keys).  Only the keys present in the payload are merged;
    everything else in ``existing`` is preserved.

    Fail-soft: when there is no block, it does not parse, it is not an object
    or it fails validation, ``existing`` is returned unchanged.

    Args:
        response: Raw LLM response text.
        existing: Previously stored state.
        schema: Pydantic model describing the allowed keys.

    Returns:
        The merged state.
    """
    block = find_json_block(response)
    if block is None:
        return existing

    try:
        payload = json.loads(block)
    except json.JSONDecodeError:
        logger.warning("Ignoring unparseable JSON block in LLM response")
        return existing

    if not isinstance(payload, dict):
        logger.warning("Ignoring non-object JSON block (%s)", type(payload).__name__)
        return existing

    try:
        update = schema.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Rejected structured update: %s", exc)
        return existing

    return {**existing, **update.model_dump(by_alias=True, exclude_unset=True)}


def _strip_json_objects(text: str) -> str:
    span = _first_json_object(text)
    while span:
        text = text[: span[0]] + text[span[1] :]
        span = _first_json_object(text)
    return _LAZY_BRACES.sub("", text)


def clean_response(response: str) -> str:
    """Remove JSON blocks and formatting lead-ins so only prose remains."""
    cleaned = _JSON_FENCE.sub("", response)
    cleaned = _ANY_FENCE.sub("", cleaned)
    cleaned = _strip_json_objects(cleaned)
    for phrase in BOILERPLATE_PHRASES:
        cleaned = cleaned.replace(phrase, "")
    cleaned = _EXCESS_BLANK_LINES.sub("\n\n", cleaned)
    return cleaned.strip()
