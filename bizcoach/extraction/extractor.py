"""Heuristic extraction of action items from assistant chat messages."""

from __future__ import annotations

import re

from bizcoach.extraction.models import ChatMessage
from bizcoach.extraction.rules import (
    DETECTION_PATTERNS,
    PARAGRAPH_VERB_PATTERN,
    RULES,
    ExtractionRule,
)

MAX_ITEM_LENGTH = 200

_SINGLE_LETTER = re.compile(r"^[A-Za-z]$")
_TRAILING_PUNCTUATION = re.compile(r"[,;:]$")


def _is_candidate(item: str) -> bool:
    return (
        len(item) > 0
        and len(item) < MAX_ITEM_LENGTH
        and not _SINGLE_LETTER.match(item)
        and len(item.split(" ")) > 1
    )


def clean_candidates(candidates: list[str]) -> list[str]:
    """De-duplicate, filter and tidy raw rule output.

    Order of first appearance is kept.  Trailing punctuation is stripped
    after de-duplication, so ``"Foo bar:"`` and ``"Foo bar"`` can both survive.
    """
    unique = list(dict.fromkeys(candidates))
    return [_TRAILING_PUNCTUATION.sub("", item).strip() for item in unique if _is_candidate(item)]


def run_rules(text: str, rules: list[ExtractionRule] | None = None) -> list[str]:
    """Apply every rule in order and concatenate their raw candidates."""
    candidates: list[str] = []
    for rule in rules if rules is not None else RULES:
        candidates.extend(rule.apply(text))
    return candidates


def extract_action_items(message: ChatMessage) -> list[str]:
    """Extract candidate action items from a chat message.

    Only assistant messages are processed; any other role yields an empty
    list.  This is a best-effort classifier, not a parser: the output is in
    rule order, not necessarily source order.

    Args:
        message: The chat message to scan.

    Returns:
        Cleaned action item strings.
    """
    if message.role != "assistant":
        return []
    return clean_candidates(run_rules(message.content))


def extract_action_items_from_text(text: str) -> list[str]:
    """Extract action items from plain text, treating it as assistant output."""
    return extract_action_items(ChatMessage(role="assistant", content=text))


def message_contains_action_items(message: ChatMessage) -> bool:
    """Return True if an assistant message likely contains action items.

    Cheaper than :func:`extract_action_items`; used to decide whether the
    full extractor is worth running.
    """
    if message.role != "assistant":
        return False

    content = message.content
    if any(p.search(content) for p in DETECTION_PATTERNS):
        return True

    action_paragraphs = [
        para for para in content.split("\n\n") if PARAGRAPH_VERB_PATTERN.match(para.strip())
    ]
    return len(action_paragraphs) >= 2
