"""Matcher rules for pulling action-item candidates out of assistant text.

Each rule is a pure function from text to candidate strings.  Rules are
independent and may overlap: the same line can be matched by several rules
and show up more than once before de-duplication.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

ACTION_VERBS: tuple[str, ...] = (
    "Create",
    "Develop",
    "Complete",
    "Research",
    "File",
    "Obtain",
    "Set up",
    "Choose",
    "Register",
    "Apply for",
    "Draft",
    "Open",
    "Plan",
    "Consider",
    "Implement",
    "Select",
    "Ensure",
    "Conduct",
    "Define",
    "Establish",
    "Identify",
    "Review",
    "Analyze",
    "Prepare",
    "Submit",
    "Determine",
    "Evaluate",
)

# Verbs that introduce a "Verb subject: detail" line
EXPLICIT_ACTION_VERBS: tuple[str, ...] = (
    "Complete",
    "Submit",
    "Apply",
    "Schedule",
    "Register",
    "Create",
    "Open",
    "Follow",
    "Review",
    "Prepare",
    "Develop",
    "Analyze",
)

OBLIGATION_PHRASES: tuple[str, ...] = (
    "To",
    "You should",
    "You need to",
    "You must",
    "It's important to",
)

# Paragraph openers used by the cheap detection check (subset of ACTION_VERBS)
PARAGRAPH_VERBS: tuple[str, ...] = ACTION_VERBS[:15]


def _alternation(words: tuple[str, ...]) -> str:
    return "|".join(re.escape(w) for w in words)


_NUMBERED = re.compile(r"(?:^|\n)\s*(\d+)[.)]\s+([^\n]+)")
_BULLETED = re.compile(r"(?:^|\n)\s*[-•*]\s+([^\n]+)")
_SECTION_HEADER = re.compile(r"(?:^|\n)([A-Z][^:]+):\s*([^\n]+)")
_ACTION_MARKER = re.compile(r"\b(Action|Task|To-Do):\s+([^\n.]+\.*)", re.IGNORECASE)
_STEP_MARKER = re.compile(r"\b(?:Step|Phase|Stage|Part)\s+\d+:?\s*([^\n]+)", re.IGNORECASE)
_PREFIXED = re.compile(r"(?:Action|Task|Goal|Objective|Activity):\s+([^\n]+)", re.IGNORECASE)
_ACTION_VERB = re.compile(
    rf"(?:^|\n)\s*({_alternation(ACTION_VERBS)})([^:]+)", re.IGNORECASE
)
_EXPLICIT_ACTION = re.compile(
    rf"(?:^|\n).*?({_alternation(EXPLICIT_ACTION_VERBS)})([^:]*?):\s*([^\n]+)",
    re.IGNORECASE,
)
_OBLIGATION = re.compile(
    rf"(?:^|\n)(?:{_alternation(OBLIGATION_PHRASES)})\s+([^,.\n]+\s+[^,.\n]+[^.]+)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ExtractionRule:
    """A named matcher: ``apply(text)`` returns candidates in source order."""

    name: str
    apply: Callable[[str], list[str]]


def match_numbered(text: str) -> list[str]:
    """``1. Do this`` / ``1) Do this``."""
    return [m.group(2).strip() for m in _NUMBERED.finditer(text)]


def match_bulleted(text: str) -> list[str]:
    """``- Do this``, ``* Do this`` or ``• Do this``."""
    return [m.group(1).strip() for m in _BULLETED.finditer(text)]


def match_section_headers(text: str) -> list[str]:
    """``Research and Planning: talk to customers`` kept as header plus content."""
    return [
        f"{m.group(1).strip()}: {m.group(2).strip()}" for m in _SECTION_HEADER.finditer(text)
    ]


def match_action_markers(text: str) -> list[str]:
    """``Action:``, ``Task:`` and ``To-Do:`` markers up to the first period."""
    return [m.group(2).strip() for m in _ACTION_MARKER.finditer(text)]


def match_step_markers(text: str) -> list[str]:
    """``Step 1: ...``, ``Phase 2 ...``, ``Stage 3: ...``, ``Part 4: ...``."""
    return [m.group(1).strip() for m in _STEP_MARKER.finditer(text)]


def match_prefixed(text: str) -> list[str]:
    """``Goal:``, ``Objective:``, ``Activity:`` style prefixes anywhere in a line."""
    return [m.group(1).strip() for m in _PREFIXED.finditer(text)]


def match_action_verbs(text: str) -> list[str]:
    """Lines opening with a business action verb, up to the next colon."""
    results: list[str] = []
    for m in _ACTION_VERB.finditer(text):
        action_text = m.group(0).strip()
        if len(action_text) > 10:
            results.append(action_text)
    return results


def match_explicit_actions(text: str) -> list[str]:
    """``Prepare your budget: list every fixed cost`` -> verb, subject and detail."""
    return [
        f"{m.group(1)}{m.group(2)}: {m.group(3).strip()}"
        for m in _EXPLICIT_ACTION.finditer(text)
    ]


def match_obligations(text: str) -> list[str]:
    """``You should ...`` / ``You need to ...`` and similar process language."""
    results: list[str] = []
    for m in _OBLIGATION.finditer(text):
        item = m.group(1).strip()
        if len(item) > 15:
            results.append(item)
    return results


RULES: list[ExtractionRule] = [
    ExtractionRule("numbered_list", match_numbered),
    ExtractionRule("bulleted_list", match_bulleted),
    ExtractionRule("section_header", match_section_headers),
    ExtractionRule("action_marker", match_action_markers),
    ExtractionRule("step_marker", match_step_markers),
    ExtractionRule("prefixed", match_prefixed),
    ExtractionRule("action_verb", match_action_verbs),
    ExtractionRule("explicit_action", match_explicit_actions),
    ExtractionRule("obligation", match_obligations),
]


# Cheap detection checks: any single hit means "likely contains action items"
DETECTION_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(?:^|\n)\s*\d+[.)]\s+[^\n]+"),
    re.compile(r"(?:^|\n)\s*[-•*]\s+[^\n]+"),
    re.compile(r"(?:^|\n)([A-Z][^:]+):\s*([^\n]+)"),
    re.compile(r"\b(Action|Task|To-Do):\s+([^\n.]+\.*)", re.IGNORECASE),
    re.compile(r"\b(?:Step|Phase|Stage|Part)\s+\d+:?"),
    re.compile(r"here are (some|the) (steps|actions|tasks|things to do):", re.IGNORECASE),
    re.compile(r"follow these (steps|procedures|guidelines|general steps)", re.IGNORECASE),
    re.compile(r"step-(by-)?step (guide|process|procedure)", re.IGNORECASE),
    re.compile(r"steps to (guide you|follow|complete|implement)", re.IGNORECASE),
    re.compile(r"you (need|should|must|have to) (complete|do|implement|follow)", re.IGNORECASE),
]

PARAGRAPH_VERB_PATTERN = re.compile(rf"^(?:{_alternation(PARAGRAPH_VERBS)})", re.IGNORECASE)
