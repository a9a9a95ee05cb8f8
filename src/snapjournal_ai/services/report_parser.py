"""Parse a model's theme-analysis reply into a ThemeReport.

The model is asked for three labeled sections:

    PATTERNS:
    - <title>: <description>
    INSIGHTS:
    - <insight>
    MOODS:
    - <mood>: <percentage>

A reply that is a JSON object with ``patterns`` / ``insights`` / ``moods``
keys is taken as-is; anything else goes through the section slicer.
Mood percentages above 100 are clamped; negative or unreadable ones are dropped.
"""

import json
import math
import uuid
from typing import Any

from snapjournal_ai.entities import ThemePattern, ThemeReport
from snapjournal_ai.logging_config import get_logger
from snapjournal_ai.prompts import INSIGHTS_LABEL, MOODS_LABEL, PATTERNS_LABEL

logger = get_logger(__name__)

SECTION_LABELS = (PATTERNS_LABEL, INSIGHTS_LABEL, MOODS_LABEL)
BULLET = "- "
DEFAULT_PATTERN_STRENGTH = 0.8


def parse_theme_reply(text: str) -> ThemeReport:
    """Parse a theme-analysis reply.

    Args:
        text: The model's reply

    Returns:
        ThemeReport; empty if nothing could be recognised
    """
    structured = _parse_structured(text)
    if structured is not None:
        return structured

    return ThemeReport(
        patterns=parse_patterns(extract_section(text, PATTERNS_LABEL)),
        insights=parse_insights(extract_section(text, INSIGHTS_LABEL)),
        mood_trends=parse_moods(extract_section(text, MOODS_LABEL)),
    )


def extract_section(text: str, label: str) -> str:
    """Return the text between the first occurrence of label and the next label.

    Any label counts as a terminator, including a repeat of the same one.

    Returns:
        The section body, or "" if the label is absent
    """
    start = text.find(label)
    if start == -1:
        return ""
    body_start = start + len(label)

    end = len(text)
    for other in SECTION_LABELS:
        position = text.find(other, body_start)
        if position != -1:
            end = min(end, position)
    return text[body_start:end]


def _bullet_items(section: str) -> list[str]:
    items = []
    for line in section.splitlines():
        line = line.strip()
        if line.startswith(BULLET):
            items.append(line[len(BULLET):].strip())
    return items


def parse_patterns(section: str) -> list[ThemePattern]:
    patterns = []
    for item in _bullet_items(section):
        title, sep, description = item.partition(":")
        title = title.strip()
        if not sep or not title:
            logger.warning("Skipping malformed pattern line: %r", item)
            continue
        patterns.append(new_pattern(title, description.strip()))
    return patterns


def parse_insights(section: str) -> list[str]:
    return [item for item in _bullet_items(section) if item]


def parse_moods(section: str) -> dict[str, float]:
    moods: dict[str, float] = {}
    for item in _bullet_items(section):
        label, sep, value = item.partition(":")
        label = label.strip()
        if not sep or not label:
            logger.warning("Skipping malformed mood line: %r", item)
            continue
        fraction = percentage_to_fraction(value)
        if fraction is None:
            logger.warning("Skipping mood %r with unusable value %r", label, value.strip())
            continue
        moods.setdefault(label, fraction)
    return moods


def percentage_to_fraction(value: Any) -> float | None:
    """Convert a percentage ("70", "70%", 70) to a fraction in [0, 1].

    Returns:
        The fraction, clamped to 1.0, or None for negative or unparseable values
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or number < 0:
        return None
    return min(number / 100.0, 1.0)


def new_pattern(title: str, description: str) -> ThemePattern:
    """Create a model-reported pattern with a fresh id and default scoring."""
    return ThemePattern(
        id=str(uuid.uuid4()),
        title=title,
        description=description,
        strength=DEFAULT_PATTERN_STRENGTH,
        entry_ids=(),
        tags=(),
        pattern_type="custom",
    )


def _parse_structured(text: str) -> ThemeReport | None:
    stripped = text.strip()
    if not stripped.startswith("{"):
        return None
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict) or not any(key in data for key in ("patterns", "insights", "moods")):
        return None

    return ThemeReport(
        patterns=_structured_patterns(data.get("patterns")),
        insights=_structured_insights(data.get("insights")),
        mood_trends=_structured_moods(data.get("moods")),
    )


def _structured_patterns(raw_patterns: Any) -> list[ThemePattern]:
    if raw_patterns is None:
        return []
    if not isinstance(raw_patterns, list):
        logger.warning("Ignoring patterns that are not a list: %r", raw_patterns)
        return []

    patterns = []
    for raw in raw_patterns:
        if isinstance(raw, str):
            patterns.extend(parse_patterns(f"{BULLET}{raw}"))
            continue
        title = raw.get("title") if isinstance(raw, dict) else None
        if not isinstance(title, str) or not title.strip():
            logger.warning("Skipping malformed pattern entry: %r", raw)
            continue
        description = raw.get("description")
        patterns.append(new_pattern(title.strip(), description.strip() if isinstance(description, str) else ""))
    return patterns


def _structured_insights(raw_insights: Any) -> list[str]:
    if raw_insights is None:
        return []
    if isinstance(raw_insights, str):
        raw_insights = [raw_insights]
    if not isinstance(raw_insights, list):
        logger.warning("Ignoring insights that are not a list: %r", raw_insights)
        return []
    return [item.strip() for item in raw_insights if isinstance(item, str) and item.strip()]


def _structured_moods(raw_moods: Any) -> dict[str, float]:
    if raw_moods is None:
        return {}
    if not isinstance(raw_moods, dict):
        logger.warning("Ignoring moods that are not an object: %r", raw_moods)
        return {}

    moods: dict[str, float] = {}
    for label, value in raw_moods.items():
        fraction = percentage_to_fraction(value)
        if label.strip() and fraction is not None:
            moods[label.strip()] = fraction
        else:
            logger.warning("Skipping mood %r with unusable value %r", label, value)
    return moods
