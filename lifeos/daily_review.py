"""Daily check-in markdown parser and serializer.

The document is the daily TEMPLATE.md shape:

    # Daily Check-In
    **Date:** 2024-12-31
    ## Energy Check / ## One Meaningful Win / ## One Friction Point /
    ## One Thing to Let Go / ## One Priority for Tomorrow /
    ## Optional: Brief Notes / ## Life Map Ratings (optional)
    **Time to complete:** 4 minutes

Every field is extracted independently. A missing or malformed field is
simply absent from the result; parsing never raises.
"""

from __future__ import annotations

import re
from typing import Any

from lifeos.checkbox import checked_option
from lifeos.markdown import (
    blockquote_lines,
    extract_blockquote,
    extract_section,
    free_text_lines,
    text_after_prompt,
)
from lifeos.models import DOMAIN_KEYS, DailyReview

SECTION_ENERGY = "Energy Check"
SECTION_WIN = "One Meaningful Win"
SECTION_FRICTION = "One Friction Point"
SECTION_LET_GO = "One Thing to Let Go"
SECTION_TOMORROW = "One Priority for Tomorrow"
SECTION_NOTES = "Optional: Brief Notes"
SECTION_RATINGS = "Life Map Ratings"

ENERGY_PROMPT = "What's affecting your energy today?"
NOTES_PROMPT = "*Anything else worth capturing? Keep it short.*"

NEEDS_ACTION = "Needs action"
JUST_ACKNOWLEDGE = "Just needs acknowledgment"
FRICTION_OPTIONS = {NEEDS_ACTION: "address", JUST_ACKNOWLEDGE: "letting_go"}

_DATE_RE = re.compile(r"\*\*Date:\*\*[ \t]*(\S+)")
_ENERGY_RE = re.compile(r"\*\*Energy level \(1-10\):\*\*[ \t]*(\S+)")
_TIME_RE = re.compile(r"\*\*Time to complete:\*\*[ \t]*([0-9]+)[ \t]*minutes", re.IGNORECASE)
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INT_RE = re.compile(r"[0-9]+")


def _rating_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*(?:[-*+]\s+)?{key}:[ \t]*([0-9]+)[ \t]*$", re.IGNORECASE | re.MULTILINE)


_RATING_PATTERNS = {key: _rating_pattern(key) for key in DOMAIN_KEYS}


# ── Parser ────────────────────────────────────────────────────


def parse_date(content: str) -> str | None:
    m = _DATE_RE.search(content)
    if m and _ISO_DATE_RE.fullmatch(m.group(1)):
        return m.group(1)
    return None


def parse_energy_level(content: str) -> int | None:
    m = _ENERGY_RE.search(content)
    if not m or not _INT_RE.fullmatch(m.group(1)):
        return None
    value = int(m.group(1))
    return value if 1 <= value <= 10 else None


def parse_completion_time(content: str) -> int | None:
    m = _TIME_RE.search(content)
    return int(m.group(1)) if m else None


def parse_domain_ratings(section: str | None) -> dict[str, int] | None:
    """Read the six 'Label: N' lines; None unless at least one rating is above zero."""
    if not section:
        return None
    ratings: dict[str, int] = {}
    for key, pattern in _RATING_PATTERNS.items():
        m = pattern.search(section)
        if not m:
            continue
        value = int(m.group(1))
        if 0 <= value <= 10:
            ratings[key] = value
    if not any(v > 0 for v in ratings.values()):
        return None
    return ratings


def parse_daily_review(content: str, file_path: str) -> DailyReview:
    """Parse a daily review document into a DailyReview record."""
    content = content or ""
    fields: dict[str, Any] = {
        "date": parse_date(content),
        "energy_level": parse_energy_level(content),
        "completion_time_minutes": parse_completion_time(content),
    }

    energy = extract_section(content, SECTION_ENERGY)
    fields["energy_factors"] = text_after_prompt(energy, ENERGY_PROMPT)

    fields["meaningful_win"] = extract_blockquote(extract_section(content, SECTION_WIN))

    friction = extract_section(content, SECTION_FRICTION)
    fields["friction_point"] = extract_blockquote(friction)
    fields["friction_action"] = checked_option(friction, FRICTION_OPTIONS)

    fields["thing_to_let_go"] = extract_blockquote(extract_section(content, SECTION_LET_GO))
    fields["tomorrow_priority"] = extract_blockquote(extract_section(content, SECTION_TOMORROW))

    notes = extract_section(content, SECTION_NOTES)
    fields["notes"] = text_after_prompt(notes, NOTES_PROMPT)

    fields["domain_ratings"] = parse_domain_ratings(extract_section(content, SECTION_RATINGS))

    return DailyReview(file_path=file_path, **fields)


# ── Serializer ────────────────────────────────────────────────


def _has_any_rating(ratings: dict[str, int] | None) -> bool:
    if not ratings:
        return False
    return any(v is not None and v > 0 for v in ratings.values())


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def serialize_daily_review(data: DailyReview) -> str:
    """Serialize a DailyReview to the daily template markdown."""
    lines: list[str] = []

    lines += ["# Daily Check-In", "", f"**Date:** {_text(data.date)}".rstrip(), "", "---", ""]

    lines += [
        f"## {SECTION_ENERGY}",
        "",
        f"**Energy level (1-10):** {_text(data.energy_level)}".rstrip(),
        "",
        "*1 = depleted, 5 = functional, 10 = fully charged*",
        "",
        ENERGY_PROMPT,
        "",
        *free_text_lines(data.energy_factors),
        "",
        "---",
        "",
    ]

    lines += [
        f"## {SECTION_WIN}",
        "",
        "*Not the biggest task completed. The thing that actually mattered.*",
        "",
        *blockquote_lines(data.meaningful_win),
        "",
        "---",
        "",
    ]

    needs_action = "[x]" if data.friction_action == "address" else "[ ]"
    acknowledge = "[x]" if data.friction_action == "letting_go" else "[ ]"
    lines += [
        f"## {SECTION_FRICTION}",
        "",
        "*What's creating resistance? Where are you stuck?*",
        "",
        *blockquote_lines(data.friction_point),
        "",
        f"- {needs_action} {NEEDS_ACTION}",
        f"- {acknowledge} {JUST_ACKNOWLEDGE}",
        "",
        "---",
        "",
    ]

    lines += [
        f"## {SECTION_LET_GO}",
        "",
        "*What expectation, worry, or 'should' can you release?*",
        "",
        *blockquote_lines(data.thing_to_let_go),
        "",
        "---",
        "",
    ]

    lines += [
        f"## {SECTION_TOMORROW}",
        "",
        "*If you only accomplish one thing, what would make tomorrow a success?*",
        "",
        *blockquote_lines(data.tomorrow_priority),
        "",
        "---",
        "",
    ]

    lines += [
        f"## {SECTION_NOTES}",
        "",
        NOTES_PROMPT,
        "",
        *free_text_lines(data.notes),
        "",
        "---",
        "",
    ]

    ratings = data.domain_ratings
    if _has_any_rating(ratings):
        lines += [
            f"## {SECTION_RATINGS}",
            "",
            "*Rate your satisfaction today (0 = not rated, 1-10)*",
            "",
        ]
        for key in DOMAIN_KEYS:
            lines.append(f"- {key.capitalize()}: {ratings.get(key) or 0}")
        lines += ["", "---", ""]

    minutes = data.completion_time_minutes
    time_value = f"{minutes} minutes" if minutes is not None else ""
    lines.append(f"**Time to complete:** {time_value}".rstrip())

    return "\n".join(lines)
