"""Weekly review markdown parser and serializer."""

from __future__ import annotations

import re
from typing import Any

from lifeos.markdown import (
    blockquote_lines,
    extract_blockquote,
    extract_section,
    free_text_lines,
    has_prompt,
    is_blank,
    text_after_prompt,
    unescape_line,
)
from lifeos.models import WeeklyReview

SECTION_MOVED_NEEDLE = "What Actually Moved the Needle This Week"
SECTION_NOISE = "What Was Noise Disguised as Work"
SECTION_TIME_LEAKS = "Where Your Time Leaked"
SECTION_INSIGHT = "One Strategic Insight"
SECTION_ADJUSTMENT = "One Adjustment for Next Week"
SECTION_NOTES = "Optional: Notes"

NOTES_PROMPT = "*Anything else worth capturing?*"

# (field, section title, helper prose) in document order
BLOCKQUOTE_SECTIONS = (
    ("moved_needle", SECTION_MOVED_NEEDLE, "*Not tasks completed. The outcomes that truly mattered.*"),
    ("noise_disguised_as_work", SECTION_NOISE, "*Busy work that felt productive but didn't advance key goals.*"),
    ("time_leaks", SECTION_TIME_LEAKS, "*Where did hours disappear without meaningful output?*"),
    ("strategic_insight", SECTION_INSIGHT, "*What did this week teach you about your work, priorities, or approach?*"),
    ("adjustment_for_next_week", SECTION_ADJUSTMENT, "*What one change will you make based on this week's learning?*"),
)

_WEEK_START_RE = re.compile(r"\*\*Week Starting:\*\*[ \t]*(\S+)")
_WEEK_NUMBER_RE = re.compile(r"\*\*Week Number:\*\*[ \t]*([0-9]+)\b")
_TIME_RE = re.compile(r"\*\*Time to complete:\*\*[ \t]*([0-9]+)[ \t]*minutes", re.IGNORECASE)
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _parse_notes(section: str | None) -> str | None:
    if section is None:
        return None
    if has_prompt(section, NOTES_PROMPT):
        return text_after_prompt(section, NOTES_PROMPT)
    # Hand-edited file without the prompt: first real line wins.
    for line in section.splitlines():
        stripped = line.strip()
        if not is_blank(stripped) and not stripped.startswith("*"):
            return unescape_line(stripped)
    return None


def parse_weekly_review(content: str, file_path: str) -> WeeklyReview:
    """Parse a weekly review document into a WeeklyReview record."""
    content = content or ""
    fields: dict[str, Any] = {}

    m = _WEEK_START_RE.search(content)
    if m and _ISO_DATE_RE.fullmatch(m.group(1)):
        fields["date"] = m.group(1)

    m = _WEEK_NUMBER_RE.search(content)
    if m:
        week = int(m.group(1))
        if 1 <= week <= 53:
            fields["week_number"] = week

    for name, title, _helper in BLOCKQUOTE_SECTIONS:
        fields[name] = extract_blockquote(extract_section(content, title))

    fields["notes"] = _parse_notes(extract_section(content, SECTION_NOTES))

    m = _TIME_RE.search(content)
    if m:
        fields["duration"] = int(m.group(1))

    return WeeklyReview(file_path=file_path, **fields)


def serialize_weekly_review(data: WeeklyReview) -> str:
    """Serialize a WeeklyReview to the weekly review markdown."""
    date = data.date or ""
    week = "" if data.week_number is None else str(data.week_number)
    lines: list[str] = [
        "# Weekly Review",
        "",
        f"**Week Starting:** {date}".rstrip(),
        f"**Week Number:** {week}".rstrip(),
        "",
        "---",
        "",
    ]

    for name, title, helper in BLOCKQUOTE_SECTIONS:
        lines += [f"## {title}", "", helper, "", *blockquote_lines(getattr(data, name)), "", "---", ""]

    lines += [f"## {SECTION_NOTES}", "", NOTES_PROMPT, "", *free_text_lines(data.notes), "", "---", ""]

    time_value = f"{data.duration} minutes" if data.duration is not None else "___ minutes"
    lines += [f"**Time to complete:** {time_value}", "", "*Target: under 20 minutes*"]

    return "\n".join(lines)
