"""Line scanner and text primitives for the review templates.

The templates are not general markdown. Every line is classified into one
token kind and the section readers slice between recognized boundaries:

    heading     ## One Meaningful Win
    rule        ---
    blockquote  > answer text
    checkbox    - [x] Needs action
    table       | Career | 8 | Strong momentum |
    blank
    text        anything else

Nothing in this module raises on string input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lifeos.checkbox import is_checkbox_line

HEADING = "heading"
RULE = "rule"
BLOCKQUOTE = "blockquote"
CHECKBOX = "checkbox"
TABLE = "table"
BLANK = "blank"
TEXT = "text"

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.*?)[ \t]*$")
_RULE_RE = re.compile(r"^[ ]{0,3}(?:-[ \t]*){3,}$|^[ ]{0,3}(?:\*[ \t]*){3,}$|^[ ]{0,3}(?:_[ \t]*){3,}$")
_PLACEHOLDER_RE = re.compile(r"\[.*\]")


@dataclass(frozen=True)
class Line:
    index: int
    kind: str
    raw: str  # line text without its line terminator
    level: int = 0  # heading level, 0 for everything else
    title: str = ""  # heading title


def classify(index: int, raw: str) -> Line:
    """Classify a single line (no terminator) into a token."""
    if not raw.strip():
        return Line(index, BLANK, raw)
    if raw.startswith(">"):
        return Line(index, BLOCKQUOTE, raw)
    m = _HEADING_RE.match(raw)
    if m:
        return Line(index, HEADING, raw, level=len(m.group(1)), title=m.group(2))
    if _RULE_RE.match(raw):
        return Line(index, RULE, raw)
    if is_checkbox_line(raw):
        return Line(index, CHECKBOX, raw)
    if raw.lstrip().startswith("|"):
        return Line(index, TABLE, raw)
    return Line(index, TEXT, raw)


def scan(text: str) -> list[Line]:
    """Tokenize a document into classified lines."""
    return [classify(i, raw) for i, raw in enumerate((text or "").splitlines())]


# ── Non-values ────────────────────────────────────────────────


def is_placeholder(value: str) -> bool:
    """True for template boilerplate such as '[Your win]' or '[YYYY-MM-DD]'."""
    return bool(_PLACEHOLDER_RE.fullmatch((value or "").strip()))


def is_blank(value: str | None) -> bool:
    """True for anything that is not a real answer: None, empty, whitespace, placeholder."""
    if value is None:
        return True
    stripped = value.strip()
    return not stripped or is_placeholder(stripped)


def clean_value(value: str | None) -> str | None:
    """Trim a candidate answer, or return None if it is a non-value."""
    if is_blank(value):
        return None
    return value.strip()


# ── Sections ──────────────────────────────────────────────────


def section_bounds(lines: list[Line], title: str, level: int = 2) -> tuple[int, int] | None:
    """Locate the body of a section as (start, end) list positions, end exclusive.

    The body starts after the heading line and stops at the next rule, the next
    heading of the same or a higher level, or the end of the document.
    Title matching is case-insensitive.
    """
    wanted = title.strip().lower()
    for pos, line in enumerate(lines):
        if line.kind == HEADING and line.level == level and line.title.strip().lower() == wanted:
            start = pos + 1
            end = start
            while end < len(lines):
                nxt = lines[end]
                if nxt.kind == RULE or (nxt.kind == HEADING and nxt.level <= level):
                    break
                end += 1
            return start, end
    return None


def extract_section(text: str, title: str, level: int = 2) -> str | None:
    """Return the raw text of a titled section, or None if the heading is absent."""
    lines = scan(text)
    bounds = section_bounds(lines, title, level)
    if bounds is None:
        return None
    start, end = bounds
    return "\n".join(line.raw for line in lines[start:end])


def extract_blockquote(section: str | None) -> str | None:
    """Join the '>' lines of a section into one answer.

    Strips the marker and at most one following space, drops empty lines,
    joins the rest with a single space. Placeholders count as absent.
    """
    if not section:
        return None
    parts = []
    for line in scan(section):
        if line.kind != BLOCKQUOTE:
            continue
        content = line.raw[1:]
        if content.startswith(" "):
            content = content[1:]
        if content.strip():
            parts.append(content)
    return clean_value(" ".join(parts))


def _strip_emphasis(s: str) -> str:
    return s.strip().strip("*_").strip()


def has_prompt(section: str | None, prompt: str) -> bool:
    if not section:
        return False
    wanted = _strip_emphasis(prompt).lower()
    return any(_strip_emphasis(raw).lower() == wanted for raw in section.splitlines())


def text_after_prompt(section: str | None, prompt: str) -> str | None:
    """Return the free text that follows a fixed prompt line inside a section.

    The prompt is matched case-insensitively and ignoring surrounding
    emphasis markers. Everything after it up to the end of the section is the
    answer, with embedded line breaks kept and line escapes removed.
    """
    if not section:
        return None
    wanted = _strip_emphasis(prompt).lower()
    raw_lines = section.splitlines()
    for pos, raw in enumerate(raw_lines):
        if _strip_emphasis(raw).lower() == wanted:
            return clean_value("\n".join(unescape_line(line) for line in raw_lines[pos + 1:]))
    return None


# ── Free text ─────────────────────────────────────────────────


def escape_line(line: str) -> str:
    """Backslash-prefix a line that would otherwise end a section.

    Lines already starting with a backslash are escaped too, so
    unescape_line(escape_line(x)) == x for every line.
    """
    if line.startswith("\\") or classify(0, line).kind in (RULE, HEADING):
        return "\\" + line
    return line


def unescape_line(line: str) -> str:
    return line[1:] if line.startswith("\\") else line


def free_text_lines(value: str | None) -> list[str]:
    """Render a free-text answer as body lines; an absent answer is one empty line."""
    if value is None or not value.strip():
        return [""]
    return [escape_line(line) for line in value.strip().splitlines()]


def blockquote_lines(value: str | None) -> list[str]:
    """Render an answer as blockquote lines; an absent answer is one empty '>'."""
    if value is None or not value.strip():
        return [">"]
    return [f"> {part}" if part else ">" for part in value.strip().splitlines()]
