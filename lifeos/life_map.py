"""Life Map table parser, serializer and in-place updater.

Table format inside frameworks/life_map.md:

    | Domain | Score (1-10) | Brief Assessment |
    |--------|--------------|------------------|
    | Career | 8 | Strong momentum, good team |
    ...

The updater is a structural edit: find the table, swap only the domain rows,
reassemble. Every byte outside those rows is left as it was.
"""

from __future__ import annotations

import math
import re

from lifeos.markdown import scan, section_bounds
from lifeos.models import DOMAIN_KEYS, ChartDataItem, LifeMap, LifeMapDomain

TABLE_HEADER = "| Domain | Score (1-10) | Brief Assessment |"
TABLE_SEPARATOR = "|--------|--------------|------------------|"
ASSESSMENT_SECTION = "Current State Assessment"

_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")
_SEPARATOR_CELL_RE = re.compile(r":?-+:?")
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


# ── Cells ─────────────────────────────────────────────────────


def split_row(line: str) -> list[str]:
    """Split a table row into trimmed cells, honoring '\\|' escapes.

    The empty strings before the leading pipe and after the trailing pipe
    are dropped.
    """
    stripped = line.strip()
    if not stripped.startswith("|"):
        return []
    cells = [c.strip().replace("\\|", "|") for c in _CELL_SPLIT_RE.split(stripped)]
    cells = cells[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|") and cells:
        cells = cells[:-1]
    return cells


def _is_separator_row(cells: list[str]) -> bool:
    return bool(cells) and all(_SEPARATOR_CELL_RE.fullmatch(c.replace(" ", "")) for c in cells)


def _is_header_row(cells: list[str]) -> bool:
    return bool(cells) and cells[0].lower() == "domain"


def row_domain(line: str) -> str | None:
    """Domain key of a table row, matched case-insensitively, or None."""
    cells = split_row(line)
    if not cells:
        return None
    key = cells[0].lower()
    return key if key in DOMAIN_KEYS else None


def parse_score(value: str) -> int:
    """Parse a score cell.

    Clean numbers are accepted and truncated toward zero ('8.5' -> 8).
    Anything else ('eight', 'n/a', '-', '') is 0. No range checks.
    """
    trimmed = (value or "").strip()
    if not _NUMBER_RE.fullmatch(trimmed):
        return 0
    return math.trunc(float(trimmed))


def _escape_cell(text: str) -> str:
    return " ".join((text or "").split()).replace("|", "\\|")


# ── Parse / serialize ─────────────────────────────────────────


def parse_life_map(content: str) -> LifeMap:
    """Parse life map markdown; always returns all six domains."""
    domains = {key: LifeMapDomain() for key in DOMAIN_KEYS}
    for line in (content or "").splitlines():
        key = row_domain(line)
        if key is None:
            continue
        cells = split_row(line)
        score = parse_score(cells[1]) if len(cells) > 1 else 0
        assessment = cells[2] if len(cells) > 2 else ""
        domains[key] = LifeMapDomain(score=score, assessment=assessment)
    return LifeMap(domains=domains)


def serialize_life_map_rows(life_map: LifeMap) -> list[str]:
    """The six data rows, in fixed domain order."""
    rows = []
    for key in DOMAIN_KEYS:
        domain = life_map.domain(key)
        rows.append(f"| {key.capitalize()} | {domain.score} | {_escape_cell(domain.assessment)} |")
    return rows


def serialize_life_map(life_map: LifeMap) -> str:
    """Full table: two header lines plus six rows."""
    return "\n".join([TABLE_HEADER, TABLE_SEPARATOR, *serialize_life_map_rows(life_map)])


# ── In-place update ───────────────────────────────────────────


def find_table_bounds(lines: list[str]) -> tuple[int, int] | None:
    """Locate the region holding the domain rows as (start, end), end exclusive.

    Prefers a table introduced by a 'Domain' header row and a separator row;
    the region is every contiguous table row after the separator. A table
    with a header but no rows yields an empty region right after the
    separator. Without a header, the first contiguous run of table rows that
    holds a domain row is used. Returns None when there is no table.
    """
    for i in range(len(lines) - 1):
        if _is_header_row(split_row(lines[i])) and _is_separator_row(split_row(lines[i + 1])):
            start = i + 2
            end = start
            while end < len(lines) and lines[end].strip().startswith("|"):
                end += 1
            return start, end

    i = 0
    while i < len(lines):
        if not lines[i].strip().startswith("|"):
            i += 1
            continue
        start = i
        while i < len(lines) and lines[i].strip().startswith("|"):
            i += 1
        if any(row_domain(line) for line in lines[start:i]):
            return start, i
    return None


def _splice_rows(region: list[str], rows: list[str]) -> list[str]:
    """Swap domain rows for the new rows; other rows (e.g. totals) keep their place."""
    out: list[str] = []
    inserted = False
    for line in region:
        if row_domain(line) is None:
            out.append(line)
            continue
        if not inserted:
            out.extend(rows)
            inserted = True
    if not inserted:
        out = rows + out
    return out


def _insert_table(content: str, table: list[str], newline: str) -> str:
    """Insert a fresh table at the end of the assessment section, or append it."""
    raw_lines = content.splitlines(keepends=True)
    bounds = section_bounds(scan(content), ASSESSMENT_SECTION)
    block = newline.join(table) + newline
    if bounds is not None:
        _start, end = bounds
        head = "".join(raw_lines[:end])
        tail = "".join(raw_lines[end:])
        if head and not head.endswith(("\n", "\r")):
            head += newline
        if not head.endswith(newline + newline):
            head += newline
        return head + block + (newline if tail else "") + tail
    if not content.strip():
        return block
    body = content.rstrip("\r\n")
    return body + newline + newline + block


def update_life_map_file(content: str, life_map: LifeMap) -> str:
    """Rewrite only the domain rows of the life map table inside a document.

    Falls back to inserting a new table when none is found. Idempotent.
    """
    content = content or ""
    newline = "\r\n" if "\r\n" in content else "\n"
    rows = serialize_life_map_rows(life_map)

    raw_lines = content.splitlines(keepends=True)
    bare = [line.rstrip("\r\n") for line in raw_lines]
    bounds = find_table_bounds(bare)
    if bounds is None:
        return _insert_table(content, [TABLE_HEADER, TABLE_SEPARATOR, *rows], newline)

    start, end = bounds
    region = _splice_rows(bare[start:end], rows)

    # The last row keeps the old terminator, so a table at EOF stays unterminated.
    last_ending = raw_lines[end - 1][len(bare[end - 1]):] if end > start else newline
    terminated = [line + newline for line in region[:-1]] + [region[-1] + last_ending]

    prefix = "".join(raw_lines[:start])
    if prefix and not prefix.endswith(("\n", "\r")):
        prefix += newline
    return prefix + "".join(terminated) + "".join(raw_lines[end:])


def get_life_map_chart_data(life_map: LifeMap) -> list[ChartDataItem]:
    """Chart rows in fixed domain order with display names."""
    return [ChartDataItem(domain=key.capitalize(), score=life_map.domain(key).score) for key in DOMAIN_KEYS]
