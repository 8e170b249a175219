"""Checkbox parsing for review templates."""

from __future__ import annotations

import re
from dataclasses import dataclass

_CHECKBOX_RE = re.compile(r"^\s*(?:[-*+]\s+)?\[([ xX])\]\s*(.*)$")


@dataclass(frozen=True)
class Checkbox:
    label: str = ""
    checked: bool = False


def is_checkbox_line(line: str) -> bool:
    return bool(_CHECKBOX_RE.match(line))


def extract_checkboxes(text: str) -> list[Checkbox]:
    """Extract markdown checkboxes from a block of text.

    Recognizes:
        - [ ] Label
        - [x] Label
        [X] Label (bare, without a list marker)
    """
    out = []
    for line in (text or "").splitlines():
        m = _CHECKBOX_RE.match(line)
        if not m:
            continue
        checked = m.group(1).lower() == "x"
        label = m.group(2).strip()
        out.append(Checkbox(label=label, checked=checked))
    return out


def checked_option(text: str | None, options: dict[str, str]) -> str | None:
    """Return the value of the single checked option, or None.

    `options` maps a label prefix (matched case-insensitively) to the value
    reported when that box is ticked. No box ticked, or more than one ticked,
    means no decision was made.
    """
    if not text:
        return None
    chosen = set()
    for box in extract_checkboxes(text):
        if not box.checked:
            continue
        label = box.label.lower()
        for prefix, value in options.items():
            if label.startswith(prefix.lower()):
                chosen.add(value)
    if len(chosen) != 1:
        return None
    return chosen.pop()
