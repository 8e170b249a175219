"""Shared test fixtures for Life OS tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml


DAILY_REVIEW = """# Daily Check-In

**Date:** 2026-02-10

---

## Energy Check

**Energy level (1-10):** 7

*1 = depleted, 5 = functional, 10 = fully charged*

What's affecting your energy today?

Slept well, short run before work.

---

## One Meaningful Win

*Not the biggest task completed. The thing that actually mattered.*

> Shipped the onboarding flow

---

## One Friction Point

*What's creating resistance? Where are you stuck?*

> Too many meetings after lunch

- [x] Needs action
- [ ] Just needs acknowledgment

---

## One Thing to Let Go

*What expectation, worry, or 'should' can you release?*

> Replying to every message the same day

---

## One Priority for Tomorrow

*If you only accomplish one thing, what would make tomorrow a success?*

> Draft the Q1 plan

---

## Optional: Brief Notes

*Anything else worth capturing? Keep it short.*

[Your notes]

---

## Life Map Ratings

*Rate your satisfaction today (0 = not rated, 1-10)*

- Career: 8
- Relationships: 0
- Health: 6
- Meaning: 0
- Finances: 0
- Fun: 4

---

**Time to complete:** 4 minutes
"""

WEEKLY_REVIEW = """# Weekly Review

**Week Starting:** 2026-02-09
**Week Number:** 7

---

## What Actually Moved the Needle This Week

*Not tasks completed. The outcomes that truly mattered.*

> Closed the partnership deal

---

## What Was Noise Disguised as Work

*Busy work that felt productive but didn't advance key goals.*

> Reorganizing the backlog twice

---

## Where Your Time Leaked

*Where did hours disappear without meaningful output?*

> Slack threads

---

## One Strategic Insight

*What did this week teach you about your work, priorities, or approach?*

> Mornings are for deep work

---

## One Adjustment for Next Week

*What one change will you make based on this week's learning?*

> No meetings before 11

---

## Optional: Notes

*Anything else worth capturing?*

Good week overall.

---

**Time to complete:** 15 minutes

*Target: under 20 minutes*
"""

LIFE_MAP = """# Life Map

Six domains, scored honestly.

## Current State Assessment

| Domain | Score (1-10) | Brief Assessment |
|--------|--------------|------------------|
| Career | 8 | Strong momentum, good team |
| Relationships | 7 | Solid, could invest more |
| Health | 6 | Sleep is inconsistent |
| Meaning | 5 | Searching |
| Finances | 7 | Stable |
| Fun | 4 | Neglected, needs attention |

## Next Steps

Revisit monthly.
"""


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with standard structure."""
    root = tmp_path / "workspace"
    (root / "reviews" / "daily").mkdir(parents=True)
    (root / "reviews" / "weekly").mkdir(parents=True)
    (root / "frameworks").mkdir(parents=True)

    settings = {"timezone": "UTC", "aggregation_window_days": 30}
    (root / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    (root / "reviews" / "daily" / "2026-02-10.md").write_text(DAILY_REVIEW, encoding="utf-8")
    (root / "reviews" / "weekly" / "2026-02-09.md").write_text(WEEKLY_REVIEW, encoding="utf-8")
    (root / "frameworks" / "life_map.md").write_text(LIFE_MAP, encoding="utf-8")

    # Set env var
    os.environ["LIFEOS_ROOT"] = str(root)
    yield root
    # Cleanup
    if "LIFEOS_ROOT" in os.environ:
        del os.environ["LIFEOS_ROOT"]


@pytest.fixture
def daily_text() -> str:
    return DAILY_REVIEW


@pytest.fixture
def weekly_text() -> str:
    return WEEKLY_REVIEW


@pytest.fixture
def life_map_text() -> str:
    return LIFE_MAP
