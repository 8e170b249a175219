"""Workspace root, settings, timezone and path helpers."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from lifeos.fileio import read_yaml

DEFAULT_WINDOW_DAYS = 30


def workspace_root() -> Path:
    """Get the workspace root directory (contains reviews/ and frameworks/)."""
    return Path(
        os.environ.get("LIFEOS_ROOT", str(Path.home() / "personal-os"))
    ).expanduser().resolve()


def load_settings(root: Path | None = None) -> dict[str, Any]:
    """Read settings.yaml; a missing or broken file yields an empty mapping."""
    if root is None:
        root = workspace_root()
    try:
        return read_yaml(settings_path(root))
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return {}


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get the user's timezone from settings.yaml, defaulting to UTC."""
    settings = load_settings(root)
    name = settings.get("timezone")
    if isinstance(name, str) and name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo("UTC")


def aggregation_window_days(root: Path | None = None) -> int:
    """Number of most recent daily reviews the dashboard aggregates."""
    value = load_settings(root).get("aggregation_window_days", DEFAULT_WINDOW_DAYS)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return DEFAULT_WINDOW_DAYS
    return value


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in the user's timezone."""
    return now_local(root).date().isoformat()


def now_local(root: Path | None = None) -> datetime:
    """Get current datetime in the user's timezone."""
    return datetime.now(get_user_timezone(root))


# ── Path helpers ──────────────────────────────────────────────

def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "settings.yaml"


def daily_reviews_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "reviews" / "daily"


def weekly_reviews_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "reviews" / "weekly"


def life_map_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "frameworks" / "life_map.md"
