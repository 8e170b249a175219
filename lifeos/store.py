"""Markdown-backed storage for reviews and the life map.

This is the caller side of the codec: it reads and writes files, applies the
business rules the parsers leave out, and assembles dashboard data.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import re
from pathlib import Path
from typing import Any

from lifeos.aggregation import (
    aggregate_domain_scores,
    combine_aggregated_with_derived,
    convert_to_chart_data,
    derive_domains_from_energy,
    get_energy_trend_data,
    is_data_empty,
    should_show_empty_state,
)
from lifeos.daily_review import parse_daily_review, serialize_daily_review
from lifeos.dates import parse_iso_date
from lifeos.fileio import read_text, write_text_atomic
from lifeos.life_map import get_life_map_chart_data, parse_life_map, update_life_map_file
from lifeos.markdown import is_blank
from lifeos.models import DOMAIN_KEYS, FRICTION_ACTIONS, DailyReview, LifeMap, LifeMapDomain, WeeklyReview
from lifeos.weekly_review import parse_weekly_review, serialize_weekly_review
from lifeos.workspace import (
    aggregation_window_days,
    daily_reviews_dir,
    life_map_path,
    weekly_reviews_dir,
    workspace_root,
)

logger = logging.getLogger(__name__)

_DATED_FILE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}\.md")

VALID_REVIEW_TYPES = ("all", "daily", "weekly")
VALID_SORTS = ("desc", "asc")


def is_dated_review_file(filename: str) -> bool:
    """True for review file names of the form YYYY-MM-DD.md."""
    return bool(_DATED_FILE_RE.fullmatch(filename))


# ── Validation ────────────────────────────────────────────────


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_date(payload: dict[str, Any], errors: list[str]) -> None:
    value = payload.get("date")
    if not value or not isinstance(value, str):
        errors.append("Missing or invalid date field")
        return
    try:
        parse_iso_date(value)
    except ValueError as e:
        errors.append(str(e))


def _check_required_text(payload: dict[str, Any], names: tuple[str, ...], errors: list[str]) -> None:
    for name in names:
        value = payload.get(name)
        if not isinstance(value, str) or is_blank(value):
            errors.append(f"Missing or invalid {name} field")


def validate_daily_review(payload: dict[str, Any]) -> list[str]:
    """Validate daily review form data and return list of errors (empty if valid)."""
    if not isinstance(payload, dict):
        return ["Invalid request body"]
    errors: list[str] = []
    _check_date(payload, errors)

    energy = payload.get("energyLevel")
    if not _is_int(energy):
        errors.append("Missing or invalid energyLevel field")
    elif not 1 <= energy <= 10:
        errors.append("energyLevel must be between 1 and 10")

    _check_required_text(payload, ("meaningfulWin", "tomorrowPriority"), errors)

    action = payload.get("frictionAction")
    if action is not None and action not in FRICTION_ACTIONS:
        errors.append(f"Invalid frictionAction: {action}")

    minutes = payload.get("completionTimeMinutes")
    if minutes is not None and (not _is_int(minutes) or minutes < 0):
        errors.append("completionTimeMinutes must be a non-negative integer")

    ratings = payload.get("domainRatings")
    if ratings is not None:
        if not isinstance(ratings, dict):
            errors.append("domainRatings must be an object")
        else:
            for key, value in ratings.items():
                if key not in DOMAIN_KEYS:
                    errors.append(f"Unknown domain: {key}")
                elif value is not None and (not _is_int(value) or not 0 <= value <= 10):
                    errors.append(f"Rating for {key} must be an integer 0-10")
    return errors


def validate_weekly_review(payload: dict[str, Any]) -> list[str]:
    """Validate weekly review form data and return list of errors (empty if valid)."""
    if not isinstance(payload, dict):
        return ["Invalid request body"]
    errors: list[str] = []
    _check_date(payload, errors)

    week = payload.get("weekNumber")
    if not _is_int(week):
        errors.append("Missing or invalid weekNumber field")
    elif not 1 <= week <= 53:
        errors.append("weekNumber must be between 1 and 53")

    _check_required_text(
        payload,
        ("movedNeedle", "noiseDisguisedAsWork", "timeLeaks", "strategicInsight", "adjustmentForNextWeek"),
        errors,
    )

    duration = payload.get("duration")
    if duration is not None and (not _is_int(duration) or duration < 0):
        errors.append("duration must be a non-negative integer")
    return errors


# ── Daily reviews ─────────────────────────────────────────────


def daily_review_path(date: str, root: Path | None = None) -> Path:
    return daily_reviews_dir(root) / f"{date}.md"


def _read_review_file(path: Path) -> str | None:
    try:
        return read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping unreadable review %s: %s", path, e)
        return None


def _dated_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and is_dated_review_file(p.name))


def load_daily_review(date: str, root: Path | None = None) -> DailyReview | None:
    """Load one daily review by date, or None if the file is missing."""
    path = daily_review_path(date, root)
    if not path.exists():
        return None
    content = _read_review_file(path)
    if content is None:
        return None
    review = parse_daily_review(content, str(path))
    if review.date is None:
        review = dataclasses.replace(review, date=date)
    return review


def load_daily_reviews(root: Path | None = None) -> list[DailyReview]:
    """All daily reviews, newest first. Undated files fall back to their file name."""
    reviews = []
    for path in _dated_files(daily_reviews_dir(root)):
        review = load_daily_review(path.stem, root)
        if review is not None:
            reviews.append(review)
    reviews.sort(key=lambda r: r.date or "", reverse=True)
    return reviews


def _write_daily(review: DailyReview, root: Path | None) -> DailyReview:
    path = daily_review_path(review.date, root)
    write_text_atomic(path, serialize_daily_review(review))
    return dataclasses.replace(review, file_path=str(path))


def create_daily_review(payload: dict[str, Any], root: Path | None = None) -> tuple[DailyReview | None, list[str]]:
    """Create a new daily review file. Returns (review, errors)."""
    errors = validate_daily_review(payload)
    if errors:
        return None, errors
    review = DailyReview.from_dict(payload)
    if daily_review_path(review.date, root).exists():
        return None, [f"Review for {review.date} already exists"]
    review = _write_daily(review, root)
    logger.info("Created daily review %s", review.file_path)
    return review, []


def update_daily_review(date: str, payload: dict[str, Any], root: Path | None = None) -> tuple[DailyReview | None, list[str]]:
    """Overwrite an existing daily review. Returns (review, errors)."""
    if not daily_review_path(date, root).exists():
        return None, [f"Review for {date} not found"]
    errors = validate_daily_review({**payload, "date": date})
    if errors:
        return None, errors
    review = _write_daily(DailyReview.from_dict({**payload, "date": date}), root)
    logger.info("Updated daily review %s", review.file_path)
    return review, []


# ── Weekly reviews ────────────────────────────────────────────


def weekly_review_path(date: str, root: Path | None = None) -> Path:
    return weekly_reviews_dir(root) / f"{date}.md"


def load_weekly_review(date: str, root: Path | None = None) -> WeeklyReview | None:
    """Load one weekly review by week-start date, or None if the file is missing."""
    path = weekly_review_path(date, root)
    if not path.exists():
        return None
    content = _read_review_file(path)
    if content is None:
        return None
    review = parse_weekly_review(content, str(path))
    if review.date is None:
        review = dataclasses.replace(review, date=date)
    return review


def load_weekly_reviews(root: Path | None = None) -> list[WeeklyReview]:
    """All weekly reviews, newest first."""
    reviews = []
    for path in _dated_files(weekly_reviews_dir(root)):
        review = load_weekly_review(path.stem, root)
        if review is not None:
            reviews.append(review)
    reviews.sort(key=lambda r: r.date or "", reverse=True)
    return reviews


def _write_weekly(review: WeeklyReview, root: Path | None) -> WeeklyReview:
    path = weekly_review_path(review.date, root)
    write_text_atomic(path, serialize_weekly_review(review))
    return dataclasses.replace(review, file_path=str(path))


def create_weekly_review(payload: dict[str, Any], root: Path | None = None) -> tuple[WeeklyReview | None, list[str]]:
    """Create a new weekly review file. Returns (review, errors)."""
    errors = validate_weekly_review(payload)
    if errors:
        return None, errors
    review = WeeklyReview.from_dict(payload)
    if weekly_review_path(review.date, root).exists():
        return None, [f"Review for {review.date} already exists"]
    review = _write_weekly(review, root)
    logger.info("Created weekly review %s", review.file_path)
    return review, []


def update_weekly_review(date: str, payload: dict[str, Any], root: Path | None = None) -> tuple[WeeklyReview | None, list[str]]:
    """Overwrite an existing weekly review. Returns (review, errors)."""
    if not weekly_review_path(date, root).exists():
        return None, [f"Review for {date} not found"]
    errors = validate_weekly_review({**payload, "date": date})
    if errors:
        return None, errors
    review = _write_weekly(WeeklyReview.from_dict({**payload, "date": date}), root)
    logger.info("Updated weekly review %s", review.file_path)
    return review, []


# ── Listing ───────────────────────────────────────────────────


def daily_list_item(review: DailyReview) -> dict[str, Any]:
    return {
        "date": review.date or "",
        "type": "daily",
        "energyLevel": review.energy_level or 0,
        "tomorrowPriority": review.tomorrow_priority or "",
        "filePath": review.file_path,
    }


def weekly_list_item(review: WeeklyReview) -> dict[str, Any]:
    return {
        "date": review.date or "",
        "type": "weekly",
        "weekNumber": review.week_number or 0,
        "movedNeedle": review.moved_needle or "",
        "filePath": review.file_path,
    }


def list_reviews(review_type: str = "all", sort: str = "desc", root: Path | None = None) -> list[dict[str, Any]]:
    """Combined review list items, filtered by type and sorted by date.

    Raises ValueError for an unknown type or sort order.
    """
    if review_type not in VALID_REVIEW_TYPES:
        raise ValueError(f"Invalid type parameter. Must be one of: {', '.join(VALID_REVIEW_TYPES)}")
    if sort not in VALID_SORTS:
        raise ValueError(f"Invalid sort parameter. Must be one of: {', '.join(VALID_SORTS)}")

    items: list[dict[str, Any]] = []
    if review_type in ("all", "daily"):
        items += [daily_list_item(r) for r in load_daily_reviews(root)]
    if review_type in ("all", "weekly"):
        items += [weekly_list_item(r) for r in load_weekly_reviews(root)]
    items.sort(key=lambda item: item["date"], reverse=(sort == "desc"))
    return items


# ── Life map ──────────────────────────────────────────────────


def clamp_score(score: float) -> int:
    """Truncate a submitted score and clamp it to 1-10."""
    return max(1, min(10, math.trunc(score)))


def load_life_map(root: Path | None = None) -> LifeMap:
    return parse_life_map(read_text(life_map_path(root)))


def validate_life_map_update(payload: dict[str, Any]) -> list[str]:
    """Validate a partial {domains: {key: {score?, assessment?}}} update."""
    if not isinstance(payload, dict):
        return ["Invalid request body"]
    domains = payload.get("domains")
    if not isinstance(domains, dict):
        return ["Missing domains object"]
    errors = []
    for key, update in domains.items():
        if not isinstance(update, dict):
            continue
        if "score" in update:
            score = update["score"]
            if not _is_number(score):
                errors.append(f"Invalid score type for domain {key}")
            elif isinstance(score, float) and not math.isfinite(score):
                errors.append(f"Score for domain {key} must be a finite number")
        if "assessment" in update and not isinstance(update["assessment"], str):
            errors.append(f"Invalid assessment type for domain {key}")
    return errors


def update_life_map(payload: dict[str, Any], root: Path | None = None) -> tuple[LifeMap | None, list[str]]:
    """Merge a partial update over the stored life map and rewrite only its table."""
    errors = validate_life_map_update(payload)
    if errors:
        return None, errors

    path = life_map_path(root)
    content = read_text(path)
    life_map = parse_life_map(content)
    for key in DOMAIN_KEYS:
        update = payload["domains"].get(key)
        if not isinstance(update, dict):
            continue
        current = life_map.domain(key)
        score = clamp_score(update["score"]) if "score" in update else current.score
        assessment = update.get("assessment", current.assessment)
        life_map = life_map.replace(key, LifeMapDomain(score=score, assessment=assessment))

    write_text_atomic(path, update_life_map_file(content, life_map))
    logger.info("Updated life map %s", path)
    return life_map, []


# ── Dashboard ─────────────────────────────────────────────────


def dashboard_snapshot(root: Path | None = None) -> dict[str, Any]:
    """Domain chart for the recent review window, with the energy fallback."""
    if root is None:
        root = workspace_root()
    reviews = load_daily_reviews(root)[: aggregation_window_days(root)]
    scores = combine_aggregated_with_derived(
        aggregate_domain_scores(reviews),
        derive_domains_from_energy(reviews),
    )
    chart = convert_to_chart_data(scores)
    has_reviews = bool(reviews)
    return {
        "scores": scores,
        "chartData": [item.to_dict() for item in chart],
        "energyTrend": [item.to_dict() for item in get_energy_trend_data(reviews)],
        "hasReviews": has_reviews,
        "isEmpty": is_data_empty(chart),
        "showEmptyState": should_show_empty_state(chart, has_reviews),
        "lifeMap": [item.to_dict() for item in get_life_map_chart_data(load_life_map(root))],
    }
