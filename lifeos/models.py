"""Typed dataclasses for the Life OS data model.

Records use from_dict/to_dict for the JSON boundary.
camelCase in JSON is mapped to snake_case in Python.
Optional fields are either a filled value or absent (None), and
absent fields are left out of to_dict() entirely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from lifeos.markdown import clean_value


DOMAIN_KEYS = ("career", "relationships", "health", "meaning", "finances", "fun")

FRICTION_ACTIONS = ("address", "letting_go")

# Six-domain score set produced by aggregation, keyed by DOMAIN_KEYS.
DomainScores = dict[str, int]


def empty_scores() -> DomainScores:
    return {key: 0 for key in DOMAIN_KEYS}


def _opt_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _opt_text(value: Any) -> str | None:
    """Free-text answer: trimmed, with empty and placeholder text as None."""
    if value is None:
        return None
    return clean_value(str(value))


def _drop_none(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


# ── Reviews ───────────────────────────────────────────────────


@dataclass(frozen=True)
class DailyReview:
    """One daily check-in for one calendar date."""

    file_path: str = ""
    date: str | None = None  # YYYY-MM-DD
    energy_level: int | None = None  # 1-10
    energy_factors: str | None = None
    meaningful_win: str | None = None
    friction_point: str | None = None
    friction_action: str | None = None  # address, letting_go
    thing_to_let_go: str | None = None
    tomorrow_priority: str | None = None
    notes: str | None = None
    completion_time_minutes: int | None = None
    domain_ratings: dict[str, int] | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DailyReview:
        if not d or not isinstance(d, dict):
            return cls()
        ratings = d.get("domainRatings")
        domain_ratings = None
        if isinstance(ratings, dict):
            domain_ratings = {}
            for key in DOMAIN_KEYS:
                value = _opt_int(ratings.get(key))
                if value is not None:
                    domain_ratings[key] = value
        return cls(
            file_path=str(d.get("filePath", "") or ""),
            date=_opt_str(d.get("date")),
            energy_level=_opt_int(d.get("energyLevel")),
            energy_factors=_opt_text(d.get("energyFactors")),
            meaningful_win=_opt_text(d.get("meaningfulWin")),
            friction_point=_opt_text(d.get("frictionPoint")),
            friction_action=_opt_str(d.get("frictionAction")),
            thing_to_let_go=_opt_text(d.get("thingToLetGo")),
            tomorrow_priority=_opt_text(d.get("tomorrowPriority")),
            notes=_opt_text(d.get("notes")),
            completion_time_minutes=_opt_int(d.get("completionTimeMinutes")),
            domain_ratings=domain_ratings,
        )

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "date": self.date,
            "energyLevel": self.energy_level,
            "energyFactors": self.energy_factors,
            "meaningfulWin": self.meaningful_win,
            "frictionPoint": self.friction_point,
            "frictionAction": self.friction_action,
            "thingToLetGo": self.thing_to_let_go,
            "tomorrowPriority": self.tomorrow_priority,
            "notes": self.notes,
            "completionTimeMinutes": self.completion_time_minutes,
            "domainRatings": dict(self.domain_ratings) if self.domain_ratings is not None else None,
            "filePath": self.file_path,
        })


@dataclass(frozen=True)
class WeeklyReview:
    """One weekly reflection, keyed by its week-start date."""

    file_path: str = ""
    date: str | None = None  # week start, YYYY-MM-DD
    week_number: int | None = None  # 1-53
    moved_needle: str | None = None
    noise_disguised_as_work: str | None = None
    time_leaks: str | None = None
    strategic_insight: str | None = None
    adjustment_for_next_week: str | None = None
    notes: str | None = None
    duration: int | None = None  # minutes

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WeeklyReview:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            file_path=str(d.get("filePath", "") or ""),
            date=_opt_str(d.get("date")),
            week_number=_opt_int(d.get("weekNumber")),
            moved_needle=_opt_text(d.get("movedNeedle")),
            noise_disguised_as_work=_opt_text(d.get("noiseDisguisedAsWork")),
            time_leaks=_opt_text(d.get("timeLeaks")),
            strategic_insight=_opt_text(d.get("strategicInsight")),
            adjustment_for_next_week=_opt_text(d.get("adjustmentForNextWeek")),
            notes=_opt_text(d.get("notes")),
            duration=_opt_int(d.get("duration")),
        )

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "date": self.date,
            "weekNumber": self.week_number,
            "movedNeedle": self.moved_needle,
            "noiseDisguisedAsWork": self.noise_disguised_as_work,
            "timeLeaks": self.time_leaks,
            "strategicInsight": self.strategic_insight,
            "adjustmentForNextWeek": self.adjustment_for_next_week,
            "notes": self.notes,
            "duration": self.duration,
            "filePath": self.file_path,
        })


# ── Life Map ──────────────────────────────────────────────────


@dataclass(frozen=True)
class LifeMapDomain:
    score: int = 0  # 0 = unrated
    assessment: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LifeMapDomain:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            score=_opt_int(d.get("score")) or 0,
            assessment=str(d.get("assessment", "") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "assessment": self.assessment}


@dataclass(frozen=True)
class LifeMap:
    domains: dict[str, LifeMapDomain] = field(
        default_factory=lambda: {key: LifeMapDomain() for key in DOMAIN_KEYS}
    )

    def domain(self, key: str) -> LifeMapDomain:
        return self.domains.get(key) or LifeMapDomain()

    def replace(self, key: str, domain: LifeMapDomain) -> LifeMap:
        """Return a new LifeMap with one domain swapped out."""
        domains = {k: self.domain(k) for k in DOMAIN_KEYS}
        domains[key] = domain
        return LifeMap(domains=domains)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LifeMap:
        if not d or not isinstance(d, dict):
            return cls()
        raw = d.get("domains") or {}
        domains = {}
        for key in DOMAIN_KEYS:
            domains[key] = LifeMapDomain.from_dict(raw.get(key) if isinstance(raw, dict) else None)
        return cls(domains=domains)

    def to_dict(self) -> dict[str, Any]:
        return {"domains": {key: self.domain(key).to_dict() for key in DOMAIN_KEYS}}


# ── Charts ────────────────────────────────────────────────────


@dataclass(frozen=True)
class ChartDataItem:
    domain: str = ""  # display name, e.g. "Career"
    score: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"domain": self.domain, "score": self.score}


@dataclass(frozen=True)
class EnergyTrendItem:
    date: str = ""
    energy: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "energy": self.energy}
