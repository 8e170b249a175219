"""Domain score aggregation for the Life Map dashboard.

Reduces a window of daily reviews into one score per domain. A rating of 0
means "not rated" and is never averaged in: career=8 one day and 0 the next
is an average of 8, not 4. Keep it that way.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Any, Iterable

from lifeos.models import (
    DOMAIN_KEYS,
    ChartDataItem,
    DailyReview,
    DomainScores,
    EnergyTrendItem,
    empty_scores,
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _is_observation(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _average(values: list[float]) -> int:
    if not values:
        return 0
    return _round_half_up(sum(values) / len(values))


def aggregate_domain_scores(reviews: Iterable[DailyReview]) -> DomainScores:
    """Average each domain's positive ratings across reviews, rounded to an int."""
    observed: dict[str, list[float]] = defaultdict(list)
    for review in reviews:
        ratings = review.domain_ratings or {}
        for key in DOMAIN_KEYS:
            value = ratings.get(key)
            if _is_observation(value):
                observed[key].append(value)
    return {key: _average(observed[key]) for key in DOMAIN_KEYS}


def derive_domains_from_energy(reviews: Iterable[DailyReview]) -> DomainScores:
    """Average energy level into health; every other domain stays 0."""
    levels = [r.energy_level for r in reviews if _is_observation(r.energy_level)]
    scores = empty_scores()
    scores["health"] = _average(levels)
    return scores


def combine_aggregated_with_derived(aggregated: DomainScores, derived: DomainScores) -> DomainScores:
    """Prefer explicit ratings; fall back to derived values only where aggregated is 0."""
    combined = {}
    for key in DOMAIN_KEYS:
        value = aggregated.get(key) or 0
        combined[key] = value if value != 0 else (derived.get(key) or 0)
    return combined


def is_data_empty(rows: Iterable[ChartDataItem]) -> bool:
    """True when every chart row scores 0 or None (an empty list counts as empty)."""
    return all(not row.score for row in rows)


def should_show_empty_state(rows: Iterable[ChartDataItem], has_any_reviews: bool) -> bool:
    """Empty-state UI only appears when there are no reviews at all.

    A user with reviews but no domain ratings still sees their data.
    """
    if has_any_reviews:
        return False
    return is_data_empty(rows)


def get_energy_trend_data(reviews: Iterable[DailyReview]) -> list[EnergyTrendItem]:
    """Energy points for the trend chart, input order kept, unrated days dropped."""
    return [
        EnergyTrendItem(date=r.date or "", energy=r.energy_level)
        for r in reviews
        if r.energy_level is not None
    ]


def convert_to_chart_data(scores: DomainScores) -> list[ChartDataItem]:
    """Domain scores as chart rows in fixed domain order."""
    return [ChartDataItem(domain=key.capitalize(), score=scores.get(key)) for key in DOMAIN_KEYS]
