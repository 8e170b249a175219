"""Tests for lifeos/daily_review.py: parser, serializer, round-trips."""

import pytest

from lifeos.daily_review import (
    parse_daily_review,
    parse_domain_ratings,
    parse_energy_level,
    serialize_daily_review,
)
from lifeos.models import DailyReview

FULL_RATINGS = {"career": 8, "relationships": 0, "health": 6, "meaning": 0, "finances": 0, "fun": 4}


def test_parse_sample_document(daily_text):
    review = parse_daily_review(daily_text, "reviews/daily/2026-02-10.md")
    assert review.file_path == "reviews/daily/2026-02-10.md"
    assert review.date == "2026-02-10"
    assert review.energy_level == 7
    assert review.energy_factors == "Slept well, short run before work."
    assert review.meaningful_win == "Shipped the onboarding flow"
    assert review.friction_point == "Too many meetings after lunch"
    assert review.friction_action == "address"
    assert review.thing_to_let_go == "Replying to every message the same day"
    assert review.tomorrow_priority == "Draft the Q1 plan"
    assert review.notes is None  # placeholder
    assert review.completion_time_minutes == 4
    assert review.domain_ratings == FULL_RATINGS


@pytest.mark.parametrize("content", [
    "",
    "just some prose, not markdown at all",
    "## One Meaningful Win\n> only this",
    "**Date:** \n**Energy level (1-10):**",
    "\x00\ufeff>>>|||[[[",
])
def test_parse_never_raises(content):
    review = parse_daily_review(content, "x.md")
    assert review.file_path == "x.md"


def test_parse_empty_returns_only_file_path():
    assert parse_daily_review("", "x.md") == DailyReview(file_path="x.md")


def test_parse_subset_of_sections():
    review = parse_daily_review("## One Meaningful Win\n> only this", "x.md")
    assert review.meaningful_win == "only this"
    assert review.date is None
    assert review.friction_action is None


def test_placeholder_date_is_absent():
    assert parse_daily_review("**Date:** [YYYY-MM-DD]", "x.md").date is None
    assert parse_daily_review("**Date:** 10/02/2026", "x.md").date is None


def test_energy_level_empty_brackets_absent():
    assert parse_energy_level("**Energy level (1-10):** [ ]") is None
    assert parse_energy_level("**Energy level (1-10):** []") is None


@pytest.mark.parametrize("token,expected", [
    ("1", 1),
    ("10", 10),
    ("0", None),
    ("11", None),
    ("7.5", None),
    ("seven", None),
])
def test_energy_level_range(token, expected):
    assert parse_energy_level(f"**Energy level (1-10):** {token}") == expected


def test_friction_both_checked_is_no_decision():
    text = "## One Friction Point\n> x\n- [x] Needs action\n- [x] Just needs acknowledgment"
    assert parse_daily_review(text, "x.md").friction_action is None


def test_friction_letting_go():
    text = "## One Friction Point\n> x\n- [ ] Needs action\n- [x] Just needs acknowledgment"
    assert parse_daily_review(text, "x.md").friction_action == "letting_go"


def test_domain_ratings_all_zero_is_absent():
    section = "- Career: 0\n- Relationships: 0\n- Health: 0\n- Meaning: 0\n- Finances: 0\n- Fun: 0"
    assert parse_domain_ratings(section) is None


def test_domain_ratings_out_of_range_skipped():
    ratings = parse_domain_ratings("- Career: 11\n- Fun: 3")
    assert ratings == {"fun": 3}


def test_completion_time_case_insensitive():
    review = parse_daily_review("**Time to complete:** 12 Minutes", "x.md")
    assert review.completion_time_minutes == 12


def test_serialize_marks_matching_checkbox():
    text = serialize_daily_review(DailyReview(friction_action="letting_go"))
    assert "- [ ] Needs action" in text
    assert "- [x] Just needs acknowledgment" in text
    text = serialize_daily_review(DailyReview())
    assert "- [ ] Needs action" in text
    assert "- [ ] Just needs acknowledgment" in text


def test_serialize_emits_every_section():
    text = serialize_daily_review(DailyReview())
    for title in (
        "## Energy Check",
        "## One Meaningful Win",
        "## One Friction Point",
        "## One Thing to Let Go",
        "## One Priority for Tomorrow",
        "## Optional: Brief Notes",
    ):
        assert title in text
    assert "## Life Map Ratings" not in text


def test_serialize_ratings_only_when_positive():
    zero = dict.fromkeys(FULL_RATINGS, 0)
    assert "## Life Map Ratings" not in serialize_daily_review(DailyReview(domain_ratings=zero))
    text = serialize_daily_review(DailyReview(domain_ratings={"career": 8}))
    assert "## Life Map Ratings" in text
    assert "- Career: 8" in text
    assert "- Fun: 0" in text


def test_round_trip_empty_record():
    review = DailyReview(file_path="x.md")
    assert parse_daily_review(serialize_daily_review(review), "x.md") == review


def test_round_trip_full_record():
    review = DailyReview(
        file_path="reviews/daily/2026-01-15.md",
        date="2026-01-15",
        energy_level=9,
        energy_factors="Coffee & <sunlight>\nplus a \"long\" walk",
        meaningful_win="Merged `parser` fix & wrote 'docs'",
        friction_point="Build <flaky> again",
        friction_action="letting_go",
        thing_to_let_go="Inbox zero",
        tomorrow_priority="Ship v1 > v0",
        notes="first line\n\n  indented second line",
        completion_time_minutes=5,
        domain_ratings=FULL_RATINGS,
    )
    parsed = parse_daily_review(serialize_daily_review(review), review.file_path)
    assert parsed == review


def test_round_trip_sample_document(daily_text):
    review = parse_daily_review(daily_text, "x.md")
    again = parse_daily_review(serialize_daily_review(review), "x.md")
    assert again == review


def test_round_trip_free_text_with_rule_and_heading_lines():
    review = DailyReview(
        file_path="x.md",
        energy_factors="Sleep\n## Why\nlate dinner",
        notes="Plan:\n---\nafter the rule\n# Big\n***\n\\already escaped",
    )
    text = serialize_daily_review(review)
    assert "\n\\---\n" in text
    assert "\n\\## Why\n" in text
    assert parse_daily_review(text, "x.md") == review


def test_partial_ratings_come_back_zero_filled():
    review = DailyReview(file_path="x.md", domain_ratings={"career": 8})
    parsed = parse_daily_review(serialize_daily_review(review), "x.md")
    assert parsed.domain_ratings == {
        "career": 8, "relationships": 0, "health": 0, "meaning": 0, "finances": 0, "fun": 0,
    }


def test_non_ascii_digits_rejected():
    arabic_indic = "٢٠٢٦-٠١-١٥"
    assert parse_daily_review(f"**Date:** {arabic_indic}", "x.md").date is None
    assert parse_energy_level("**Energy level (1-10):** ٧") is None
