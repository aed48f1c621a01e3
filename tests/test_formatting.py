"""
Tests for display helpers.
Run with: pytest tests/test_formatting.py
"""

from datetime import datetime, timedelta, timezone

from shiftly.formatting import (
    format_score,
    initials,
    parse_timestamp,
    relative_time,
    score_bar,
    score_bucket,
    score_color,
    status_color,
)

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def _ago(**kwargs) -> str:
    return (NOW - timedelta(**kwargs)).isoformat()


def test_score_buckets():
    assert score_bucket(0.7) == "high"
    assert score_bucket(0.69) == "mid"
    assert score_bucket(0.4) == "mid"
    assert score_bucket(0.39) == "low"
    assert score_bucket(0.0) == "low"


def test_score_color_unscored():
    assert score_color(None) == "grey50"
    assert score_color(0.9) == "green"


def test_format_score():
    assert format_score(0.85) == "85%"
    assert format_score(0.0) == "0%"
    assert format_score(None) == "N/A"


def test_status_color_case_insensitive():
    assert status_color("Active") == "green"
    assert status_color("escalated") == "dark_orange"


def test_score_bar_clamped():
    assert score_bar(0.5, width=4) == "██░░"
    assert score_bar(1.5, width=4) == "████"


def test_parse_timestamp_variants():
    assert parse_timestamp("2026-10-19T12:00:00Z") == NOW
    assert parse_timestamp("2026-10-19T12:00:00.123456+00:00").microsecond == 123456
    assert parse_timestamp("2026-10-19T12:00:00").tzinfo is not None
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(None) is None


def test_relative_time():
    assert relative_time(_ago(seconds=30), now=NOW) == "30s ago"
    assert relative_time(_ago(minutes=5), now=NOW) == "5m ago"
    assert relative_time(_ago(hours=3), now=NOW) == "3h ago"
    assert relative_time(_ago(days=2), now=NOW) == "2d ago"
    assert relative_time((NOW + timedelta(minutes=1)).isoformat(), now=NOW) == "just now"
    assert relative_time("garbage", now=NOW) == ""


def test_initials():
    assert initials("john doe") == "JD"
    assert initials("Cher") == "CH"
