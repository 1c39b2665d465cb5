"""Date Rules — tests for format validation and future-date classification.

Tests cover:
    - is_valid_date_format accepts YYYY-MM-DD with in-range components
    - is_valid_date_format is format-only (calendar-invalid days pass)
    - is_valid_date_format rejects wrong length, separators, non-digits, out-of-range parts
    - is_future_date compares year, then month, then day; today is not future
"""

from datetime import date

import pytest

from app.core.date_rules import is_future_date, is_valid_date_format, utc_today

TODAY = date(2025, 6, 15)


# ─── is_valid_date_format ────────────────────────────────────────

def test_valid_date_format_accepts_iso_date():
    assert is_valid_date_format("2025-01-01")


def test_valid_date_format_ignores_month_length():
    assert is_valid_date_format("2025-02-30")
    assert is_valid_date_format("2025-04-31")


@pytest.mark.parametrize("value", [
    "2025-1-01",
    "2025-01-001",
    "",
    "2025/01/01",
    "20250-1-01",
    "2025-0a-01",
    "２０２５-01-01",
    "0999-01-01",
    "2025-00-01",
    "2025-13-01",
    "2025-01-00",
    "2025-01-32",
])
def test_valid_date_format_rejects(value):
    assert not is_valid_date_format(value)


# ─── is_future_date ──────────────────────────────────────────────

def test_future_date_later_year():
    assert is_future_date("2026-01-01", today=TODAY)


def test_future_date_earlier_year_with_later_month():
    assert not is_future_date("2024-12-31", today=TODAY)


def test_future_date_same_year_later_month():
    assert is_future_date("2025-07-01", today=TODAY)


def test_future_date_same_year_earlier_month_later_day():
    assert not is_future_date("2025-05-30", today=TODAY)


def test_future_date_same_month_later_day():
    assert is_future_date("2025-06-16", today=TODAY)


def test_future_date_today_is_not_future():
    assert not is_future_date("2025-06-15", today=TODAY)


def test_future_date_calendar_invalid_date_still_classifies():
    assert is_future_date("2025-06-31", today=TODAY)


def test_future_date_is_deterministic_for_fixed_today():
    results = {is_future_date("2025-06-20", today=TODAY) for _ in range(5)}
    assert results == {True}


def test_future_date_defaults_to_utc_today():
    today = utc_today()
    assert not is_future_date(today.isoformat())
    assert is_future_date(f"{today.year + 1}-01-01")
