"""Date Rules — format validation and future-date classification for YYYY-MM-DD strings.

Invariants:
    - All functions are PURE except utc_today (reads the clock)
    - Format check is lexical + range only: month length and leap years are NOT enforced
      (2025-02-30 passes)
    - A date equal to today is not future — it is due now

Design Decisions:
    - Component-wise comparison over datetime.date parsing: calendar-invalid dates that
      pass the format check must still classify without raising
    - today injectable: callers and tests pin "now" for deterministic results
"""

from datetime import date, datetime, timezone

DATE_LENGTH = 10
MIN_YEAR, MAX_YEAR = 1000, 9999
_ASCII_DIGITS = frozenset("0123456789")


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def is_valid_date_format(value: str) -> bool:
    """True if value looks like YYYY-MM-DD with in-range components."""
    if len(value) != DATE_LENGTH:
        return False
    if value[4] != "-" or value[7] != "-":
        return False

    year, month, day = value[0:4], value[5:7], value[8:10]
    if not all(ch in _ASCII_DIGITS for ch in year + month + day):
        return False

    if not MIN_YEAR <= int(year) <= MAX_YEAR:
        return False
    if not 1 <= int(month) <= 12:
        return False
    if not 1 <= int(day) <= 31:
        return False
    return True


def is_future_date(value: str, today: date | None = None) -> bool:
    """True if value is strictly after today (UTC by default).

    Assumes value already passed is_valid_date_format.
    """
    today = today or utc_today()
    year, month, day = int(value[0:4]), int(value[5:7]), int(value[8:10])

    if year != today.year:
        return year > today.year
    if month != today.month:
        return month > today.month
    return day > today.day
