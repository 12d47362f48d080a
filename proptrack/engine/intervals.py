"""Date-interval helpers shared by the accrual calculators.

Month and year cadences use calendar-average lengths (365.25 days a year)
rather than exact month lengths.
"""

from datetime import date

from dateutil.relativedelta import relativedelta

from proptrack.models.events import Cadence

DAYS_PER_YEAR = 365.25

CADENCE_DAYS: dict[Cadence, float] = {
    Cadence.WEEKLY: 7.0,
    Cadence.FORTNIGHTLY: 14.0,
    Cadence.MONTHLY: DAYS_PER_YEAR / 12,
    Cadence.QUARTERLY: DAYS_PER_YEAR / 4,
    Cadence.ANNUALLY: DAYS_PER_YEAR,
}


def days_between(a: date, b: date) -> int:
    """Whole days from a to b (negative if b is before a)."""
    return (b - a).days


def cadence_days(cadence: Cadence) -> float:
    return CADENCE_DAYS.get(cadence, DAYS_PER_YEAR)


def periods_per_year(cadence: Cadence) -> float:
    return DAYS_PER_YEAR / cadence_days(cadence)


def clamp_date(d: date, lo: date, hi: date) -> date:
    if d < lo:
        return lo
    if d > hi:
        return hi
    return d


def add_years(d: date, years: int) -> date:
    """Shift by whole calendar years; 29 Feb lands on 28 Feb in common years."""
    return d + relativedelta(years=years)
