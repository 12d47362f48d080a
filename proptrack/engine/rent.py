"""Rent accrual over an arbitrary date window.

The tenancy log is treated as a step function of weekly rent: START and
RENT_CHANGE set the rent in force, END clears it. Pure functions. No I/O.
"""

from collections.abc import Iterable, Iterator
from datetime import date

from proptrack.engine.intervals import clamp_date, days_between
from proptrack.models.events import TenancyEvent, TenancyEventType
from proptrack.models.results import RentAccrual


def _rent_segments(
    tenancies: Iterable[TenancyEvent],
    start: date,
    end: date,
) -> Iterator[tuple[int, float | None, float]]:
    """Yield (days, weekly_rent_in_force, last_known_rent) for each sub-interval.

    Events before ``start`` contribute no days but still set the rent carried
    into the window. ``last_known_rent`` is the most recent rent that was in
    force before the sub-interval began (0 if none ever was).
    """
    events = sorted(
        (e for e in tenancies if e.effective_date <= end),
        key=lambda e: e.effective_date,
    )

    weekly: float | None = None
    last_known = 0.0
    cursor = start

    for ev in events:
        boundary = clamp_date(ev.effective_date, start, end)
        days = days_between(cursor, boundary)
        if days > 0:
            yield days, weekly, last_known
        cursor = max(cursor, boundary)

        if ev.type is TenancyEventType.END:
            weekly = None
        elif ev.weekly_rent is not None:
            weekly = ev.weekly_rent
        if weekly is not None:
            last_known = weekly

    remaining = days_between(cursor, end)
    if remaining > 0:
        yield remaining, weekly, last_known


def accrue_rent(
    tenancies: Iterable[TenancyEvent],
    start: date,
    end: date,
) -> RentAccrual:
    """Accrued gross rent, vacancy days and vacancy loss over [start, end).

    A window with end <= start yields all zeros. Days with no rent in force
    (before the first START, after an END, or with no tenancy at all) count
    as vacancy.
    """
    if end <= start:
        return RentAccrual()

    accrued = 0.0
    vacancy_days = 0
    occupied_days = 0
    vacancy_loss = 0.0

    for days, weekly, last_known in _rent_segments(tenancies, start, end):
        if weekly is not None:
            accrued += weekly * days / 7
            occupied_days += days
        else:
            vacancy_days += days
            vacancy_loss += last_known * days / 7

    return RentAccrual(
        accrued_rent=accrued,
        vacancy_days=vacancy_days,
        occupied_days=occupied_days,
        vacancy_loss=vacancy_loss,
    )


def weekly_rent_at(tenancies: Iterable[TenancyEvent], at: date) -> float | None:
    """Weekly rent in force on ``at``, or None if the property is vacant."""
    weekly: float | None = None
    for ev in sorted(tenancies, key=lambda e: e.effective_date):
        if ev.effective_date > at:
            break
        if ev.type is TenancyEventType.END:
            weekly = None
        elif ev.weekly_rent is not None:
            weekly = ev.weekly_rent
    return weekly
