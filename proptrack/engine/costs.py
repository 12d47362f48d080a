"""Recurring-cost accrual over an arbitrary date window.

Pure functions. No I/O.
"""

from collections.abc import Iterable
from datetime import date

from proptrack.engine.intervals import cadence_days, clamp_date, days_between
from proptrack.engine.rent import accrue_rent
from proptrack.models.events import FeeType, RecurringCostEvent, TenancyEvent
from proptrack.models.results import CostAccrual


def active_window(
    cost: RecurringCostEvent, start: date, end: date
) -> tuple[date, date] | None:
    """Overlap of the cost's active span [effective_date, end_date) with [start, end)."""
    if end <= start or cost.effective_date >= end:
        return None
    active_start = clamp_date(cost.effective_date, start, end)
    active_end = clamp_date(cost.end_date, start, end) if cost.end_date else end
    if active_start >= active_end:
        return None
    return active_start, active_end


def accrue_cost(
    cost: RecurringCostEvent,
    tenancies: Iterable[TenancyEvent],
    start: date,
    end: date,
) -> float:
    """Amount one recurring cost accrues over [start, end).

    Fixed fees accrue pro rata by day; percent-of-rent fees take their ratio of
    the rent accrued over the overlap.
    """
    window = active_window(cost, start, end)
    if window is None:
        return 0.0
    active_start, active_end = window

    if cost.fee_type is FeeType.PERCENT_OF_RENT:
        rent = accrue_rent(tenancies, active_start, active_end)
        return rent.accrued_rent * cost.amount

    daily = cost.amount / cadence_days(cost.cadence)
    return daily * days_between(active_start, active_end)


def accrue_recurring_costs(
    costs: Iterable[RecurringCostEvent],
    tenancies: Iterable[TenancyEvent],
    start: date,
    end: date,
) -> CostAccrual:
    """Accrued recurring costs by category over [start, end).

    Categories with no cost active in the window are left out rather than
    reported as zero. Several costs sharing a category are summed.
    """
    tenancies = tuple(tenancies)
    by_category: dict[str, float] = {}

    for cost in costs:
        if active_window(cost, start, end) is None:
            continue
        amount = accrue_cost(cost, tenancies, start, end)
        by_category[cost.category] = by_category.get(cost.category, 0.0) + amount

    return CostAccrual(by_category=by_category, total=sum(by_category.values()))
