"""KPI composition: point-in-time snapshots and closed-period summaries.

Composes the rent, recurring-cost and loan calculators with one-off events
and valuations. Money figures are whole-property amounts; ownership_pct is
carried through for callers that display a share.

Pure computation. No I/O.
"""

from collections.abc import Iterable
from datetime import date

from proptrack.engine.costs import accrue_recurring_costs
from proptrack.engine.loan import estimate_interest_paid, estimate_loan_position, interest_between
from proptrack.engine.rent import accrue_rent, weekly_rent_at
from proptrack.models.events import OneOffEvent, PropertyEvents, ValuationEvent
from proptrack.models.results import KpiSnapshot, PeriodKpis


def check_ownership(ownership_pct: float) -> None:
    if not 0 <= ownership_pct <= 100:
        raise ValueError(f"ownership_pct must be between 0 and 100, got {ownership_pct}")


def latest_valuation(valuations: Iterable[ValuationEvent], at: date) -> ValuationEvent | None:
    """Most recent valuation dated on or before ``at``."""
    past = [v for v in valuations if v.date <= at]
    if not past:
        return None
    return max(past, key=lambda v: v.date)


def reference_value(events: PropertyEvents, at: date) -> float | None:
    """Latest valuation on or before ``at``, falling back to the purchase price."""
    valuation = latest_valuation(events.valuations, at)
    if valuation is not None:
        return valuation.value
    if events.purchase is not None:
        return events.purchase.purchase_price
    return None


def sum_one_offs(
    one_offs: Iterable[OneOffEvent],
    start: date | None,
    end: date,
    inclusive_end: bool = True,
) -> tuple[float, float]:
    """(income, expenses) from one-offs dated in the window; expenses are negative."""
    income = 0.0
    expenses = 0.0
    for event in one_offs:
        if start is not None and event.date < start:
            continue
        if event.date > end or (not inclusive_end and event.date == end):
            continue
        if event.amount > 0:
            income += event.amount
        elif event.amount < 0:
            expenses += event.amount
    return income, expenses


def _ratio(numerator: float, denominator: float | None) -> float | None:
    if denominator is None or denominator == 0:
        return None
    return numerator / denominator


def compute_kpis(events: PropertyEvents, ownership_pct: float, as_of: date) -> KpiSnapshot:
    """Single KPI snapshot accrued from settlement up to ``as_of``."""
    check_ownership(ownership_pct)
    purchase = events.purchase
    start = purchase.settlement_date if purchase is not None else as_of

    rent = accrue_rent(events.tenancies, start, as_of)
    costs = accrue_recurring_costs(events.recurring_costs, events.tenancies, start, as_of)
    one_off_income, one_off_expenses = sum_one_offs(events.one_offs, None, as_of)

    position = estimate_loan_position(purchase, events.loans, as_of)
    interest_paid = estimate_interest_paid(purchase, events.loans, as_of)

    noi = rent.accrued_rent - costs.total
    net_cashflow = noi - interest_paid + one_off_income + one_off_expenses

    valuation = latest_valuation(events.valuations, as_of)
    value = valuation.value if valuation is not None else None
    equity = value - position.balance if value is not None else None

    return KpiSnapshot(
        as_of=as_of,
        ownership_pct=ownership_pct,
        purchase_price=purchase.purchase_price if purchase is not None else 0.0,
        acquisition_costs=purchase.acquisition_costs if purchase is not None else 0.0,
        total_acquisition_cost=purchase.total_acquisition_cost if purchase is not None else 0.0,
        gross_rent=rent.accrued_rent,
        vacancy_days=rent.vacancy_days,
        vacancy_loss=rent.vacancy_loss,
        current_weekly_rent=weekly_rent_at(events.tenancies, as_of),
        recurring_costs_by_category=costs.by_category,
        total_recurring_costs=costs.total,
        one_off_income=one_off_income,
        one_off_expenses=one_off_expenses,
        loan_balance=position.balance,
        loan_balance_source=position.source,
        interest_paid=interest_paid,
        current_rate=position.rate,
        current_loan_type=position.loan_type,
        fixed_expiry=position.fixed_expiry,
        offset_balance=position.offset_balance,
        noi=noi,
        net_cashflow=net_cashflow,
        latest_valuation=value,
        latest_valuation_date=valuation.date if valuation is not None else None,
        equity=equity,
        lvr=_ratio(position.balance, value),
    )


def compute_period_kpis(
    events: PropertyEvents,
    ownership_pct: float,
    start: date,
    end: date,
    inclusive_end: bool = True,
) -> PeriodKpis:
    """KPIs restricted to the period from ``start`` to ``end``.

    Rent and recurring costs accrue directly over the window. Interest is the
    difference of two cumulative estimates, which holds because the interest
    estimate never decreases with time. Pass ``inclusive_end=False`` when
    periods are half-open and adjacent, so a one-off on the boundary is only
    counted once.
    """
    check_ownership(ownership_pct)

    rent = accrue_rent(events.tenancies, start, end)
    costs = accrue_recurring_costs(events.recurring_costs, events.tenancies, start, end)
    one_off_income, one_off_expenses = sum_one_offs(events.one_offs, start, end, inclusive_end)
    interest_paid = interest_between(events.purchase, events.loans, start, end)

    noi = rent.accrued_rent - costs.total
    net_cashflow = noi - interest_paid + one_off_income + one_off_expenses
    ref_value = reference_value(events, end)

    return PeriodKpis(
        start=start,
        end=end,
        ownership_pct=ownership_pct,
        gross_rent=rent.accrued_rent,
        vacancy_days=rent.vacancy_days,
        vacancy_loss=rent.vacancy_loss,
        recurring_costs_by_category=costs.by_category,
        total_recurring_costs=costs.total,
        one_off_income=one_off_income,
        one_off_expenses=one_off_expenses,
        interest_paid=interest_paid,
        noi=noi,
        net_cashflow=net_cashflow,
        reference_value=ref_value,
        gross_yield=_ratio(rent.accrued_rent, ref_value),
        net_yield=_ratio(noi, ref_value),
    )


def fiscal_year_bounds(year: int, start_month: int = 7) -> tuple[date, date]:
    """Half-open [start, end) of the reporting year ending in ``year``.

    start_month=7 gives the Australian financial year (FY2025 is
    1 Jul 2024 to 30 Jun 2025); start_month=1 gives the calendar year.
    """
    if not 1 <= start_month <= 12:
        raise ValueError(f"start_month must be 1-12, got {start_month}")
    if start_month == 1:
        return date(year, 1, 1), date(year + 1, 1, 1)
    return date(year - 1, start_month, 1), date(year, start_month, 1)
