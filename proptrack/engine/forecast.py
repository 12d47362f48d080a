"""Forward projection of value, debt, cashflow and returns.

Value compounds from the latest known valuation through a multi-segment
appreciation schedule. Rent and recurring costs stay flat at the trailing
twelve-month run rate; nothing models rent growth or cost inflation. The loan
is re-estimated at each future instant with the same walk the KPI composer
uses.

Pure computation. No I/O.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from datetime import date

from proptrack.engine.costs import accrue_recurring_costs
from proptrack.engine.intervals import DAYS_PER_YEAR, add_years, days_between
from proptrack.engine.kpis import check_ownership, latest_valuation
from proptrack.engine.loan import estimate_loan_position
from proptrack.engine.rent import accrue_rent
from proptrack.models.assumptions import AppreciationSegment
from proptrack.models.events import PropertyEvents
from proptrack.models.results import ForecastPoint

logger = logging.getLogger(__name__)

DEFAULT_APPRECIATION_RATE = 0.05


def validate_schedule(segments: Iterable[AppreciationSegment]) -> tuple[AppreciationSegment, ...]:
    """Reject schedules the projection cannot reason about."""
    schedule = tuple(segments)
    for i, seg in enumerate(schedule):
        if not math.isfinite(seg.years) or seg.years <= 0:
            raise ValueError(f"Appreciation segment {i} must have years > 0, got {seg.years}")
        if not math.isfinite(seg.rate) or seg.rate <= -1:
            raise ValueError(f"Appreciation segment {i} must have a rate above -100%, got {seg.rate}")
    return schedule


def project_value(
    anchor_value: float,
    years_from_anchor: float,
    segments: Sequence[AppreciationSegment] = (),
    flat_rate: float = DEFAULT_APPRECIATION_RATE,
) -> float:
    """Compound ``anchor_value`` forward through the schedule.

    Segments apply in order. Past the end of the schedule the last segment's
    rate continues; with no schedule the flat rate applies throughout.
    """
    if not segments:
        return anchor_value * (1 + flat_rate) ** years_from_anchor

    value = anchor_value
    remaining = years_from_anchor
    for seg in segments:
        if remaining <= 0:
            break
        seg_years = min(remaining, seg.years)
        value *= (1 + seg.rate) ** seg_years
        remaining -= seg_years

    if remaining > 0:
        logger.debug("Extending last appreciation rate %.4f for %.2f years", segments[-1].rate, remaining)
        value *= (1 + segments[-1].rate) ** remaining
    return value


def annualise_return(total_return: float, years: float) -> float:
    """CAGR equivalent of a cumulative return.

    A total return below -100% is floored at a zero base so the root stays real.
    """
    if years <= 0:
        return total_return
    return max(0.0, 1 + total_return) ** (1 / years) - 1


def compute_forecast(
    events: PropertyEvents,
    ownership_pct: float,
    as_of: date,
    years: Iterable[int],
    segments: Sequence[AppreciationSegment] | None = None,
    appreciation_rate: float = DEFAULT_APPRECIATION_RATE,
) -> list[ForecastPoint]:
    """One ForecastPoint per requested year offset from ``as_of``, ascending.

    ``segments`` takes precedence over ``appreciation_rate``, which is only the
    flat fallback.
    """
    check_ownership(ownership_pct)
    schedule = validate_schedule(segments or ())
    if not math.isfinite(appreciation_rate) or appreciation_rate <= -1:
        raise ValueError(f"Flat appreciation rate must be above -100%, got {appreciation_rate}")
    offsets = sorted(set(years))
    if offsets and offsets[0] < 0:
        raise ValueError(f"Forecast year offsets must be >= 0, got {offsets[0]}")

    purchase = events.purchase

    # Anchor at the latest valuation, else the purchase price at settlement
    valuation = latest_valuation(events.valuations, as_of)
    if valuation is not None:
        anchor_value, anchor_date = valuation.value, valuation.date
    elif purchase is not None:
        anchor_value, anchor_date = purchase.purchase_price, purchase.settlement_date
    else:
        anchor_value, anchor_date = 0.0, as_of
    anchor_lag_days = days_between(anchor_date, as_of)

    # Trailing twelve months, clipped to settlement for younger properties
    run_start = add_years(as_of, -1)
    if purchase is not None and purchase.settlement_date > run_start:
        run_start = purchase.settlement_date
    run_days = days_between(run_start, as_of)
    annualisation = DAYS_PER_YEAR / run_days if run_days > 0 else 1.0

    trailing_rent = accrue_rent(events.tenancies, run_start, as_of).accrued_rent
    trailing_costs = accrue_recurring_costs(
        events.recurring_costs, events.tenancies, run_start, as_of
    ).total
    annual_gross_rent = trailing_rent * annualisation
    annual_recurring_costs = trailing_costs * annualisation

    current_balance = estimate_loan_position(purchase, events.loans, as_of).balance
    current_equity = anchor_value - current_balance

    acquisition_costs = purchase.acquisition_costs if purchase is not None else 0.0
    total_acquisition_cost = max(1.0, purchase.total_acquisition_cost if purchase is not None else 0.0)

    if schedule:
        base_rate = schedule[0].rate
    else:
        base_rate = appreciation_rate

    points: list[ForecastPoint] = []
    cumulative_cashflow = 0.0
    prev_offset = 0

    for y in offsets:
        years_from_anchor = (y * DAYS_PER_YEAR + anchor_lag_days) / DAYS_PER_YEAR
        projected_value = project_value(anchor_value, years_from_anchor, schedule, appreciation_rate)

        future = estimate_loan_position(purchase, events.loans, add_years(as_of, y))
        equity = projected_value - future.balance
        lvr = future.balance / projected_value if projected_value > 0 else None

        annual_interest = future.balance * future.rate if future.rate is not None else 0.0
        annual_net_cashflow = annual_gross_rent - annual_recurring_costs - annual_interest

        cumulative_cashflow += annual_net_cashflow * (y - prev_offset)
        prev_offset = y

        # Sunk acquisition costs count against the gain until value recovers them
        equity_gain = equity - current_equity - acquisition_costs
        roi = (equity_gain + cumulative_cashflow) / total_acquisition_cost

        if y > 0:
            value_cagr = (projected_value / max(1.0, anchor_value)) ** (1 / y) - 1
        else:
            value_cagr = base_rate

        points.append(ForecastPoint(
            year=as_of.year + y,
            years_from_now=y,
            projected_value=projected_value,
            loan_balance=future.balance,
            equity=equity,
            lvr=lvr,
            annual_gross_rent=annual_gross_rent,
            annual_recurring_costs=annual_recurring_costs,
            annual_interest=annual_interest,
            annual_net_cashflow=annual_net_cashflow,
            cumulative_cashflow=cumulative_cashflow,
            cumulative_equity_gain=equity_gain,
            roi=roi,
            annualised_roi=annualise_return(roi, y),
            value_cagr=value_cagr,
        ))

    return points
