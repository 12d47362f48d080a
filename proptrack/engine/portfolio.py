"""Portfolio-level aggregation of per-property forecasts.

Pure computation. No I/O.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from proptrack.engine.forecast import annualise_return
from proptrack.models.results import ForecastPoint

logger = logging.getLogger(__name__)


def implied_acquisition_cost(point: ForecastPoint) -> float | None:
    """Back out the ROI denominator from (equity gain + cashflow) / roi.

    None when roi is exactly zero, where the cost cannot be recovered. The
    result is floored at 1 to mirror the floor applied when the ROI was
    computed.
    """
    if point.roi == 0:
        return None
    cost = (point.cumulative_equity_gain + point.cumulative_cashflow) / point.roi
    return max(1.0, cost)


def aggregate_forecasts(
    forecasts: Mapping[str, Sequence[ForecastPoint]],
    years: Iterable[int],
) -> list[ForecastPoint]:
    """Sum matching year offsets across properties.

    Offsets no property reports are skipped. Aggregate ROI is re-derived from
    the summed gain and cashflow over the summed implied acquisition costs;
    properties whose ROI is exactly zero drop out of that denominator.
    """
    aggregate: list[ForecastPoint] = []

    for y in sorted(set(years)):
        points = [
            pt
            for series in forecasts.values()
            for pt in series
            if pt.years_from_now == y
        ]
        if not points:
            continue

        total_value = sum(pt.projected_value for pt in points)
        total_loan = sum(pt.loan_balance for pt in points)
        total_gain = sum(pt.cumulative_equity_gain for pt in points)
        total_cashflow = sum(pt.cumulative_cashflow for pt in points)

        costs = [implied_acquisition_cost(pt) for pt in points]
        skipped = sum(1 for c in costs if c is None)
        if skipped:
            logger.debug("Year %d: %d propert(ies) with zero ROI left out of the cost base", y, skipped)
        total_cost = sum(c for c in costs if c is not None)
        roi = (total_gain + total_cashflow) / total_cost if total_cost > 0 else 0.0

        aggregate.append(ForecastPoint(
            year=points[0].year,
            years_from_now=y,
            projected_value=total_value,
            loan_balance=total_loan,
            equity=sum(pt.equity for pt in points),
            lvr=total_loan / total_value if total_value > 0 else None,
            annual_gross_rent=sum(pt.annual_gross_rent for pt in points),
            annual_recurring_costs=sum(pt.annual_recurring_costs for pt in points),
            annual_interest=sum(pt.annual_interest for pt in points),
            annual_net_cashflow=sum(pt.annual_net_cashflow for pt in points),
            cumulative_cashflow=total_cashflow,
            cumulative_equity_gain=total_gain,
            roi=roi,
            annualised_roi=annualise_return(roi, y),
            value_cagr=sum(pt.value_cagr for pt in points) / len(points),
        ))

    return aggregate
