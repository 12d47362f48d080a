"""Loan balance and interest estimation from the loan-event timeline.

This is a simple-interest-per-period approximation, not an amortization
schedule: each loan period charges interest on the balance at the start of
the period and, for principal-and-interest loans, retires whatever part of
the repayment exceeds that interest. Figures drift from a lender statement
over long horizons. A manual balance on the latest event replaces the
estimate outright.

Pure functions. No I/O.
"""

import logging
from collections.abc import Iterable, Iterator
from datetime import date

from proptrack.engine.intervals import cadence_days, days_between, periods_per_year
from proptrack.models.events import LoanEvent, LoanType, PurchaseEvent
from proptrack.models.results import BalanceSource, LoanPosition

logger = logging.getLogger(__name__)


def _active_loans(loans: Iterable[LoanEvent], as_of: date) -> list[LoanEvent]:
    return sorted(
        (e for e in loans if e.effective_date <= as_of),
        key=lambda e: e.effective_date,
    )


def _loan_periods(active: list[LoanEvent], as_of: date) -> Iterator[tuple[LoanEvent, float]]:
    """Yield (loan event, repayment periods elapsed) for each period up to as_of.

    A period runs from one event's effective date to the next event's (or to
    as_of for the latest). Fractional periods are kept.
    """
    for i, loan in enumerate(active):
        period_end = active[i + 1].effective_date if i + 1 < len(active) else as_of
        period_end = min(period_end, as_of)
        if period_end <= loan.effective_date:
            continue
        days = days_between(loan.effective_date, period_end)
        yield loan, days / cadence_days(loan.repayment_cadence)


def _advance(balance: float, loan: LoanEvent, periods: float) -> tuple[float, float]:
    """Step the balance through one loan period.

    Returns (balance at period end, interest charged over the period).
    """
    rate_per_period = loan.annual_rate / periods_per_year(loan.repayment_cadence)
    interest_per_period = balance * rate_per_period
    interest = interest_per_period * periods

    if loan.loan_type is LoanType.INTEREST_ONLY:
        return balance, interest

    principal_per_period = max(0.0, loan.repayment_amount - interest_per_period)
    return max(0.0, balance - principal_per_period * periods), interest


def _opening_balance(purchase: PurchaseEvent | None) -> float:
    if purchase is None or purchase.loan_amount is None:
        return 0.0
    return purchase.loan_amount


def estimate_loan_position(
    purchase: PurchaseEvent | None,
    loans: Iterable[LoanEvent],
    as_of: date,
) -> LoanPosition:
    """Outstanding balance and current loan terms as of a date.

    Priority:
      1. No loan event on or before as_of: the purchase loan amount, source NONE.
      2. Latest event carries a manual balance: that balance verbatim, source MANUAL.
      3. Otherwise walk every period from the purchase loan amount, source COMPUTED.
    """
    active = _active_loans(loans, as_of)
    if not active:
        return LoanPosition(balance=_opening_balance(purchase), source=BalanceSource.NONE)

    latest = active[-1]
    terms = dict(
        rate=latest.annual_rate,
        loan_type=latest.loan_type,
        fixed_expiry=latest.fixed_expiry,
        offset_balance=latest.offset_balance,
        lender=latest.lender,
    )

    if latest.manual_loan_balance is not None:
        logger.debug(
            "Using manual loan balance %.2f from %s", latest.manual_loan_balance, latest.effective_date
        )
        return LoanPosition(balance=latest.manual_loan_balance, source=BalanceSource.MANUAL, **terms)

    balance = _opening_balance(purchase)
    for loan, periods in _loan_periods(active, as_of):
        balance, _ = _advance(balance, loan, periods)

    return LoanPosition(balance=balance, source=BalanceSource.COMPUTED, **terms)


def estimate_interest_paid(
    purchase: PurchaseEvent | None,
    loans: Iterable[LoanEvent],
    as_of: date,
) -> float:
    """Cumulative interest paid from the first loan event up to as_of.

    Non-decreasing in as_of, so interest over a window is the difference of
    two calls.
    """
    active = _active_loans(loans, as_of)
    if not active:
        return 0.0

    balance = _opening_balance(purchase)
    total = 0.0
    for loan, periods in _loan_periods(active, as_of):
        balance, interest = _advance(balance, loan, periods)
        total += interest
    return total


def interest_between(
    purchase: PurchaseEvent | None,
    loans: Iterable[LoanEvent],
    start: date,
    end: date,
) -> float:
    """Interest paid over [start, end] as a difference of cumulative totals."""
    loans = tuple(loans)
    return max(
        0.0,
        estimate_interest_paid(purchase, loans, end) - estimate_interest_paid(purchase, loans, start),
    )
