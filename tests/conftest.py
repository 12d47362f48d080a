"""Canonical test fixtures used across all engine tests.

Fixture: 193 Frenchville Rd. Settled 2024-11-01 at $555K with a $432,900
interest-only loan at 5.74%, tenanted from 2024-11-15 at $424/wk, 8% management
fee and $2,042/yr landlord insurance.
"""

from datetime import date

import pytest

from proptrack.models.events import (
    Cadence,
    FeeType,
    LoanEvent,
    LoanType,
    OneOffEvent,
    PropertyEvents,
    PurchaseEvent,
    RateType,
    RecurringCostEvent,
    TenancyEvent,
    TenancyEventType,
    ValuationEvent,
)


@pytest.fixture
def purchase() -> PurchaseEvent:
    return PurchaseEvent(
        settlement_date=date(2024, 11, 1),
        purchase_price=555000.0,
        deposit=122100.0,
        stamp_duty=18000.0,
        legal_fees=2000.0,
        buyers_agent_fee=13875.0,
        loan_amount=432900.0,
    )


@pytest.fixture
def io_loan() -> LoanEvent:
    return LoanEvent(
        effective_date=date(2024, 11, 1),
        loan_type=LoanType.INTEREST_ONLY,
        rate_type=RateType.VARIABLE,
        annual_rate=0.0574,
        repayment_amount=2069.51,
        repayment_cadence=Cadence.MONTHLY,
        offset_balance=150000.0,
        lender="Unknown",
    )


@pytest.fixture
def tenancy_start() -> TenancyEvent:
    return TenancyEvent(
        type=TenancyEventType.START,
        effective_date=date(2024, 11, 15),
        weekly_rent=424.0,
        lease_term_months=12,
    )


@pytest.fixture
def management_fee() -> RecurringCostEvent:
    return RecurringCostEvent(
        effective_date=date(2024, 11, 15),
        category="MGMT_FEE",
        fee_type=FeeType.PERCENT_OF_RENT,
        amount=0.08,
        cadence=Cadence.MONTHLY,
    )


@pytest.fixture
def insurance() -> RecurringCostEvent:
    return RecurringCostEvent(
        effective_date=date(2024, 11, 1),
        category="INSURANCE",
        fee_type=FeeType.FIXED,
        amount=2042.0,
        cadence=Cadence.ANNUALLY,
    )


@pytest.fixture
def frenchville(purchase, io_loan, tenancy_start, management_fee, insurance) -> PropertyEvents:
    """The canonical property: no valuations, no one-offs."""
    return PropertyEvents(
        purchase=purchase,
        loans=(io_loan,),
        tenancies=(tenancy_start,),
        recurring_costs=(management_fee, insurance),
    )


@pytest.fixture
def frenchville_valued(frenchville) -> PropertyEvents:
    """Canonical property with a repair bill and a valuation on 2025-12-31."""
    return PropertyEvents(
        purchase=frenchville.purchase,
        loans=frenchville.loans,
        tenancies=frenchville.tenancies,
        recurring_costs=frenchville.recurring_costs,
        one_offs=(
            OneOffEvent(date=date(2025, 6, 30), amount=-2500.0, category="MAINTENANCE"),
            OneOffEvent(date=date(2025, 9, 1), amount=300.0, category="INSURANCE_CLAIM"),
        ),
        valuations=(
            ValuationEvent(date=date(2025, 12, 31), value=640000.0, source="bank"),
        ),
    )
