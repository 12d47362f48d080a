from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from proptrack.models.events import LoanType


class BalanceSource(Enum):
    MANUAL = "manual"
    COMPUTED = "computed"
    NONE = "none"


@dataclass(frozen=True)
class RentAccrual:
    accrued_rent: float = 0.0
    vacancy_days: int = 0
    occupied_days: int = 0
    vacancy_loss: float = 0.0  # Rent forgone at the last rent in force before each vacancy


@dataclass(frozen=True)
class CostAccrual:
    by_category: dict[str, float] = field(default_factory=dict)
    total: float = 0.0


@dataclass(frozen=True)
class LoanPosition:
    balance: float = 0.0
    source: BalanceSource = BalanceSource.NONE
    rate: float | None = None
    loan_type: LoanType | None = None
    fixed_expiry: date | None = None
    offset_balance: float | None = None
    lender: str | None = None


@dataclass
class KpiSnapshot:
    as_of: date
    ownership_pct: float = 100.0

    # Acquisition
    purchase_price: float = 0.0
    acquisition_costs: float = 0.0  # Stamp duty + legal + agent
    total_acquisition_cost: float = 0.0

    # Income (accrued since settlement)
    gross_rent: float = 0.0
    vacancy_days: int = 0
    vacancy_loss: float = 0.0
    current_weekly_rent: float | None = None  # None while vacant

    # Recurring costs (accrued since settlement)
    recurring_costs_by_category: dict[str, float] = field(default_factory=dict)
    total_recurring_costs: float = 0.0

    # One-offs (summed to as_of)
    one_off_income: float = 0.0
    one_off_expenses: float = 0.0  # Negative

    # Loan
    loan_balance: float = 0.0
    loan_balance_source: BalanceSource = BalanceSource.NONE
    interest_paid: float = 0.0  # Estimated, cumulative
    current_rate: float | None = None
    current_loan_type: LoanType | None = None
    fixed_expiry: date | None = None
    offset_balance: float | None = None

    # Cashflow
    noi: float = 0.0  # gross_rent - total_recurring_costs
    net_cashflow: float = 0.0  # noi - interest_paid + one-offs

    # Value
    latest_valuation: float | None = None
    latest_valuation_date: date | None = None
    equity: float | None = None
    lvr: float | None = None


@dataclass
class PeriodKpis:
    start: date
    end: date
    ownership_pct: float = 100.0

    gross_rent: float = 0.0
    vacancy_days: int = 0
    vacancy_loss: float = 0.0
    recurring_costs_by_category: dict[str, float] = field(default_factory=dict)
    total_recurring_costs: float = 0.0
    one_off_income: float = 0.0
    one_off_expenses: float = 0.0
    interest_paid: float = 0.0
    noi: float = 0.0
    net_cashflow: float = 0.0

    # Yields against the reference value at period end
    reference_value: float | None = None
    gross_yield: float | None = None
    net_yield: float | None = None


@dataclass
class ForecastPoint:
    year: int  # Calendar year
    years_from_now: int

    projected_value: float = 0.0
    loan_balance: float = 0.0
    equity: float = 0.0
    lvr: float | None = None

    # Held flat at the trailing twelve-month run rate
    annual_gross_rent: float = 0.0
    annual_recurring_costs: float = 0.0

    annual_interest: float = 0.0  # Projected balance x rate at that instant
    annual_net_cashflow: float = 0.0
    cumulative_cashflow: float = 0.0

    # Gain over today's equity, net of sunk acquisition costs
    cumulative_equity_gain: float = 0.0
    roi: float = 0.0  # (equity gain + cumulative cashflow) / total acquisition cost
    annualised_roi: float = 0.0  # CAGR of total return, comparable across horizons
    value_cagr: float = 0.0


@dataclass
class PropertyForecast:
    property_id: str
    points: list[ForecastPoint] = field(default_factory=list)


@dataclass
class PortfolioForecast:
    properties: list[PropertyForecast] = field(default_factory=list)
    aggregate: list[ForecastPoint] = field(default_factory=list)
