"""Property event model: the six dated event kinds the engine integrates.

Records arrive from the persistence layer already coerced to floats and naive
dates. Nothing here computes anything.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class LoanType(Enum):
    INTEREST_ONLY = "interest-only"
    PRINCIPAL_AND_INTEREST = "principal-and-interest"

    @classmethod
    def _missing_(cls, value):
        # Short codes used by older exports
        aliases = {"IO": cls.INTEREST_ONLY, "PI": cls.PRINCIPAL_AND_INTEREST}
        if isinstance(value, str):
            return aliases.get(value.upper())
        return None


class RateType(Enum):
    FIXED = "fixed"
    VARIABLE = "variable"


class TenancyEventType(Enum):
    START = "START"
    RENT_CHANGE = "RENT_CHANGE"
    END = "END"


class FeeType(Enum):
    FIXED = "fixed"
    PERCENT_OF_RENT = "percent_of_rent"

    @classmethod
    def _missing_(cls, value):
        if value == "pct_rent":
            return cls.PERCENT_OF_RENT
        return None


class Cadence(Enum):
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


@dataclass(frozen=True)
class PurchaseEvent:
    settlement_date: date
    purchase_price: float
    deposit: float | None = None
    stamp_duty: float | None = None
    legal_fees: float | None = None
    buyers_agent_fee: float | None = None
    loan_amount: float | None = None  # Initial loan drawn at settlement

    @property
    def acquisition_costs(self) -> float:
        """Stamp duty + legal fees + buyer's agent fee (sunk costs)."""
        return (self.stamp_duty or 0.0) + (self.legal_fees or 0.0) + (self.buyers_agent_fee or 0.0)

    @property
    def total_acquisition_cost(self) -> float:
        return self.purchase_price + self.acquisition_costs


@dataclass(frozen=True)
class LoanEvent:
    effective_date: date
    loan_type: LoanType
    annual_rate: float  # 0.0574 = 5.74%
    repayment_amount: float = 0.0
    repayment_cadence: Cadence = Cadence.MONTHLY
    rate_type: RateType = RateType.VARIABLE
    fixed_expiry: date | None = None
    offset_balance: float | None = None
    manual_loan_balance: float | None = None  # Lender-reported balance, wins over the estimate
    lender: str | None = None


@dataclass(frozen=True)
class TenancyEvent:
    type: TenancyEventType
    effective_date: date
    weekly_rent: float | None = None  # None for END
    lease_term_months: int | None = None


@dataclass(frozen=True)
class RecurringCostEvent:
    effective_date: date
    category: str  # Free-form: MGMT_FEE, INSURANCE, STRATA, ...
    fee_type: FeeType
    amount: float  # Currency per cadence if fixed; ratio of rent if percent_of_rent
    cadence: Cadence = Cadence.ANNUALLY
    end_date: date | None = None


@dataclass(frozen=True)
class OneOffEvent:
    date: date
    amount: float  # Positive = income, negative = expense
    category: str = ""


@dataclass(frozen=True)
class ValuationEvent:
    date: date
    value: float
    source: str | None = None


@dataclass(frozen=True)
class PropertyEvents:
    """Every event recorded against one property.

    Sequences may arrive in any order; engine functions sort their own copies.
    """
    purchase: PurchaseEvent | None = None
    loans: tuple[LoanEvent, ...] = field(default_factory=tuple)
    tenancies: tuple[TenancyEvent, ...] = field(default_factory=tuple)
    recurring_costs: tuple[RecurringCostEvent, ...] = field(default_factory=tuple)
    one_offs: tuple[OneOffEvent, ...] = field(default_factory=tuple)
    valuations: tuple[ValuationEvent, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.purchase is None and not (
            self.loans or self.tenancies or self.recurring_costs or self.one_offs or self.valuations
        )
