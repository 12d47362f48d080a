from datetime import date

from proptrack.models.events import FeeType, LoanType, PropertyEvents, PurchaseEvent


class TestEnums:
    def test_loan_type_aliases(self):
        assert LoanType("IO") is LoanType.INTEREST_ONLY
        assert LoanType("pi") is LoanType.PRINCIPAL_AND_INTEREST
        assert LoanType("interest-only") is LoanType.INTEREST_ONLY

    def test_fee_type_alias(self):
        assert FeeType("pct_rent") is FeeType.PERCENT_OF_RENT
        assert FeeType("percent_of_rent") is FeeType.PERCENT_OF_RENT


class TestPurchaseEvent:
    def test_acquisition_costs_treat_missing_as_zero(self):
        purchase = PurchaseEvent(settlement_date=date(2024, 11, 1), purchase_price=555000.0, stamp_duty=18000.0)
        assert purchase.acquisition_costs == 18000.0
        assert purchase.total_acquisition_cost == 573000.0


class TestPropertyEvents:
    def test_empty(self, frenchville):
        assert PropertyEvents().is_empty
        assert not frenchville.is_empty
