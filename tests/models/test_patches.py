from datetime import date

import pytest

from proptrack.models.events import LoanEvent, LoanType, ValuationEvent
from proptrack.models.patches import UNSET, FieldPatch, PatchError, apply_patch


@pytest.fixture
def loan() -> LoanEvent:
    return LoanEvent(
        effective_date=date(2025, 6, 1),
        loan_type=LoanType.INTEREST_ONLY,
        annual_rate=0.0574,
        manual_loan_balance=431167.12,
        lender="Unknown",
    )


class TestFieldPatch:
    def test_only_present_fields_change(self, loan):
        patched = apply_patch(loan, FieldPatch(LoanEvent, {"annual_rate": 0.0549}))
        assert patched.annual_rate == 0.0549
        assert patched.manual_loan_balance == 431167.12
        assert patched.lender == "Unknown"

    def test_none_clears_field(self, loan):
        patched = apply_patch(loan, FieldPatch(LoanEvent, {"manual_loan_balance": None}))
        assert patched.manual_loan_balance is None

    def test_unset_is_dropped(self, loan):
        patch = FieldPatch.for_(LoanEvent, manual_loan_balance=UNSET, lender="Big Bank")
        assert dict(patch.changes) == {"lender": "Big Bank"}
        patched = apply_patch(loan, patch)
        assert patched.manual_loan_balance == 431167.12
        assert patched.lender == "Big Bank"

    def test_original_untouched(self, loan):
        apply_patch(loan, FieldPatch(LoanEvent, {"annual_rate": 0.01}))
        assert loan.annual_rate == 0.0574

    def test_empty_patch_returns_same(self, loan):
        patch = FieldPatch.for_(LoanEvent, lender=UNSET)
        assert patch.is_empty
        assert apply_patch(loan, patch) is loan

    def test_unknown_field(self):
        with pytest.raises(PatchError, match="no field"):
            FieldPatch(LoanEvent, {"balance": 1.0})

    def test_target_must_be_dataclass(self):
        with pytest.raises(PatchError, match="not an event type"):
            FieldPatch(dict, {"annual_rate": 0.05})

    def test_wrong_target(self, loan):
        with pytest.raises(PatchError):
            apply_patch(loan, FieldPatch(ValuationEvent, {"value": 1.0}))

    def test_changes_read_only(self):
        patch = FieldPatch(LoanEvent, {"annual_rate": 0.05})
        with pytest.raises(TypeError):
            patch.changes["annual_rate"] = 0.06

    def test_unset_is_falsy_singleton(self):
        assert not UNSET
        assert type(UNSET)() is UNSET
        assert repr(UNSET) == "UNSET"
