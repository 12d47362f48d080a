from datetime import date

import pytest

from proptrack.models.events import LoanEvent, PurchaseEvent, ValuationEvent
from proptrack.models.patches import FieldPatch, PatchError
from proptrack.repository import InMemoryEventRepository, PropertyNotFoundError


@pytest.fixture
def repo(frenchville_valued) -> InMemoryEventRepository:
    return InMemoryEventRepository({"frenchville": frenchville_valued})


class TestInMemoryEventRepository:
    def test_load(self, repo, frenchville_valued):
        assert repo.load_events_for_property("frenchville") is frenchville_valued
        assert repo.property_ids() == ["frenchville"]

    def test_missing_property(self, repo):
        with pytest.raises(PropertyNotFoundError):
            repo.load_events_for_property("nowhere")

    def test_add(self, repo, frenchville):
        repo.add("second", frenchville)
        assert repo.property_ids() == ["frenchville", "second"]

    def test_patch_loan_at_index(self, repo):
        updated = repo.apply("frenchville", FieldPatch(LoanEvent, {"manual_loan_balance": 431167.12}), index=0)
        assert updated.loans[0].manual_loan_balance == 431167.12
        assert updated.loans[0].annual_rate == 0.0574
        assert repo.load_events_for_property("frenchville") is updated

    def test_patch_purchase(self, repo):
        updated = repo.apply("frenchville", FieldPatch(PurchaseEvent, {"legal_fees": None}))
        assert updated.purchase.legal_fees is None
        assert updated.purchase.acquisition_costs == 31875.0

    def test_patch_bad_index(self, repo):
        with pytest.raises(PatchError):
            repo.apply("frenchville", FieldPatch(ValuationEvent, {"value": 1.0}), index=3)

    def test_patch_requires_index(self, repo):
        with pytest.raises(PatchError):
            repo.apply("frenchville", FieldPatch(ValuationEvent, {"date": date(2026, 1, 1)}))

    def test_patch_missing_property(self, repo):
        with pytest.raises(PropertyNotFoundError):
            repo.apply("nowhere", FieldPatch(LoanEvent, {"annual_rate": 0.05}), index=0)
