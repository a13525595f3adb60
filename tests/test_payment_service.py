# tests/test_payment_service.py
"""Tests for challan totals and payment summaries."""

from decimal import Decimal
from types import SimpleNamespace

from gst_compliance.domain.services.payment_service import (
    ChallanAmounts,
    PaymentSummary,
    challan_total,
    summarize_payments,
)


def _payment(total, status="pending", **itc):
    fields = {"itc_cgst_used": 0, "itc_sgst_used": 0, "itc_igst_used": 0}
    fields.update(itc)
    return SimpleNamespace(total_amount=total, status=status, **fields)


class TestChallanAmounts:

    def test_from_mapping_rounds_and_defaults(self):
        amounts = ChallanAmounts.from_mapping({"cgst": 100.005, "sgst": "50", "interest": None})
        assert amounts.cgst == Decimal("100.01")
        assert amounts.sgst == Decimal("50.00")
        assert amounts.interest == Decimal("0")
        assert amounts.itc_igst_used == Decimal("0")

    def test_total_includes_interest_and_late_fee(self):
        amounts = ChallanAmounts.from_mapping(
            {"cgst": 300, "sgst": 300, "igst": 0, "cess": 10, "interest": 49.32, "late_fee": 500}
        )
        assert challan_total(amounts) == Decimal("1159.32")

    def test_utilisation_split_does_not_change_total(self):
        amounts = ChallanAmounts.from_mapping({"igst": 1000, "cash_igst_used": 400, "itc_igst_used": 600})
        assert challan_total(amounts) == Decimal("1000")


class TestSummarizePayments:

    def test_pending_and_paid_totals(self):
        summary = summarize_payments([
            _payment("1000", "paid", itc_cgst_used=200),
            _payment("250.50", "pending", itc_igst_used="75.25"),
            _payment("100", "paid"),
        ])
        assert summary.payment_count == 3
        assert summary.paid_count == 2
        assert summary.pending_count == 1
        assert summary.total_paid == Decimal("1100")
        assert summary.total_pending == Decimal("250.50")
        assert summary.itc_utilized == {
            "cgst": Decimal("200"), "sgst": Decimal("0"), "igst": Decimal("75.25"),
        }

    def test_empty(self):
        assert summarize_payments([]).to_dict() == PaymentSummary().to_dict()

    def test_to_dict_uses_floats(self):
        data = summarize_payments([_payment("99.99", "pending")]).to_dict()
        assert data["total_pending"] == 99.99
        assert data["itc_utilized"]["cgst"] == 0.0
