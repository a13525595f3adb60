# gst_compliance/domain/services/payment_service.py
"""
Challan (GST payment) amounts and payment summaries.

A challan carries tax per head plus interest and late fee. The cash / ITC
utilisation split per head is informational and does not change the
challan total.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable

from gst_compliance.domain.models.money import ZERO, round_money, to_decimal

PAYMENT_PENDING = "pending"
PAYMENT_PAID = "paid"
PAYMENT_STATUSES = (PAYMENT_PENDING, PAYMENT_PAID)

_TOTAL_FIELDS = ("cgst", "sgst", "igst", "cess", "interest", "late_fee")


@dataclass
class ChallanAmounts:
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    cess: Decimal = ZERO
    interest: Decimal = ZERO
    late_fee: Decimal = ZERO
    cash_cgst_used: Decimal = ZERO
    cash_sgst_used: Decimal = ZERO
    cash_igst_used: Decimal = ZERO
    itc_cgst_used: Decimal = ZERO
    itc_sgst_used: Decimal = ZERO
    itc_igst_used: Decimal = ZERO

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "ChallanAmounts":
        return cls(**{
            name: round_money(to_decimal(data.get(name)))
            for name in cls.__dataclass_fields__
        })


def challan_total(amounts: Any) -> Decimal:
    """cgst + sgst + igst + cess + interest + late_fee."""
    total = ZERO
    for name in _TOTAL_FIELDS:
        total += to_decimal(getattr(amounts, name, None))
    return round_money(total)


@dataclass
class PaymentSummary:
    payment_count: int = 0
    pending_count: int = 0
    paid_count: int = 0
    total_pending: Decimal = ZERO
    total_paid: Decimal = ZERO
    itc_utilized: dict[str, Decimal] = field(default_factory=lambda: {
        "cgst": ZERO, "sgst": ZERO, "igst": ZERO,
    })

    def to_dict(self) -> dict:
        return {
            "payment_count": self.payment_count,
            "pending_count": self.pending_count,
            "paid_count": self.paid_count,
            "total_pending": float(self.total_pending),
            "total_paid": float(self.total_paid),
            "itc_utilized": {k: float(v) for k, v in self.itc_utilized.items()},
        }


def summarize_payments(payments: Iterable[Any]) -> PaymentSummary:
    """Pending vs paid totals, and ITC utilised per head across all challans."""
    summary = PaymentSummary()
    for p in payments:
        summary.payment_count += 1
        amount = to_decimal(p.total_amount)
        if p.status == PAYMENT_PAID:
            summary.paid_count += 1
            summary.total_paid += amount
        else:
            summary.pending_count += 1
            summary.total_pending += amount
        for head in ("cgst", "sgst", "igst"):
            summary.itc_utilized[head] += to_decimal(getattr(p, f"itc_{head}_used", None))

    summary.total_pending = round_money(summary.total_pending)
    summary.total_paid = round_money(summary.total_paid)
    summary.itc_utilized = {k: round_money(v) for k, v in summary.itc_utilized.items()}
    return summary
