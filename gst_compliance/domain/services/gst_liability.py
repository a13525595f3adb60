# gst_compliance/domain/services/gst_liability.py
"""
Net GST Liability Computation.

Nets output tax (sales invoices) against input tax credit (purchases) for
one MMYYYY period, separately per tax head. Credit of one head is never
set off against another head, and excess ITC is not carried as a
negative liability.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable
from uuid import UUID

from gst_compliance.domain.models.money import ZERO, round_money, to_decimal
from gst_compliance.domain.services.periods import date_in_period, period_date_range

logger = logging.getLogger("gst_liability")


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------

@dataclass
class TaxLiability:
    """Derived liability snapshot for a single period (never stored as-is)."""
    period: str
    invoice_count: int = 0
    purchase_count: int = 0
    # Output tax (from invoices)
    output_cgst: Decimal = ZERO
    output_sgst: Decimal = ZERO
    output_igst: Decimal = ZERO
    # Input tax credit (from purchases)
    input_cgst: Decimal = ZERO
    input_sgst: Decimal = ZERO
    input_igst: Decimal = ZERO
    # Net payable per head = max(0, output - input)
    net_cgst: Decimal = ZERO
    net_sgst: Decimal = ZERO
    net_igst: Decimal = ZERO
    total_payable: Decimal = ZERO
    itc_available: Decimal = ZERO

    @property
    def total_output(self) -> Decimal:
        return self.output_cgst + self.output_sgst + self.output_igst

    def snapshot(self) -> dict:
        """Per-head figures as written onto a filed return."""
        return {
            "output_cgst": float(self.output_cgst),
            "output_sgst": float(self.output_sgst),
            "output_igst": float(self.output_igst),
            "input_cgst": float(self.input_cgst),
            "input_sgst": float(self.input_sgst),
            "input_igst": float(self.input_igst),
            "net_payable": float(self.total_payable),
        }

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "invoice_count": self.invoice_count,
            "purchase_count": self.purchase_count,
            "output_cgst": float(self.output_cgst),
            "output_sgst": float(self.output_sgst),
            "output_igst": float(self.output_igst),
            "input_cgst": float(self.input_cgst),
            "input_sgst": float(self.input_sgst),
            "input_igst": float(self.input_igst),
            "net_cgst": float(self.net_cgst),
            "net_sgst": float(self.net_sgst),
            "net_igst": float(self.net_igst),
            "total_payable": float(self.total_payable),
            "itc_available": float(self.itc_available),
        }


# ---------------------------------------------------------------------------
# Pure computation
# ---------------------------------------------------------------------------

def _sum_head(documents: list[Any], attr: str) -> Decimal:
    total = ZERO
    for doc in documents:
        total += to_decimal(getattr(doc, attr, None))
    return round_money(total)


def filter_in_period(documents: Iterable[Any], period: str) -> list[Any]:
    """Documents whose ``invoice_date`` falls inside the period month."""
    return [d for d in documents if date_in_period(getattr(d, "invoice_date", None), period)]


def net_liability(
    period: str,
    invoices: Iterable[Any],
    purchases: Iterable[Any],
) -> TaxLiability:
    """Net output tax against ITC, head by head.

    ``invoices`` / ``purchases`` are any objects exposing ``total_cgst``,
    ``total_sgst`` and ``total_igst``; they must already be restricted to
    the period.
    """
    invoices = list(invoices)
    purchases = list(purchases)

    liab = TaxLiability(
        period=period,
        invoice_count=len(invoices),
        purchase_count=len(purchases),
    )

    liab.output_cgst = _sum_head(invoices, "total_cgst")
    liab.output_sgst = _sum_head(invoices, "total_sgst")
    liab.output_igst = _sum_head(invoices, "total_igst")

    liab.input_cgst = _sum_head(purchases, "total_cgst")
    liab.input_sgst = _sum_head(purchases, "total_sgst")
    liab.input_igst = _sum_head(purchases, "total_igst")

    liab.net_cgst = max(ZERO, liab.output_cgst - liab.input_cgst)
    liab.net_sgst = max(ZERO, liab.output_sgst - liab.input_sgst)
    liab.net_igst = max(ZERO, liab.output_igst - liab.input_igst)

    liab.total_payable = liab.net_cgst + liab.net_sgst + liab.net_igst
    liab.itc_available = liab.input_cgst + liab.input_sgst + liab.input_igst
    return liab


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def reconcile(business_id: UUID, period: str, db: Any) -> TaxLiability:
    """
    Compute the liability snapshot for a business and MMYYYY period.

    Steps:
    1. Fetch invoices dated within the period month
    2. Fetch purchases dated within the period month
    3. Net per head via ``net_liability``
    """
    from gst_compliance.infrastructure.db.repositories.invoice_repository import InvoiceRepository
    from gst_compliance.infrastructure.db.repositories.purchase_repository import PurchaseRepository

    start, end = period_date_range(period)

    invoices = await InvoiceRepository(db).list_for_period(business_id, start, end)
    purchases = await PurchaseRepository(db).list_for_period(business_id, start, end)

    liab = net_liability(period, invoices, purchases)

    logger.info(
        "Liability computed: business=%s period=%s payable=%.2f (CGST=%.2f, SGST=%.2f, IGST=%.2f) itc=%.2f",
        business_id,
        period,
        liab.total_payable,
        liab.net_cgst,
        liab.net_sgst,
        liab.net_igst,
        liab.itc_available,
    )
    return liab
