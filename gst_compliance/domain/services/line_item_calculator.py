# gst_compliance/domain/services/line_item_calculator.py
"""
Per-line GST computation.

    base        = quantity × rate
    discount    = base × discount / 100   (percentage)  |  discount (amount)
    taxable     = base − discount          (negative allowed, e.g. credit notes)
    INTRA_STATE → CGST = SGST = taxable × gst_rate / 200
    INTER_STATE → IGST        = taxable × gst_rate / 100
    NO_GST      → no tax
    total       = taxable + CGST + SGST + IGST

Every output field is rounded to paise; inputs are assumed validated.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from gst_compliance.domain.models.documents import (
    DiscountType,
    ExportType,
    InvoiceType,
    TaxTreatment,
)
from gst_compliance.domain.models.money import ZERO, percent_of, round_money, to_decimal

_TWO = Decimal("2")


@dataclass(frozen=True)
class LineTax:
    """Computed amounts for a single line."""
    discount_amount: Decimal
    taxable_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    total_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "discount_amount": float(self.discount_amount),
            "taxable_amount": float(self.taxable_amount),
            "cgst_amount": float(self.cgst_amount),
            "sgst_amount": float(self.sgst_amount),
            "igst_amount": float(self.igst_amount),
            "total_amount": float(self.total_amount),
        }


def compute_line(
    quantity: Any,
    rate: Any,
    discount: Any = ZERO,
    discount_type: DiscountType = DiscountType.PERCENTAGE,
    gst_rate: Any = ZERO,
    treatment: TaxTreatment = TaxTreatment.INTRA_STATE,
) -> LineTax:
    """Compute taxable value and tax heads for one line."""
    base = to_decimal(quantity) * to_decimal(rate)

    if DiscountType(discount_type) is DiscountType.PERCENTAGE:
        discount_amount = percent_of(base, discount)
    else:
        discount_amount = to_decimal(discount)

    taxable = round_money(base - discount_amount)

    cgst = sgst = igst = ZERO
    if treatment is TaxTreatment.INTER_STATE:
        igst = round_money(percent_of(taxable, gst_rate))
    elif treatment is TaxTreatment.INTRA_STATE:
        cgst = round_money(percent_of(taxable, gst_rate) / _TWO)
        sgst = cgst

    return LineTax(
        discount_amount=round_money(discount_amount),
        taxable_amount=taxable,
        cgst_amount=cgst,
        sgst_amount=sgst,
        igst_amount=igst,
        total_amount=taxable + cgst + sgst + igst,
    )


def is_inter_state(own_state_code: str | None, other_state_code: str | None) -> bool:
    """True when both codes are known and differ."""
    return bool(own_state_code) and bool(other_state_code) and own_state_code != other_state_code


def resolve_tax_treatment(
    invoice_type: InvoiceType | str,
    own_state_code: str | None,
    place_of_supply_code: str | None,
    export_type: ExportType | str | None = None,
) -> TaxTreatment:
    """Pick the tax treatment for a whole document.

    Bills of supply and exports without payment of tax carry no GST;
    other exports are always IGST; everything else follows the
    own-state vs place-of-supply comparison.
    """
    invoice_type = InvoiceType(invoice_type)

    if invoice_type is InvoiceType.BILL_OF_SUPPLY:
        return TaxTreatment.NO_GST
    if invoice_type is InvoiceType.EXPORT_INVOICE:
        if export_type is not None and ExportType(export_type) is ExportType.WITHOUT_PAYMENT:
            return TaxTreatment.NO_GST
        return TaxTreatment.INTER_STATE
    if is_inter_state(own_state_code, place_of_supply_code):
        return TaxTreatment.INTER_STATE
    return TaxTreatment.INTRA_STATE
