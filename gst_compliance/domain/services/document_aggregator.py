# gst_compliance/domain/services/document_aggregator.py
"""
Document-level totals for invoices and purchases.

Totals are a plain field-wise sum of the already-rounded line amounts, so
the result is the same to the paisa whatever order the lines come in.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from gst_compliance.domain.models.documents import (
    DocumentTotals,
    ItcEligibility,
    LineItem,
    LineItemInput,
    TaxTreatment,
)
from gst_compliance.domain.models.money import ZERO, round_money, to_decimal
from gst_compliance.domain.reference_data import hsn_default_rate
from gst_compliance.domain.services.line_item_calculator import compute_line

DEFAULT_GST_RATE = Decimal("18")
_PARTIAL_ITC_SHARE = Decimal("0.5")
_ENTERED_FIELDS = set(LineItemInput.model_fields) - {"gst_rate"}


def aggregate(lines: Iterable) -> DocumentTotals:
    """Sum computed lines (``LineItem`` or ``LineTax``) into document totals."""
    subtotal = discount = cgst = sgst = igst = grand = ZERO
    for line in lines:
        subtotal += to_decimal(line.taxable_amount)
        discount += to_decimal(getattr(line, "discount_amount", ZERO))
        cgst += to_decimal(line.cgst_amount)
        sgst += to_decimal(line.sgst_amount)
        igst += to_decimal(line.igst_amount)
        grand += to_decimal(line.total_amount)

    return DocumentTotals(
        subtotal=round_money(subtotal),
        total_discount=round_money(discount),
        total_cgst=round_money(cgst),
        total_sgst=round_money(sgst),
        total_igst=round_money(igst),
        grand_total=round_money(grand),
    )


def effective_gst_rate(item: LineItemInput) -> Decimal:
    """Entered rate, else the HSN default, else 18%."""
    if item.gst_rate is not None:
        return item.gst_rate
    hsn_rate = hsn_default_rate(item.hsn_code)
    if hsn_rate is not None:
        return Decimal(hsn_rate)
    return DEFAULT_GST_RATE


def build_line_items(
    items: Sequence[LineItemInput],
    treatment: TaxTreatment,
) -> list[LineItem]:
    """Compute tax for every entered line, preserving order.

    Already computed ``LineItem`` rows are accepted too; their stored
    amounts are ignored and recomputed.
    """
    computed: list[LineItem] = []
    for item in items:
        gst_rate = effective_gst_rate(item)
        tax = compute_line(
            quantity=item.quantity,
            rate=item.rate,
            discount=item.discount,
            discount_type=item.discount_type,
            gst_rate=gst_rate,
            treatment=treatment,
        )
        computed.append(
            LineItem(
                **item.model_dump(include=_ENTERED_FIELDS),
                gst_rate=gst_rate,
                discount_amount=tax.discount_amount,
                taxable_amount=tax.taxable_amount,
                cgst_amount=tax.cgst_amount,
                sgst_amount=tax.sgst_amount,
                igst_amount=tax.igst_amount,
                total_amount=tax.total_amount,
            )
        )
    return computed


def build_document(
    items: Sequence[LineItemInput],
    treatment: TaxTreatment,
) -> tuple[list[LineItem], DocumentTotals]:
    lines = build_line_items(items, treatment)
    return lines, aggregate(lines)


def itc_eligible_amount(totals: DocumentTotals, eligibility: ItcEligibility | str) -> Decimal:
    """Portion of a purchase's GST that can be claimed as input credit."""
    eligibility = ItcEligibility(eligibility)
    if eligibility is ItcEligibility.NONE:
        return ZERO
    if eligibility is ItcEligibility.PARTIAL:
        return round_money(totals.total_tax * _PARTIAL_ITC_SHARE)
    return round_money(totals.total_tax)


# ---------------------------------------------------------------------------
# Amount in words (Indian numbering: thousand, lakh, crore)
# ---------------------------------------------------------------------------

_ONES = (
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
)
_TENS = (
    "", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety",
)


def _below_hundred(n: int) -> str:
    if n < 20:
        return _ONES[n]
    tens, ones = divmod(n, 10)
    return f"{_TENS[tens]} {_ONES[ones]}".strip()


def _below_thousand(n: int) -> str:
    hundreds, rest = divmod(n, 100)
    parts = []
    if hundreds:
        parts.append(f"{_ONES[hundreds]} Hundred")
    if rest:
        parts.append(_below_hundred(rest))
    return " ".join(parts)


def _indian_words(n: int) -> str:
    if n == 0:
        return "Zero"

    crore, n = divmod(n, 10_000_000)
    lakh, n = divmod(n, 100_000)
    thousand, n = divmod(n, 1_000)

    parts = []
    if crore:
        parts.append(f"{_indian_words(crore)} Crore")
    if lakh:
        parts.append(f"{_below_hundred(lakh)} Lakh")
    if thousand:
        parts.append(f"{_below_hundred(thousand)} Thousand")
    if n:
        parts.append(_below_thousand(n))
    return " ".join(parts)


def amount_in_words(amount) -> str:
    """``120000.50`` → ``Rupees One Lakh Twenty Thousand and Fifty Paise Only``."""
    value = round_money(amount)
    sign = "Minus " if value < 0 else ""
    value = abs(value)

    rupees = int(value)
    paise = int((value - rupees) * 100)

    words = f"Rupees {sign}{_indian_words(rupees)}"
    if paise:
        words += f" and {_below_hundred(paise)} Paise"
    return words + " Only"
