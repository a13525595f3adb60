# gst_compliance/domain/models/documents.py
"""
Typed shapes for invoice / purchase documents and their line items.

Line items are persisted as a versioned JSON blob (``LineItemsBlob``) and
re-validated through these models on every read.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from gst_compliance.domain.reference_data import GST_RATES, is_valid_gst_rate

LINE_ITEMS_SCHEMA_VERSION = 1


class InvoiceType(str, Enum):
    TAX_INVOICE = "tax_invoice"
    BILL_OF_SUPPLY = "bill_of_supply"
    EXPORT_INVOICE = "export_invoice"
    DEBIT_NOTE = "debit_note"
    CREDIT_NOTE = "credit_note"


class ExportType(str, Enum):
    WITH_PAYMENT = "with_payment"
    WITHOUT_PAYMENT = "without_payment"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    AMOUNT = "amount"


class TaxTreatment(str, Enum):
    """How GST applies to every line of one document."""
    INTRA_STATE = "intra_state"   # CGST + SGST, half rate each
    INTER_STATE = "inter_state"   # IGST at full rate (also exports with payment)
    NO_GST = "no_gst"             # bill of supply / export without payment


class ItcEligibility(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"


class LineItemInput(BaseModel):
    """A line as entered by the user, before tax is computed."""
    description: str = Field(min_length=1)
    hsn_code: Optional[str] = None
    quantity: Decimal = Field(ge=1)
    unit: str = "Nos"
    rate: Decimal = Field(ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    discount_type: DiscountType = DiscountType.PERCENTAGE
    gst_rate: Optional[Decimal] = Field(
        default=None,
        description=f"One of {GST_RATES}; defaults to the HSN rate, else 18",
    )

    @field_validator("gst_rate")
    @classmethod
    def rate_in_schedule(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and not is_valid_gst_rate(v):
            raise ValueError(f"GST rate must be one of {GST_RATES}")
        return v


class LineItem(LineItemInput):
    """A line with its computed tax fields."""
    gst_rate: Decimal
    discount_amount: Decimal = Decimal("0")
    taxable_amount: Decimal
    cgst_amount: Decimal = Decimal("0")
    sgst_amount: Decimal = Decimal("0")
    igst_amount: Decimal = Decimal("0")
    total_amount: Decimal


class LineItemsBlob(BaseModel):
    schema_version: int = LINE_ITEMS_SCHEMA_VERSION
    items: list[LineItem] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def known_version(cls, v: int) -> int:
        if v != LINE_ITEMS_SCHEMA_VERSION:
            raise ValueError(f"Unsupported line-item schema version {v}")
        return v


class DocumentTotals(BaseModel):
    subtotal: Decimal = Decimal("0")
    total_discount: Decimal = Decimal("0")
    total_cgst: Decimal = Decimal("0")
    total_sgst: Decimal = Decimal("0")
    total_igst: Decimal = Decimal("0")
    grand_total: Decimal = Decimal("0")

    @property
    def total_tax(self) -> Decimal:
        return self.total_cgst + self.total_sgst + self.total_igst


def dump_line_items(lines: list[LineItem]) -> dict:
    """Serialise computed lines into the blob stored in the ``items`` column."""
    return LineItemsBlob(items=list(lines)).model_dump(mode="json")


def load_line_items(blob: dict) -> list[LineItem]:
    """Validate a stored blob back into ``LineItem`` models."""
    return LineItemsBlob.model_validate(blob).items
