# gst_compliance/api/v1/schemas/documents.py
"""Request and response schemas for invoices, purchases and the calculator."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from gst_compliance.domain.models.documents import (
    ExportType,
    InvoiceStatus,
    InvoiceType,
    ItcEligibility,
    LineItemInput,
)
from gst_compliance.domain.reference_data import is_valid_state_code


def _check_pos(v: str | None) -> str | None:
    if v is None or v == "":
        return None
    if not is_valid_state_code(v):
        raise ValueError(f"Unknown place of supply code: {v}")
    return v


class InvoiceCreate(BaseModel):
    """Sales invoice as entered; tax and totals are computed server-side."""
    customer_id: UUID
    invoice_number: str | None = Field(
        default=None, max_length=50, description="Generated as INV-0001, ... when omitted"
    )
    invoice_type: InvoiceType = InvoiceType.TAX_INVOICE
    export_type: ExportType | None = None
    invoice_date: date
    due_date: date | None = None
    place_of_supply_code: str | None = Field(
        default=None, description="Defaults to the customer's state code"
    )
    is_reverse_charge: bool = False
    items: list[LineItemInput] = Field(min_length=1)
    notes: str | None = None
    terms_and_conditions: str | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT

    @field_validator("place_of_supply_code")
    @classmethod
    def check_pos(cls, v: str | None) -> str | None:
        return _check_pos(v)


class InvoiceUpdate(BaseModel):
    """Partial update; totals are recomputed from the merged document."""
    customer_id: UUID | None = None
    invoice_number: str | None = Field(default=None, min_length=1, max_length=50)
    invoice_type: InvoiceType | None = None
    export_type: ExportType | None = None
    invoice_date: date | None = None
    due_date: date | None = None
    place_of_supply_code: str | None = None
    is_reverse_charge: bool | None = None
    items: list[LineItemInput] | None = Field(default=None, min_length=1)
    notes: str | None = None
    terms_and_conditions: str | None = None
    status: InvoiceStatus | None = None

    @field_validator("place_of_supply_code")
    @classmethod
    def check_pos(cls, v: str | None) -> str | None:
        return _check_pos(v)


class PurchaseCreate(BaseModel):
    vendor_id: UUID
    invoice_number: str = Field(min_length=1, max_length=50)
    invoice_date: date
    category: str = Field(default="goods", pattern=r"^(goods|services|capital_goods)$")
    place_of_supply_code: str | None = None
    is_reverse_charge: bool = False
    items: list[LineItemInput] = Field(min_length=1)
    itc_eligibility: ItcEligibility = ItcEligibility.FULL
    notes: str | None = None

    @field_validator("place_of_supply_code")
    @classmethod
    def check_pos(cls, v: str | None) -> str | None:
        return _check_pos(v)


class CalculatorRequest(BaseModel):
    """Stateless preview of a document's tax."""
    invoice_type: InvoiceType = InvoiceType.TAX_INVOICE
    export_type: ExportType | None = None
    own_state_code: str | None = None
    place_of_supply_code: str | None = None
    items: list[LineItemInput] = Field(min_length=1)

    @field_validator("own_state_code", "place_of_supply_code")
    @classmethod
    def check_codes(cls, v: str | None) -> str | None:
        return _check_pos(v)


class LineItemResponse(BaseModel):
    description: str
    hsn_code: str | None = None
    quantity: float
    unit: str
    rate: float
    discount: float
    discount_type: str
    gst_rate: float
    discount_amount: float
    taxable_amount: float
    cgst_amount: float
    sgst_amount: float
    igst_amount: float
    total_amount: float


class TotalsResponse(BaseModel):
    subtotal: float
    total_discount: float
    total_cgst: float
    total_sgst: float
    total_igst: float
    total_amount: float


class InvoiceResponse(TotalsResponse):
    id: str
    business_id: str
    customer_id: str
    invoice_number: str
    invoice_type: str
    export_type: str | None = None
    invoice_date: date
    due_date: date | None = None
    place_of_supply: str | None = None
    place_of_supply_code: str | None = None
    tax_treatment: str
    is_inter_state: bool
    is_reverse_charge: bool
    items: list[LineItemResponse]
    amount_in_words: str | None = None
    notes: str | None = None
    terms_and_conditions: str | None = None
    status: str


class PurchaseResponse(TotalsResponse):
    id: str
    business_id: str
    vendor_id: str
    invoice_number: str
    invoice_date: date
    category: str
    place_of_supply_code: str | None = None
    tax_treatment: str
    is_inter_state: bool
    is_reverse_charge: bool
    items: list[LineItemResponse]
    itc_eligibility: str
    itc_eligible: float
    itc_blocked: float
    gstr2b_status: str
    notes: str | None = None


def line_items_response(blob: dict) -> list[dict]:
    """Stored line-items blob → response rows, re-validated on the way out."""
    from gst_compliance.domain.models.documents import load_line_items

    return [
        LineItemResponse(
            description=item.description,
            hsn_code=item.hsn_code,
            quantity=float(item.quantity),
            unit=item.unit,
            rate=float(item.rate),
            discount=float(item.discount),
            discount_type=item.discount_type.value,
            gst_rate=float(item.gst_rate),
            discount_amount=float(item.discount_amount),
            taxable_amount=float(item.taxable_amount),
            cgst_amount=float(item.cgst_amount),
            sgst_amount=float(item.sgst_amount),
            igst_amount=float(item.igst_amount),
            total_amount=float(item.total_amount),
        ).model_dump()
        for item in load_line_items(blob)
    ]
