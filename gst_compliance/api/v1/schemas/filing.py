# gst_compliance/api/v1/schemas/filing.py
"""Schemas for filing returns and payments."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from gst_compliance.domain.services.filing_workflow import ReturnType
from gst_compliance.domain.services.payment_service import PAYMENT_STATUSES
from gst_compliance.domain.services.periods import parse_period_key


class FilingReturnCreate(BaseModel):
    return_type: ReturnType
    period: str = Field(description="MMYYYY, e.g. 032025")
    due_date: date | None = Field(default=None, description="Defaults to the statutory due date")

    @field_validator("period")
    @classmethod
    def check_period(cls, v: str) -> str:
        parse_period_key(v)
        return v


class FilingReturnResponse(BaseModel):
    id: str
    business_id: str
    return_type: str
    period: str
    due_date: date
    status: str
    filed_date: date | None = None
    arn_number: str | None = None
    tax_liability: float | None = None
    itc_claimed: float | None = None
    tax_paid: float | None = None
    late_fee: float | None = None
    json_data: dict | None = None


class PaymentCreate(BaseModel):
    """Record a challan; ``total_amount`` is computed from the heads."""
    filing_return_id: UUID | None = None
    challan_number: str | None = Field(default=None, max_length=50)
    challan_date: date | None = None
    cgst: float = Field(default=0, ge=0)
    sgst: float = Field(default=0, ge=0)
    igst: float = Field(default=0, ge=0)
    cess: float = Field(default=0, ge=0)
    interest: float = Field(default=0, ge=0)
    late_fee: float = Field(default=0, ge=0)
    cash_cgst_used: float = Field(default=0, ge=0)
    cash_sgst_used: float = Field(default=0, ge=0)
    cash_igst_used: float = Field(default=0, ge=0)
    itc_cgst_used: float = Field(default=0, ge=0)
    itc_sgst_used: float = Field(default=0, ge=0)
    itc_igst_used: float = Field(default=0, ge=0)
    payment_mode: str | None = Field(default=None, description="cash/neft/rtgs/online")
    status: str = "pending"

    @field_validator("status")
    @classmethod
    def check_status(cls, v: str) -> str:
        if v not in PAYMENT_STATUSES:
            raise ValueError(f"status must be one of {PAYMENT_STATUSES}")
        return v


class PaymentResponse(BaseModel):
    id: str
    business_id: str
    filing_return_id: str | None = None
    challan_number: str | None = None
    challan_date: date | None = None
    cgst: float = 0
    sgst: float = 0
    igst: float = 0
    cess: float = 0
    interest: float = 0
    late_fee: float = 0
    cash_cgst_used: float = 0
    cash_sgst_used: float = 0
    cash_igst_used: float = 0
    itc_cgst_used: float = 0
    itc_sgst_used: float = 0
    itc_igst_used: float = 0
    total_amount: float = 0
    payment_mode: str | None = None
    status: str = "pending"
