# gst_compliance/api/v1/schemas/business.py
"""Request and response schemas for businesses, customers and vendors."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from gst_compliance.domain.reference_data import is_valid_state_code

GSTIN_RE = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")


def _check_gstin(v: str | None) -> str | None:
    if v is None or v == "":
        return None
    v = v.strip().upper()
    if not GSTIN_RE.match(v):
        raise ValueError(f"Invalid GSTIN: {v}")
    return v


def _check_state_code(v: str | None) -> str | None:
    if v is None or v == "":
        return None
    if not is_valid_state_code(v):
        raise ValueError(f"Unknown state code: {v}")
    return v


class BusinessType(str, Enum):
    PROPRIETOR = "proprietor"
    PARTNERSHIP = "partnership"
    LLP = "llp"
    PVT_LTD = "pvt_ltd"


class GstScheme(str, Enum):
    REGULAR = "regular"
    COMPOSITION = "composition"


class BusinessCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    gstin: str
    pan: str | None = Field(default=None, max_length=10)
    business_type: BusinessType
    gst_scheme: GstScheme = GstScheme.REGULAR
    address: str = Field(min_length=1)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    state_code: str = Field(min_length=2, max_length=2)
    pincode: str = Field(pattern=r"^\d{6}$")
    email: str | None = None
    phone: str | None = Field(default=None, max_length=15)

    @field_validator("gstin")
    @classmethod
    def check_gstin(cls, v: str) -> str:
        checked = _check_gstin(v)
        if checked is None:
            raise ValueError("GSTIN is required")
        return checked

    @field_validator("state_code")
    @classmethod
    def check_state_code(cls, v: str) -> str:
        return _check_state_code(v)


class BusinessUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    gstin: str | None = None
    pan: str | None = Field(default=None, max_length=10)
    business_type: BusinessType | None = None
    gst_scheme: GstScheme | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    state_code: str | None = None
    pincode: str | None = Field(default=None, pattern=r"^\d{6}$")
    email: str | None = None
    phone: str | None = Field(default=None, max_length=15)

    @field_validator("gstin")
    @classmethod
    def check_gstin(cls, v: str | None) -> str | None:
        return _check_gstin(v)

    @field_validator("state_code")
    @classmethod
    def check_state_code(cls, v: str | None) -> str | None:
        return _check_state_code(v)


class BusinessResponse(BaseModel):
    id: str
    name: str
    gstin: str
    pan: str | None = None
    business_type: str
    gst_scheme: str
    address: str
    city: str
    state: str
    state_code: str
    pincode: str
    email: str | None = None
    phone: str | None = None


class CounterpartyCreate(BaseModel):
    """Customer (buyer) or vendor (supplier)."""
    name: str = Field(min_length=1, max_length=255)
    gstin: str | None = None
    pan: str | None = Field(default=None, max_length=10)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    state_code: str | None = None
    pincode: str | None = Field(default=None, pattern=r"^\d{6}$")
    email: str | None = None
    phone: str | None = Field(default=None, max_length=15)

    @field_validator("gstin")
    @classmethod
    def check_gstin(cls, v: str | None) -> str | None:
        return _check_gstin(v)

    @field_validator("state_code")
    @classmethod
    def check_state_code(cls, v: str | None) -> str | None:
        return _check_state_code(v)


class CounterpartyResponse(BaseModel):
    id: str
    business_id: str
    name: str
    gstin: str | None = None
    pan: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    state_code: str | None = None
    pincode: str | None = None
    email: str | None = None
    phone: str | None = None
