# gst_compliance/api/v1/routes/businesses.py
"""
V1 API endpoints for business profiles and their customers and vendors.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.core.db import get_db
from gst_compliance.domain.reference_data import state_name
from gst_compliance.infrastructure.db.models import Business
from gst_compliance.infrastructure.db.repositories.business_repository import BusinessRepository
from gst_compliance.infrastructure.db.repositories.counterparty_repository import (
    CustomerRepository,
    VendorRepository,
)

from gst_compliance.api.v1.deps import get_business
from gst_compliance.api.v1.envelope import ok
from gst_compliance.api.v1.schemas.business import (
    BusinessCreate,
    BusinessResponse,
    BusinessUpdate,
    CounterpartyCreate,
    CounterpartyResponse,
)

logger = logging.getLogger("api.v1.businesses")

router = APIRouter(prefix="/businesses", tags=["Businesses"])


# ============================================================
# Helpers
# ============================================================

def _to_business_response(b) -> dict:
    return BusinessResponse(
        id=str(b.id),
        name=b.name,
        gstin=b.gstin,
        pan=b.pan,
        business_type=b.business_type,
        gst_scheme=b.gst_scheme,
        address=b.address,
        city=b.city,
        state=b.state,
        state_code=b.state_code,
        pincode=b.pincode,
        email=b.email,
        phone=b.phone,
    ).model_dump()


def _to_counterparty_response(c) -> dict:
    return CounterpartyResponse(
        id=str(c.id),
        business_id=str(c.business_id),
        name=c.name,
        gstin=c.gstin,
        pan=c.pan,
        address=c.address,
        city=c.city,
        state=c.state,
        state_code=c.state_code,
        pincode=c.pincode,
        email=c.email,
        phone=c.phone,
    ).model_dump()


def _counterparty_data(body: CounterpartyCreate) -> dict:
    data = body.model_dump()
    if data.get("state_code") and not data.get("state"):
        data["state"] = state_name(data["state_code"])
    return data


# ============================================================
# Businesses
# ============================================================

@router.post("", status_code=201, summary="Create business profile")
async def create_business(body: BusinessCreate, db: AsyncSession = Depends(get_db)):
    business = await BusinessRepository(db).create(body.model_dump(mode="json"))
    logger.info("Business created: %s (%s)", business.id, business.gstin)
    return ok(data=_to_business_response(business))


@router.get("", summary="List businesses")
async def list_businesses(db: AsyncSession = Depends(get_db)):
    businesses = await BusinessRepository(db).list_all()
    return ok(data=[_to_business_response(b) for b in businesses])


@router.get("/{business_id}", summary="Get business profile")
async def get_business_detail(business: Business = Depends(get_business)):
    return ok(data=_to_business_response(business))


@router.patch("/{business_id}", summary="Update business profile")
async def update_business(
    body: BusinessUpdate,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    data = body.model_dump(mode="json", exclude_unset=True)
    business = await BusinessRepository(db).update(business, data)
    return ok(data=_to_business_response(business))


# ============================================================
# Customers / Vendors
# ============================================================

@router.post("/{business_id}/customers", status_code=201, summary="Add customer")
async def create_customer(
    body: CounterpartyCreate,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    customer = await CustomerRepository(db).create(business.id, _counterparty_data(body))
    return ok(data=_to_counterparty_response(customer))


@router.get("/{business_id}/customers", summary="List customers")
async def list_customers(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    rows = await CustomerRepository(db).list_for_business(business.id)
    return ok(data=[_to_counterparty_response(c) for c in rows])


@router.delete("/{business_id}/customers/{customer_id}", summary="Delete customer")
async def delete_customer(
    customer_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    repo = CustomerRepository(db)
    customer = await repo.get(business.id, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    await repo.delete(customer)
    return ok(message="Customer deleted")


@router.post("/{business_id}/vendors", status_code=201, summary="Add vendor")
async def create_vendor(
    body: CounterpartyCreate,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    vendor = await VendorRepository(db).create(business.id, _counterparty_data(body))
    return ok(data=_to_counterparty_response(vendor))


@router.get("/{business_id}/vendors", summary="List vendors")
async def list_vendors(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    rows = await VendorRepository(db).list_for_business(business.id)
    return ok(data=[_to_counterparty_response(v) for v in rows])


@router.delete("/{business_id}/vendors/{vendor_id}", summary="Delete vendor")
async def delete_vendor(
    vendor_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    repo = VendorRepository(db)
    vendor = await repo.get(business.id, vendor_id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    await repo.delete(vendor)
    return ok(message="Vendor deleted")
