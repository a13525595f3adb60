# gst_compliance/api/v1/routes/purchases.py
"""
V1 API endpoints for purchases (inward supplies) and GSTR-2B status.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.core.db import get_db
from gst_compliance.domain.services.document_aggregator import build_document, itc_eligible_amount
from gst_compliance.domain.services.line_item_calculator import resolve_tax_treatment
from gst_compliance.domain.services.purchase_reconciliation import reconcile_purchases_2b
from gst_compliance.infrastructure.db.models import Business, Purchase
from gst_compliance.infrastructure.db.repositories.counterparty_repository import VendorRepository
from gst_compliance.infrastructure.db.repositories.purchase_repository import PurchaseRepository

from gst_compliance.api.v1.deps import ensure_unlocked, get_business
from gst_compliance.api.v1.envelope import PaginationParams, ok, paginate
from gst_compliance.api.v1.routes.invoices import document_columns
from gst_compliance.api.v1.schemas.documents import (
    PurchaseCreate,
    PurchaseResponse,
    line_items_response,
)

logger = logging.getLogger("api.v1.purchases")

router = APIRouter(prefix="/businesses/{business_id}/purchases", tags=["Purchases"])


def _to_purchase_response(p: Purchase) -> dict:
    return PurchaseResponse(
        id=str(p.id),
        business_id=str(p.business_id),
        vendor_id=str(p.vendor_id),
        invoice_number=p.invoice_number,
        invoice_date=p.invoice_date,
        category=p.category,
        place_of_supply_code=p.place_of_supply_code,
        tax_treatment=p.tax_treatment,
        is_inter_state=bool(p.is_inter_state),
        is_reverse_charge=bool(p.is_reverse_charge),
        items=line_items_response(p.items),
        subtotal=float(p.subtotal or 0),
        total_discount=float(p.total_discount or 0),
        total_cgst=float(p.total_cgst or 0),
        total_sgst=float(p.total_sgst or 0),
        total_igst=float(p.total_igst or 0),
        total_amount=float(p.total_amount or 0),
        itc_eligibility=p.itc_eligibility,
        itc_eligible=float(p.itc_eligible or 0),
        itc_blocked=float(p.itc_blocked or 0),
        gstr2b_status=p.gstr2b_status,
        notes=p.notes,
    ).model_dump()


@router.post("", status_code=201, summary="Record purchase")
async def create_purchase(
    body: PurchaseCreate,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    """Compute input tax for a supplier invoice.

    Inter-state when the vendor's state differs from the place of supply
    (the business's own state unless given). The ITC eligibility choice
    splits the tax into eligible and blocked credit.
    """
    vendor = await VendorRepository(db).get(business.id, body.vendor_id)
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    await ensure_unlocked(db, business.id, body.invoice_date)

    pos = body.place_of_supply_code or business.state_code
    treatment = resolve_tax_treatment("tax_invoice", vendor.state_code, pos)
    lines, totals = build_document(body.items, treatment)
    eligible = itc_eligible_amount(totals, body.itc_eligibility)

    purchase = await PurchaseRepository(db).create(business.id, {
        "vendor_id": vendor.id,
        "invoice_number": body.invoice_number,
        "invoice_date": body.invoice_date,
        "category": body.category,
        "place_of_supply_code": pos,
        "is_reverse_charge": body.is_reverse_charge,
        "itc_eligibility": body.itc_eligibility.value,
        "itc_eligible": eligible,
        "itc_blocked": totals.total_tax - eligible,
        "gstr2b_status": "pending",
        "notes": body.notes,
        **document_columns(lines, totals, treatment),
    })
    logger.info(
        "Purchase %s recorded for business %s: itc eligible=%s blocked=%s",
        purchase.invoice_number, business.id, eligible, totals.total_tax - eligible,
    )
    return ok(data=_to_purchase_response(purchase))


@router.get("", summary="List purchases")
async def list_purchases(
    business: Business = Depends(get_business),
    page: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    repo = PurchaseRepository(db)
    purchases = await repo.list_page(business.id, page.limit, page.offset)
    return paginate(purchases, await repo.count(business.id), page, _to_purchase_response)


@router.post("/reconcile", summary="Reconcile purchases with GSTR-2B")
async def reconcile_2b(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    repo = PurchaseRepository(db)
    purchases = await repo.list_for_business(business.id)
    vendors = await VendorRepository(db).list_for_business(business.id)
    result = reconcile_purchases_2b(purchases, vendors)
    await repo.commit()
    return ok(data=result.to_dict())


@router.get("/{purchase_id}", summary="Get purchase")
async def get_purchase(
    purchase_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    purchase = await PurchaseRepository(db).get(business.id, purchase_id)
    if not purchase:
        raise HTTPException(status_code=404, detail="Purchase not found")
    return ok(data=_to_purchase_response(purchase))


@router.delete("/{purchase_id}", summary="Delete purchase")
async def delete_purchase(
    purchase_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    repo = PurchaseRepository(db)
    purchase = await repo.get(business.id, purchase_id)
    if not purchase:
        raise HTTPException(status_code=404, detail="Purchase not found")
    await ensure_unlocked(db, business.id, purchase.invoice_date)
    await repo.delete(purchase)
    return ok(message="Purchase deleted")
