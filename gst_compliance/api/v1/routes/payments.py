# gst_compliance/api/v1/routes/payments.py
"""V1 API endpoints for challan payments."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.core.db import get_db
from gst_compliance.domain.services.payment_service import summarize_payments
from gst_compliance.infrastructure.db.models import Business, Payment
from gst_compliance.infrastructure.db.repositories.filing_repository import FilingRepository
from gst_compliance.infrastructure.db.repositories.payment_repository import PaymentRepository

from gst_compliance.api.v1.deps import get_business
from gst_compliance.api.v1.envelope import ok
from gst_compliance.api.v1.schemas.filing import PaymentCreate, PaymentResponse

logger = logging.getLogger("api.v1.payments")

router = APIRouter(prefix="/businesses/{business_id}/payments", tags=["Payments"])

_AMOUNT_FIELDS = (
    "cgst", "sgst", "igst", "cess", "interest", "late_fee",
    "cash_cgst_used", "cash_sgst_used", "cash_igst_used",
    "itc_cgst_used", "itc_sgst_used", "itc_igst_used",
    "total_amount",
)


def _to_payment_response(p: Payment) -> dict:
    return PaymentResponse(
        id=str(p.id),
        business_id=str(p.business_id),
        filing_return_id=str(p.filing_return_id) if p.filing_return_id else None,
        challan_number=p.challan_number,
        challan_date=p.challan_date,
        payment_mode=p.payment_mode,
        status=p.status,
        **{name: float(getattr(p, name) or 0) for name in _AMOUNT_FIELDS},
    ).model_dump()


@router.post("", status_code=201, summary="Record challan payment")
async def create_payment(
    body: PaymentCreate,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    if body.filing_return_id is not None:
        filing = await FilingRepository(db).get(business.id, body.filing_return_id)
        if not filing:
            raise HTTPException(status_code=404, detail="Filing return not found")

    payment = await PaymentRepository(db).create(business.id, body.model_dump())
    logger.info(
        "Payment recorded for business %s: challan=%s total=%s",
        business.id, payment.challan_number, payment.total_amount,
    )
    return ok(data=_to_payment_response(payment))


@router.get("", summary="List payments")
async def list_payments(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    payments = await PaymentRepository(db).list_for_business(business.id)
    return ok(data=[_to_payment_response(p) for p in payments])


@router.get("/summary", summary="Payment summary")
async def payment_summary(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    payments = await PaymentRepository(db).list_for_business(business.id)
    return ok(data=summarize_payments(payments).to_dict())
