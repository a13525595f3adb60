# gst_compliance/api/v1/routes/filing_returns.py
"""
V1 API endpoints for GST return filing.

    pending → filed   (auto-populate from the period's liability, or NIL)
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.core.db import get_db
from gst_compliance.domain.services.filing_workflow import (
    InvalidFilingTransitionError,
    apply_auto_populate,
    apply_nil_filing,
    compute_due_date,
)
from gst_compliance.domain.services.gst_liability import reconcile
from gst_compliance.infrastructure.db.models import Business, FilingReturn
from gst_compliance.infrastructure.db.repositories.filing_repository import FilingRepository

from gst_compliance.api.v1.deps import get_business
from gst_compliance.api.v1.envelope import ok
from gst_compliance.api.v1.schemas.filing import FilingReturnCreate, FilingReturnResponse

logger = logging.getLogger("api.v1.filing_returns")

router = APIRouter(prefix="/businesses/{business_id}/filing-returns", tags=["Filing Returns"])


def _opt_float(value) -> float | None:
    return None if value is None else float(value)


def to_filing_response(f: FilingReturn) -> dict:
    return FilingReturnResponse(
        id=str(f.id),
        business_id=str(f.business_id),
        return_type=f.return_type,
        period=f.period,
        due_date=f.due_date,
        status=f.status,
        filed_date=f.filed_date,
        arn_number=f.arn_number,
        tax_liability=_opt_float(f.tax_liability),
        itc_claimed=_opt_float(f.itc_claimed),
        tax_paid=_opt_float(f.tax_paid),
        late_fee=_opt_float(f.late_fee),
        json_data=f.json_data,
    ).model_dump()


async def _filing_or_404(db: AsyncSession, business_id: UUID, filing_id: UUID) -> FilingReturn:
    filing = await FilingRepository(db).get(business_id, filing_id)
    if not filing:
        raise HTTPException(status_code=404, detail="Filing return not found")
    return filing


@router.post("", status_code=201, summary="Create filing return")
async def create_filing_return(
    body: FilingReturnCreate,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    repo = FilingRepository(db)
    return_type = body.return_type.value
    if await repo.find(business.id, return_type, body.period):
        raise HTTPException(
            status_code=409,
            detail=f"{return_type} for period {body.period} already exists",
        )
    due_date = body.due_date or compute_due_date(return_type, body.period)
    filing = await repo.create(business.id, return_type, body.period, due_date)
    logger.info("Filing return %s %s created (due %s)", return_type, body.period, due_date)
    return ok(data=to_filing_response(filing))


@router.get("", summary="List filing returns")
async def list_filing_returns(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    filings = await FilingRepository(db).list_for_business(business.id)
    return ok(data=[to_filing_response(f) for f in filings])


@router.get("/{filing_id}", summary="Get filing return")
async def get_filing_return(
    filing_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    filing = await _filing_or_404(db, business.id, filing_id)
    return ok(data=to_filing_response(filing))


@router.post("/{filing_id}/auto-populate", summary="Auto-populate and file from liability")
async def auto_populate_filing_return(
    filing_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    """Compute the period liability, write it onto the return and mark it filed."""
    filing = await _filing_or_404(db, business.id, filing_id)
    liability = await reconcile(business.id, filing.period, db)
    try:
        apply_auto_populate(filing, liability)
    except InvalidFilingTransitionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    filing = await FilingRepository(db).save(filing)
    return ok(data=to_filing_response(filing), message="Return auto-populated and filed")


@router.post("/{filing_id}/file-nil", summary="File NIL return")
async def file_nil_return(
    filing_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    filing = await _filing_or_404(db, business.id, filing_id)
    try:
        apply_nil_filing(filing)
    except InvalidFilingTransitionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    filing = await FilingRepository(db).save(filing)
    return ok(data=to_filing_response(filing), message="NIL return filed")
