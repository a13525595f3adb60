# gst_compliance/api/v1/routes/reports.py
"""
V1 API endpoints for derived, read-only views of a business:
tax liability, compliance score, insights, monthly report, dashboard
and due-date reminders.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.core.config import settings
from gst_compliance.core.db import get_db
from gst_compliance.domain.services.compliance_score import ScoreWeights, score_filings
from gst_compliance.domain.services.gst_liability import TaxLiability, reconcile
from gst_compliance.domain.services.insights import (
    dashboard_stats,
    due_soon_reminders,
    generate_insights,
    monthly_report,
)
from gst_compliance.domain.services.periods import (
    InvalidPeriodError,
    current_period_key,
    period_date_range,
)
from gst_compliance.infrastructure.db.models import Business
from gst_compliance.infrastructure.db.repositories.counterparty_repository import CustomerRepository
from gst_compliance.infrastructure.db.repositories.filing_repository import FilingRepository
from gst_compliance.infrastructure.db.repositories.invoice_repository import InvoiceRepository
from gst_compliance.infrastructure.db.repositories.purchase_repository import PurchaseRepository

from gst_compliance.api.v1.deps import get_business
from gst_compliance.api.v1.envelope import ok

logger = logging.getLogger("api.v1.reports")

router = APIRouter(prefix="/businesses/{business_id}", tags=["Reports"])


async def _liability_or_400(business: Business, period: str, db: AsyncSession) -> TaxLiability:
    try:
        return await reconcile(business.id, period, db)
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/tax-liability/{period}", summary="Net GST liability for a period")
async def get_tax_liability(
    period: str,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    """Output tax vs input credit for the MMYYYY period, netted per head."""
    liability = await _liability_or_400(business, period, db)
    return ok(data=liability.to_dict())


@router.get("/compliance-score", summary="Filing compliance score")
async def get_compliance_score(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    filings = await FilingRepository(db).list_for_business(business.id)
    result = score_filings(filings, weights=ScoreWeights.from_settings())
    return ok(data=result.to_dict())


@router.get("/insights", summary="Business insights")
async def get_insights(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    invoices = await InvoiceRepository(db).list_for_business(business.id)
    purchases = await PurchaseRepository(db).list_for_business(business.id)
    filings = await FilingRepository(db).list_for_business(business.id)
    return ok(data=generate_insights(invoices, purchases, filings))


@router.get("/reports/monthly/{period}", summary="Monthly summary report")
async def get_monthly_report(
    period: str,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    liability = await _liability_or_400(business, period, db)
    start, end = period_date_range(period)
    invoices = await InvoiceRepository(db).list_for_period(business.id, start, end)
    purchases = await PurchaseRepository(db).list_for_period(business.id, start, end)
    return ok(data=monthly_report(business, period, liability, invoices, purchases))


@router.get("/dashboard", summary="Dashboard statistics")
async def get_dashboard(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    """Headline figures; GST payable and ITC are for the current period."""
    liability = await reconcile(business.id, current_period_key(), db)
    invoices = await InvoiceRepository(db).list_for_business(business.id)
    customers = await CustomerRepository(db).list_for_business(business.id)
    filings = await FilingRepository(db).list_for_business(business.id)
    return ok(data=dashboard_stats(invoices, customers, filings, liability))


@router.post("/reminders", summary="Generate due-date reminders")
async def create_reminders(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    """List pending returns due soon; delivery to the user happens elsewhere."""
    filings = await FilingRepository(db).list_for_business(business.id)
    reminders = due_soon_reminders(filings, window_days=settings.REMINDER_WINDOW_DAYS)
    return ok(data=reminders, message=f"Generated {len(reminders)} reminder(s)")
