# gst_compliance/api/v1/deps.py
"""
FastAPI dependencies for the v1 API layer.

Every business-scoped route takes the business id from its path; the
``get_business`` dependency resolves it (404 when unknown) so handlers
never work against an implicit "current business".
"""

from __future__ import annotations

import logging
from datetime import date
from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.core.config import settings
from gst_compliance.core.db import get_db
from gst_compliance.domain.services.filing_workflow import DocumentLockedError, ensure_period_open
from gst_compliance.infrastructure.db.models import Business
from gst_compliance.infrastructure.db.repositories.business_repository import BusinessRepository
from gst_compliance.infrastructure.db.repositories.filing_repository import FilingRepository

logger = logging.getLogger("api.v1.deps")


async def get_business(
    business_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Business:
    business = await BusinessRepository(db).get_by_id(business_id)
    if business is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Business not found")
    return business


async def ensure_unlocked(db: AsyncSession, business_id: UUID, *dates: date | None) -> None:
    """409 when any of ``dates`` falls in the span of a filed return."""
    if not settings.LOCK_FILED_PERIODS:
        return
    dates = [d for d in dates if d is not None]
    if not dates:
        return
    filed = await FilingRepository(db).list_filed(business_id)
    for d in dates:
        try:
            ensure_period_open(filed, d)
        except DocumentLockedError as exc:
            logger.info("Blocked change to locked period for business %s: %s", business_id, exc)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
