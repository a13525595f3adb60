# gst_compliance/infrastructure/db/repositories/payment_repository.py
"""Repository for challan payments."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.domain.services.payment_service import ChallanAmounts, challan_total
from gst_compliance.infrastructure.db.models import Payment


class PaymentRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(
        self,
        business_id: uuid.UUID,
        data: dict[str, Any],
    ) -> Payment:
        """Record a new challan; the total is always recomputed from the heads."""
        amounts = ChallanAmounts.from_mapping(data)
        payment = Payment(
            id=uuid.uuid4(),
            business_id=business_id,
            filing_return_id=data.get("filing_return_id"),
            challan_number=data.get("challan_number"),
            challan_date=data.get("challan_date"),
            payment_mode=data.get("payment_mode"),
            status=data.get("status", "pending"),
            total_amount=challan_total(amounts),
            **vars(amounts),
        )
        self.db.add(payment)
        await self.db.commit()
        await self.db.refresh(payment)
        return payment

    async def list_for_business(self, business_id: uuid.UUID) -> list[Payment]:
        """All challans of a business, most recent first."""
        stmt = (
            select(Payment)
            .where(Payment.business_id == business_id)
            .order_by(Payment.challan_date.desc(), Payment.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
