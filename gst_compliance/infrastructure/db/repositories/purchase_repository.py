# gst_compliance/infrastructure/db/repositories/purchase_repository.py
"""Repository for inward (purchase) invoices."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.infrastructure.db.models import Purchase


class PurchaseRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, business_id: uuid.UUID, data: dict[str, Any]) -> Purchase:
        purchase = Purchase(id=uuid.uuid4(), business_id=business_id, **data)
        self.db.add(purchase)
        await self.db.commit()
        await self.db.refresh(purchase)
        return purchase

    async def get(self, business_id: uuid.UUID, purchase_id: uuid.UUID) -> Purchase | None:
        stmt = select(Purchase).where(
            and_(Purchase.id == purchase_id, Purchase.business_id == business_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_business(self, business_id: uuid.UUID) -> list[Purchase]:
        stmt = (
            select(Purchase)
            .where(Purchase.business_id == business_id)
            .order_by(Purchase.invoice_date.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_page(self, business_id: uuid.UUID, limit: int, offset: int) -> list[Purchase]:
        stmt = (
            select(Purchase)
            .where(Purchase.business_id == business_id)
            .order_by(Purchase.invoice_date.desc(), Purchase.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self, business_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(Purchase).where(Purchase.business_id == business_id)
        return (await self.db.execute(stmt)).scalar() or 0

    async def list_for_period(
        self,
        business_id: uuid.UUID,
        start: date,
        end: date,
    ) -> list[Purchase]:
        """Purchases dated between ``start`` and ``end`` inclusive."""
        stmt = (
            select(Purchase)
            .where(
                and_(
                    Purchase.business_id == business_id,
                    Purchase.invoice_date >= start,
                    Purchase.invoice_date <= end,
                )
            )
            .order_by(Purchase.invoice_date)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete(self, purchase: Purchase) -> None:
        await self.db.delete(purchase)
        await self.db.commit()

    async def commit(self) -> None:
        """Flush in-place changes (e.g. 2B status updates) made on loaded rows."""
        await self.db.commit()
