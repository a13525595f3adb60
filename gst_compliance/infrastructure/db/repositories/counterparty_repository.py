# gst_compliance/infrastructure/db/repositories/counterparty_repository.py
"""Repositories for customers (buyers) and vendors (suppliers).

Both tables share one shape, so one implementation serves both.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.infrastructure.db.models import Customer, Vendor


class _CounterpartyRepository:
    model: Any = None

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, business_id: uuid.UUID, data: dict[str, Any]):
        row = self.model(id=uuid.uuid4(), business_id=business_id, **data)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return row

    async def get(self, business_id: uuid.UUID, row_id: uuid.UUID):
        """Fetch a row only if it belongs to ``business_id``."""
        stmt = select(self.model).where(
            and_(self.model.id == row_id, self.model.business_id == business_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_business(self, business_id: uuid.UUID) -> list:
        stmt = (
            select(self.model)
            .where(self.model.business_id == business_id)
            .order_by(self.model.name)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete(self, row) -> None:
        await self.db.delete(row)
        await self.db.commit()


class CustomerRepository(_CounterpartyRepository):
    model = Customer


class VendorRepository(_CounterpartyRepository):
    model = Vendor
