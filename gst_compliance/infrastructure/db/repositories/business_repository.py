# gst_compliance/infrastructure/db/repositories/business_repository.py
"""Repository for Business profile CRUD."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.infrastructure.db.models import Business


class BusinessRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, data: dict[str, Any]) -> Business:
        business = Business(id=uuid.uuid4(), **data)
        self.db.add(business)
        await self.db.commit()
        await self.db.refresh(business)
        return business

    async def get_by_id(self, business_id: uuid.UUID) -> Business | None:
        stmt = select(Business).where(Business.id == business_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Business]:
        stmt = select(Business).order_by(Business.name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, business: Business, data: dict[str, Any]) -> Business:
        for key, value in data.items():
            setattr(business, key, value)
        await self.db.commit()
        await self.db.refresh(business)
        return business
