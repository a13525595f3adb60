# gst_compliance/infrastructure/db/repositories/filing_repository.py

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.infrastructure.db.models import FilingReturn


class FilingRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(
        self,
        business_id: uuid.UUID,
        return_type: str,
        period: str,
        due_date: date,
        *,
        status: str = "pending",
        arn_number: str | None = None,
    ) -> FilingReturn:
        """Create a new return record for a period."""
        record = FilingReturn(
            id=uuid.uuid4(),
            business_id=business_id,
            return_type=return_type,
            period=period,
            due_date=due_date,
            status=status,
            arn_number=arn_number,
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def get(self, business_id: uuid.UUID, filing_id: uuid.UUID) -> FilingReturn | None:
        stmt = select(FilingReturn).where(
            and_(FilingReturn.id == filing_id, FilingReturn.business_id == business_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find(
        self, business_id: uuid.UUID, return_type: str, period: str
    ) -> FilingReturn | None:
        stmt = select(FilingReturn).where(
            and_(
                FilingReturn.business_id == business_id,
                FilingReturn.return_type == return_type,
                FilingReturn.period == period,
            )
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_for_business(self, business_id: uuid.UUID) -> list[FilingReturn]:
        """All returns, latest due date first."""
        stmt = (
            select(FilingReturn)
            .where(FilingReturn.business_id == business_id)
            .order_by(FilingReturn.due_date.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_filed(self, business_id: uuid.UUID) -> list[FilingReturn]:
        stmt = select(FilingReturn).where(
            and_(
                FilingReturn.business_id == business_id,
                FilingReturn.status == "filed",
            )
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def save(self, record: FilingReturn, **fields: Any) -> FilingReturn:
        for key, value in fields.items():
            setattr(record, key, value)
        await self.db.commit()
        await self.db.refresh(record)
        return record
