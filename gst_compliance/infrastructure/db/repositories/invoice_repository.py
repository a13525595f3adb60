# gst_compliance/infrastructure/db/repositories/invoice_repository.py
"""Repository for outward invoices."""

from __future__ import annotations

import re
import uuid
from datetime import date
from typing import Any, Iterable

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.infrastructure.db.models import Invoice

_TRAILING_DIGITS = re.compile(r"(\d+)$")


class InvoiceRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ---------- small helpers ----------

    @staticmethod
    def last_sequence(invoice_numbers: Iterable[str]) -> int:
        """Highest trailing number across invoice numbers, 0 if none has one."""
        last = 0
        for number in invoice_numbers:
            m = _TRAILING_DIGITS.search(number or "")
            if m:
                last = max(last, int(m.group(1)))
        return last

    # ---------- main methods ----------

    async def create(self, business_id: uuid.UUID, data: dict[str, Any]) -> Invoice:
        invoice = Invoice(id=uuid.uuid4(), business_id=business_id, **data)
        self.db.add(invoice)
        await self.db.commit()
        await self.db.refresh(invoice)
        return invoice

    async def get(self, business_id: uuid.UUID, invoice_id: uuid.UUID) -> Invoice | None:
        stmt = select(Invoice).where(
            and_(Invoice.id == invoice_id, Invoice.business_id == business_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_business(self, business_id: uuid.UUID) -> list[Invoice]:
        """All invoices of a business, newest first."""
        stmt = (
            select(Invoice)
            .where(Invoice.business_id == business_id)
            .order_by(Invoice.invoice_date.desc(), Invoice.invoice_number.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_page(self, business_id: uuid.UUID, limit: int, offset: int) -> list[Invoice]:
        """One page of invoices, newest first, in the same order as ``list_for_business``."""
        stmt = (
            select(Invoice)
            .where(Invoice.business_id == business_id)
            .order_by(Invoice.invoice_date.desc(), Invoice.invoice_number.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self, business_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(Invoice).where(Invoice.business_id == business_id)
        return (await self.db.execute(stmt)).scalar() or 0

    async def list_for_period(
        self,
        business_id: uuid.UUID,
        start: date,
        end: date,
    ) -> list[Invoice]:
        """Invoices dated between ``start`` and ``end`` inclusive."""
        stmt = (
            select(Invoice)
            .where(
                and_(
                    Invoice.business_id == business_id,
                    Invoice.invoice_date >= start,
                    Invoice.invoice_date <= end,
                )
            )
            .order_by(Invoice.invoice_date)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def number_exists(self, business_id: uuid.UUID, invoice_number: str) -> bool:
        stmt = select(Invoice.id).where(
            and_(Invoice.business_id == business_id, Invoice.invoice_number == invoice_number)
        )
        result = await self.db.execute(stmt)
        return result.first() is not None

    async def get_last_sequence(self, business_id: uuid.UUID) -> int:
        stmt = select(Invoice.invoice_number).where(Invoice.business_id == business_id)
        result = await self.db.execute(stmt)
        return self.last_sequence(result.scalars().all())

    async def update(self, invoice: Invoice, data: dict[str, Any]) -> Invoice:
        for key, value in data.items():
            setattr(invoice, key, value)
        await self.db.commit()
        await self.db.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.db.delete(invoice)
        await self.db.commit()
