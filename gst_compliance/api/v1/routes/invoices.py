# gst_compliance/api/v1/routes/invoices.py
"""
V1 API endpoints for sales invoices.

Tax is always computed here from the entered line items: clients never
send taxable values or tax amounts.
"""

from __future__ import annotations

import logging
from enum import Enum
from io import BytesIO
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from gst_compliance.core.db import get_db
from gst_compliance.domain.models.documents import (
    DocumentTotals,
    LineItem,
    TaxTreatment,
    dump_line_items,
    load_line_items,
)
from gst_compliance.domain.reference_data import state_name
from gst_compliance.domain.services.document_aggregator import amount_in_words, build_document
from gst_compliance.domain.services.invoice_pdf import generate_invoice_pdf
from gst_compliance.domain.services.line_item_calculator import resolve_tax_treatment
from gst_compliance.infrastructure.db.models import Business, Invoice
from gst_compliance.infrastructure.db.repositories.counterparty_repository import CustomerRepository
from gst_compliance.infrastructure.db.repositories.invoice_repository import InvoiceRepository

from gst_compliance.api.v1.deps import ensure_unlocked, get_business
from gst_compliance.api.v1.envelope import PaginationParams, ok, paginate
from gst_compliance.api.v1.schemas.documents import (
    InvoiceCreate,
    InvoiceResponse,
    InvoiceUpdate,
    line_items_response,
)

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/businesses/{business_id}/invoices", tags=["Invoices"])

INVOICE_PREFIX = "INV"

_REQUIRED_COLUMNS = (
    "customer_id", "invoice_number", "invoice_type", "invoice_date", "is_reverse_charge", "status",
)


# ============================================================
# Helpers
# ============================================================

def _to_invoice_response(inv: Invoice) -> dict:
    return InvoiceResponse(
        id=str(inv.id),
        business_id=str(inv.business_id),
        customer_id=str(inv.customer_id),
        invoice_number=inv.invoice_number,
        invoice_type=inv.invoice_type,
        export_type=inv.export_type,
        invoice_date=inv.invoice_date,
        due_date=inv.due_date,
        place_of_supply=inv.place_of_supply,
        place_of_supply_code=inv.place_of_supply_code,
        tax_treatment=inv.tax_treatment,
        is_inter_state=bool(inv.is_inter_state),
        is_reverse_charge=bool(inv.is_reverse_charge),
        items=line_items_response(inv.items),
        subtotal=float(inv.subtotal or 0),
        total_discount=float(inv.total_discount or 0),
        total_cgst=float(inv.total_cgst or 0),
        total_sgst=float(inv.total_sgst or 0),
        total_igst=float(inv.total_igst or 0),
        total_amount=float(inv.total_amount or 0),
        amount_in_words=inv.amount_in_words,
        notes=inv.notes,
        terms_and_conditions=inv.terms_and_conditions,
        status=inv.status,
    ).model_dump()


def _plain(value):
    return value.value if isinstance(value, Enum) else value


def document_columns(
    lines: list[LineItem],
    totals: DocumentTotals,
    treatment: TaxTreatment,
) -> dict:
    """Computed columns shared by invoices and purchases."""
    return {
        "items": dump_line_items(lines),
        "tax_treatment": treatment.value,
        "is_inter_state": treatment is TaxTreatment.INTER_STATE,
        "subtotal": totals.subtotal,
        "total_discount": totals.total_discount,
        "total_cgst": totals.total_cgst,
        "total_sgst": totals.total_sgst,
        "total_igst": totals.total_igst,
        "total_amount": totals.grand_total,
    }


async def _customer_or_404(db: AsyncSession, business_id: UUID, customer_id: UUID):
    customer = await CustomerRepository(db).get(business_id, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


# ============================================================
# Endpoints
# ============================================================

@router.get("/next-number", summary="Next invoice number")
async def next_invoice_number(
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    last = await InvoiceRepository(db).get_last_sequence(business.id)
    return ok(data={
        "last_number": last,
        "next_invoice_number": f"{INVOICE_PREFIX}-{last + 1:04d}",
    })


@router.post("", status_code=201, summary="Create invoice")
async def create_invoice(
    body: InvoiceCreate,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    repo = InvoiceRepository(db)
    customer = await _customer_or_404(db, business.id, body.customer_id)
    await ensure_unlocked(db, business.id, body.invoice_date)

    invoice_number = body.invoice_number
    if not invoice_number:
        last = await repo.get_last_sequence(business.id)
        invoice_number = f"{INVOICE_PREFIX}-{last + 1:04d}"
    if await repo.number_exists(business.id, invoice_number):
        raise HTTPException(status_code=409, detail=f"Invoice number {invoice_number} already exists")

    pos = body.place_of_supply_code or customer.state_code or business.state_code
    treatment = resolve_tax_treatment(body.invoice_type, business.state_code, pos, body.export_type)
    lines, totals = build_document(body.items, treatment)

    invoice = await repo.create(business.id, {
        "customer_id": customer.id,
        "invoice_number": invoice_number,
        "invoice_type": body.invoice_type.value,
        "export_type": _plain(body.export_type),
        "invoice_date": body.invoice_date,
        "due_date": body.due_date,
        "place_of_supply": state_name(pos),
        "place_of_supply_code": pos,
        "is_reverse_charge": body.is_reverse_charge,
        "amount_in_words": amount_in_words(totals.grand_total),
        "notes": body.notes,
        "terms_and_conditions": body.terms_and_conditions,
        "status": body.status.value,
        **document_columns(lines, totals, treatment),
    })
    logger.info(
        "Invoice %s created for business %s: %s total=%s",
        invoice.invoice_number, business.id, treatment.value, totals.grand_total,
    )
    return ok(data=_to_invoice_response(invoice))


@router.get("", summary="List invoices")
async def list_invoices(
    business: Business = Depends(get_business),
    page: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    repo = InvoiceRepository(db)
    invoices = await repo.list_page(business.id, page.limit, page.offset)
    return paginate(invoices, await repo.count(business.id), page, _to_invoice_response)


@router.get("/{invoice_id}", summary="Get invoice")
async def get_invoice(
    invoice_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    invoice = await InvoiceRepository(db).get(business.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return ok(data=_to_invoice_response(invoice))


@router.get("/{invoice_id}/pdf", summary="Download invoice PDF")
async def invoice_pdf(
    invoice_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    invoice = await InvoiceRepository(db).get(business.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    customer = await CustomerRepository(db).get(business.id, invoice.customer_id)

    pdf = generate_invoice_pdf(invoice, load_line_items(invoice.items), business, customer)
    filename = f"{invoice.invoice_number}.pdf"
    return StreamingResponse(
        BytesIO(pdf),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/{invoice_id}", summary="Update invoice")
async def update_invoice(
    invoice_id: UUID,
    body: InvoiceUpdate,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    """Apply a partial update and recompute tax for the merged document."""
    repo = InvoiceRepository(db)
    invoice = await repo.get(business.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")

    changes = {
        k: _plain(v)
        for k, v in body.model_dump(exclude_unset=True, exclude={"items"}).items()
    }
    for key in _REQUIRED_COLUMNS:
        if changes.get(key) is None:
            changes.pop(key, None)
    await ensure_unlocked(db, business.id, invoice.invoice_date, changes.get("invoice_date"))

    if changes.get("customer_id"):
        customer = await _customer_or_404(db, business.id, changes["customer_id"])
    else:
        customer = await _customer_or_404(db, business.id, invoice.customer_id)

    new_number = changes.get("invoice_number")
    if new_number and new_number != invoice.invoice_number:
        if await repo.number_exists(business.id, new_number):
            raise HTTPException(status_code=409, detail=f"Invoice number {new_number} already exists")

    invoice_type = changes.get("invoice_type", invoice.invoice_type)
    export_type = changes.get("export_type", invoice.export_type)
    if "place_of_supply_code" in changes or "customer_id" in changes:
        pos = changes.get("place_of_supply_code") or customer.state_code or business.state_code
    else:
        pos = invoice.place_of_supply_code
    items = body.items if body.items is not None else load_line_items(invoice.items)

    treatment = resolve_tax_treatment(invoice_type, business.state_code, pos, export_type)
    lines, totals = build_document(items, treatment)

    changes.update({
        "place_of_supply": state_name(pos),
        "place_of_supply_code": pos,
        "amount_in_words": amount_in_words(totals.grand_total),
        **document_columns(lines, totals, treatment),
    })
    invoice = await repo.update(invoice, changes)
    logger.info("Invoice %s updated for business %s", invoice.invoice_number, business.id)
    return ok(data=_to_invoice_response(invoice))


@router.delete("/{invoice_id}", summary="Delete invoice")
async def delete_invoice(
    invoice_id: UUID,
    business: Business = Depends(get_business),
    db: AsyncSession = Depends(get_db),
):
    repo = InvoiceRepository(db)
    invoice = await repo.get(business.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    await ensure_unlocked(db, business.id, invoice.invoice_date)
    await repo.delete(invoice)
    return ok(message="Invoice deleted")
