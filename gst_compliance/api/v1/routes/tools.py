# gst_compliance/api/v1/routes/tools.py
"""
V1 API endpoints that need no stored data: late-fee calculator, line-item
tax preview and the reference tables.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Query

from gst_compliance.domain.reference_data import GST_RATES, HSN_CODES, INDIAN_STATES
from gst_compliance.domain.services.document_aggregator import amount_in_words, build_document
from gst_compliance.domain.services.late_fee import calculate_late_fee, schedule_from_settings
from gst_compliance.domain.services.line_item_calculator import resolve_tax_treatment

from gst_compliance.api.v1.envelope import ok
from gst_compliance.api.v1.schemas.documents import CalculatorRequest

router = APIRouter(tags=["Tools"])


@router.get("/late-fee/{return_type}/{due_date}", summary="Late fee and interest")
async def get_late_fee(
    return_type: str,
    due_date: date,
    tax_amount: Decimal = Query(
        Decimal("0"), ge=0, allow_inf_nan=False, description="Outstanding tax for interest",
    ),
):
    result = calculate_late_fee(
        return_type,
        due_date,
        outstanding_tax=tax_amount,
        schedule=schedule_from_settings(),
    )
    return ok(data=result.to_dict())


@router.post("/calculator/line-items", summary="Preview document tax")
async def preview_line_items(body: CalculatorRequest):
    treatment = resolve_tax_treatment(
        body.invoice_type,
        body.own_state_code,
        body.place_of_supply_code,
        body.export_type,
    )
    lines, totals = build_document(body.items, treatment)
    return ok(data={
        "tax_treatment": treatment.value,
        "items": [
            {
                "description": line.description,
                "gst_rate": float(line.gst_rate),
                "discount_amount": float(line.discount_amount),
                "taxable_amount": float(line.taxable_amount),
                "cgst_amount": float(line.cgst_amount),
                "sgst_amount": float(line.sgst_amount),
                "igst_amount": float(line.igst_amount),
                "total_amount": float(line.total_amount),
            }
            for line in lines
        ],
        "subtotal": float(totals.subtotal),
        "total_discount": float(totals.total_discount),
        "total_cgst": float(totals.total_cgst),
        "total_sgst": float(totals.total_sgst),
        "total_igst": float(totals.total_igst),
        "total_amount": float(totals.grand_total),
        "amount_in_words": amount_in_words(totals.grand_total),
    })


@router.get("/reference/states", summary="Indian states and UT codes")
async def list_states():
    return ok(data=[{"code": code, "name": name} for code, name in INDIAN_STATES])


@router.get("/reference/hsn", summary="HSN/SAC codes")
async def list_hsn_codes(q: str | None = Query(None, description="Filter by code prefix or description")):
    rows = HSN_CODES
    if q:
        needle = q.lower()
        rows = [r for r in rows if r[0].startswith(q) or needle in r[1].lower()]
    return ok(data=[{"code": c, "description": d, "gst_rate": r} for c, d, r in rows])


@router.get("/reference/gst-rates", summary="GST rate slabs")
async def list_gst_rates():
    return ok(data=list(GST_RATES))
