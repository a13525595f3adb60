# gst_compliance/domain/services/insights.py
"""
Business insights, monthly report, dashboard and due-date reminders.

Everything here works on already-fetched rows (ORM objects or anything
with the same attributes) and returns JSON-ready dicts.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Iterable

from gst_compliance.domain.models.money import money_sum, to_decimal
from gst_compliance.domain.services.compliance_score import is_overdue
from gst_compliance.domain.services.gst_liability import TaxLiability
from gst_compliance.domain.services.periods import current_period_key, date_in_period

logger = logging.getLogger("insights")

LOW_ITC_RATIO = Decimal("0.5")
DASHBOARD_LIST_SIZE = 5


def _sum(rows: Iterable[Any], attr: str) -> Decimal:
    return money_sum(getattr(r, attr, None) for r in rows)


def _output_tax(invoices: Iterable[Any]) -> Decimal:
    invoices = list(invoices)
    return _sum(invoices, "total_cgst") + _sum(invoices, "total_sgst") + _sum(invoices, "total_igst")


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------

def generate_insights(
    invoices: Iterable[Any],
    purchases: Iterable[Any],
    filings: Iterable[Any],
    today: date | None = None,
) -> list[dict]:
    """Actionable hints, highest priority first.

    - blocked ITC on purchases
    - overdue returns
    - ITC below half of output tax
    - revenue for the current month (always present)
    """
    today = today or date.today()
    invoices = list(invoices)
    purchases = list(purchases)
    filings = list(filings)

    insights: list[dict] = []

    eligible_itc = _sum(purchases, "itc_eligible")
    blocked_itc = _sum(purchases, "itc_blocked")
    if blocked_itc > 0:
        insights.append({
            "type": "itc_optimization",
            "title": "Blocked ITC Detected",
            "description": (
                f"You have Rs {blocked_itc:.2f} in blocked ITC. "
                "Review blocked items for eligibility."
            ),
            "potential_saving": float(blocked_itc),
            "priority": "high",
        })

    overdue = [f for f in filings if is_overdue(f, today)]
    if overdue:
        insights.append({
            "type": "compliance",
            "title": "Overdue Returns",
            "description": (
                f"You have {len(overdue)} overdue return(s). "
                "File immediately to avoid penalties."
            ),
            "priority": "high",
        })

    if eligible_itc < _output_tax(invoices) * LOW_ITC_RATIO:
        insights.append({
            "type": "tax_saving",
            "title": "Low ITC Utilization",
            "description": (
                "Your ITC is less than 50% of output tax. "
                "Consider registering more vendor purchases."
            ),
            "priority": "medium",
        })

    period = current_period_key(today)
    this_month = [inv for inv in invoices if date_in_period(inv.invoice_date, period)]
    revenue = _sum(this_month, "total_amount")
    insights.append({
        "type": "growth",
        "title": "Monthly Revenue",
        "description": f"This month's revenue: Rs {revenue:.2f} from {len(this_month)} invoices.",
        "priority": "low",
    })

    return insights


# ---------------------------------------------------------------------------
# Monthly report
# ---------------------------------------------------------------------------

def monthly_report(
    business: Any,
    period: str,
    liability: TaxLiability,
    invoices: Iterable[Any],
    purchases: Iterable[Any],
    generated_at: datetime | None = None,
) -> dict:
    invoices = list(invoices)
    purchases = list(purchases)
    total_sales = _sum(invoices, "total_amount")
    total_purchases = _sum(purchases, "total_amount")

    return {
        "period": period,
        "business_name": getattr(business, "name", None),
        "gstin": getattr(business, "gstin", None),
        "summary": {
            "invoice_count": len(invoices),
            "purchase_count": len(purchases),
            "total_sales": float(total_sales),
            "total_purchases": float(total_purchases),
            "gross_profit": float(total_sales - total_purchases),
        },
        "tax_summary": {
            "output_cgst": float(liability.output_cgst),
            "output_sgst": float(liability.output_sgst),
            "output_igst": float(liability.output_igst),
            "input_cgst": float(liability.input_cgst),
            "input_sgst": float(liability.input_sgst),
            "input_igst": float(liability.input_igst),
            "net_payable": float(liability.total_payable),
            "itc_available": float(liability.itc_available),
        },
        "generated_at": (generated_at or datetime.now(timezone.utc)).isoformat(),
    }


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def _deadline_row(f: Any) -> dict:
    return {
        "id": str(f.id),
        "return_type": f.return_type,
        "period": f.period,
        "due_date": f.due_date.isoformat(),
        "status": f.status,
    }


def _invoice_row(inv: Any) -> dict:
    return {
        "id": str(inv.id),
        "invoice_number": inv.invoice_number,
        "invoice_date": inv.invoice_date.isoformat(),
        "total_amount": float(to_decimal(inv.total_amount)),
        "status": inv.status,
    }


def dashboard_stats(
    invoices: Iterable[Any],
    customers: Iterable[Any],
    filings: Iterable[Any],
    liability: TaxLiability,
) -> dict:
    """Headline numbers for the business home screen.

    GST payable and ITC available come from the current period's
    liability, not from an estimate over all invoices.
    """
    invoices = list(invoices)
    pending = [inv for inv in invoices if inv.status in ("draft", "sent")]

    upcoming = sorted(
        (f for f in filings if f.status == "pending"),
        key=lambda f: f.due_date,
    )[:DASHBOARD_LIST_SIZE]
    recent = sorted(invoices, key=lambda inv: inv.invoice_date, reverse=True)[:DASHBOARD_LIST_SIZE]

    return {
        "total_invoices": len(invoices),
        "total_revenue": float(_sum(invoices, "total_amount")),
        "pending_amount": float(_sum(pending, "total_amount")),
        "total_customers": len(list(customers)),
        "gst_payable": float(liability.total_payable),
        "itc_available": float(liability.itc_available),
        "period": liability.period,
        "upcoming_deadlines": [_deadline_row(f) for f in upcoming],
        "recent_invoices": [_invoice_row(inv) for inv in recent],
    }


# ---------------------------------------------------------------------------
# Reminders
# ---------------------------------------------------------------------------

def due_soon_reminders(
    filings: Iterable[Any],
    today: date | None = None,
    window_days: int = 7,
) -> list[dict]:
    """Pending returns due between today and ``window_days`` ahead (inclusive)."""
    today = today or date.today()
    reminders = []
    for f in filings:
        if f.status != "pending":
            continue
        days_until_due = (f.due_date - today).days
        if 0 <= days_until_due <= window_days:
            reminders.append({
                "filing_id": str(f.id),
                "return_type": f.return_type,
                "period": f.period,
                "due_date": f.due_date.isoformat(),
                "days_until_due": days_until_due,
                "title": f"{f.return_type} Due Soon",
                "message": (
                    f"Your {f.return_type} for period {f.period} "
                    f"is due in {days_until_due} days."
                ),
            })

    logger.info("Reminders generated: %d due within %d days", len(reminders), window_days)
    return reminders
