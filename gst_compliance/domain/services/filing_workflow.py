# gst_compliance/domain/services/filing_workflow.py
"""
GST return filing lifecycle.

    pending → filed   (terminal)

A return moves to ``filed`` either by auto-populating it from the period's
computed liability or by filing it as a NIL return. Once a return is
filed, the invoices and purchases dated within the span it covers (a
month, a quarter for CMP-08, a financial year for GSTR-4 and GSTR-9) are
locked.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any, Iterable

from gst_compliance.domain.models.money import ZERO
from gst_compliance.domain.services.gst_liability import TaxLiability
from gst_compliance.domain.services.late_fee import calculate_late_fee
from gst_compliance.domain.services.periods import (
    last_day_of_month,
    next_month,
    parse_period_key,
    period_date_range,
)

logger = logging.getLogger("filing_workflow")


class ReturnType(str, Enum):
    GSTR_1 = "GSTR-1"
    GSTR_3B = "GSTR-3B"
    GSTR_4 = "GSTR-4"
    GSTR_9 = "GSTR-9"
    CMP_08 = "CMP-08"


class FilingStatus(str, Enum):
    PENDING = "pending"
    FILED = "filed"


VALID_TRANSITIONS: dict[str, list[str]] = {
    FilingStatus.PENDING.value: [FilingStatus.FILED.value],
    FilingStatus.FILED.value: [],  # terminal
}


class InvalidFilingTransitionError(ValueError):
    """Raised when a filing status transition is not allowed."""
    pass


class DocumentLockedError(Exception):
    """Raised when a document belongs to a period whose return is filed."""
    pass


def validate_filing_transition(current_status: str, new_status: str) -> None:
    allowed = VALID_TRANSITIONS.get(current_status, [])
    if new_status not in allowed:
        raise InvalidFilingTransitionError(
            f"Cannot transition return from '{current_status}' to '{new_status}'. "
            f"Allowed: {allowed}"
        )


# ---------------------------------------------------------------------------
# Due dates
# ---------------------------------------------------------------------------

def compute_due_date(return_type: ReturnType | str, period: str) -> date:
    """Statutory due date for a return covering the MMYYYY period.

    GSTR-1: 11th of next month. GSTR-3B: 20th of next month.
    CMP-08: 18th of the month after the quarter ends.
    GSTR-4: 30 April after the financial year. GSTR-9: 31 December after it.
    """
    return_type = ReturnType(return_type)
    month, year = parse_period_key(period)

    if return_type is ReturnType.GSTR_1:
        m, y = next_month(month, year)
        return date(y, m, 11)
    if return_type is ReturnType.GSTR_3B:
        m, y = next_month(month, year)
        return date(y, m, 20)
    if return_type is ReturnType.CMP_08:
        quarter_end = ((month - 1) // 3) * 3 + 3
        m, y = next_month(quarter_end, year)
        return date(y, m, 18)

    fy_end_year = year + 1 if month >= 4 else year
    if return_type is ReturnType.GSTR_4:
        return date(fy_end_year, 4, 30)
    return date(fy_end_year, 12, 31)


def return_span(return_type: ReturnType | str, period: str) -> tuple[date, date]:
    """First and last day (inclusive) of the documents a return covers.

    Monthly returns cover their month, CMP-08 the quarter containing the
    period and the annual returns (GSTR-4, GSTR-9) the whole financial year.
    """
    return_type = ReturnType(return_type)
    month, year = parse_period_key(period)

    if return_type is ReturnType.CMP_08:
        first = ((month - 1) // 3) * 3 + 1
        return date(year, first, 1), date(year, first + 2, last_day_of_month(year, first + 2))
    if return_type in (ReturnType.GSTR_4, ReturnType.GSTR_9):
        fy_start = year if month >= 4 else year - 1
        return date(fy_start, 4, 1), date(fy_start + 1, 3, 31)
    return period_date_range(period)


# ---------------------------------------------------------------------------
# Filing actions
# ---------------------------------------------------------------------------

def apply_auto_populate(filing: Any, liability: TaxLiability, today: date | None = None) -> Any:
    """Write the computed liability snapshot onto the return and mark it filed.

    A return filed after its due date also records the late fee.
    """
    validate_filing_transition(filing.status, FilingStatus.FILED.value)
    today = today or date.today()

    filing.tax_liability = liability.total_payable
    filing.itc_claimed = liability.itc_available
    filing.json_data = liability.snapshot()
    filing.late_fee = calculate_late_fee(filing.return_type, filing.due_date, today=today).late_fee
    filing.status = FilingStatus.FILED.value
    filing.filed_date = today

    logger.info(
        "Return %s %s auto-populated: liability=%.2f itc=%.2f",
        filing.return_type, filing.period, liability.total_payable, liability.itc_available,
    )
    return filing


def apply_nil_filing(filing: Any, today: date | None = None) -> Any:
    """File the return as NIL: liability, ITC and tax paid are all zero."""
    validate_filing_transition(filing.status, FilingStatus.FILED.value)
    today = today or date.today()

    filing.tax_liability = ZERO
    filing.itc_claimed = ZERO
    filing.tax_paid = ZERO
    filing.json_data = {"is_nil_return": True}
    filing.late_fee = calculate_late_fee(filing.return_type, filing.due_date, today=today).late_fee
    filing.status = FilingStatus.FILED.value
    filing.filed_date = today

    logger.info("Return %s %s filed as NIL", filing.return_type, filing.period)
    return filing


# ---------------------------------------------------------------------------
# Period locking
# ---------------------------------------------------------------------------

def locking_return(filings: Iterable[Any], document_date: date) -> Any | None:
    """The filed return (if any) whose span contains ``document_date``."""
    for f in filings:
        if f.status != FilingStatus.FILED.value:
            continue
        start, end = return_span(f.return_type, f.period)
        if start <= document_date <= end:
            return f
    return None


def ensure_period_open(filings: Iterable[Any], document_date: date | None) -> None:
    if document_date is None:
        return
    filed = locking_return(filings, document_date)
    if filed is not None:
        raise DocumentLockedError(
            f"Period {filed.period} is locked: {filed.return_type} was filed on {filed.filed_date}"
        )
