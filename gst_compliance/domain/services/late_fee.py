# gst_compliance/domain/services/late_fee.py
"""
Late fee and interest for a return filed after its due date.

    days_late = max(0, today − due_date)
    late_fee  = min(days_late × per_day_fee, cap)
    interest  = outstanding_tax × annual_rate × days_late / 365   (simple)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from gst_compliance.domain.models.money import ZERO, round_money, to_decimal

_DAYS_IN_YEAR = Decimal("365")


@dataclass(frozen=True)
class PenaltySchedule:
    """Per-day late fee and caps by return type."""
    per_day_fee: dict[str, Decimal] = field(default_factory=lambda: {
        "GSTR-1": Decimal("50"),
        "GSTR-3B": Decimal("50"),
        "CMP-08": Decimal("50"),
        "GSTR-4": Decimal("50"),
        "GSTR-9": Decimal("200"),
    })
    max_fee: dict[str, Decimal] = field(default_factory=lambda: {
        "GSTR-9": Decimal("10000"),
    })
    default_max_fee: Decimal = Decimal("5000")
    annual_interest_rate: Decimal = Decimal("0.18")

    def fee_per_day(self, return_type: str) -> Decimal:
        return self.per_day_fee.get(return_type, ZERO)

    def fee_cap(self, return_type: str) -> Decimal:
        return self.max_fee.get(return_type, self.default_max_fee)


DEFAULT_SCHEDULE = PenaltySchedule()


def schedule_from_settings() -> PenaltySchedule:
    from gst_compliance.core.config import settings

    return PenaltySchedule(annual_interest_rate=to_decimal(settings.LATE_FEE_INTEREST_RATE))


@dataclass
class LateFeeResult:
    return_type: str
    due_date: date
    days_late: int = 0
    late_fee: Decimal = ZERO
    interest: Decimal = ZERO
    total_penalty: Decimal = ZERO

    def to_dict(self) -> dict:
        return {
            "return_type": self.return_type,
            "due_date": self.due_date.isoformat(),
            "days_late": self.days_late,
            "late_fee": float(self.late_fee),
            "interest": float(self.interest),
            "total_penalty": float(self.total_penalty),
        }


def days_late(due_date: date, today: date | None = None) -> int:
    return max(0, ((today or date.today()) - due_date).days)


def calculate_late_fee(
    return_type: str,
    due_date: date,
    outstanding_tax: Any = ZERO,
    today: date | None = None,
    schedule: PenaltySchedule = DEFAULT_SCHEDULE,
) -> LateFeeResult:
    """Late fee (capped) plus simple daily interest on the unpaid tax."""
    late = days_late(due_date, today)

    fee = min(Decimal(late) * schedule.fee_per_day(return_type), schedule.fee_cap(return_type))
    interest = round_money(
        to_decimal(outstanding_tax) * schedule.annual_interest_rate * Decimal(late) / _DAYS_IN_YEAR
    )
    fee = round_money(fee)

    return LateFeeResult(
        return_type=return_type,
        due_date=due_date,
        days_late=late,
        late_fee=fee,
        interest=interest,
        total_penalty=fee + interest,
    )
