# tests/test_late_fee.py
"""Tests for late fee and interest on delayed returns."""

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from gst_compliance.domain.services.late_fee import (
    DEFAULT_SCHEDULE,
    PenaltySchedule,
    calculate_late_fee,
    days_late,
)

DUE = date(2024, 4, 20)


class TestCalculateLateFee:

    def test_ten_days_late_gstr3b(self):
        result = calculate_late_fee("GSTR-3B", DUE, outstanding_tax=10000, today=date(2024, 4, 30))
        assert result.days_late == 10
        assert result.late_fee == Decimal("500")
        assert result.interest == Decimal("49.32")
        assert result.total_penalty == Decimal("549.32")

    def test_fee_capped_at_5000(self):
        result = calculate_late_fee("GSTR-1", DUE, today=DUE + timedelta(days=200))
        assert result.late_fee == Decimal("5000")

    def test_annual_return_has_higher_rate_and_cap(self):
        result = calculate_late_fee("GSTR-9", DUE, today=DUE + timedelta(days=20))
        assert result.late_fee == Decimal("4000")
        capped = calculate_late_fee("GSTR-9", DUE, today=DUE + timedelta(days=60))
        assert capped.late_fee == Decimal("10000")

    def test_not_yet_due_has_no_penalty(self):
        result = calculate_late_fee("GSTR-3B", DUE, outstanding_tax=10000, today=date(2024, 4, 1))
        assert result.days_late == 0
        assert result.total_penalty == Decimal("0")

    def test_filed_on_due_date_is_not_late(self):
        assert calculate_late_fee("GSTR-3B", DUE, today=DUE).days_late == 0

    def test_unknown_return_type_has_no_fee(self):
        result = calculate_late_fee("GSTR-X", DUE, outstanding_tax=1000, today=DUE + timedelta(days=5))
        assert result.late_fee == Decimal("0")
        assert result.interest > 0

    def test_custom_interest_rate(self):
        schedule = PenaltySchedule(annual_interest_rate=Decimal("0.24"))
        result = calculate_late_fee(
            "GSTR-3B", DUE, outstanding_tax=36500, today=DUE + timedelta(days=1), schedule=schedule,
        )
        assert result.interest == Decimal("24")

    def test_to_dict(self):
        data = calculate_late_fee("GSTR-3B", DUE, today=date(2024, 4, 22)).to_dict()
        assert data == {
            "return_type": "GSTR-3B",
            "due_date": "2024-04-20",
            "days_late": 2,
            "late_fee": 100.0,
            "interest": 0.0,
            "total_penalty": 100.0,
        }


class TestMonotonicity:

    @settings(max_examples=150, deadline=None)
    @given(
        return_type=st.sampled_from(sorted(DEFAULT_SCHEDULE.per_day_fee)),
        first=st.integers(min_value=-30, max_value=800),
        extra=st.integers(min_value=0, max_value=400),
        tax=st.integers(min_value=0, max_value=10_000_000),
    )
    def test_penalty_never_decreases_with_time(self, return_type, first, extra, tax):
        earlier = calculate_late_fee(return_type, DUE, tax, today=DUE + timedelta(days=first))
        later = calculate_late_fee(return_type, DUE, tax, today=DUE + timedelta(days=first + extra))
        assert later.late_fee >= earlier.late_fee
        assert later.total_penalty >= earlier.total_penalty
        assert later.late_fee <= DEFAULT_SCHEDULE.fee_cap(return_type)


class TestDaysLate:

    def test_clamped_at_zero(self):
        assert days_late(DUE, date(2024, 1, 1)) == 0

    def test_counts_calendar_days(self):
        assert days_late(DUE, date(2024, 5, 20)) == 30
