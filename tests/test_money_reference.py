# tests/test_money_reference.py
"""Tests for currency helpers and the GST reference tables."""

from decimal import Decimal

from gst_compliance.domain.models.money import money_sum, percent_of, round_money, to_decimal
from gst_compliance.domain.reference_data import (
    hsn_default_rate,
    is_valid_gst_rate,
    is_valid_state_code,
    state_name,
)


class TestMoney:

    def test_round_half_up(self):
        assert round_money("2.345") == Decimal("2.35")
        assert round_money("-2.345") == Decimal("-2.35")
        assert round_money(0.125) == Decimal("0.13")

    def test_to_decimal_handles_none_and_garbage(self):
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("abc") == Decimal("0")
        assert to_decimal(1.1) == Decimal("1.1")

    def test_percent_of_keeps_full_precision(self):
        assert percent_of("10.05", 5) == Decimal("0.5025")

    def test_money_sum(self):
        assert money_sum(["0.10", 0.20, None, Decimal("0.30")]) == Decimal("0.60")


class TestReferenceData:

    def test_gst_rates(self):
        assert is_valid_gst_rate(18)
        assert is_valid_gst_rate("5.0")
        assert not is_valid_gst_rate(7)
        assert not is_valid_gst_rate("abc")

    def test_state_codes(self):
        assert is_valid_state_code("27")
        assert not is_valid_state_code("99")
        assert not is_valid_state_code(None)
        assert state_name("29") == "Karnataka"
        assert state_name(None) is None

    def test_hsn_lookup_uses_heading(self):
        assert hsn_default_rate("8528") == 28
        assert hsn_default_rate("85287100") == 28
        assert hsn_default_rate("ZZZZ") is None
        assert hsn_default_rate(None) is None
