"""Tests for money helpers"""
from decimal import Decimal

import pytest

from freshcart.services.money import format_money, parse_price, parse_stored_price, round_money, to_decimal, to_float


class TestToDecimal:
    """Tests for lenient conversion."""

    def test_float_goes_through_str(self):
        """Test floats convert without binary artifacts."""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_invalid_defaults_to_zero(self):
        """Test None and garbage become zero."""
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("abc") == Decimal("0")


class TestParsePrice:
    """Tests for strict user price parsing."""

    @pytest.mark.parametrize("raw, expected", [
        ("40", Decimal("40")),
        (" 12.50 ", Decimal("12.50")),
        (7, Decimal("7")),
        (2.5, Decimal("2.5")),
        ("-3", Decimal("-3")),
    ])
    def test_valid(self, raw, expected):
        """Test numeric input parses (sign is checked by the caller)."""
        assert parse_price(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "12abc", "NaN", "Infinity", True])
    def test_invalid(self, raw):
        """Test non-numeric input raises ValueError."""
        with pytest.raises(ValueError):
            parse_price(raw)

    def test_stored_price_must_be_non_negative(self):
        """Test snapshot prices reject negatives but allow zero."""
        assert parse_stored_price("0") == Decimal("0")
        assert parse_stored_price(12.5) == Decimal("12.5")
        with pytest.raises(ValueError):
            parse_stored_price("-0.01")


def test_round_money():
    """Test half-up rounding to cents"""
    assert round_money("0.125") == Decimal("0.13")
    assert round_money(80) == Decimal("80.00")


def test_format_money():
    """Test currency formatting"""
    assert format_money(80) == "₹80.00"
    assert format_money("1234.5", "USD") == "$1,234.50"
    assert format_money(3, "CHF") == "3.00 CHF"


def test_to_float():
    """Test boundary conversion to float"""
    assert to_float(Decimal("40.25")) == 40.25
