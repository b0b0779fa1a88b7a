"""Tests for amount conversion and display formatting."""

from decimal import Decimal

import pytest

from omniswap.routing.amounts import (
    format_amount,
    is_plain_decimal,
    from_smallest_unit,
    parse_decimal,
    parse_time_estimate,
    to_smallest_unit,
)


class TestToSmallestUnit:
    """Tests for human decimal -> smallest unit conversion."""

    @pytest.mark.parametrize(
        "amount,decimals,expected",
        [
            ("1.5", 6, "1500000"),
            ("100", 6, "100000000"),
            ("0.000001", 6, "1"),
            ("1", 18, "1000000000000000000"),
            (".5", 2, "50"),
            ("5.", 2, "500"),
            ("100", 0, "100"),
            ("0", 18, "0"),
        ],
    )
    def test_converts(self, amount, decimals, expected):
        assert to_smallest_unit(amount, decimals) == expected

    def test_truncates_excess_digits(self):
        """Extra fractional digits are dropped, never rounded up."""
        assert to_smallest_unit("1.23456789", 6) == "1234567"
        assert to_smallest_unit("0.9999999", 6) == "999999"
        assert to_smallest_unit("1.9", 0) == "1"

    def test_below_precision_is_zero(self):
        assert to_smallest_unit("0.0000001", 6) == "0"

    @pytest.mark.parametrize("amount", ["", "abc", "-1", "1.2.3", "1e5", " ", "."])
    def test_malformed_input_is_zero(self, amount):
        assert to_smallest_unit(amount, 6) == "0"

    def test_negative_decimals_is_zero(self):
        assert to_smallest_unit("1", -1) == "0"

    @pytest.mark.parametrize("amount", ["100", "0.5", ".5", "5.", " 1.25 "])
    def test_plain_decimal_accepted(self, amount):
        assert is_plain_decimal(amount) is True

    @pytest.mark.parametrize("amount", ["", ".", "1e2", "1E-3", "1_00", "-1", "+1", "1,000", None])
    def test_plain_decimal_rejected(self, amount):
        assert is_plain_decimal(amount) is False


class TestFromSmallestUnit:
    """Tests for smallest unit -> human decimal conversion."""

    @pytest.mark.parametrize(
        "amount,decimals,expected",
        [
            ("1500000", 6, "1.5"),
            ("1000000", 6, "1"),
            ("1234567", 6, "1.234567"),
            ("1", 18, "0.000000000000000001"),
            ("310000000000000000", 18, "0.31"),
            (310000000000000000, 18, "0.31"),
            ("42", 0, "42"),
            ("0", 6, "0"),
            ("000123", 2, "1.23"),
        ],
    )
    def test_converts(self, amount, decimals, expected):
        assert from_smallest_unit(amount, decimals) == expected

    @pytest.mark.parametrize("amount", ["", "1.5", "-10", "abc"])
    def test_malformed_input_is_zero(self, amount):
        assert from_smallest_unit(amount, 6) == "0"

    def test_round_trip_truncates_to_precision(self):
        smallest = to_smallest_unit("1.23456789", 6)
        assert smallest == "1234567"
        assert from_smallest_unit(smallest, 6) == "1.234567"


class TestFormatAmount:
    """Tests for the display formatting policy."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0", "0"),
            ("0.0000001", "1.0000e-07"),
            ("0.00005", "0.000050"),
            ("1.5", "1.5000"),
            ("999.5", "999.5000"),
            ("1234.5", "1,234.5"),
            ("1234", "1,234"),
            ("2500000", "2,500,000"),
            (Decimal("0.31"), "0.3100"),
        ],
    )
    def test_formats(self, value, expected):
        assert format_amount(value) == expected

    @pytest.mark.parametrize("value", [None, "abc", "NaN"])
    def test_unparseable_is_zero(self, value):
        assert format_amount(value) == "0"


class TestParsers:
    """Tests for tolerant parsing helpers."""

    def test_parse_decimal(self):
        assert parse_decimal("1.5") == Decimal("1.5")
        assert parse_decimal(2) == Decimal("2")
        assert parse_decimal(" 0.25 ") == Decimal("0.25")

    @pytest.mark.parametrize("value", [None, True, "x", "NaN", "Infinity", ""])
    def test_parse_decimal_rejects(self, value):
        assert parse_decimal(value) is None

    @pytest.mark.parametrize(
        "forecast,expected",
        [("10-60", 600), ("5", 300), ("about 20 minutes", 1200), (None, 600), ("", 600), ("fast", 600)],
    )
    def test_parse_time_estimate(self, forecast, expected):
        assert parse_time_estimate(forecast) == expected
