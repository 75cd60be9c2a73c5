"""Unit tests for raw-amount / decimal-string conversion."""
from __future__ import annotations

import pytest

from mantle_yield.errors import MalformedAmount
from mantle_yield.units import format_units, format_usd, parse_units, parse_usd


class TestFormatUnits:
    def test_whole_number_has_no_fraction(self) -> None:
        assert format_units(10**18, 18) == "1"

    def test_strips_trailing_zeros(self) -> None:
        assert format_units(1_500_000, 6) == "1.5"

    def test_small_fraction_keeps_leading_zeros(self) -> None:
        assert format_units(1, 6) == "0.000001"

    def test_zero(self) -> None:
        assert format_units(0, 18) == "0"

    def test_huge_value_is_exact(self) -> None:
        raw = 123_456_789_012_345_678_901_234_567_890
        assert format_units(raw, 18) == "123456789012.34567890123456789"

    def test_zero_decimals(self) -> None:
        assert format_units(42, 0) == "42"


class TestParseUnits:
    def test_whole_number(self) -> None:
        assert parse_units("100", 6) == 100_000_000

    def test_fraction_is_padded(self) -> None:
        assert parse_units("1.5", 6) == 1_500_000

    def test_excess_fraction_is_truncated(self) -> None:
        assert parse_units("1.1234567", 6) == 1_123_456

    def test_leading_dot(self) -> None:
        assert parse_units(".5", 18) == 5 * 10**17

    def test_trailing_dot(self) -> None:
        assert parse_units("7.", 6) == 7_000_000

    @pytest.mark.parametrize("bad", ["", ".", "abc", "-1", "1.2.3", "1e5", "1,000"])
    def test_malformed_raises(self, bad: str) -> None:
        with pytest.raises(MalformedAmount):
            parse_units(bad, 18)

    def test_malformed_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_units("nope", 6)

    @pytest.mark.parametrize(
        "raw,decimals",
        [(0, 18), (1, 18), (25_500_000_000_000_000_000, 18), (35_000_000_000, 6), (999_999, 6)],
    )
    def test_round_trip(self, raw: int, decimals: int) -> None:
        assert parse_units(format_units(raw, decimals), decimals) == raw


class TestUsd:
    def test_format_usd_thousands_separator(self) -> None:
        assert format_usd(175135) == "$175,135.00"

    def test_format_usd_pads_cents(self) -> None:
        assert format_usd(0.1) == "$0.10"

    def test_parse_usd(self) -> None:
        assert parse_usd("$60,690.00") == pytest.approx(60690.0)

    def test_parse_usd_garbage_is_zero(self) -> None:
        assert parse_usd("n/a") == 0.0
