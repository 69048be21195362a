"""Unit tests for decimal-string ⇄ scaled-integer conversion."""
from __future__ import annotations

import pytest

from blend_mcp import amounts
from blend_mcp.errors import ErrorKind, InvalidAmount


class TestEncode:
    def test_usdc_fraction(self) -> None:
        assert amounts.encode("100.5", 6) == 100500000

    def test_whole_weth(self) -> None:
        assert amounts.encode("1", 18) == 1000000000000000000

    def test_wbtc_small_amount(self) -> None:
        assert amounts.encode("0.001", 8) == 100000

    def test_zero_decimals(self) -> None:
        assert amounts.encode("42", 0) == 42

    def test_leading_dot_and_trailing_dot(self) -> None:
        assert amounts.encode(".5", 6) == 500000
        assert amounts.encode("5.", 6) == 5000000

    def test_trailing_zeros_beyond_precision_are_exact(self) -> None:
        assert amounts.encode("1.500000000", 6) == 1500000

    def test_surrounding_whitespace(self) -> None:
        assert amounts.encode(" 2.25 ", 2) == 225

    def test_large_value_is_exact(self) -> None:
        assert amounts.encode("123456789012345678901234567890.123456789012345678", 18) == (
            123456789012345678901234567890123456789012345678
        )

    @pytest.mark.parametrize("bad", ["-1", "-0.5", "abc", "", "1e18", "1,000", "0x10", "1.2.3", "."])
    def test_rejects_invalid(self, bad: str) -> None:
        with pytest.raises(InvalidAmount):
            amounts.encode(bad, 18)

    def test_rejects_too_many_fraction_digits(self) -> None:
        with pytest.raises(InvalidAmount, match="more than 6 fractional digits"):
            amounts.encode("1.0000001", 6)

    def test_rejects_fraction_for_zero_decimal_token(self) -> None:
        with pytest.raises(InvalidAmount):
            amounts.encode("1.5", 0)

    def test_rejects_non_string(self) -> None:
        with pytest.raises(InvalidAmount):
            amounts.encode(1.5, 6)  # type: ignore[arg-type]

    def test_rejects_overflow(self) -> None:
        with pytest.raises(InvalidAmount, match="uint256"):
            amounts.encode(str(2**256), 0)

    def test_rejects_oversized_integer_part(self) -> None:
        with pytest.raises(InvalidAmount, match="uint256"):
            amounts.encode("1" * 5000, 6)
        with pytest.raises(InvalidAmount, match="uint256"):
            amounts.encode("9" * 79, 0)

    def test_error_kind(self) -> None:
        with pytest.raises(InvalidAmount) as exc_info:
            amounts.encode("-1", 6)
        assert exc_info.value.kind is ErrorKind.INVALID_AMOUNT


class TestDecode:
    def test_fraction(self) -> None:
        assert amounts.decode(100500000, 6) == "100.5"

    def test_whole(self) -> None:
        assert amounts.decode(10**18, 18) == "1"

    def test_zero(self) -> None:
        assert amounts.decode(0, 18) == "0"

    def test_sub_unit(self) -> None:
        assert amounts.decode(1, 18) == "0.000000000000000001"

    def test_zero_decimals(self) -> None:
        assert amounts.decode(7, 0) == "7"

    def test_rejects_negative(self) -> None:
        with pytest.raises(InvalidAmount):
            amounts.decode(-1, 6)


class TestNormalize:
    def test_strips_zeros(self) -> None:
        assert amounts.normalize("007.500") == "7.5"

    def test_integer_with_zero_fraction(self) -> None:
        assert amounts.normalize("3.000") == "3"

    def test_leading_dot(self) -> None:
        assert amounts.normalize(".25") == "0.25"


class TestRoundTrip:
    @pytest.mark.parametrize(
        ("amount", "decimals"),
        [("100.5", 6), ("0.001", 8), ("000.010", 18), ("1", 0), ("99999.999999", 6)],
    )
    def test_decode_encode_is_normalized(self, amount: str, decimals: int) -> None:
        assert amounts.decode(amounts.encode(amount, decimals), decimals) == amounts.normalize(amount)
