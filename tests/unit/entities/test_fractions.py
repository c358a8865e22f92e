"""Tests for Fraction, TokenAmount and Price."""

import fractions

import pytest

from powerswap.constants import UINT256_MAX, Rounding
from powerswap.entities import Fraction, Price, TokenAmount
from powerswap.errors import TokenMismatch
from powerswap.safe_int import DivisionByZero, Uint256Overflow, Underflow


class TestFraction:
    """Tests for unreduced integer fractions."""

    def test_zero_denominator_raises(self):
        with pytest.raises(DivisionByZero):
            Fraction(1, 0)

    def test_quotient_and_remainder(self):
        f = Fraction(7, 2)
        assert f.quotient == 3
        assert f.remainder == Fraction(1, 2)

    def test_kept_unreduced(self):
        f = Fraction(2, 4)
        assert (f.numerator, f.denominator) == (2, 4)
        assert f.reduced == fractions.Fraction(1, 2)

    def test_equality_cross_multiplies(self):
        assert Fraction(1, 2) == Fraction(2, 4)
        assert Fraction(4, 2) == 2
        assert hash(Fraction(1, 2)) == hash(Fraction(3, 6))

    def test_add_same_denominator(self):
        f = Fraction(1, 4).add(Fraction(2, 4))
        assert (f.numerator, f.denominator) == (3, 4)

    def test_add_different_denominator(self):
        f = Fraction(1, 2).add(Fraction(1, 3))
        assert (f.numerator, f.denominator) == (5, 6)

    def test_subtract_can_go_negative(self):
        assert Fraction(1, 3).subtract(Fraction(1, 2)) == Fraction(-1, 6)

    def test_multiply_divide(self):
        assert Fraction(2, 3).multiply(Fraction(3, 4)) == Fraction(1, 2)
        assert Fraction(2, 3).divide(2) == Fraction(1, 3)

    def test_invert(self):
        assert Fraction(2, 3).invert() == Fraction(3, 2)

    def test_comparisons(self):
        assert Fraction(1, 3).less_than(Fraction(1, 2))
        assert Fraction(2, 3).greater_than(Fraction(1, 2))
        assert Fraction(3, 3).equal_to(1)


class TestFractionFormatting:
    """Tests for to_significant and to_fixed."""

    def test_to_significant(self):
        assert Fraction(1, 3).to_significant(4) == "0.3333"
        assert Fraction(2, 3).to_significant(2) == "0.67"
        assert Fraction(2, 3).to_significant(2, Rounding.ROUND_DOWN) == "0.66"

    def test_to_significant_large_value_has_no_exponent(self):
        assert Fraction(123456).to_significant(3) == "123000"

    def test_to_significant_requires_positive_digits(self):
        with pytest.raises(ValueError):
            Fraction(1, 3).to_significant(0)

    def test_to_fixed_rounding(self):
        assert Fraction(2, 3).to_fixed(2) == "0.67"
        assert Fraction(2, 3).to_fixed(2, Rounding.ROUND_DOWN) == "0.66"
        assert Fraction(1, 3).to_fixed(2, Rounding.ROUND_UP) == "0.34"
        assert Fraction(1, 2).to_fixed(0) == "1"

    def test_to_fixed_pads_zeros(self):
        assert Fraction(3, 2).to_fixed(3) == "1.500"

    def test_to_fixed_negative(self):
        assert Fraction(-1, 2).to_fixed(1) == "-0.5"

    def test_to_fixed_negative_places_raises(self):
        with pytest.raises(ValueError):
            Fraction(1, 2).to_fixed(-1)


class TestTokenAmount:
    """Tests for TokenAmount."""

    def test_raw_must_fit_uint256(self, token_a):
        with pytest.raises(ValueError):
            TokenAmount(token_a, -1)
        with pytest.raises(ValueError):
            TokenAmount(token_a, UINT256_MAX + 1)

    def test_add(self, token_a):
        assert TokenAmount(token_a, 5).add(TokenAmount(token_a, 7)) == TokenAmount(token_a, 12)

    def test_add_overflow_raises(self, token_a):
        with pytest.raises(Uint256Overflow):
            TokenAmount(token_a, UINT256_MAX).add(TokenAmount(token_a, 1))

    def test_subtract(self, token_a):
        assert TokenAmount(token_a, 7).subtract(TokenAmount(token_a, 5)) == TokenAmount(token_a, 2)

    def test_subtract_underflow_raises(self, token_a):
        with pytest.raises(Underflow):
            TokenAmount(token_a, 5).subtract(TokenAmount(token_a, 7))

    def test_token_mismatch_raises(self, token_a, token_b):
        with pytest.raises(TokenMismatch):
            TokenAmount(token_a, 5).add(TokenAmount(token_b, 5))
        with pytest.raises(TokenMismatch):
            TokenAmount(token_a, 5).subtract(TokenAmount(token_b, 1))

    def test_to_exact(self, token_a):
        amount = TokenAmount(token_a, 1_500_000_000_000_000_000)
        assert amount.to_exact() == "1.500000000000000000"
        assert amount.to_significant() == "1.5"

    def test_to_fixed_uses_decimals(self, usdc):
        amount = TokenAmount(usdc, 1_234_567)
        assert amount.to_fixed(2) == "1.23"
        assert amount.to_fixed() == "1.234567"

    def test_to_fixed_beyond_decimals_raises(self, usdc):
        with pytest.raises(ValueError, match="decimals"):
            TokenAmount(usdc, 1).to_fixed(7)


class TestPrice:
    """Tests for Price."""

    @pytest.fixture
    def weth_usdc(self, weth, usdc) -> Price:
        """2000 USDC per WETH, in raw units."""
        return Price(weth, usdc, 10**18, 2000 * 10**6)

    def test_zero_denominator_raises(self, weth, usdc):
        with pytest.raises(DivisionByZero):
            Price(weth, usdc, 0, 1)

    def test_raw_and_adjusted(self, weth_usdc):
        assert weth_usdc.raw == fractions.Fraction(2000, 10**12)
        assert weth_usdc.adjusted == Fraction(2000)

    def test_formatting(self, weth_usdc):
        assert weth_usdc.to_significant(6) == "2000"
        assert weth_usdc.to_fixed(2) == "2000.00"

    def test_invert(self, weth_usdc, weth, usdc):
        inverted = weth_usdc.invert()
        assert inverted.base_token == usdc
        assert inverted.quote_token == weth
        assert inverted.to_fixed(4) == "0.0005"

    def test_quote(self, weth_usdc, weth, usdc):
        assert weth_usdc.quote(TokenAmount(weth, 10**18)) == TokenAmount(usdc, 2000 * 10**6)

    def test_quote_wrong_token_raises(self, weth_usdc, usdc):
        with pytest.raises(TokenMismatch):
            weth_usdc.quote(TokenAmount(usdc, 1))

    def test_multiply_chains_prices(self, weth_usdc, weth, usdc, dai):
        usdc_dai = Price(usdc, dai, 10**6, 10**18)
        weth_dai = weth_usdc.multiply(usdc_dai)
        assert weth_dai.base_token == weth
        assert weth_dai.quote_token == dai
        assert weth_dai.raw == 2000
        assert weth_dai.to_significant(4) == "2000"

    def test_multiply_mismatched_tokens_raises(self, weth_usdc):
        with pytest.raises(TokenMismatch):
            weth_usdc.multiply(weth_usdc)

    def test_multiply_by_scalar(self, weth_usdc):
        assert weth_usdc.multiply(2).adjusted == Fraction(4000)

    def test_equality_uses_reduced_ratio(self, token_a, token_b):
        assert Price(token_a, token_b, 2, 4) == Price(token_a, token_b, 1, 2)
        assert Price(token_a, token_b, 1, 2) != Price(token_b, token_a, 1, 2)
