"""Value types: integer fractions, token amounts and prices.

Everything is exact integer arithmetic. decimal.Decimal is only used to
render values for display, never in a formula.
"""

from __future__ import annotations

import fractions
from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_UP, ROUND_UP, Context, Decimal

from powerswap.constants import Rounding, SolidityType
from powerswap.entities.token import Token
from powerswap.errors import TokenMismatch
from powerswap.safe_int import DivisionByZero, S, validate_solidity_type

_DECIMAL_ROUNDING = {
    Rounding.ROUND_DOWN: ROUND_DOWN,
    Rounding.ROUND_HALF_UP: ROUND_HALF_UP,
    Rounding.ROUND_UP: ROUND_UP,
}


def _round_quotient(numerator: int, denominator: int, rounding: Rounding) -> int:
    """Integer quotient of a non-negative ratio under the given rounding mode."""
    quotient, remainder = divmod(numerator, denominator)
    if remainder == 0 or rounding == Rounding.ROUND_DOWN:
        return quotient
    if rounding == Rounding.ROUND_UP:
        return quotient + 1
    return quotient + 1 if remainder * 2 >= denominator else quotient


def _to_significant(numerator: int, denominator: int, significant_digits: int, rounding: Rounding) -> str:
    if significant_digits <= 0:
        raise ValueError(f"{significant_digits} is not positive")
    context = Context(prec=significant_digits, rounding=_DECIMAL_ROUNDING[rounding])
    return format(context.divide(Decimal(numerator), Decimal(denominator)), "f")


def _to_fixed(numerator: int, denominator: int, decimal_places: int, rounding: Rounding) -> str:
    if decimal_places < 0:
        raise ValueError(f"{decimal_places} is negative")
    sign = "-" if (numerator < 0) != (denominator < 0) and numerator != 0 else ""
    scaled = _round_quotient(abs(numerator) * 10**decimal_places, abs(denominator), rounding)
    return sign + format(Decimal(scaled).scaleb(-decimal_places), "f")


@dataclass(frozen=True, eq=False)
class Fraction:
    """A ratio of two integers, kept unreduced.

    Comparisons cross-multiply, so 1/2 and 2/4 compare equal. Use `reduced`
    for the lowest-terms form.
    """

    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        if self.denominator == 0:
            raise DivisionByZero(f"Fraction with zero denominator: {self.numerator}/0")

    @staticmethod
    def _coerce(other: Fraction | int) -> Fraction:
        return other if isinstance(other, Fraction) else Fraction(other)

    @property
    def quotient(self) -> int:
        """Floor division of numerator by denominator."""
        return self.numerator // self.denominator

    @property
    def remainder(self) -> Fraction:
        return Fraction(self.numerator % self.denominator, self.denominator)

    @property
    def reduced(self) -> fractions.Fraction:
        return fractions.Fraction(self.numerator, self.denominator)

    def invert(self) -> Fraction:
        return Fraction(self.denominator, self.numerator)

    def add(self, other: Fraction | int) -> Fraction:
        other = self._coerce(other)
        if self.denominator == other.denominator:
            return Fraction(self.numerator + other.numerator, self.denominator)
        return Fraction(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def subtract(self, other: Fraction | int) -> Fraction:
        other = self._coerce(other)
        if self.denominator == other.denominator:
            return Fraction(self.numerator - other.numerator, self.denominator)
        return Fraction(
            self.numerator * other.denominator - other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def multiply(self, other: Fraction | int) -> Fraction:
        other = self._coerce(other)
        return Fraction(self.numerator * other.numerator, self.denominator * other.denominator)

    def divide(self, other: Fraction | int) -> Fraction:
        other = self._coerce(other)
        return Fraction(self.numerator * other.denominator, self.denominator * other.numerator)

    def less_than(self, other: Fraction | int) -> bool:
        return self.reduced < self._coerce(other).reduced

    def equal_to(self, other: Fraction | int) -> bool:
        return self.reduced == self._coerce(other).reduced

    def greater_than(self, other: Fraction | int) -> bool:
        return self.reduced > self._coerce(other).reduced

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Fraction, int)):
            return self.equal_to(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.reduced)

    def to_significant(self, significant_digits: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return _to_significant(self.numerator, self.denominator, significant_digits, rounding)

    def to_fixed(self, decimal_places: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return _to_fixed(self.numerator, self.denominator, decimal_places, rounding)


@dataclass(frozen=True)
class TokenAmount:
    """A non-negative raw amount of a token, in its smallest unit.

    Arithmetic between two amounts requires the same token.
    """

    token: Token
    raw: int

    def __post_init__(self) -> None:
        validate_solidity_type(self.raw, SolidityType.UINT256)

    def _check_token(self, other: TokenAmount) -> None:
        if self.token != other.token:
            raise TokenMismatch(f"Amount token {other.token!r} does not match {self.token!r}")

    def add(self, other: TokenAmount) -> TokenAmount:
        self._check_token(other)
        return TokenAmount(self.token, (S(self.raw) + S(other.raw)).to_uint256())

    def subtract(self, other: TokenAmount) -> TokenAmount:
        """Subtract other from self.

        Raises:
            TokenMismatch: If the tokens differ
            Underflow: If other exceeds self
        """
        self._check_token(other)
        return TokenAmount(self.token, (S(self.raw) - S(other.raw)).value)

    @property
    def as_fraction(self) -> Fraction:
        """Amount in whole token units, as raw / 10**decimals."""
        return Fraction(self.raw, 10**self.token.decimals)

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        return self.as_fraction.to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int | None = None, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        if decimal_places is None:
            decimal_places = self.token.decimals
        if decimal_places > self.token.decimals:
            raise ValueError(f"{self.token!r} has only {self.token.decimals} decimals")
        return self.as_fraction.to_fixed(decimal_places, rounding)

    def to_exact(self) -> str:
        return self.as_fraction.to_fixed(self.token.decimals, Rounding.ROUND_DOWN)


@dataclass(frozen=True, eq=False)
class Price:
    """Units of quote_token received per unit of base_token.

    Stored as a raw ratio of smallest units (numerator / denominator).
    `adjusted` rescales it by the tokens' decimals for display.
    """

    base_token: Token
    quote_token: Token
    denominator: int
    numerator: int

    def __post_init__(self) -> None:
        if self.denominator == 0:
            raise DivisionByZero(f"Price with zero denominator: {self.numerator}/0")

    @property
    def raw(self) -> fractions.Fraction:
        """The price as a lowest-terms fraction of raw units."""
        return fractions.Fraction(self.numerator, self.denominator)

    @property
    def scalar(self) -> Fraction:
        return Fraction(10**self.base_token.decimals, 10**self.quote_token.decimals)

    @property
    def adjusted(self) -> Fraction:
        """The price in whole-token units (raw ratio scaled by decimals)."""
        return Fraction(self.numerator, self.denominator).multiply(self.scalar)

    def invert(self) -> Price:
        return Price(self.quote_token, self.base_token, self.numerator, self.denominator)

    def multiply(self, other: Price | int) -> Price:
        """Chain two prices (base→quote→other quote), or scale by an integer.

        Raises:
            TokenMismatch: If other's base token is not this price's quote token
        """
        if isinstance(other, Price):
            if self.quote_token != other.base_token:
                raise TokenMismatch(
                    f"Cannot chain price quoted in {self.quote_token!r} with price based in {other.base_token!r}"
                )
            return Price(
                self.base_token,
                other.quote_token,
                self.denominator * other.denominator,
                self.numerator * other.numerator,
            )
        return Price(self.base_token, self.quote_token, self.denominator, self.numerator * other)

    def quote(self, amount: TokenAmount) -> TokenAmount:
        """Convert an amount of the base token into the quote token (floor).

        Raises:
            TokenMismatch: If amount is not in the base token
        """
        if amount.token != self.base_token:
            raise TokenMismatch(f"Cannot quote {amount.token!r} with a price based in {self.base_token!r}")
        return TokenAmount(self.quote_token, amount.raw * self.numerator // self.denominator)

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted.to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 4, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted.to_fixed(decimal_places, rounding)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return (
            self.base_token == other.base_token
            and self.quote_token == other.quote_token
            and self.raw == other.raw
        )

    def __hash__(self) -> int:
        return hash((self.base_token, self.quote_token, self.raw))

    def __repr__(self) -> str:
        return f"Price({self.numerator}/{self.denominator} {self.quote_token!r} per {self.base_token!r})"
