"""Pair error classes.

These errors map to the pair contract's revert reasons. They are validation
failures: none of them is transient, and nothing in the SDK retries them.
"""


class PowerswapError(Exception):
    """Base error for pair operations."""

    pass


class TokenMismatch(PowerswapError):
    """An operand's token does not match the slot it was passed for."""

    pass


class ChainIdMismatch(TokenMismatch):
    """Two tokens that must share a chain live on different chains."""

    pass


class IdenticalAddresses(PowerswapError):
    """A token was ordered against itself."""

    pass


class UnrelatedToken(PowerswapError):
    """Token is neither token0 nor token1 of the pair."""

    pass


class InsufficientReserves(PowerswapError):
    """A required balance is zero, or the requested output drains a reserve."""

    pass


class InsufficientInputAmount(PowerswapError):
    """Input amount is non-positive, or the computed result rounds to zero."""

    pass


class InsufficientOutputAmount(PowerswapError):
    """Requested output amount is non-positive."""

    pass


class WrongLiquidityToken(PowerswapError):
    """Amount is not denominated in the pair's liquidity token."""

    pass


class InvalidLiquidityAmount(PowerswapError):
    """Liquidity exceeds the total supply."""

    pass


class MissingKLast(PowerswapError):
    """Protocol fee is on but no kLast checkpoint was supplied."""

    pass


class ChainReadError(PowerswapError):
    """A chain reader failed to return contract state."""

    pass


__all__ = [
    "PowerswapError",
    "TokenMismatch",
    "ChainIdMismatch",
    "IdenticalAddresses",
    "UnrelatedToken",
    "InsufficientReserves",
    "InsufficientInputAmount",
    "InsufficientOutputAmount",
    "WrongLiquidityToken",
    "InvalidLiquidityAmount",
    "MissingKLast",
    "ChainReadError",
]
