"""Models for raw on-chain pair data."""

from powerswap.models.state import PairState
from powerswap.models.types import (
    Uint112,
    Uint256,
    is_valid_address,
    parse_bigint_ish,
)

__all__ = [
    "PairState",
    "Uint112",
    "Uint256",
    "is_valid_address",
    "parse_bigint_ish",
]
