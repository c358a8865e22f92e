"""Shared type definitions for on-chain values.

These types are used by the chain-state models and the fetcher.
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator

from powerswap.constants import SolidityType
from powerswap.safe_int import validate_solidity_type


def parse_bigint_ish(value: Any) -> int:
    """Parse an integer given as int or numeric string.

    Chain readers and callers hand over raw integers in different shapes:
    plain ints, decimal strings ("1000"), or hex strings ("0x3e8").

    Args:
        value: Value to parse

    Returns:
        The parsed non-negative integer

    Raises:
        ValueError: If value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise ValueError(f"Integer expected, got bool: {value}")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            int_value = int(text, 16) if text.lower().startswith("0x") else int(text)
        except ValueError as err:
            raise ValueError(f"Not an integer string: '{value}'") from err
    else:
        raise ValueError(f"Integer must be int or string, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Integer cannot be negative: {value}")

    return int_value


def _uint(solidity_type: SolidityType) -> AfterValidator:
    return AfterValidator(lambda v: validate_solidity_type(v, solidity_type))


# Unsigned integers, accepted as int or numeric string
Uint112 = Annotated[int, BeforeValidator(parse_bigint_ish), _uint(SolidityType.UINT112)]
Uint256 = Annotated[int, BeforeValidator(parse_bigint_ish), _uint(SolidityType.UINT256)]


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address (format only, no checksum)."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False
