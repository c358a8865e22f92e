"""Test helpers module for shared test utilities.

- constants: Token addresses, deployment vectors and fixed-point scales
- factories: Token and pair factory functions
"""

from tests.helpers.constants import (
    DAI,
    DGD,
    Q112,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    UNISWAP_V2_FACTORY,
    UNISWAP_V2_INIT_CODE_HASH,
    UNISWAP_V2_USDC_DAI,
    UNISWAP_V2_WETH_USDC,
    USDC,
    WETH,
    WS,
)
from tests.helpers.factories import make_pair, make_token

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "DGD",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "UNISWAP_V2_FACTORY",
    "UNISWAP_V2_INIT_CODE_HASH",
    "UNISWAP_V2_WETH_USDC",
    "UNISWAP_V2_USDC_DAI",
    "Q112",
    "WS",
    # Factories
    "make_token",
    "make_pair",
]
