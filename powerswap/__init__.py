"""Powerswap SDK - off-chain quoting for Powerswap pairs."""

from powerswap.config import DEFAULT_DEPLOYMENT, Deployment
from powerswap.constants import (
    FACTORY_ADDRESS,
    INIT_CODE_HASH,
    MINIMUM_LIQUIDITY,
    PRICE_SCALE,
    WEIGHT_SCALE,
    ChainId,
    Rounding,
    TradeType,
)
from powerswap.entities import WETH, Fraction, Pair, Price, Token, TokenAmount
from powerswap.errors import (
    ChainIdMismatch,
    ChainReadError,
    IdenticalAddresses,
    InsufficientInputAmount,
    InsufficientOutputAmount,
    InsufficientReserves,
    InvalidLiquidityAmount,
    MissingKLast,
    PowerswapError,
    TokenMismatch,
    UnrelatedToken,
    WrongLiquidityToken,
)
from powerswap.fetcher import Fetcher, MockChainReader, Web3ChainReader
from powerswap.models import PairState
from powerswap.pair_address import PairAddressCache, compute_pair_address

__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Constants
    "ChainId",
    "TradeType",
    "Rounding",
    "FACTORY_ADDRESS",
    "INIT_CODE_HASH",
    "MINIMUM_LIQUIDITY",
    "WEIGHT_SCALE",
    "PRICE_SCALE",
    # Configuration
    "Deployment",
    "DEFAULT_DEPLOYMENT",
    # Entities
    "Token",
    "WETH",
    "Fraction",
    "TokenAmount",
    "Price",
    "Pair",
    "PairState",
    # Addresses
    "PairAddressCache",
    "compute_pair_address",
    # Fetching
    "Fetcher",
    "MockChainReader",
    "Web3ChainReader",
    # Errors
    "PowerswapError",
    "TokenMismatch",
    "ChainIdMismatch",
    "UnrelatedToken",
    "InsufficientReserves",
    "InsufficientInputAmount",
    "InsufficientOutputAmount",
    "WrongLiquidityToken",
    "InvalidLiquidityAmount",
    "MissingKLast",
    "IdenticalAddresses",
    "ChainReadError",
]
