"""Protocol constants for the Powerswap pair contract.

Centralizes deployment parameters and the fixed-point scales used by the
pair formulas. Every value here must match the deployed contract exactly.
"""

from enum import Enum, IntEnum


class ChainId(IntEnum):
    """Chains the SDK knows deployment data for."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5
    KOVAN = 42


class TradeType(Enum):
    """Whether a quote fixes the input or the output amount."""

    EXACT_INPUT = "exact_input"
    EXACT_OUTPUT = "exact_output"


class Rounding(Enum):
    """Rounding modes for formatting fractions (display only)."""

    ROUND_DOWN = "round_down"
    ROUND_HALF_UP = "round_half_up"
    ROUND_UP = "round_up"


# Factory contract the pairs are deployed from (CREATE2 deployer)
FACTORY_ADDRESS = "0xB89658d9636744D0b016b4AC0d71935d667c2065"

# keccak256 of the pair contract creation bytecode
INIT_CODE_HASH = "0xa28aaa48c2283c5ec0407803dfdf7b7e702076440f67d00353c0a1eff6ef01e9"

# Liquidity permanently locked on the first mint
MINIMUM_LIQUIDITY = 1000

# Blend parameter R lives in [0, WEIGHT_SCALE]
# R = 0 is a pure constant-product curve, R = WEIGHT_SCALE a pure reference-price curve
WEIGHT_SCALE = 65535

# Reference prices are UQ112x112 fixed-point numbers
PRICE_SCALE = 2**112

# Swap fee of 0.3%: amount_in_with_fee = amount_in * 997 // 1000
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# Liquidity mint/value adjustment: share * 98 / (reserve * 100 + amount * 2)
LIQUIDITY_NUMERATOR = 98
LIQUIDITY_DENOMINATOR = 100
LIQUIDITY_AMOUNT_FACTOR = 2

# Protocol fee is 1/6 of the growth in sqrt(k): denominator rootK * 5 + rootKLast
PROTOCOL_FEE_DIVISOR = 5

# Liquidity token metadata
LIQUIDITY_TOKEN_DECIMALS = 18
LIQUIDITY_TOKEN_SYMBOL = "POW"
LIQUIDITY_TOKEN_NAME = "Powerswap"


class SolidityType(Enum):
    """Solidity integer types that amounts and metadata must fit in."""

    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT112 = "uint112"
    UINT256 = "uint256"


SOLIDITY_TYPE_MAXIMA = {
    SolidityType.UINT8: 2**8 - 1,
    SolidityType.UINT16: 2**16 - 1,
    SolidityType.UINT112: 2**112 - 1,
    SolidityType.UINT256: 2**256 - 1,
}

UINT256_MAX = SOLIDITY_TYPE_MAXIMA[SolidityType.UINT256]
