"""Shared token constants for tests.

Addresses are checksummed, as Token stores them.

Usage:
    from tests.helpers import WETH, USDC
    # or
    from tests.helpers.constants import WETH, USDC
"""

# =============================================================================
# Mainnet tokens
# =============================================================================

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"  # Wrapped Ether (18 decimals)
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"  # USD Coin (6 decimals)
DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"  # Dai Stablecoin (18 decimals)
DGD = "0xE0B7927c4aF23765Cb51314A0E0521A9645F0E2A"  # DigixDAO (9 decimals, no decimals())

# =============================================================================
# Synthetic tokens (TOKEN_A sorts before TOKEN_B)
# =============================================================================

TOKEN_A = "0x1111111111111111111111111111111111111111"
TOKEN_B = "0x2222222222222222222222222222222222222222"
TOKEN_C = "0x3333333333333333333333333333333333333333"

# =============================================================================
# Uniswap V2 deployment (known CREATE2 vectors for address derivation)
# =============================================================================

UNISWAP_V2_FACTORY = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
UNISWAP_V2_INIT_CODE_HASH = "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f"
UNISWAP_V2_WETH_USDC = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"
UNISWAP_V2_USDC_DAI = "0xAE461cA67B15dc8dc81CE7615e0320dA1A9aB8D5"

# =============================================================================
# Fixed-point scales
# =============================================================================

Q112 = 2**112
WS = 65535


__all__ = [
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
]
