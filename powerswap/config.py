"""Deployment configuration for the SDK."""

import os
from dataclasses import dataclass

from powerswap.constants import (
    FACTORY_ADDRESS,
    INIT_CODE_HASH,
    LIQUIDITY_TOKEN_NAME,
    LIQUIDITY_TOKEN_SYMBOL,
)


@dataclass(frozen=True)
class Deployment:
    """Parameters of a factory deployment.

    Pair addresses are a CREATE2 function of the factory address and the
    pair bytecode hash, so a fork deployed from a different factory only
    needs a different Deployment.

    Attributes:
        factory_address: Factory contract that deploys the pairs
        init_code_hash: keccak256 of the pair creation bytecode (0x-prefixed)
        liquidity_token_symbol: Symbol of the pair's liquidity token
        liquidity_token_name: Name of the pair's liquidity token
    """

    factory_address: str = FACTORY_ADDRESS
    init_code_hash: str = INIT_CODE_HASH
    liquidity_token_symbol: str = LIQUIDITY_TOKEN_SYMBOL
    liquidity_token_name: str = LIQUIDITY_TOKEN_NAME


# Default configuration instance
DEFAULT_DEPLOYMENT = Deployment()


def load_deployment_from_env() -> Deployment:
    """Build a Deployment from environment variables.

    Configuration via environment variables:
    - POWERSWAP_FACTORY_ADDRESS: Factory address (default: FACTORY_ADDRESS)
    - POWERSWAP_INIT_CODE_HASH: Pair init code hash (default: INIT_CODE_HASH)
    """
    return Deployment(
        factory_address=os.environ.get("POWERSWAP_FACTORY_ADDRESS", FACTORY_ADDRESS),
        init_code_hash=os.environ.get("POWERSWAP_INIT_CODE_HASH", INIT_CODE_HASH),
    )


def get_rpc_url() -> str | None:
    """RPC endpoint from POWERSWAP_RPC_URL, falling back to RPC_URL."""
    return os.environ.get("POWERSWAP_RPC_URL") or os.environ.get("RPC_URL")
