"""Deterministic pair address derivation.

Pairs are deployed by the factory with CREATE2, salted by the sorted token
addresses, so a pair's address is a pure function of the two tokens and
the deployment:

    salt    = keccak256(abi.encodePacked(token0, token1))
    address = keccak256(0xff ++ factory ++ salt ++ init_code_hash)[12:]
"""

from __future__ import annotations

import structlog
from eth_abi.packed import encode_packed
from eth_utils import keccak, to_bytes, to_checksum_address

from powerswap.config import DEFAULT_DEPLOYMENT, Deployment
from powerswap.entities.token import Token, sort_tokens

logger = structlog.get_logger()


def compute_pair_address(factory_address: str, init_code_hash: str, token_a: Token, token_b: Token) -> str:
    """CREATE2 address of the pair for two tokens (order independent).

    Args:
        factory_address: Factory that deploys the pair
        init_code_hash: keccak256 of the pair creation bytecode
        token_a: One token of the pair
        token_b: The other token

    Returns:
        Checksummed pair address

    Raises:
        ChainIdMismatch: If the tokens are on different chains
        IdenticalAddresses: If both tokens are the same
    """
    token0, token1 = sort_tokens(token_a, token_b)
    salt = keccak(encode_packed(["address", "address"], [token0.address, token1.address]))
    preimage = b"\xff" + to_bytes(hexstr=factory_address) + salt + to_bytes(hexstr=init_code_hash)
    return to_checksum_address(keccak(preimage)[12:])


class PairAddressCache:
    """Memoized pair address derivation for one deployment.

    The cache only grows. Concurrent writers compute the same value for the
    same key, so a lost race just recomputes it.
    """

    def __init__(self, deployment: Deployment = DEFAULT_DEPLOYMENT) -> None:
        self.deployment = deployment
        self._addresses: dict[tuple[str, str], str] = {}

    def get_address(self, token_a: Token, token_b: Token) -> str:
        """Pair address for two tokens, derived once per (token0, token1)."""
        token0, token1 = sort_tokens(token_a, token_b)
        key = (token0.address, token1.address)
        address = self._addresses.get(key)
        if address is None:
            address = compute_pair_address(
                self.deployment.factory_address,
                self.deployment.init_code_hash,
                token0,
                token1,
            )
            self._addresses[key] = address
            logger.debug("pair_address_derived", token0=token0.address, token1=token1.address, pair=address)
        return address

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)
