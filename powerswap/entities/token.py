"""ERC20 token identity."""

from __future__ import annotations

from dataclasses import dataclass, field

from eth_utils import to_checksum_address

from powerswap.constants import ChainId, SolidityType
from powerswap.errors import ChainIdMismatch, IdenticalAddresses
from powerswap.models.types import is_valid_address
from powerswap.safe_int import validate_solidity_type


@dataclass(frozen=True, eq=False)
class Token:
    """A fungible token on a specific chain.

    Identity is (chain_id, address). decimals, symbol and name are display
    metadata and do not take part in equality. The address is stored in
    EIP-55 checksum form, so lookups are case insensitive.
    """

    chain_id: int
    address: str
    decimals: int
    symbol: str | None = field(default=None)
    name: str | None = field(default=None)

    def __post_init__(self) -> None:
        if not is_valid_address(self.address):
            raise ValueError(f"Invalid token address: {self.address}")
        validate_solidity_type(self.decimals, SolidityType.UINT8)
        object.__setattr__(self, "address", to_checksum_address(self.address))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.chain_id == other.chain_id and self.address == other.address

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address))

    def __repr__(self) -> str:
        label = self.symbol or self.address
        return f"Token({label}, chain_id={self.chain_id})"

    def equals(self, other: Token) -> bool:
        return self == other

    def sorts_before(self, other: Token) -> bool:
        """Whether this token is token0 of a pair with other.

        Raises:
            ChainIdMismatch: If the tokens are on different chains
            IdenticalAddresses: If both tokens have the same address
        """
        if self.chain_id != other.chain_id:
            raise ChainIdMismatch(f"Chain ids differ: {self.chain_id} != {other.chain_id}")
        if self.address == other.address:
            raise IdenticalAddresses(f"Cannot order {self.address} against itself")
        return self.address.lower() < other.address.lower()

    def sort_key(self) -> tuple[str, int]:
        """Total order over tokens: address first, chain id second."""
        return self.address.lower(), self.chain_id


def sort_tokens(token_a: Token, token_b: Token) -> tuple[Token, Token]:
    """Return the two tokens as (token0, token1)."""
    return (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)


WETH = {
    ChainId.MAINNET: Token(
        ChainId.MAINNET, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "WETH", "Wrapped Ether"
    ),
    ChainId.ROPSTEN: Token(
        ChainId.ROPSTEN, "0xc778417E063141139Fce010982780140Aa0cD5Ab", 18, "WETH", "Wrapped Ether"
    ),
    ChainId.RINKEBY: Token(
        ChainId.RINKEBY, "0xc778417E063141139Fce010982780140Aa0cD5Ab", 18, "WETH", "Wrapped Ether"
    ),
    ChainId.GOERLI: Token(
        ChainId.GOERLI, "0xB4FBF271143F4FBf7B91A5ded31805e42b2208d6", 18, "WETH", "Wrapped Ether"
    ),
    ChainId.KOVAN: Token(
        ChainId.KOVAN, "0xd0A1E359811322d97991E03f863a0C30C2cF029C", 18, "WETH", "Wrapped Ether"
    ),
}
