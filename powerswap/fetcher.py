"""Construct tokens and pairs from on-chain data.

Chain access goes through a ChainReader, so the RPC-backed reader can be
swapped for MockChainReader in tests. Token decimals and pair addresses are
memoized in explicit cache objects owned by the Fetcher.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import structlog
from eth_utils import to_checksum_address

from powerswap.config import DEFAULT_DEPLOYMENT, Deployment
from powerswap.constants import ChainId
from powerswap.entities.pair import Pair
from powerswap.entities.token import Token
from powerswap.errors import ChainIdMismatch, ChainReadError
from powerswap.models.state import PairState
from powerswap.pair_address import PairAddressCache

logger = structlog.get_logger()


class ChainReader(Protocol):
    """Protocol for reading token and pair contract state from one chain."""

    def read_decimals(self, address: str) -> int:
        """ERC20 decimals() of the token at address."""
        ...

    def read_pair_state(self, pair_address: str) -> PairState:
        """Reserves, virtual balances, base prices and R of the pair at pair_address."""
        ...


class MockChainReader:
    """Chain reader backed by dictionaries, for tests and offline use.

    Configure with known decimals and pair states, and track calls for
    assertions. Unknown addresses raise KeyError.
    """

    def __init__(
        self,
        decimals: dict[str, int] | None = None,
        pair_states: dict[str, PairState] | None = None,
    ) -> None:
        self.decimals = {to_checksum_address(k): v for k, v in (decimals or {}).items()}
        self.pair_states = {to_checksum_address(k): v for k, v in (pair_states or {}).items()}
        self.calls: list[tuple[str, str]] = []  # (method, address)

    def read_decimals(self, address: str) -> int:
        self.calls.append(("read_decimals", address))
        return self.decimals[to_checksum_address(address)]

    def read_pair_state(self, pair_address: str) -> PairState:
        self.calls.append(("read_pair_state", pair_address))
        return self.pair_states[to_checksum_address(pair_address)]


# ERC20 ABI - minimal, just decimals()
ERC20_ABI = [
    {
        "name": "decimals",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
]

# Pair ABI - the view functions the pair state is read from
PAIR_ABI = [
    {
        "name": "getReserves",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "_reserve0", "type": "uint112"},
            {"name": "_reserve1", "type": "uint112"},
            {"name": "_blockTimestampLast", "type": "uint32"},
        ],
    },
    {
        "name": "getBalances",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "_balanceBuy0", "type": "uint256"},
            {"name": "_balanceBuy1", "type": "uint256"},
            {"name": "_balanceSell0", "type": "uint256"},
            {"name": "_balanceSell1", "type": "uint256"},
        ],
    },
    {
        "name": "getPrices",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "_buyPrice", "type": "uint256"},
            {"name": "_sellPrice", "type": "uint256"},
        ],
    },
    {
        "name": "getR",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]


class Web3ChainReader:
    """Chain reader that makes eth_call requests through web3."""

    def __init__(self, rpc_url: str):
        """Initialize reader with an RPC endpoint.

        Args:
            rpc_url: HTTP RPC URL (e.g., "https://eth.llamarpc.com")
        """
        try:
            from web3 import Web3
        except ImportError as e:
            raise ImportError("web3 package required for Web3ChainReader. Install with: pip install web3") from e

        self.w3 = Web3(Web3.HTTPProvider(rpc_url))

    def _contract(self, address: str, abi: list[dict[str, Any]]) -> Any:
        return self.w3.eth.contract(address=to_checksum_address(address), abi=abi)

    def read_decimals(self, address: str) -> int:
        try:
            return int(self._contract(address, ERC20_ABI).functions.decimals().call())
        except Exception as e:
            logger.warning("decimals_read_failed", token=address, error=str(e))
            raise ChainReadError(f"decimals() failed for {address}") from e

    def read_pair_state(self, pair_address: str) -> PairState:
        try:
            functions = self._contract(pair_address, PAIR_ABI).functions
            reserve0, reserve1, _ = functions.getReserves().call()
            buy0, buy1, sell0, sell1 = functions.getBalances().call()
            buy_price, sell_price = functions.getPrices().call()
            blend = functions.getR().call()
        except Exception as e:
            logger.warning("pair_state_read_failed", pair=pair_address, error=str(e))
            raise ChainReadError(f"Reading pair state failed for {pair_address}") from e

        return PairState(
            reserve0=reserve0,
            reserve1=reserve1,
            buy_virtual0=buy0,
            buy_virtual1=buy1,
            sell_virtual0=sell0,
            sell_virtual1=sell1,
            base_price0=buy_price,
            base_price1=sell_price,
            blend=blend,
        )


class TokenDecimalsCache:
    """Token decimals keyed by (chain_id, checksummed address).

    The cache only grows; a decimals value never changes once deployed.
    Seeded with tokens whose decimals() does not behave like ERC20.
    """

    KNOWN_DECIMALS: dict[tuple[int, str], int] = {
        (ChainId.MAINNET, "0xE0B7927c4aF23765Cb51314A0E0521A9645F0E2A"): 9,  # DGD
    }

    def __init__(self, seed: Mapping[tuple[int, str], int] | None = None) -> None:
        self._decimals: dict[tuple[int, str], int] = {}
        for (chain_id, address), decimals in {**self.KNOWN_DECIMALS, **(seed or {})}.items():
            self.set(chain_id, address, decimals)

    @staticmethod
    def _key(chain_id: int, address: str) -> tuple[int, str]:
        return int(chain_id), to_checksum_address(address)

    def get(self, chain_id: int, address: str) -> int | None:
        return self._decimals.get(self._key(chain_id, address))

    def set(self, chain_id: int, address: str, decimals: int) -> None:
        self._decimals[self._key(chain_id, address)] = decimals

    def __contains__(self, key: tuple[int, str]) -> bool:
        return self._key(*key) in self._decimals

    def __len__(self) -> int:
        return len(self._decimals)


class Fetcher:
    """Builds Token and Pair instances from chain data.

    Usage:
        fetcher = Fetcher({ChainId.MAINNET: Web3ChainReader(rpc_url)})
        dai = fetcher.fetch_token_data(ChainId.MAINNET, DAI_ADDRESS, "DAI")
        pair = fetcher.fetch_pair_data(dai, WETH[ChainId.MAINNET])
    """

    def __init__(
        self,
        readers: Mapping[int, ChainReader] | ChainReader,
        *,
        deployment: Deployment = DEFAULT_DEPLOYMENT,
        decimals_cache: TokenDecimalsCache | None = None,
        address_cache: PairAddressCache | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            readers: Reader per chain id, or a single reader used for every chain
            deployment: Factory deployment the pairs come from
            decimals_cache: Shared decimals cache (a fresh one if None)
            address_cache: Shared pair address cache (a fresh one for deployment if None)
        """
        self._readers = readers
        self.decimals_cache = decimals_cache if decimals_cache is not None else TokenDecimalsCache()
        self.address_cache = address_cache if address_cache is not None else PairAddressCache(deployment)

    def _reader(self, chain_id: int) -> ChainReader:
        if not isinstance(self._readers, Mapping):
            return self._readers
        try:
            return self._readers[chain_id]
        except KeyError:
            raise ValueError(f"No chain reader configured for chain {chain_id}") from None

    def fetch_token_data(
        self,
        chain_id: int,
        address: str,
        symbol: str | None = None,
        name: str | None = None,
    ) -> Token:
        """Token with its decimals, read from chain unless cached.

        Args:
            chain_id: Chain of the token
            address: Token contract address
            symbol: Optional symbol (not read from chain)
            name: Optional name (not read from chain)
        """
        decimals = self.decimals_cache.get(chain_id, address)
        if decimals is None:
            decimals = self._reader(chain_id).read_decimals(address)
            self.decimals_cache.set(chain_id, address, decimals)
            logger.info("token_decimals_fetched", chain_id=int(chain_id), token=address, decimals=decimals)
        else:
            logger.debug("token_decimals_cached", chain_id=int(chain_id), token=address)
        return Token(chain_id, address, decimals, symbol, name)

    def fetch_pair_data(self, token_a: Token, token_b: Token) -> Pair:
        """Current pair snapshot for two tokens.

        Raises:
            ChainIdMismatch: If the tokens are on different chains
            ChainReadError: If the reader fails to read the pair
        """
        if token_a.chain_id != token_b.chain_id:
            raise ChainIdMismatch(f"Chain ids differ: {token_a.chain_id} != {token_b.chain_id}")

        address = self.address_cache.get_address(token_a, token_b)
        state = self._reader(token_a.chain_id).read_pair_state(address)
        logger.info(
            "pair_state_fetched",
            chain_id=int(token_a.chain_id),
            pair=address,
            reserve0=state.reserve0,
            reserve1=state.reserve1,
            blend=state.blend,
        )
        return Pair.from_state(token_a, token_b, state, address_cache=self.address_cache)
