"""Pytest configuration and fixtures."""

import pytest

from powerswap.constants import ChainId
from powerswap.entities import Pair, Token
from powerswap.fetcher import MockChainReader
from powerswap.models import PairState
from tests.helpers import DAI, TOKEN_A, TOKEN_B, USDC, WETH, make_pair, make_token

# =============================================================================
# Tokens
# =============================================================================


@pytest.fixture
def token_a() -> Token:
    """Synthetic 18-decimal token that sorts first."""
    return make_token(TOKEN_A, symbol="A")


@pytest.fixture
def token_b() -> Token:
    """Synthetic 18-decimal token that sorts second."""
    return make_token(TOKEN_B, symbol="B")


@pytest.fixture
def weth() -> Token:
    return Token(ChainId.MAINNET, WETH, 18, "WETH")


@pytest.fixture
def usdc() -> Token:
    return Token(ChainId.MAINNET, USDC, 6, "USDC")


@pytest.fixture
def dai() -> Token:
    return Token(ChainId.MAINNET, DAI, 18, "DAI")


# =============================================================================
# Pairs
# =============================================================================


@pytest.fixture
def balanced_pair() -> Pair:
    """A/B pair with 1,000,000 of each side, virtual balances equal to reserves, R = 0."""
    return make_pair(1_000_000, 1_000_000)


# =============================================================================
# Mock chain readers
# =============================================================================


@pytest.fixture
def mock_reader(weth: Token, dai: Token) -> MockChainReader:
    """Reader that knows WETH/DAI decimals and the WETH/DAI pair state."""
    pair_address = Pair.get_address(weth, dai)
    return MockChainReader(
        decimals={WETH: 18, DAI: 18},
        pair_states={pair_address: PairState.reserves_only(5_000_000, 10_000_000)},
    )
