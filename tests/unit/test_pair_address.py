"""Tests for CREATE2 pair address derivation."""

import pytest
from structlog.testing import capture_logs

from powerswap.config import Deployment
from powerswap.constants import FACTORY_ADDRESS, INIT_CODE_HASH, ChainId
from powerswap.errors import ChainIdMismatch, IdenticalAddresses
from powerswap.pair_address import PairAddressCache, compute_pair_address
from tests.helpers import (
    TOKEN_A,
    TOKEN_B,
    UNISWAP_V2_FACTORY,
    UNISWAP_V2_INIT_CODE_HASH,
    UNISWAP_V2_USDC_DAI,
    UNISWAP_V2_WETH_USDC,
    make_token,
)


class TestComputePairAddress:
    """Tests for compute_pair_address."""

    def test_known_vectors(self, weth, usdc, dai):
        """Same derivation as Uniswap V2, checked against its deployed pairs."""
        assert compute_pair_address(UNISWAP_V2_FACTORY, UNISWAP_V2_INIT_CODE_HASH, weth, usdc) == UNISWAP_V2_WETH_USDC
        assert compute_pair_address(UNISWAP_V2_FACTORY, UNISWAP_V2_INIT_CODE_HASH, usdc, dai) == UNISWAP_V2_USDC_DAI

    def test_order_independent(self, weth, usdc):
        assert compute_pair_address(FACTORY_ADDRESS, INIT_CODE_HASH, weth, usdc) == compute_pair_address(
            FACTORY_ADDRESS, INIT_CODE_HASH, usdc, weth
        )

    def test_returns_checksummed_address(self, weth, usdc):
        address = compute_pair_address(FACTORY_ADDRESS, INIT_CODE_HASH, weth, usdc)
        assert address.startswith("0x")
        assert len(address) == 42
        assert address != address.lower()

    def test_depends_on_factory(self, weth, usdc):
        assert compute_pair_address(FACTORY_ADDRESS, INIT_CODE_HASH, weth, usdc) != compute_pair_address(
            UNISWAP_V2_FACTORY, INIT_CODE_HASH, weth, usdc
        )

    def test_identical_tokens_raise(self, weth):
        with pytest.raises(IdenticalAddresses):
            compute_pair_address(FACTORY_ADDRESS, INIT_CODE_HASH, weth, weth)

    def test_cross_chain_raises(self):
        with pytest.raises(ChainIdMismatch):
            compute_pair_address(
                FACTORY_ADDRESS,
                INIT_CODE_HASH,
                make_token(TOKEN_A),
                make_token(TOKEN_B, chain_id=ChainId.GOERLI),
            )


class TestPairAddressCache:
    """Tests for PairAddressCache."""

    def test_matches_pure_function(self, weth, usdc):
        cache = PairAddressCache()
        assert cache.get_address(usdc, weth) == compute_pair_address(FACTORY_ADDRESS, INIT_CODE_HASH, weth, usdc)

    def test_keyed_by_sorted_addresses(self, weth, usdc):
        cache = PairAddressCache()
        cache.get_address(weth, usdc)
        cache.get_address(usdc, weth)
        assert len(cache) == 1
        assert (usdc.address, weth.address) in cache

    def test_derives_once(self, weth, usdc):
        cache = PairAddressCache()
        with capture_logs() as logs:
            first = cache.get_address(weth, usdc)
            second = cache.get_address(weth, usdc)
        assert first == second
        derived = [entry for entry in logs if entry["event"] == "pair_address_derived"]
        assert len(derived) == 1
        assert derived[0]["pair"] == first

    def test_uses_deployment(self, weth, usdc):
        cache = PairAddressCache(Deployment(UNISWAP_V2_FACTORY, UNISWAP_V2_INIT_CODE_HASH))
        assert cache.get_address(weth, usdc) == UNISWAP_V2_WETH_USDC
