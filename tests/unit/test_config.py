"""Tests for deployment configuration."""

import pytest

from powerswap.config import DEFAULT_DEPLOYMENT, Deployment, get_rpc_url, load_deployment_from_env
from powerswap.constants import FACTORY_ADDRESS, INIT_CODE_HASH
from tests.helpers import UNISWAP_V2_FACTORY, UNISWAP_V2_INIT_CODE_HASH


class TestDeployment:
    """Tests for the Deployment dataclass."""

    def test_defaults(self):
        assert DEFAULT_DEPLOYMENT.factory_address == FACTORY_ADDRESS
        assert DEFAULT_DEPLOYMENT.init_code_hash == INIT_CODE_HASH
        assert DEFAULT_DEPLOYMENT.liquidity_token_symbol == "POW"
        assert DEFAULT_DEPLOYMENT.liquidity_token_name == "Powerswap"

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_DEPLOYMENT.factory_address = UNISWAP_V2_FACTORY  # type: ignore


class TestLoadDeploymentFromEnv:
    """Tests for environment-based configuration."""

    def test_defaults_without_env(self, monkeypatch):
        monkeypatch.delenv("POWERSWAP_FACTORY_ADDRESS", raising=False)
        monkeypatch.delenv("POWERSWAP_INIT_CODE_HASH", raising=False)
        assert load_deployment_from_env() == DEFAULT_DEPLOYMENT

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("POWERSWAP_FACTORY_ADDRESS", UNISWAP_V2_FACTORY)
        monkeypatch.setenv("POWERSWAP_INIT_CODE_HASH", UNISWAP_V2_INIT_CODE_HASH)
        assert load_deployment_from_env() == Deployment(UNISWAP_V2_FACTORY, UNISWAP_V2_INIT_CODE_HASH)


class TestGetRpcUrl:
    """Tests for get_rpc_url."""

    def test_prefers_powerswap_variable(self, monkeypatch):
        monkeypatch.setenv("POWERSWAP_RPC_URL", "http://powerswap:8545")
        monkeypatch.setenv("RPC_URL", "http://generic:8545")
        assert get_rpc_url() == "http://powerswap:8545"

    def test_falls_back_to_rpc_url(self, monkeypatch):
        monkeypatch.delenv("POWERSWAP_RPC_URL", raising=False)
        monkeypatch.setenv("RPC_URL", "http://generic:8545")
        assert get_rpc_url() == "http://generic:8545"

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("POWERSWAP_RPC_URL", raising=False)
        monkeypatch.delenv("RPC_URL", raising=False)
        assert get_rpc_url() is None
