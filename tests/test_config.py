"""
Tests for config.py module.

Covers:
- TokenConfig, UniswapV3Config dataclasses
- ChainId, PoolFee
- get_stable_list(), get_token_list()
- get_rpc_url(), get_uniswap_config(), get_wrapped_native()
"""

import dataclasses

import pytest

import config
from config import (
    ChainId,
    PoolFee,
    TokenConfig,
    UNISWAP_V3_CONTRACTS,
    UNISWAP_V3_CONTRACTS_CELO,
    WRAPPED_NATIVE_ADDRESS,
    get_rpc_url,
    get_stable_list,
    get_token_list,
    get_uniswap_config,
    get_wrapped_native,
)
from uniswap_pm.math.ticks import FEE_TO_TICK_SPACING, get_tick_spacing


class TestTokenConfig:

    def test_defaults(self):
        token = TokenConfig(address="0x1111111111111111111111111111111111111111", symbol="T", decimals=18)
        assert token.name == ""
        assert token.chain_id == ChainId.MAINNET

    def test_frozen(self):
        token = TokenConfig(address="0x1111111111111111111111111111111111111111", symbol="T", decimals=18)
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.decimals = 6


class TestFeeTiers:

    def test_every_pool_fee_has_spacing(self):
        """Единственная таблица fee -> spacing покрывает все PoolFee."""
        assert {int(fee) for fee in PoolFee} == set(FEE_TO_TICK_SPACING)
        assert [get_tick_spacing(fee) for fee in PoolFee] == [1, 10, 60, 200]

    def test_pool_fee_values(self):
        assert [int(fee) for fee in PoolFee] == [100, 500, 3000, 10000]


class TestTokenLists:

    def test_stables(self):
        stables = get_stable_list()
        assert set(stables) == {"dai", "usdc", "usdt"}
        assert stables["usdc"].decimals == 6
        assert stables["usdt"].decimals == 6
        assert stables["dai"].decimals == 18

    def test_tokens(self):
        tokens = get_token_list(ChainId.MAINNET)
        assert set(tokens) == {"wbtc", "weth", "link", "uni"}
        assert tokens["wbtc"].decimals == 8
        assert tokens["weth"].address == WRAPPED_NATIVE_ADDRESS[ChainId.MAINNET]

    def test_chain_id_propagates(self):
        assert get_stable_list(ChainId.MAINNET)["usdc"].chain_id == ChainId.MAINNET

    @pytest.mark.parametrize("chain_id", [ChainId.OPTIMISM, ChainId.CELO, 999])
    def test_unconfigured_chain(self, chain_id):
        with pytest.raises(ValueError, match="not configured"):
            get_token_list(chain_id)


class TestRpcUrl:

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.setattr(config, "ALCHEMY_API_KEY", "")
        with pytest.raises(ValueError, match="ALCHEMY_API_KEY"):
            get_rpc_url(ChainId.MAINNET)

    def test_with_api_key(self, monkeypatch):
        monkeypatch.setattr(config, "ALCHEMY_API_KEY", "test-key")
        monkeypatch.setitem(config.RPC_URL, ChainId.MAINNET, "https://eth-mainnet.alchemyapi.io/v2/test-key")
        assert get_rpc_url(ChainId.MAINNET).endswith("/test-key")

    def test_celo_without_key(self, monkeypatch):
        monkeypatch.setattr(config, "ALCHEMY_API_KEY", "")
        assert get_rpc_url(ChainId.CELO) == "https://forno.celo.org"

    def test_unknown_chain(self):
        with pytest.raises(ValueError, match="Unknown chain_id"):
            get_rpc_url(999)


class TestUniswapConfig:

    @pytest.mark.parametrize("chain_id", [ChainId.MAINNET, ChainId.OPTIMISM, ChainId.ARBITRUM, ChainId.POLYGON])
    def test_canonical_deployment(self, chain_id):
        assert get_uniswap_config(chain_id) is UNISWAP_V3_CONTRACTS
        assert get_uniswap_config(chain_id).factory == "0x1F98431c8aD98523631AE4a59f267346ea31F984"

    def test_celo(self):
        assert get_uniswap_config(ChainId.CELO) is UNISWAP_V3_CONTRACTS_CELO
        assert UNISWAP_V3_CONTRACTS_CELO.factory != UNISWAP_V3_CONTRACTS.factory

    def test_wrapped_native(self):
        assert get_wrapped_native(ChainId.MAINNET) == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
        assert get_wrapped_native(999) is None
