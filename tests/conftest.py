"""
Shared fixtures for all tests.
"""

import pytest
from unittest.mock import MagicMock

from config import ChainId, TokenConfig, get_stable_list, get_token_list


class MockWeb3:
    """Переиспользуемый мок Web3 для тестов (только чтение контрактов)."""

    def __init__(self, chain_id: int = ChainId.MAINNET):
        self.eth = MagicMock()
        self.eth.chain_id = chain_id
        self.eth.block_number = 19_000_000
        self.eth.contract = MagicMock()

    def set_slot0(self, sqrt_price_x96: int, tick: int):
        """Ответ pool.functions.slot0().call() для любого пула."""
        contract = self.eth.contract.return_value
        contract.functions.slot0.return_value.call.return_value = [
            sqrt_price_x96, tick, 0, 1, 1, 0, True
        ]

    def fail_slot0(self, error: Exception):
        contract = self.eth.contract.return_value
        contract.functions.slot0.return_value.call.side_effect = error


@pytest.fixture
def mock_w3():
    """Мок Web3 instance."""
    return MockWeb3()


@pytest.fixture
def stables():
    return get_stable_list(ChainId.MAINNET)


@pytest.fixture
def tokens():
    return get_token_list(ChainId.MAINNET)


@pytest.fixture
def usdc(stables) -> TokenConfig:
    return stables["usdc"]


@pytest.fixture
def usdt(stables) -> TokenConfig:
    return stables["usdt"]


@pytest.fixture
def weth(tokens) -> TokenConfig:
    return tokens["weth"]


@pytest.fixture
def wbtc(tokens) -> TokenConfig:
    return tokens["wbtc"]


# Тестовые адреса (Ethereum mainnet)
TOKEN_A = "0x1111111111111111111111111111111111111111"
TOKEN_B = "0x2222222222222222222222222222222222222222"
USDC_MAINNET = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WETH_MAINNET = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
WBTC_MAINNET = "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599"
DAI_MAINNET = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
USDT_MAINNET = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
