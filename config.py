"""
Configuration for Uniswap V3 Position Manager tooling

Сети, адреса контрактов Uniswap V3, реестр токенов и fee tiers.
RPC ключи читаются из .env (ALCHEMY_API_KEY).
"""

import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()


class ChainId(IntEnum):
    MAINNET = 1
    MAINNET_FORK = 31337
    OPTIMISM = 10
    POLYGON = 137
    ARBITRUM = 42161
    CELO = 42220


class PoolFee(IntEnum):
    LOWEST = 100    # 0.01%
    LOW = 500       # 0.05%
    MEDIUM = 3000   # 0.30%
    HIGH = 10000    # 1.00%


@dataclass(frozen=True)
class TokenConfig:
    """Конфигурация токена."""
    address: str
    symbol: str
    decimals: int
    name: str = ""
    chain_id: int = ChainId.MAINNET


@dataclass(frozen=True)
class UniswapV3Config:
    """Адреса контрактов Uniswap V3 в сети."""
    factory: str
    nft: str                  # NonfungiblePositionManager
    quoter: str
    router: str
    tick_lens: str
    quoter_v2: str = ""
    router02: str = ""


# ============================================================
# RPC
# ============================================================

ALCHEMY_API_KEY = os.getenv("ALCHEMY_API_KEY", "")

RPC_URL: Dict[int, str] = {
    ChainId.MAINNET: f"https://eth-mainnet.alchemyapi.io/v2/{ALCHEMY_API_KEY}",
    ChainId.OPTIMISM: f"https://opt-mainnet.g.alchemy.com/v2/{ALCHEMY_API_KEY}",
    ChainId.POLYGON: f"https://polygon-mainnet.g.alchemyapi.io/v2/{ALCHEMY_API_KEY}",
    ChainId.ARBITRUM: f"https://arb-mainnet.g.alchemy.com/v2/{ALCHEMY_API_KEY}",
    ChainId.CELO: "https://forno.celo.org",
}

# Печатать результаты расчётов в консоль (main.py)
LOG_RESULTS = os.getenv("LOG_RESULTS", "false").lower() == "true"


# ============================================================
# UNISWAP V3 CONTRACTS
# ============================================================

UNISWAP_V3_CONTRACTS = UniswapV3Config(
    factory="0x1F98431c8aD98523631AE4a59f267346ea31F984",
    nft="0xC36442b4a4522E871399CD717aBDD847Ab11FE88",
    quoter="0xb27308f9F90D607463bb33eA1BeBb41C27CE5AB6",
    router="0xE592427A0AEce92De3Edee1F18E0157C05861564",
    tick_lens="0xbfd8137f7d1516D3ea5cA83523914859ec47F573",
    quoter_v2="0x61fFE014bA17989E743c5F6cB21bF9697530B21e",
    router02="0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45",
)

# Celo - отдельный деплой со своей фабрикой
UNISWAP_V3_CONTRACTS_CELO = UniswapV3Config(
    factory="0xAfE208a311B21f13EF87E33A90049fC17A7acDEc",
    nft="0x3d79EdAaBC0EaB6F08ED885C05Fc0B014290D95A",
    quoter="0x82825d0554fA07f7FC52Ab63c961F330fdEFa8E8",
    router="0x5615CDAb10dc425a742d643d949a7F474C01abc4",
    tick_lens="0x5f115D9113F88e0a0Db1b5033D90D4a9690AcD3D",
)

# keccak256 байткода UniswapV3Pool (для CREATE2)
POOL_INIT_CODE_HASH = "0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54"


# ============================================================
# NATIVE / WRAPPED NATIVE
# ============================================================

NATIVE_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

WRAPPED_NATIVE_ADDRESS: Dict[int, str] = {
    ChainId.MAINNET: "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",   # WETH
    ChainId.OPTIMISM: "0x4200000000000000000000000000000000000006",  # WETH
    ChainId.POLYGON: "0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",   # WMATIC
    ChainId.ARBITRUM: "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",  # WETH
    ChainId.CELO: "0x471EcE3750Da237f93B8E339c536989b8978a438",      # CELO
}


# ============================================================
# TOKEN CONFIGURATIONS (Ethereum Mainnet)
# ============================================================

DAI_ADDRESS: Dict[int, str] = {ChainId.MAINNET: "0x6B175474E89094C44Da98b954EedeAC495271d0F"}
USDC_ADDRESS: Dict[int, str] = {ChainId.MAINNET: "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"}
USDT_ADDRESS: Dict[int, str] = {ChainId.MAINNET: "0xdAC17F958D2ee523a2206206994597C13D831ec7"}
WBTC_ADDRESS: Dict[int, str] = {ChainId.MAINNET: "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599"}
WETH_ADDRESS: Dict[int, str] = {ChainId.MAINNET: WRAPPED_NATIVE_ADDRESS[ChainId.MAINNET]}
LINK_ADDRESS: Dict[int, str] = {ChainId.MAINNET: "0x514910771AF9Ca656af840dff83E8264EcF986CA"}
UNI_ADDRESS: Dict[int, str] = {ChainId.MAINNET: "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984"}


def _token(address_map: Dict[int, str], chain_id: int, symbol: str, name: str, decimals: int) -> TokenConfig:
    if chain_id not in address_map:
        raise ValueError(f"{symbol} not configured for chain_id: {chain_id}")
    return TokenConfig(
        address=address_map[chain_id],
        symbol=symbol,
        decimals=decimals,
        name=name,
        chain_id=chain_id,
    )


def get_stable_list(chain_id: int = ChainId.MAINNET) -> Dict[str, TokenConfig]:
    """Стейблкоины сети: dai, usdc, usdt."""
    return {
        "dai": _token(DAI_ADDRESS, chain_id, "DAI", "Dai Stablecoin", 18),
        "usdc": _token(USDC_ADDRESS, chain_id, "USDC", "USDCoin", 6),
        "usdt": _token(USDT_ADDRESS, chain_id, "USDT", "Tether USD", 6),
    }


def get_token_list(chain_id: int = ChainId.MAINNET) -> Dict[str, TokenConfig]:
    """Волатильные токены сети: wbtc, weth, link, uni."""
    return {
        "wbtc": _token(WBTC_ADDRESS, chain_id, "WBTC", "Wrapped BTC", 8),
        "weth": _token(WETH_ADDRESS, chain_id, "WETH", "Wrapped Ether", 18),
        "link": _token(LINK_ADDRESS, chain_id, "LINK", "ChainLink Token", 18),
        "uni": _token(UNI_ADDRESS, chain_id, "UNI", "Uniswap", 18),
    }


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_rpc_url(chain_id: int) -> str:
    """RPC URL по chain_id. Для Alchemy-сетей требуется ALCHEMY_API_KEY."""
    if chain_id not in RPC_URL:
        raise ValueError(f"Unknown chain_id: {chain_id}")
    if chain_id != ChainId.CELO and not ALCHEMY_API_KEY:
        raise ValueError("ALCHEMY_API_KEY not set (add it to .env)")
    return RPC_URL[chain_id]


def get_uniswap_config(chain_id: int = ChainId.MAINNET) -> UniswapV3Config:
    """Адреса Uniswap V3: Celo отдельно, остальные сети - канонический деплой."""
    if chain_id == ChainId.CELO:
        return UNISWAP_V3_CONTRACTS_CELO
    return UNISWAP_V3_CONTRACTS


def get_wrapped_native(chain_id: int) -> Optional[str]:
    """Адрес wrapped native токена сети (None если сеть неизвестна)."""
    return WRAPPED_NATIVE_ADDRESS.get(chain_id)
