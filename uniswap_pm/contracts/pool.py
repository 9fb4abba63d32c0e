"""
Uniswap V3 Pool Integration

Адрес пула через CREATE2 (без RPC) и чтение текущего состояния пула.
"""

import logging
from dataclasses import dataclass

from eth_abi import encode
from web3 import Web3

from config import ChainId, POOL_INIT_CODE_HASH, TokenConfig, get_uniswap_config
from ..math.ticks import get_tick_spacing, nearest_usable_tick
from ..utils import is_wrapped_native, sort_tokens

logger = logging.getLogger(__name__)


# Pool ABI (только slot0)
POOL_ABI = [
    {
        "inputs": [],
        "name": "slot0",
        "outputs": [
            {"name": "sqrtPriceX96", "type": "uint160"},
            {"name": "tick", "type": "int24"},
            {"name": "observationIndex", "type": "uint16"},
            {"name": "observationCardinality", "type": "uint16"},
            {"name": "observationCardinalityNext", "type": "uint16"},
            {"name": "feeProtocol", "type": "uint8"},
            {"name": "unlocked", "type": "bool"}
        ],
        "stateMutability": "view",
        "type": "function"
    },
]


@dataclass(frozen=True)
class PoolState:
    """Состояние пула, нужное для расчёта диапазона позиции."""
    address: str
    token0: TokenConfig
    token1: TokenConfig
    fee: int
    tick_spacing: int
    sqrt_price_x96: int
    tick_current: int       # тик из slot0
    tick: int               # tick_current, выровненный по spacing
    zero_for_one: bool      # token0 - wrapped native
    invert_price: bool


def compute_pool_address(token_a: str, token_b: str, fee: int, chain_id: int = ChainId.MAINNET) -> str:
    """
    Адрес пула через CREATE2.

    address = keccak256(0xff ++ factory ++ salt ++ POOL_INIT_CODE_HASH)[12:]
    salt = keccak256(abi.encode(token0, token1, fee))

    Args:
        token_a, token_b: Адреса токенов в любом порядке
        fee: Fee tier
        chain_id: Сеть (Celo использует свою фабрику)

    Returns:
        Checksum адрес пула
    """
    factory = get_uniswap_config(chain_id).factory
    token0, token1 = sort_tokens([
        Web3.to_checksum_address(token_a),
        Web3.to_checksum_address(token_b),
    ])

    salt = Web3.keccak(encode(["address", "address", "uint24"], [token0, token1, int(fee)]))
    raw = Web3.keccak(
        b"\xff"
        + bytes.fromhex(factory[2:])
        + bytes(salt)
        + bytes.fromhex(POOL_INIT_CODE_HASH[2:])
    )

    return Web3.to_checksum_address("0x" + bytes(raw)[12:].hex())


def get_pool_state(
    w3: Web3,
    token_a: TokenConfig,
    token_b: TokenConfig,
    fee: int,
    chain_id: int = ChainId.MAINNET
) -> PoolState:
    """
    Чтение текущего состояния пула.

    Если token0 - wrapped native (WETH), котировка идёт как token1 per token0,
    иначе цену нужно инвертировать.

    Raises:
        ValueError: неизвестный fee tier
        Exception: ошибки RPC пробрасываются как есть
    """
    token0, token1 = sort_tokens([token_a, token_b])
    tick_spacing = get_tick_spacing(fee)

    pool_address = compute_pool_address(token0.address, token1.address, fee, chain_id)
    pool = w3.eth.contract(address=pool_address, abi=POOL_ABI)

    try:
        slot0 = pool.functions.slot0().call()
    except Exception as e:
        logger.error(f"Failed to read slot0 for pool {pool_address}: {e}")
        raise

    sqrt_price_x96, tick_current = slot0[0], slot0[1]
    tick = nearest_usable_tick(tick_current, tick_spacing)
    zero_for_one = is_wrapped_native(token0.address)

    logger.debug(
        f"Pool {token0.symbol}/{token1.symbol} ({fee / 10000}%) {pool_address}: "
        f"tick={tick_current} -> {tick}, zero_for_one={zero_for_one}"
    )

    return PoolState(
        address=pool_address,
        token0=token0,
        token1=token1,
        fee=int(fee),
        tick_spacing=tick_spacing,
        sqrt_price_x96=sqrt_price_x96,
        tick_current=tick_current,
        tick=tick,
        zero_for_one=zero_for_one,
        invert_price=not zero_for_one,
    )
