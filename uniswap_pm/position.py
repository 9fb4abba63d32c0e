"""
Open Position Parameters

Сборка параметров openPosition для контракта PositionManager:
тики из get_position_range + суммы по типу позиции.
Итоговые liquidity/amounts контракт считает сам.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from web3 import Web3

from .contracts.pool import PoolState
from .math.position_range import PositionRange, PositionType, to_position_type

logger = logging.getLogger(__name__)


@dataclass
class OpenPositionParams:
    """Параметры открытия позиции."""
    position_type: PositionType
    token0: str
    token1: str
    fee: int
    tick_lower: int
    tick_upper: int
    amount0_in: int
    amount1_in: int
    amount0_desired: int
    amount1_desired: int
    amount0_min: int = 0
    amount1_min: int = 0
    deadline: Optional[int] = None
    recipient: Optional[str] = None

    def to_tuple(self, recipient: str = None, deadline: int = None) -> tuple:
        """Конвертация в tuple для контракта (порядок полей OpenPositionParams)."""
        recipient = recipient or self.recipient
        if recipient is None:
            raise ValueError("recipient is required")

        deadline = deadline or self.deadline
        if deadline is None:
            deadline = int(time.time()) + 3600  # +1 час

        return (
            int(self.position_type),
            Web3.to_checksum_address(self.token0),
            Web3.to_checksum_address(self.token1),
            self.fee,
            self.tick_lower,
            self.tick_upper,
            self.amount0_in,
            self.amount1_in,
            self.amount0_desired,
            self.amount1_desired,
            self.amount0_min,
            self.amount1_min,
            deadline,
            Web3.to_checksum_address(recipient),
        )


def get_position_amounts(
    position_type: PositionType,
    zero_for_one: bool,
    eth_amount: int,
    token_amount: int
) -> Tuple[int, int]:
    """
    Какие токены вносятся в позицию.

    - CALL: только ETH (позиция выше цены)
    - PUT: только токен (позиция ниже цены)
    - PLAIN: оба

    Args:
        zero_for_one: True если token0 - wrapped native

    Returns:
        (amount0, amount1)
    """
    position_type = to_position_type(position_type)

    if position_type == PositionType.CALL:
        return (eth_amount, 0) if zero_for_one else (0, eth_amount)
    if position_type == PositionType.PUT:
        return (0, token_amount) if zero_for_one else (token_amount, 0)
    return (eth_amount, token_amount) if zero_for_one else (token_amount, eth_amount)


def build_open_position_params(
    position_type: PositionType,
    pool: PoolState,
    position_range: PositionRange,
    amount0: int,
    amount1: int,
    recipient: str,
    deadline: int = None
) -> OpenPositionParams:
    """Параметры openPosition без слиппеджа (min = 0)."""
    position_type = to_position_type(position_type)

    params = OpenPositionParams(
        position_type=position_type,
        token0=pool.token0.address,
        token1=pool.token1.address,
        fee=pool.fee,
        tick_lower=position_range.tick_lower,
        tick_upper=position_range.tick_upper,
        amount0_in=amount0,
        amount1_in=amount1,
        amount0_desired=amount0,
        amount1_desired=amount1,
        deadline=deadline,
        recipient=recipient,
    )

    logger.debug(
        f"OpenPosition {position_type.name} {pool.token0.symbol}/{pool.token1.symbol}: "
        f"ticks=[{params.tick_lower}, {params.tick_upper}] amounts=({amount0}, {amount1})"
    )
    return params
