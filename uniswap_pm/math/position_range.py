"""
Position Range Module

Расчёт диапазона тиков позиции по её типу:
- CALL: диапазон выше текущей цены (позиция в базовом токене, продаём на росте)
- PUT: диапазон ниже текущей цены (позиция в котируемом токене, покупаем на падении)
- PLAIN: симметричный диапазон вокруг текущей цены

Одна граница CALL/PUT - цена на один tick spacing выше текущей.
Пример для текущей цены $100, spacing 60:
- CALL: $100.6 - $132.25
- PUT:  $81.0 - $100.6
- PLAIN: $86.96 - $115.0

Ликвидность здесь не считается - её считает контракт по готовым тикам.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext
from enum import IntEnum
from typing import Tuple, Union

from ..exceptions import UnsupportedPositionShapeError
from .ticks import PRECISION, human_price_from_tick, tick_from_human_price

logger = logging.getLogger(__name__)


class PositionType(IntEnum):
    CALL = 0
    PUT = 1
    PLAIN = 2


# Множители от текущей цены
CALL_MULTIPLIER = Decimal("1.15")
PUT_MULTIPLIER = Decimal("0.90")
PLAIN_MULTIPLIER = Decimal("1.15")


@dataclass(frozen=True)
class PositionRange:
    """Результат расчёта диапазона позиции."""
    price_current: Decimal                # Текущая цена (в направлении invert_price)
    prices: Tuple[Decimal, Decimal]       # Границы диапазона, по возрастанию
    ticks: Tuple[int, int]                # (tick_lower, tick_upper), кратны spacing

    @property
    def tick_lower(self) -> int:
        return self.ticks[0]

    @property
    def tick_upper(self) -> int:
        return self.ticks[1]


def to_position_type(value: Union[PositionType, int, str]) -> PositionType:
    """
    Приведение значения к PositionType ("call", 0, PositionType.CALL).

    Raises:
        UnsupportedPositionShapeError: неизвестный тип
    """
    if isinstance(value, PositionType):
        return value
    if isinstance(value, str):
        try:
            return PositionType[value.strip().upper()]
        except KeyError:
            raise UnsupportedPositionShapeError(value) from None
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return PositionType(value)
        except ValueError:
            raise UnsupportedPositionShapeError(value) from None
    raise UnsupportedPositionShapeError(value)


def get_position_prices(
    position_type: Union[PositionType, int, str],
    price_current: Decimal,
    tick_spacing: int
) -> Tuple[Decimal, Decimal]:
    """
    Ценовой диапазон позиции в человеческих единицах.

    Args:
        position_type: CALL / PUT / PLAIN
        price_current: Текущая цена
        tick_spacing: Шаг тиков пула

    Returns:
        (price_lower, price_upper)
    """
    position_type = to_position_type(position_type)

    with localcontext() as ctx:
        ctx.prec = PRECISION
        price_current = Decimal(price_current)
        price_next = price_current * (1 + Decimal(tick_spacing) / 10000)

        if position_type == PositionType.CALL:
            mid_price = price_current * CALL_MULTIPLIER
            prices = [mid_price * CALL_MULTIPLIER, price_next]
        elif position_type == PositionType.PUT:
            mid_price = price_current * PUT_MULTIPLIER
            prices = [mid_price * PUT_MULTIPLIER, price_next]
        else:
            # PLAIN: геометрически симметричный диапазон -> симметричный в тиках
            prices = [price_current / PLAIN_MULTIPLIER, price_current * PLAIN_MULTIPLIER]

    prices.sort()
    return prices[0], prices[1]


def get_position_range(
    position_type: Union[PositionType, int, str],
    token0,
    token1,
    tick_spacing: int,
    tick: int,
    invert_price: bool
) -> PositionRange:
    """
    Расчёт диапазона тиков для новой позиции.

    Args:
        position_type: CALL / PUT / PLAIN
        token0: Токен с меньшим адресом (нужен атрибут decimals)
        token1: Токен с большим адресом
        tick_spacing: Шаг тиков пула
        tick: Текущий тик пула, уже выровненный по spacing
        invert_price: True если цена котируется как token0 per token1

    Returns:
        PositionRange с ценами и тиками (tick_lower < tick_upper)

    Raises:
        UnsupportedPositionShapeError: неизвестный тип позиции
        TickOutOfRangeError: граница диапазона вне допустимых тиков
    """
    position_type = to_position_type(position_type)

    price = human_price_from_tick(tick, token0.decimals, token1.decimals)
    price_current = price.select(invert_price)

    price_lower, price_upper = get_position_prices(position_type, price_current, tick_spacing)

    ticks = sorted([
        tick_from_human_price(price_lower, token0.decimals, token1.decimals, invert_price, tick_spacing),
        tick_from_human_price(price_upper, token0.decimals, token1.decimals, invert_price, tick_spacing),
    ])

    logger.debug(
        f"{position_type.name} range: tick={tick} spacing={tick_spacing} invert={invert_price} "
        f"prices=[{price_lower:.6g}, {price_upper:.6g}] ticks={ticks}"
    )

    return PositionRange(
        price_current=price_current,
        prices=(price_lower, price_upper),
        ticks=(ticks[0], ticks[1]),
    )


def print_position_range(result: PositionRange, token0=None, token1=None) -> None:
    """
    Красивый вывод диапазона позиции.

    Args:
        result: Результат get_position_range
        token0, token1: Токены пула (для подписей, опционально)
    """
    pair = ""
    if token0 is not None and token1 is not None:
        pair = f" {token0.symbol}/{token1.symbol}"

    logger.info("\n" + "=" * 60)
    logger.info(f"POSITION RANGE{pair}")
    logger.info("=" * 60)
    logger.info(f"Current price: {result.price_current:.8g}")

    for label, price in zip(("Lower", "Upper"), result.prices):
        pct = (price / result.price_current - 1) * 100
        logger.info(f"{label:<6} {price:>16.8g}  ({pct:+.2f}%)")

    logger.info("-" * 60)
    logger.info(f"Ticks: [{result.tick_lower}, {result.tick_upper}] width {result.tick_upper - result.tick_lower}")
