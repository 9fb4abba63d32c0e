"""
Uniswap V3 Tick Mathematics

Основные формулы:
- price(i) = 1.0001^i
- sqrtPriceX96 = sqrt(price) * 2^96
- human price = price * 10^(decimals0 - decimals1)

Tick spacing по fee tier:
- 0.01% (100) -> spacing 1
- 0.05% (500) -> spacing 10
- 0.30% (3000) -> spacing 60
- 1.00% (10000) -> spacing 200

Все вычисления в Decimal / Fraction / int. float допускается только на входе.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, localcontext, ROUND_FLOOR, ROUND_HALF_UP
from fractions import Fraction
from typing import Optional, Tuple, Union

from ..exceptions import InvalidPriceError, TickOutOfRangeError

logger = logging.getLogger(__name__)

# Точность Decimal: uint256 умещается в 78 десятичных знаков
PRECISION = 78

# Константы
Q96 = 2 ** 96
Q192 = 2 ** 192
MIN_TICK = -887272
MAX_TICK = 887272
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342
BASE_TICK = Decimal("1.0001")

# Fee tier -> tick spacing
FEE_TO_TICK_SPACING = {
    100: 1,      # 0.01%
    500: 10,     # 0.05%
    3000: 60,    # 0.30%
    10000: 200,  # 1.00%
}

Number = Union[int, float, str, Decimal, Fraction]


@dataclass(frozen=True)
class TickPrice:
    """Цена тика в человеческих единицах (с учётом decimals)."""
    price: Decimal           # token1 per token0
    inverse_price: Decimal   # token0 per token1

    def select(self, invert_price: bool) -> Decimal:
        return self.inverse_price if invert_price else self.price


def _to_fraction(value: Number) -> Fraction:
    # float через str: Fraction(0.1) дал бы двоичный хвост
    if isinstance(value, float):
        value = Decimal(str(value))
    return Fraction(value)


def _check_tick(tick: int) -> None:
    if tick < MIN_TICK or tick > MAX_TICK:
        raise TickOutOfRangeError(tick, MIN_TICK, MAX_TICK)


def expand_decimals(amount: Number, decimals: int) -> Fraction:
    """amount * 10^decimals без потери точности."""
    return _to_fraction(amount) * 10 ** decimals


def base_log(base: Number, value: Number) -> Decimal:
    """Логарифм value по основанию base."""
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return Decimal(value).ln() / Decimal(base).ln()


def mul_div(x: int, y: int, denominator: int, round_up: bool = False) -> int:
    """
    x * y / denominator с полной точностью.

    Python int не переполняется, поэтому промежуточное произведение
    хранится целиком (аналог FullMath.mulDiv в 512 бит).

    Args:
        round_up: True = округление вверх (mulDivRoundingUp)

    Raises:
        ZeroDivisionError: denominator == 0
    """
    if denominator == 0:
        raise ZeroDivisionError("mul_div: denominator is zero")

    result, remainder = divmod(x * y, denominator)
    if round_up and remainder:
        result += 1
    return result


def encode_sqrt_ratio_x96(numerator: Number, denominator: Number = 1) -> int:
    """
    sqrtPriceX96 = floor(sqrt(numerator / denominator) * 2^96).

    Считается точно: floor(sqrt(r * 2^192)) == isqrt(floor(r * 2^192)).

    Args:
        numerator: amount1 (или цена целиком при denominator=1)
        denominator: amount0

    Returns:
        sqrtPriceX96 (целое число)

    Raises:
        InvalidPriceError: если numerator или denominator <= 0

    Example:
        >>> encode_sqrt_ratio_x96(1, 1) == Q96
        True
        >>> encode_sqrt_ratio_x96(100)
        792281625142643375935439503360
    """
    num = _to_fraction(numerator)
    den = _to_fraction(denominator)
    if num <= 0:
        raise InvalidPriceError(numerator)
    if den <= 0:
        raise InvalidPriceError(denominator)

    ratio = num / den
    return math.isqrt(ratio.numerator * Q192 // ratio.denominator)


def price_to_sqrt_price_x96(price: Number) -> int:
    """Конвертация raw цены (token1/token0 в минимальных единицах) в sqrtPriceX96."""
    return encode_sqrt_ratio_x96(price)


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """
    sqrtPriceX96 для тика: sqrt(1.0001)^tick * 2^96.

    Степень считается Decimal (возведение в целую степень делается
    бинарным умножением, не tick-кратным циклом).

    Raises:
        TickOutOfRangeError: тик вне [MIN_TICK, MAX_TICK]
    """
    _check_tick(tick)

    with localcontext() as ctx:
        ctx.prec = PRECISION
        sqrt_price = BASE_TICK.sqrt() ** tick
        return int((sqrt_price * Q96).to_integral_value(rounding=ROUND_FLOOR))


def format_sqrt_ratio_x96(sqrt_price_x96: int, decimals0: int, decimals1: int) -> Decimal:
    """
    sqrtPriceX96 -> человеческая цена token1/token0.

    price = (sqrtPriceX96 / 2^96)^2 * 10^(decimals0 - decimals1)
    """
    with localcontext() as ctx:
        ctx.prec = PRECISION
        ratio = Decimal(sqrt_price_x96 * sqrt_price_x96) / Q192

        # decimals1 < decimals0 -> умножение, иначе деление
        return ratio.scaleb(decimals0 - decimals1)


def sqrt_price_x96_to_price(sqrt_price_x96: int) -> Decimal:
    """Конвертация sqrtPriceX96 в raw цену (без учёта decimals)."""
    return format_sqrt_ratio_x96(sqrt_price_x96, 0, 0)


def human_price_from_tick(tick: int, decimals0: int, decimals1: int) -> TickPrice:
    """
    Цена тика в человеческих единицах.

    Возвращает и прямую цену (token1 per token0), и обратную, чтобы
    вызывающий код мог выбрать нужное направление без пересчёта.

    Example:
        # USDC (6) / WETH (18), tick ≈ 200000
        tp = human_price_from_tick(200000, 6, 18)
        tp.price          # WETH per USDC ≈ 0.000485
        tp.inverse_price  # USDC per WETH ≈ 2063
    """
    sqrt_price_x96 = get_sqrt_ratio_at_tick(tick)
    price = format_sqrt_ratio_x96(sqrt_price_x96, decimals0, decimals1)

    with localcontext() as ctx:
        ctx.prec = PRECISION
        inverse_price = 1 / price

    return TickPrice(price=price, inverse_price=inverse_price)


def tick_from_human_price(
    price: Number,
    decimals0: int,
    decimals1: int,
    invert_price: bool = False,
    tick_spacing: Optional[int] = None
) -> int:
    """
    Конвертация человеческой цены в тик.

    Args:
        price: Цена в человеческих единицах.
               invert_price=False: token1 per token0
               invert_price=True: token0 per token1 (например USD цена токена,
               когда стейблкоин - token0)
        decimals0: decimals token0
        decimals1: decimals token1
        invert_price: Направление котировки (см. выше)
        tick_spacing: Если задан, тик выравнивается через nearest_usable_tick

    Returns:
        round(log_sqrt(1.0001)(sqrtPrice)), при tick_spacing - кратный ему

    Raises:
        InvalidPriceError: price <= 0 или цена не представима в Q96
        TickOutOfRangeError: тик вне [MIN_TICK, MAX_TICK]
    """
    value = _to_fraction(price)
    if value <= 0:
        raise InvalidPriceError(price)

    if invert_price:
        numerator = expand_decimals(value, decimals0)
        denominator = expand_decimals(1, decimals1)
    else:
        numerator = expand_decimals(1, decimals0)
        denominator = expand_decimals(value, decimals1)

    sqrt_numerator = encode_sqrt_ratio_x96(numerator)
    sqrt_denominator = encode_sqrt_ratio_x96(denominator)
    if sqrt_numerator == 0 or sqrt_denominator == 0:
        raise InvalidPriceError(price)

    sqrt_ratio_x96 = mul_div(sqrt_denominator, Q96, sqrt_numerator)
    if sqrt_ratio_x96 == 0:
        raise InvalidPriceError(price)

    with localcontext() as ctx:
        ctx.prec = PRECISION
        sqrt_ratio = Decimal(sqrt_ratio_x96) / Q96
        raw_tick = base_log(BASE_TICK.sqrt(), sqrt_ratio)
        tick = int(raw_tick.to_integral_value(rounding=ROUND_HALF_UP))

    _check_tick(tick)

    if tick_spacing:
        snapped = nearest_usable_tick(tick, tick_spacing)
        logger.debug(f"tick_from_human_price: price={price} tick={tick} -> {snapped} (spacing {tick_spacing})")
        return snapped

    return tick


def get_min_tick(tick_spacing: int) -> int:
    """Минимальный тик, кратный tick_spacing: ceil(MIN_TICK / s) * s."""
    return -(-MIN_TICK // tick_spacing) * tick_spacing


def get_max_tick(tick_spacing: int) -> int:
    """Максимальный тик, кратный tick_spacing: floor(MAX_TICK / s) * s."""
    return (MAX_TICK // tick_spacing) * tick_spacing


def nearest_usable_tick(tick: int, tick_spacing: int) -> int:
    """
    Ближайший тик, кратный tick_spacing.

    Половина округляется от нуля (по модулю вверх). Если результат
    вышел за глобальные границы - сдвигается на один spacing внутрь.

    Args:
        tick: Исходный тик
        tick_spacing: Шаг тиков (зависит от fee tier)

    Returns:
        Тик в [get_min_tick(s), get_max_tick(s)], кратный s

    Raises:
        ValueError: tick_spacing <= 0
        TickOutOfRangeError: тик вне [MIN_TICK, MAX_TICK]
    """
    if tick_spacing <= 0:
        raise ValueError(f"tick_spacing must be positive, got {tick_spacing}")
    _check_tick(tick)

    quotient, remainder = divmod(abs(tick), tick_spacing)
    if remainder * 2 >= tick_spacing:
        quotient += 1
    rounded = quotient * tick_spacing if tick >= 0 else -quotient * tick_spacing

    if rounded < MIN_TICK:
        return rounded + tick_spacing
    if rounded > MAX_TICK:
        return rounded - tick_spacing
    return rounded


def get_tick_spacing(fee: int) -> int:
    """
    Получение tick_spacing по fee tier.

    Raises:
        ValueError: Если fee не найден
    """
    if fee in FEE_TO_TICK_SPACING:
        return FEE_TO_TICK_SPACING[fee]

    valid_fees = sorted(FEE_TO_TICK_SPACING.keys())
    raise ValueError(f"Unknown fee tier: {fee}. Valid fee tiers are: {valid_fees}")


def get_price_range_for_tick_range(
    tick_lower: int,
    tick_upper: int,
    decimals0: int = 0,
    decimals1: int = 0
) -> Tuple[Decimal, Decimal]:
    """
    Получение диапазона цен (token1 per token0) для диапазона тиков.

    Returns:
        (price_lower, price_upper)
    """
    return (
        human_price_from_tick(tick_lower, decimals0, decimals1).price,
        human_price_from_tick(tick_upper, decimals0, decimals1).price,
    )
