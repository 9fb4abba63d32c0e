"""
Uniswap V3 Position Range & Path Tool

- Калькулятор диапазона позиции CALL / PUT / PLAIN по текущему тику
- Кодирование / декодирование multi-hop путей для квотера
- Чтение состояния пула с mainnet (требует ALCHEMY_API_KEY в .env)
"""

import logging
import os

from web3 import Web3

from config import LOG_RESULTS, PoolFee, TokenConfig, get_rpc_url, get_stable_list, get_token_list
from uniswap_pm.contracts.pool import get_pool_state
from uniswap_pm.exceptions import PositionMathError
from uniswap_pm.math.position_range import PositionType, get_position_range, print_position_range
from uniswap_pm.math.ticks import get_tick_spacing, nearest_usable_tick
from uniswap_pm.path import decode_path, encode_path

logger = logging.getLogger(__name__)


def _ask_int(prompt: str, default: int = None) -> int:
    while True:
        raw = input(prompt).strip()
        if not raw and default is not None:
            return default
        try:
            return int(raw)
        except ValueError:
            print("Введите целое число")


def _ask_choice(prompt: str, options: dict, default: str):
    while True:
        raw = input(prompt).strip() or default
        if raw in options:
            return options[raw]
        print(f"Неверный выбор, допустимо: {', '.join(options)}")


def _ask_position_type() -> PositionType:
    print("\nТип позиции:")
    print("1. CALL  - выше текущей цены")
    print("2. PUT   - ниже текущей цены")
    print("3. PLAIN - симметрично вокруг цены")
    type_map = {"1": PositionType.CALL, "2": PositionType.PUT, "3": PositionType.PLAIN}
    return _ask_choice("Выбор (1-3) [1]: ", type_map, "1")


def _ask_fee() -> int:
    print("\nFee tier пула:")
    for i, fee in enumerate(PoolFee, start=1):
        print(f"{i}. {fee / 10000:.2f}% ({int(fee)})")
    fee_map = {str(i): int(fee) for i, fee in enumerate(PoolFee, start=1)}
    return _ask_choice("Выбор (1-4) [3]: ", fee_map, "3")


def range_calculator():
    """Диапазон позиции по тику, введённому вручную."""
    print("\n" + "=" * 60)
    print("POSITION RANGE CALCULATOR")
    print("=" * 60)

    fee = _ask_fee()
    tick_spacing = get_tick_spacing(fee)
    tick_current = _ask_int("\nТекущий тик пула: ")
    decimals0 = _ask_int("Decimals token0 [18]: ", 18)
    decimals1 = _ask_int("Decimals token1 [18]: ", 18)
    invert_price = input("Инвертировать цену (token0 per token1)? (y/n) [n]: ").strip().lower() == "y"
    position_type = _ask_position_type()

    token0 = TokenConfig(address="", symbol="TOKEN0", decimals=decimals0)
    token1 = TokenConfig(address="", symbol="TOKEN1", decimals=decimals1)

    try:
        tick = nearest_usable_tick(tick_current, tick_spacing)
        result = get_position_range(position_type, token0, token1, tick_spacing, tick, invert_price)
    except PositionMathError as e:
        print(f"\nОшибка: {e}")
        return

    print_position_range(result, token0, token1)


def path_tool():
    """Кодирование / декодирование пути."""
    print("\n" + "=" * 60)
    print("PATH ENCODER / DECODER")
    print("=" * 60)
    print("1. Закодировать (адреса и fee через запятую)")
    print("2. Декодировать hex")

    try:
        if (input("Выбор (1/2) [1]: ").strip() or "1") == "1":
            tokens = [t.strip() for t in input("Токены: ").split(",") if t.strip()]
            fees = [int(f) for f in input("Fees: ").split(",") if f.strip()]
            print(f"\nPath: {encode_path(tokens, fees)}")
        else:
            route = decode_path(input("Path (0x...): ").strip())
            print(f"\nTokens: {list(route.tokens)}")
            print(f"Fees:   {list(route.fees)}")
    except (PositionMathError, ValueError) as e:
        print(f"\nОшибка: {e}")


def mainnet_preview():
    """Диапазоны CALL/PUT для реальных пулов mainnet."""
    w3 = Web3(Web3.HTTPProvider(get_rpc_url(1)))

    stables = get_stable_list()
    tokens = get_token_list()
    pairs = [
        (stables["dai"], tokens["weth"]),
        (stables["usdc"], tokens["weth"]),
        (tokens["weth"], stables["usdt"]),
    ]

    for token_a, token_b in pairs:
        state = get_pool_state(w3, token_a, token_b, PoolFee.MEDIUM)
        for position_type in (PositionType.CALL, PositionType.PUT):
            result = get_position_range(
                position_type, state.token0, state.token1, state.tick_spacing, state.tick, state.invert_price
            )
            logger.info(f"\n>>> {position_type.name} {state.token0.symbol}-{state.token1.symbol}, tick {state.tick_current}")
            print_position_range(result, state.token0, state.token1)


def main():
    """Главная функция."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "DEBUG" if LOG_RESULTS else "INFO"),
        format="%(message)s",
    )

    print("""
    Uniswap V3 Position Range & Path Tool
    """)

    print("Выбери действие:")
    print("1. Калькулятор диапазона позиции")
    print("2. Кодек путей")
    print("3. Диапазоны для пулов mainnet (требует ALCHEMY_API_KEY)")
    print("4. Выход")

    choice = input("\nВыбор (1-4): ").strip()

    if choice == "1":
        range_calculator()
    elif choice == "2":
        path_tool()
    elif choice == "3":
        mainnet_preview()
    elif choice == "4":
        print("Выход")
    else:
        print("Неверный выбор")


if __name__ == "__main__":
    main()
