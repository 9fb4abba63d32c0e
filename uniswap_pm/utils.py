"""
Address and unit helpers.

Includes:
- sort_tokens: порядок token0/token1 как в пуле (по числовому значению адреса)
- is_same_address / is_native / is_wrapped_native
- format_units / parse_units: wei <-> человеческие единицы через Decimal
"""

from decimal import Decimal, localcontext, ROUND_DOWN
from typing import List, Sequence, TypeVar, Union

from web3 import Web3

from config import NATIVE_ADDRESS, WRAPPED_NATIVE_ADDRESS

T = TypeVar("T")


def _address_of(token) -> str:
    return getattr(token, "address", token)


def sort_tokens(tokens: Sequence[T]) -> List[T]:
    """
    Сортировка токенов по адресу (token0 < token1).

    Принимает адреса или объекты с .address (TokenConfig).
    Сравнивается числовое значение адреса, регистр не влияет.
    """
    return sorted(tokens, key=lambda token: int(_address_of(token), 16))


def is_same_address(address_a: str, address_b: str) -> bool:
    return Web3.to_checksum_address(address_a) == Web3.to_checksum_address(address_b)


def is_native(token_address: str) -> bool:
    return is_same_address(token_address, NATIVE_ADDRESS)


def is_wrapped_native(token_address: str) -> bool:
    """Является ли токен wrapped native (WETH, WMATIC, CELO) в любой сети."""
    address = Web3.to_checksum_address(token_address)
    return any(is_same_address(address, wrapped) for wrapped in WRAPPED_NATIVE_ADDRESS.values())


def format_units(value: int, decimals: int = 18) -> Decimal:
    """
    wei -> человеческие единицы.

    Example:
        >>> format_units(1_500_000, 6)
        Decimal('1.500000')
    """
    with localcontext() as ctx:
        ctx.prec = 78
        return Decimal(value).scaleb(-decimals)


def parse_units(value: Union[int, float, str, Decimal], decimals: int = 18) -> int:
    """
    Человеческие единицы -> wei (усечение к нулю).

    Example:
        >>> parse_units("50000", 6)
        50000000000
        >>> parse_units(2.5, 8)
        250000000
    """
    with localcontext() as ctx:
        ctx.prec = 78
        amount = Decimal(str(value)).scaleb(decimals)
        return int(amount.to_integral_value(rounding=ROUND_DOWN))
