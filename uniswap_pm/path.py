"""
Uniswap V3 Multi-hop Path Codec

Формат пути (как в SwapRouter / Quoter):
    token0 (20 bytes) | fee0 (3 bytes, big-endian) | token1 (20 bytes) | fee1 | ... | tokenN

Пример USDC -> WETH -> WBTC (fee 3000 = 0x000bb8):
    0x<usdc><000bb8><weth><000bb8><wbtc>   (66 bytes)
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple, Union

from web3 import Web3

from .exceptions import (
    InvalidAddressError,
    InvalidFeeError,
    InvalidPathLengthError,
    MalformedPathError,
)

logger = logging.getLogger(__name__)

ADDR_SIZE = 20
FEE_SIZE = 3
OFFSET = ADDR_SIZE + FEE_SIZE       # один хоп: адрес + fee
DATA_SIZE = OFFSET + ADDR_SIZE      # минимальный путь: один пул
MAX_FEE = 2 ** (8 * FEE_SIZE) - 1

PathLike = Union[str, bytes, bytearray]


@dataclass(frozen=True)
class Pool:
    """Один пул из пути."""
    token_a: str
    fee: int
    token_b: str


@dataclass(frozen=True)
class SwapRoute:
    """Маршрут свапа: N+1 токенов и N fee."""
    tokens: Tuple[str, ...]
    fees: Tuple[int, ...]

    def __post_init__(self):
        if len(self.tokens) < 2 or len(self.tokens) - 1 != len(self.fees):
            raise InvalidPathLengthError(len(self.tokens), len(self.fees))

    @property
    def hops(self) -> int:
        return len(self.fees)

    def pools(self) -> Iterator[Pool]:
        for i, fee in enumerate(self.fees):
            yield Pool(token_a=self.tokens[i], fee=fee, token_b=self.tokens[i + 1])

    def encode(self) -> str:
        return encode_path(self.tokens, self.fees)


def _address_bytes(token) -> bytes:
    # TokenConfig и подобные объекты - берём .address
    address = getattr(token, "address", token)
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidAddressError(address)
    hex_part = address[2:] if address[:2].lower() == "0x" else address
    # смешанный регистр = EIP-55, checksum обязан совпасть
    if hex_part not in (hex_part.lower(), hex_part.upper()) and not Web3.is_checksum_address(address):
        raise InvalidAddressError(address)
    return bytes.fromhex(hex_part)


def _fee_bytes(fee) -> bytes:
    if isinstance(fee, bool) or not isinstance(fee, int) or not 0 <= fee <= MAX_FEE:
        raise InvalidFeeError(fee)
    return int(fee).to_bytes(FEE_SIZE, "big")


def _to_bytes(path: PathLike) -> bytes:
    if isinstance(path, (bytes, bytearray)):
        return bytes(path)
    data = path[2:] if path[:2].lower() == "0x" else path
    try:
        return bytes.fromhex(data)
    except ValueError as e:
        raise MalformedPathError(f"Path is not valid hex: {e}") from e


def encode_path(tokens: Sequence, fees: Sequence[int]) -> str:
    """
    Кодирование маршрута в байтовый путь.

    Args:
        tokens: Адреса токенов (или объекты с .address), len = N + 1
        fees: Fee tiers пулов, len = N

    Returns:
        Путь в lowercase hex с префиксом 0x

    Raises:
        InvalidPathLengthError: len(tokens) - 1 != len(fees) или меньше 2 токенов
        InvalidAddressError: адрес не 20 байт hex
        InvalidFeeError: fee не помещается в 3 байта
    """
    if len(tokens) < 2 or len(tokens) - 1 != len(fees):
        raise InvalidPathLengthError(len(tokens), len(fees))

    path = b""
    for token, fee in zip(tokens, fees):
        path += _address_bytes(token) + _fee_bytes(fee)
    path += _address_bytes(tokens[-1])

    return "0x" + path.hex()


def decode_first_pool(path: PathLike) -> Pool:
    """
    Первый пул пути: tokenA (20) + fee (3) + tokenB (20).

    Raises:
        MalformedPathError: путь короче 43 байт
    """
    data = _to_bytes(path)
    if len(data) < DATA_SIZE:
        raise MalformedPathError(f"Path too short: {len(data)} bytes, need at least {DATA_SIZE}")

    token_a = Web3.to_checksum_address("0x" + data[:ADDR_SIZE].hex())
    fee = int.from_bytes(data[ADDR_SIZE:OFFSET], "big")
    token_b = Web3.to_checksum_address("0x" + data[OFFSET:DATA_SIZE].hex())

    return Pool(token_a=token_a, fee=fee, token_b=token_b)


def decode_path(path: PathLike) -> SwapRoute:
    """
    Декодирование байтового пути в маршрут.

    Курсор сдвигается ровно на один хоп (23 байта) за итерацию.

    Raises:
        MalformedPathError: путь короче 43 байт или не выровнен по хопам
    """
    data = _to_bytes(path)
    if len(data) < DATA_SIZE or (len(data) - ADDR_SIZE) % OFFSET != 0:
        raise MalformedPathError(
            f"Invalid path length {len(data)}: expected {ADDR_SIZE} + {OFFSET} * n bytes, n >= 1"
        )

    tokens: List[str] = []
    fees: List[int] = []
    dst_token = ""
    offset = 0

    while len(data) - offset >= DATA_SIZE:
        pool = decode_first_pool(data[offset:])
        tokens.append(pool.token_a)
        fees.append(pool.fee)
        dst_token = pool.token_b
        offset += OFFSET

    tokens.append(dst_token)

    logger.debug(f"Decoded path: {len(fees)} hops, {' -> '.join(tokens)} fees={fees}")
    return SwapRoute(tokens=tuple(tokens), fees=tuple(fees))


def path_has_multiple_pools(path: PathLike) -> bool:
    """True если в пути больше одного пула."""
    return len(_to_bytes(path)) >= DATA_SIZE + OFFSET


def skip_token(path: PathLike) -> str:
    """
    Путь без первого токена и fee (следующий хоп для роутера).

    Raises:
        MalformedPathError: в пути только один пул
    """
    data = _to_bytes(path)
    if len(data) < DATA_SIZE + OFFSET:
        raise MalformedPathError("Cannot skip token: path has a single pool")
    return "0x" + data[OFFSET:].hex()
