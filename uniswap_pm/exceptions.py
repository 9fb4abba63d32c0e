"""
Ошибки математики позиций и кодека путей.

Все ошибки детерминированы входными данными и не подлежат повтору.
"""


class PositionMathError(ValueError):
    """Базовая ошибка расчётов."""
    pass


class InvalidPriceError(PositionMathError):
    """Цена <= 0 (нельзя извлечь sqrt)."""
    def __init__(self, price):
        self.price = price
        super().__init__(f"Price must be positive, got {price}")


class TickOutOfRangeError(PositionMathError):
    """Тик вне [MIN_TICK, MAX_TICK]."""
    def __init__(self, tick, min_tick: int, max_tick: int):
        self.tick = tick
        self.min_tick = min_tick
        self.max_tick = max_tick
        super().__init__(f"Tick {tick} out of range [{min_tick}, {max_tick}]")


class UnsupportedPositionShapeError(PositionMathError):
    """Неизвестный тип позиции."""
    def __init__(self, position_type):
        self.position_type = position_type
        super().__init__(f"Unsupported position type: {position_type!r}")


class InvalidPathLengthError(PositionMathError):
    """Количество токенов и fee не согласовано (нужно len(tokens) - 1 == len(fees))."""
    def __init__(self, n_tokens: int, n_fees: int):
        self.n_tokens = n_tokens
        self.n_fees = n_fees
        super().__init__(f"Invalid path length: {n_tokens} tokens, {n_fees} fees")


class MalformedPathError(PositionMathError):
    """Байтовый путь не выровнен по хопам или слишком короткий."""
    pass


class InvalidAddressError(PositionMathError):
    """Адрес не является 20-байтным hex."""
    def __init__(self, address):
        self.address = address
        super().__init__(f"Invalid address: {address!r}")


class InvalidFeeError(PositionMathError):
    """Fee не помещается в uint24."""
    def __init__(self, fee):
        self.fee = fee
        super().__init__(f"Invalid fee: {fee!r} (must fit uint24)")
