"""
Tests for uniswap_pm.position: суммы по типу позиции и параметры openPosition.
"""

from unittest.mock import patch

import pytest

from uniswap_pm.contracts.pool import PoolState
from uniswap_pm.exceptions import UnsupportedPositionShapeError
from uniswap_pm.math.position_range import PositionType, get_position_range
from uniswap_pm.position import OpenPositionParams, build_open_position_params, get_position_amounts


RECIPIENT = "0x1234567890123456789012345678901234567890"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"

ETH_AMOUNT = 10 ** 18
TOKEN_AMOUNT = 2000 * 10 ** 6


@pytest.fixture
def usdc_weth_pool(usdc, weth):
    return PoolState(
        address="0x8ad599c3A0ff1De082011EFDDc58f1908eb6e6D8",
        token0=usdc,
        token1=weth,
        fee=3000,
        tick_spacing=60,
        sqrt_price_x96=0,
        tick_current=200001,
        tick=199980,
        zero_for_one=False,
        invert_price=True,
    )


class TestGetPositionAmounts:

    @pytest.mark.parametrize("position_type,zero_for_one,expected", [
        (PositionType.CALL, True, (ETH_AMOUNT, 0)),
        (PositionType.CALL, False, (0, ETH_AMOUNT)),
        (PositionType.PUT, True, (0, TOKEN_AMOUNT)),
        (PositionType.PUT, False, (TOKEN_AMOUNT, 0)),
        (PositionType.PLAIN, True, (ETH_AMOUNT, TOKEN_AMOUNT)),
        (PositionType.PLAIN, False, (TOKEN_AMOUNT, ETH_AMOUNT)),
    ])
    def test_amounts(self, position_type, zero_for_one, expected):
        assert get_position_amounts(position_type, zero_for_one, ETH_AMOUNT, TOKEN_AMOUNT) == expected

    def test_string_type(self):
        assert get_position_amounts("put", False, ETH_AMOUNT, TOKEN_AMOUNT) == (TOKEN_AMOUNT, 0)

    def test_unsupported(self):
        with pytest.raises(UnsupportedPositionShapeError):
            get_position_amounts(5, True, ETH_AMOUNT, TOKEN_AMOUNT)


class TestOpenPositionParams:

    def _params(self, **overrides):
        kwargs = dict(
            position_type=PositionType.PUT,
            token0=USDC.lower(),
            token1=WETH.lower(),
            fee=3000,
            tick_lower=199920,
            tick_upper=202080,
            amount0_in=TOKEN_AMOUNT,
            amount1_in=0,
            amount0_desired=TOKEN_AMOUNT,
            amount1_desired=0,
        )
        kwargs.update(overrides)
        return OpenPositionParams(**kwargs)

    def test_to_tuple_order(self):
        result = self._params().to_tuple(recipient=RECIPIENT, deadline=1_700_000_000)
        assert result == (
            1,
            USDC,
            WETH,
            3000,
            199920,
            202080,
            TOKEN_AMOUNT,
            0,
            TOKEN_AMOUNT,
            0,
            0,
            0,
            1_700_000_000,
            RECIPIENT,
        )

    def test_recipient_from_params(self):
        result = self._params(recipient=RECIPIENT, deadline=123).to_tuple()
        assert result[-1] == RECIPIENT
        assert result[-2] == 123

    def test_recipient_required(self):
        with pytest.raises(ValueError, match="recipient"):
            self._params().to_tuple()

    def test_default_deadline(self):
        with patch("uniswap_pm.position.time.time", return_value=1_000_000):
            result = self._params().to_tuple(recipient=RECIPIENT)
        assert result[-2] == 1_000_000 + 3600


class TestBuildOpenPositionParams:

    def test_from_range(self, usdc_weth_pool):
        pool = usdc_weth_pool
        position_range = get_position_range(
            PositionType.PUT, pool.token0, pool.token1, pool.tick_spacing, pool.tick, pool.invert_price
        )
        amount0, amount1 = get_position_amounts(PositionType.PUT, pool.zero_for_one, ETH_AMOUNT, TOKEN_AMOUNT)

        params = build_open_position_params(
            PositionType.PUT, pool, position_range, amount0, amount1, RECIPIENT, deadline=42
        )

        assert params.position_type is PositionType.PUT
        assert params.token0 == USDC
        assert params.token1 == WETH
        assert params.fee == 3000
        assert (params.tick_lower, params.tick_upper) == (199920, 202080)
        assert (params.amount0_in, params.amount1_in) == (TOKEN_AMOUNT, 0)
        assert (params.amount0_desired, params.amount1_desired) == (TOKEN_AMOUNT, 0)
        assert (params.amount0_min, params.amount1_min) == (0, 0)
        assert params.to_tuple()[-2:] == (42, RECIPIENT)

    def test_string_type_normalized(self, usdc_weth_pool):
        position_range = get_position_range(PositionType.CALL, usdc_weth_pool.token0, usdc_weth_pool.token1, 60, 199980, True)
        params = build_open_position_params("call", usdc_weth_pool, position_range, 0, ETH_AMOUNT, RECIPIENT)
        assert params.position_type is PositionType.CALL
        assert params.to_tuple()[0] == 0
