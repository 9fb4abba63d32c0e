from .ticks import (
    encode_sqrt_ratio_x96,
    format_sqrt_ratio_x96,
    get_sqrt_ratio_at_tick,
    human_price_from_tick,
    tick_from_human_price,
    mul_div,
    nearest_usable_tick,
    get_min_tick,
    get_max_tick,
    get_tick_spacing,
    TickPrice,
)
from .position_range import (
    get_position_range,
    get_position_prices,
    print_position_range,
    PositionRange,
    PositionType,
)
