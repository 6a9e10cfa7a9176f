from .price import (
    PriceRoundingType,
    price_decimal_to_point,
    price_undecimal_to_point,
    point_to_price_decimal,
    point_delta_rounding_down,
    point_delta_rounding_up,
    MIN_POINT,
    MAX_POINT,
)
from .liquidity import (
    calculate_liquidity_amount_desired,
    calculate_deposit_amounts,
    calculate_liquidity,
    LiquidityAmounts,
)
