"""
Tests for liquidity amount calculations.
"""

import pytest
from decimal import Decimal

from iziswap.math.liquidity import (
    LiquidityAmounts,
    calculate_deposit_amounts,
    calculate_liquidity,
    calculate_liquidity_amount_desired,
    get_amount_x,
    get_amount_y,
)
from iziswap.math.price import (
    PriceRoundingType,
    point_delta_rounding_down,
    point_delta_rounding_up,
    price_decimal_to_point,
)


class TestRangeAmounts:
    """Tests for get_amount_x / get_amount_y."""

    def test_single_point_at_zero(self):
        """На точке 0 цена 1: X и Y равны liquidity."""
        assert get_amount_y(1000, 0, 1) == 1000
        assert get_amount_x(1000, 0, 1) == 1000

    def test_empty_range_is_zero(self):
        assert get_amount_y(10**18, 100, 100) == 0
        assert get_amount_x(10**18, 100, 100) == 0
        assert get_amount_y(10**18, 200, 100) == 0

    def test_additive_over_subranges(self):
        liquidity = 10**18
        whole = get_amount_y(liquidity, -400, 400)
        parts = get_amount_y(liquidity, -400, 0) + get_amount_y(liquidity, 0, 400)
        assert abs(whole / parts - 1) < Decimal("1e-20")

        whole = get_amount_x(liquidity, -400, 400)
        parts = get_amount_x(liquidity, -400, 0) + get_amount_x(liquidity, 0, 400)
        assert abs(whole / parts - 1) < Decimal("1e-20")

    def test_linear_in_liquidity(self):
        ratio = get_amount_y(2 * 10**18, 0, 400) / get_amount_y(10**18, 0, 400)
        assert abs(ratio - 2) < Decimal("1e-20")

    def test_higher_points_hold_more_y(self):
        assert get_amount_y(10**18, 1000, 1001) > get_amount_y(10**18, 0, 1)
        assert get_amount_x(10**18, 1000, 1001) < get_amount_x(10**18, 0, 1)


class TestDepositAmounts:
    """Tests for calculate_deposit_amounts."""

    def test_range_above_current_only_x(self):
        amounts = calculate_deposit_amounts(10**18, 1000, 2000, current_point=0)
        assert amounts.amount_y == 0
        assert amounts.amount_x > 0

    def test_range_below_current_only_y(self):
        amounts = calculate_deposit_amounts(10**18, -2000, -1000, current_point=0)
        assert amounts.amount_x == 0
        assert amounts.amount_y > 0

    def test_current_point_is_held_in_y(self):
        """Диапазон [current, current + 1) целиком в Y."""
        amounts = calculate_deposit_amounts(10**18, 500, 501, current_point=500)
        assert amounts.amount_x == 0
        assert amounts.amount_y > 0

    def test_range_contains_current(self):
        amounts = calculate_deposit_amounts(10**18, -1000, 1000, current_point=0)
        assert isinstance(amounts, LiquidityAmounts)
        assert amounts.amount_x > 0
        assert amounts.amount_y > 0
        assert amounts.liquidity == 10**18

    def test_rounds_up(self):
        amounts = calculate_deposit_amounts(1, -1000, 1000, current_point=0)
        assert amounts.amount_x >= get_amount_x(1, 1, 1000)
        assert amounts.amount_y >= get_amount_y(1, -1000, 1)

    def test_invalid_range_raises(self):
        with pytest.raises(ValueError):
            calculate_deposit_amounts(10**18, 100, 0, current_point=0)


class TestCalculateLiquidity:
    """Tests for calculate_liquidity."""

    def test_requires_amount(self):
        with pytest.raises(ValueError):
            calculate_liquidity(-1000, 1000, 0)

    def test_deposit_fits_into_amounts(self):
        amount_x = 5 * 10**18
        amount_y = 3 * 10**18
        liquidity = calculate_liquidity(-1000, 1000, 0, amount_x=amount_x, amount_y=amount_y)
        amounts = calculate_deposit_amounts(liquidity, -1000, 1000, 0)

        assert liquidity > 0
        assert amounts.amount_x <= amount_x + 1
        assert amounts.amount_y <= amount_y + 1

    def test_limiting_token_wins(self):
        only_y = calculate_liquidity(-1000, 1000, 0, amount_y=10**18)
        both = calculate_liquidity(-1000, 1000, 0, amount_x=10**30, amount_y=10**18)
        assert both == only_y

    def test_side_outside_range_ignored(self):
        """Y не участвует в диапазоне выше текущей точки."""
        only_x = calculate_liquidity(1000, 2000, 0, amount_x=10**18)
        with_y = calculate_liquidity(1000, 2000, 0, amount_x=10**18, amount_y=1)
        assert with_y == only_x
        assert calculate_liquidity(1000, 2000, 0, amount_y=10**18) == 0


class TestLiquidityAmountDesired:
    """Tests for calculate_liquidity_amount_desired."""

    def test_example_pair(self, token_a, token_b):
        """
        Пара из примера mint: A (6 decimals) / B (18 decimals), fee 2000,
        цены 0.099870 и 0.29881, 100 A.
        """
        point_delta = 40
        point1 = price_decimal_to_point(token_a, token_b, 0.099870, PriceRoundingType.NEAREST)
        point2 = price_decimal_to_point(token_a, token_b, 0.29881, PriceRoundingType.NEAREST)
        assert isinstance(point1, int) and isinstance(point2, int)
        assert point1 != point2

        left = point_delta_rounding_down(min(point1, point2), point_delta)
        right = point_delta_rounding_up(max(point1, point2), point_delta)
        assert left < right

        current = point_delta_rounding_down((left + right) // 2, point_delta)
        amount_b = calculate_liquidity_amount_desired(
            left, right, current, 100 * 10**6, True, token_a, token_b
        )
        assert isinstance(amount_b, int)
        assert amount_b > 0

    def test_strictly_increasing_when_range_contains_current(self, token_a, token_b):
        previous = 0
        for amount in (10**6, 10**7, 10**8, 10**9):
            paired = calculate_liquidity_amount_desired(
                -1000, 1000, 0, amount, True, token_a, token_b
            )
            assert paired > previous
            previous = paired

    def test_symmetric_direction(self, token_a, token_b):
        """Обратный расчёт даёт исходную сумму с точностью до округления."""
        amount_b = calculate_liquidity_amount_desired(-1000, 1000, 0, 10**18, True, token_a, token_b)
        amount_a = calculate_liquidity_amount_desired(-1000, 1000, 0, amount_b, False, token_a, token_b)
        assert abs(amount_a - 10**18) <= 10**18 // 10**12

    def test_one_sided_range_returns_zero(self, token_a, token_b):
        """
        Диапазон по одну сторону от текущей точки держит один токен:
        парная сумма 0 при любой фиксированной сумме.
        """
        # token_b - tokenX, token_a - tokenY
        below = (-2000, -1000)
        above = (1000, 2000)
        for amount in (10**6, 10**9):
            assert calculate_liquidity_amount_desired(*below, 0, amount, True, token_a, token_b) == 0
            assert calculate_liquidity_amount_desired(*below, 0, amount, False, token_a, token_b) == 0
            assert calculate_liquidity_amount_desired(*above, 0, amount, True, token_a, token_b) == 0
            assert calculate_liquidity_amount_desired(*above, 0, amount, False, token_a, token_b) == 0

    def test_zero_amount(self, token_a, token_b):
        assert calculate_liquidity_amount_desired(-1000, 1000, 0, 0, True, token_a, token_b) == 0

    def test_invalid_inputs_raise(self, token_a, token_b):
        with pytest.raises(ValueError):
            calculate_liquidity_amount_desired(1000, -1000, 0, 10**6, True, token_a, token_b)
        with pytest.raises(ValueError):
            calculate_liquidity_amount_desired(-1000, 1000, 0, -1, True, token_a, token_b)


class TestPoolSqrtPrice:
    """Y на текущей точке по реальной цене пула (sqrt_price_96)."""

    Q96 = 2**96

    def test_deposit_current_point_uses_pool_price(self):
        # Цена пула 4 (sqrtPrice 2) на точке 500: только Y, L * 2
        amounts = calculate_deposit_amounts(10**18, 500, 501, current_point=500, sqrt_price_96=2 * self.Q96)
        assert amounts.amount_x == 0
        assert amounts.amount_y == 2 * 10**18

    def test_grid_price_matches_default(self, token_a, token_b):
        # token_b - tokenX; на точке 0 цена сетки 1
        default = calculate_liquidity_amount_desired(-1000, 1000, 0, 10**18, False, token_a, token_b)
        grid = calculate_liquidity_amount_desired(
            -1000, 1000, 0, 10**18, False, token_a, token_b, sqrt_price_96=self.Q96
        )
        assert abs(grid - default) <= 1

    def test_price_above_grid_needs_more_y(self, token_a, token_b):
        sqrt_price_96 = int(self.Q96 * Decimal("1.00004"))
        default = calculate_liquidity_amount_desired(-1000, 1000, 0, 10**18, False, token_a, token_b)
        real = calculate_liquidity_amount_desired(
            -1000, 1000, 0, 10**18, False, token_a, token_b, sqrt_price_96=sqrt_price_96
        )
        assert real > default

    def test_ignored_outside_range(self):
        below = calculate_deposit_amounts(10**18, -2000, -1000, current_point=0)
        with_price = calculate_deposit_amounts(
            10**18, -2000, -1000, current_point=0, sqrt_price_96=3 * self.Q96
        )
        assert with_price == below

    def test_liquidity_from_y_uses_pool_price(self):
        grid = calculate_liquidity(500, 501, 500, amount_y=10**18)
        real = calculate_liquidity(500, 501, 500, amount_y=10**18, sqrt_price_96=2 * self.Q96)
        assert real == 5 * 10**17
        assert real < grid
