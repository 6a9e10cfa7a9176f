"""
iZiSwap Liquidity Mathematics

Ликвидность в iZiSwap дискретна: каждая точка i диапазона [left, right)
держит либо X, либо Y.

- Y на точке i: L * sqrt(1.0001^i)
- X на точке i: L / sqrt(1.0001^i)

Суммы по диапазону (геометрические ряды):
- amountY[left, right) = L * (sqrtP(right) - sqrtP(left)) / (sqrt(1.0001) - 1)
- amountX[left, right) = L * (sqrt(1.0001)^(right-left) - 1) / (sqrtP(right) - sqrtP(right-1))

При депозите LiquidityManager кладёт текущую точку в Y:
- X часть: [max(left, current + 1), right)
- Y часть: [left, min(right, current + 1))

Контракт считает Y текущей точки по реальной цене пула (sqrtPrice_96),
а не по сетке; её можно передать через sqrt_price_96.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING
from typing import Optional

from ..token import Token, is_token_x
from .price import POINT_BASE, high_precision, to_decimal

Q96 = Decimal(2 ** 96)


@dataclass
class LiquidityAmounts:
    """Количества токенов для депозита ликвидности."""
    amount_x: int  # В минимальных единицах
    amount_y: int
    liquidity: int


def _sqrt_price(point: int) -> Decimal:
    return (POINT_BASE ** point).sqrt()


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def get_amount_y(liquidity, left_point: int, right_point: int) -> Decimal:
    """
    Количество tokenY для liquidity на [left_point, right_point).

    Без округления; пустой диапазон даёт 0.
    """
    if right_point <= left_point:
        return Decimal(0)
    liquidity = to_decimal(liquidity)
    with high_precision():
        sqrt_rate = POINT_BASE.sqrt()
        return liquidity * (_sqrt_price(right_point) - _sqrt_price(left_point)) / (sqrt_rate - 1)


def get_amount_x(liquidity, left_point: int, right_point: int) -> Decimal:
    """
    Количество tokenX для liquidity на [left_point, right_point).

    Без округления; пустой диапазон даёт 0.
    """
    if right_point <= left_point:
        return Decimal(0)
    liquidity = to_decimal(liquidity)
    with high_precision():
        sqrt_rate = POINT_BASE.sqrt()
        sqrt_price_r = _sqrt_price(right_point)
        numerator = sqrt_rate ** (right_point - left_point) - 1
        denominator = sqrt_price_r - sqrt_price_r / sqrt_rate
        return liquidity * numerator / denominator


def _deposit_ranges(left_point: int, right_point: int, current_point: int):
    """((x_left, x_right), (y_left, y_right)) для депозита."""
    x_range = (max(left_point, current_point + 1), right_point)
    y_range = (left_point, min(right_point, current_point + 1))
    return x_range, y_range


def _unit_y(
    left_point: int,
    right_point: int,
    current_point: int,
    sqrt_price_96: Optional[int] = None
) -> Decimal:
    """tokenY на единицу liquidity для Y части депозита."""
    y_left, y_right = _deposit_ranges(left_point, right_point, current_point)[1]
    if sqrt_price_96 is None or not left_point <= current_point < right_point:
        return get_amount_y(1, y_left, y_right)
    # Текущая точка по цене пула
    with high_precision():
        return get_amount_y(1, y_left, current_point) + Decimal(int(sqrt_price_96)) / Q96


def calculate_deposit_amounts(
    liquidity: int,
    left_point: int,
    right_point: int,
    current_point: int,
    sqrt_price_96: Optional[int] = None
) -> LiquidityAmounts:
    """
    Расчёт X и Y для депозита liquidity на [left_point, right_point).

    Три случая:
    1. right <= current: диапазон ниже текущей точки, только Y
    2. left > current: диапазон выше текущей точки, только X
    3. иначе: оба токена, текущая точка в Y

    Округление вверх, как в контракте при депозите.
    """
    if left_point > right_point:
        raise ValueError("left_point must be <= right_point")

    x_left, x_right = _deposit_ranges(left_point, right_point, current_point)[0]
    with high_precision():
        unit_y = _unit_y(left_point, right_point, current_point, sqrt_price_96)
        amount_x = _ceil(get_amount_x(liquidity, x_left, x_right))
        amount_y = _ceil(to_decimal(liquidity) * unit_y)

    return LiquidityAmounts(amount_x=amount_x, amount_y=amount_y, liquidity=int(liquidity))


def calculate_liquidity(
    left_point: int,
    right_point: int,
    current_point: int,
    amount_x: Optional[int] = None,
    amount_y: Optional[int] = None,
    sqrt_price_96: Optional[int] = None
) -> int:
    """
    Максимальная liquidity, которую покрывают заданные суммы.

    Если заданы обе суммы - берётся минимум (лимитирующий токен).
    Сторона с пустым поддиапазоном не ограничивает liquidity.
    """
    if amount_x is None and amount_y is None:
        raise ValueError("Either amount_x or amount_y must be provided")
    if left_point > right_point:
        raise ValueError("left_point must be <= right_point")

    x_left, x_right = _deposit_ranges(left_point, right_point, current_point)[0]
    candidates = []
    with high_precision():
        if amount_x is not None:
            unit_x = get_amount_x(1, x_left, x_right)
            if unit_x > 0:
                candidates.append(to_decimal(amount_x) / unit_x)
        if amount_y is not None:
            unit_y = _unit_y(left_point, right_point, current_point, sqrt_price_96)
            if unit_y > 0:
                candidates.append(to_decimal(amount_y) / unit_y)

    if not candidates:
        return 0
    return int(min(candidates))


def calculate_liquidity_amount_desired(
    left_point: int,
    right_point: int,
    current_point: int,
    amount,
    amount_is_token_a: bool,
    token_a: Token,
    token_b: Token,
    sqrt_price_96: Optional[int] = None
) -> int:
    """
    Парная сумма для депозита ликвидности.

    По сумме одного токена вычисляет, сколько нужно второго, чтобы
    покрыть диапазон [left_point, right_point) при текущей точке пула.

    Args:
        left_point, right_point: Диапазон (кратный pointDelta)
        current_point: Текущая точка пула
        amount: Сумма фиксированного токена в минимальных единицах
        amount_is_token_a: True если amount задан в token_a
        token_a, token_b: Пара токенов
        sqrt_price_96: Реальная цена пула (PoolState.sqrt_price_96) для
            текущей точки; без неё берётся цена точки сетки

    Returns:
        Сумма второго токена в минимальных единицах (округление вверх).
        0 если фиксированный токен не участвует в диапазоне.

    Example:
        max_b = calculate_liquidity_amount_desired(
            left, right, state.current_point, 100 * 10**6, True, usdc, weth,
            sqrt_price_96=state.sqrt_price_96,
        )
    """
    if left_point > right_point:
        raise ValueError("left_point must be <= right_point")
    amount = to_decimal(amount)
    if amount < 0:
        raise ValueError("Amount must be non-negative")

    amount_is_x = amount_is_token_a if is_token_x(token_a, token_b) else not amount_is_token_a
    x_left, x_right = _deposit_ranges(left_point, right_point, current_point)[0]

    with high_precision():
        unit_x = get_amount_x(1, x_left, x_right)
        unit_y = _unit_y(left_point, right_point, current_point, sqrt_price_96)

        if amount_is_x:
            if unit_x == 0:
                return 0
            liquidity = amount / unit_x
            paired = liquidity * unit_y
        else:
            if unit_y == 0:
                return 0
            liquidity = amount / unit_y
            paired = liquidity * unit_x

        return _ceil(paired)
