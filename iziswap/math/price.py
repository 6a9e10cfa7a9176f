"""
iZiSwap Point Mathematics

Основные формулы:
- price(point) = 1.0001^point  (цена tokenY за tokenX в минимальных единицах)
- sqrt_price(point) = 1.0001^(point / 2)

tokenX - токен с меньшим адресом, tokenY - с большим.
Валидные точки пула кратны pointDelta.

Все вычисления в Decimal с локальным контекстом (60 знаков), float
используется только на входе.
"""

import math
from contextlib import contextmanager
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_UP,
    localcontext,
)
from enum import Enum

from ..errors import PrecisionLoss
from ..token import Token, is_token_x

# Константы
MIN_POINT = -800000
MAX_POINT = 800000
POINT_BASE = Decimal("1.0001")

_CONTEXT = Context(prec=60, traps=[Overflow, InvalidOperation, DivisionByZero])


class PriceRoundingType(Enum):
    """Направление округления при переводе цены в точку."""
    NEAREST = "nearest"
    DOWN = "down"
    UP = "up"


@contextmanager
def high_precision():
    """
    Локальный Decimal контекст для pool math.

    Переполнение или невалидная операция превращаются в PrecisionLoss
    вместо тихого усечения.
    """
    try:
        with localcontext(_CONTEXT):
            yield
    except (Overflow, InvalidOperation, DivisionByZero) as e:
        raise PrecisionLoss(f"Decimal arithmetic lost precision: {e!r}") from e


def to_decimal(value) -> Decimal:
    """Конвертация int/float/str/Decimal в конечный Decimal."""
    if isinstance(value, float) and not math.isfinite(value):
        raise PrecisionLoss(f"Value is not finite: {value}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise PrecisionLoss(f"Value is not finite: {value}")
    return result


def _check_point(point: int) -> int:
    if point < MIN_POINT or point > MAX_POINT:
        raise ValueError(f"Point {point} is out of range [{MIN_POINT}, {MAX_POINT}]")
    return point


def price_undecimal_to_point(price_undecimal, rounding: PriceRoundingType = PriceRoundingType.NEAREST) -> int:
    """
    Конвертация цены пула (Y за X, минимальные единицы) в точку.

    point = log(price) / log(1.0001)

    Args:
        price_undecimal: Цена tokenY/tokenX без учёта decimals
        rounding: NEAREST - ближайшая точка (в лог-шкале),
                  DOWN - наибольшая точка с price(point) <= price,
                  UP - наименьшая точка с price(point) >= price

    Returns:
        Point (целое число)
    """
    price = to_decimal(price_undecimal)
    if price <= 0:
        raise ValueError("Price must be positive")

    with high_precision():
        exact = price.ln() / POINT_BASE.ln()

        if rounding is PriceRoundingType.NEAREST:
            point = int(exact.to_integral_value(rounding=ROUND_HALF_UP))

        elif rounding is PriceRoundingType.DOWN:
            point = int(exact.to_integral_value(rounding=ROUND_FLOOR))
            # Логарифм посчитан с конечной точностью: поправляем по точной степени
            if POINT_BASE ** (point + 1) <= price:
                point += 1
            elif POINT_BASE ** point > price:
                point -= 1

        elif rounding is PriceRoundingType.UP:
            point = int(exact.to_integral_value(rounding=ROUND_CEILING))
            if POINT_BASE ** (point - 1) >= price:
                point -= 1
            elif POINT_BASE ** point < price:
                point += 1

        else:
            raise ValueError(f"Unknown rounding type: {rounding}")

    return _check_point(point)


def point_to_price_undecimal(point: int) -> Decimal:
    """Цена пула (Y за X, минимальные единицы) для точки."""
    with high_precision():
        return POINT_BASE ** point


def point_to_price_undecimal_sqrt(point: int) -> Decimal:
    """sqrt(1.0001^point)."""
    with high_precision():
        return (POINT_BASE ** point).sqrt()


def price_decimal_to_price_undecimal(token_a: Token, token_b: Token, price_decimal_a_by_b) -> Decimal:
    """
    Цена A в B (человеческая) -> цена в минимальных единицах.

    price_undecimal * amountA_raw = amountB_raw
    => price_undecimal = price_decimal * 10^decimalsB / 10^decimalsA
    """
    price = to_decimal(price_decimal_a_by_b)
    with high_precision():
        return price * Decimal(10) ** token_b.decimals / Decimal(10) ** token_a.decimals


def price_undecimal_to_price_decimal(token_a: Token, token_b: Token, price_undecimal_a_by_b) -> Decimal:
    """Обратное к price_decimal_to_price_undecimal."""
    price = to_decimal(price_undecimal_a_by_b)
    with high_precision():
        return price * Decimal(10) ** token_a.decimals / Decimal(10) ** token_b.decimals


def price_decimal_to_point(
    token_a: Token,
    token_b: Token,
    price_decimal_a_by_b,
    rounding: PriceRoundingType = PriceRoundingType.NEAREST
) -> int:
    """
    Конвертация человеческой цены в точку пула.

    Args:
        token_a: Токен, цена которого задана
        token_b: Токен, в котором выражена цена
        price_decimal_a_by_b: Сколько B стоит 1 A (с учётом decimals)
        rounding: Округление точки (в ориентации пула X/Y)

    Returns:
        Point

    Example:
        # USDC (6 decimals) / WETH (18 decimals), 1 USDC = 0.0005 WETH
        point = price_decimal_to_point(usdc, weth, 0.0005, PriceRoundingType.NEAREST)
    """
    price = to_decimal(price_decimal_a_by_b)
    if price <= 0:
        raise ValueError("Price must be positive")

    if is_token_x(token_a, token_b):
        price_undecimal = price_decimal_to_price_undecimal(token_a, token_b, price)
    else:
        with high_precision():
            price_b_by_a = Decimal(1) / price
        price_undecimal = price_decimal_to_price_undecimal(token_b, token_a, price_b_by_a)

    return price_undecimal_to_point(price_undecimal, rounding)


def point_to_price_decimal(token_a: Token, token_b: Token, point: int) -> Decimal:
    """
    Человеческая цена A в B для точки пула.

    Обратное к price_decimal_to_point (с точностью до шага сетки).
    """
    a_is_x = is_token_x(token_a, token_b)
    token_x, token_y = (token_a, token_b) if a_is_x else (token_b, token_a)

    with high_precision():
        price_y_by_x = POINT_BASE ** point * Decimal(10) ** (token_x.decimals - token_y.decimals)
        if a_is_x:
            return price_y_by_x
        return Decimal(1) / price_y_by_x


def point_delta_rounding_down(point: int, point_delta: int) -> int:
    """
    Выравнивание точки вниз (к -inf) к кратному point_delta.

    Floor division корректна и для отрицательных точек.
    """
    if point_delta <= 0:
        raise ValueError(f"point_delta must be positive, got {point_delta}")
    return (point // point_delta) * point_delta


def point_delta_rounding_up(point: int, point_delta: int) -> int:
    """Выравнивание точки вверх (к +inf) к кратному point_delta."""
    if point_delta <= 0:
        raise ValueError(f"point_delta must be positive, got {point_delta}")
    return -((-point) // point_delta) * point_delta
