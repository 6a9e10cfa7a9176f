"""
Liquidity Provider

Создание позиций через LiquidityManager iZiSwap:
цены -> точки (выравнивание по pointDelta) -> парная сумма -> mint.

Пример использования:
```python
w3 = Web3(Web3.HTTPProvider(chain.rpc_url))
lm = LiquidityManagerContract(w3, "0x93C22Fbeff4448F2fb6e432579b0638838Ff9581")

pool = get_pool_contract(get_pool_address(lm, token_a, token_b, 2000), w3)
params = plan_mint(
    token_a, token_b, 2000,
    current_point=get_pool_state(pool).current_point,
    point_delta=get_point_delta(pool),
    price_low=0.099870, price_high=0.29881,
    amount_a_decimal=100,
)
gas = mint_estimate_gas(lm, account, chain, params, gas_price=5_000_000_000)
```
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple, Union

from eth_account.signers.local import LocalAccount
from web3.contract.contract import ContractFunction

from .config import ChainConfig, DEFAULT_DEADLINE
from .contracts.liquidity_manager import LiquidityManagerContract, MintArgs
from .math.liquidity import calculate_liquidity_amount_desired
from .math.price import (
    PriceRoundingType,
    high_precision,
    point_delta_rounding_down,
    point_delta_rounding_up,
    price_decimal_to_point,
    to_decimal,
)
from .token import Token, decimal_to_amount, is_native_coin, is_token_x
from .utils import TransactionHandle, build_sending_params, estimate_gas, submit

logger = logging.getLogger(__name__)

Account = Union[str, LocalAccount]

# Допуск по умолчанию для минимальных сумм mint (1.5%)
DEFAULT_MINT_SLIPPAGE = Decimal("0.015")


@dataclass(frozen=True)
class MintParams:
    """
    Параметры создания позиции в порядке token_a / token_b.

    Порядок tokenX / tokenY определяется при построении вызова.
    """
    token_a: Token
    token_b: Token
    fee: int
    left_point: int
    right_point: int
    max_amount_a: int
    max_amount_b: int
    min_amount_a: int = 0
    min_amount_b: int = 0
    deadline: int = DEFAULT_DEADLINE
    strict_erc20_token: bool = False


@dataclass
class MintCalling:
    """Построенный вызов mint и параметры транзакции."""
    calling: ContractFunction
    options: Dict[str, Any]


def get_mint_call(
    liquidity_manager: LiquidityManagerContract,
    account: Account,
    chain: ChainConfig,
    params: MintParams,
    gas_price=None,
    gas_limit=None
) -> MintCalling:
    """
    Вызов mint (или multicall [mint, refundETH] если одна из сторон -
    нативная монета).
    """
    if params.left_point > params.right_point:
        raise ValueError("left_point must be <= right_point")
    account = account if isinstance(account, str) else account.address

    if is_token_x(params.token_a, params.token_b):
        token_x, token_y = params.token_a, params.token_b
        max_x, max_y = params.max_amount_a, params.max_amount_b
        min_x, min_y = params.min_amount_a, params.min_amount_b
    else:
        token_x, token_y = params.token_b, params.token_a
        max_x, max_y = params.max_amount_b, params.max_amount_a
        min_x, min_y = params.min_amount_b, params.min_amount_a

    options = {
        "from": account,
        "value": 0,
        "gas": gas_limit,
        "maxFeePerGas": gas_price,
    }
    if is_native_coin(token_x, chain, params.strict_erc20_token):
        options["value"] = int(max_x)
    elif is_native_coin(token_y, chain, params.strict_erc20_token):
        options["value"] = int(max_y)

    mint_calling = liquidity_manager.mint(MintArgs(
        miner=account,
        token_x=token_x.address,
        token_y=token_y.address,
        fee=params.fee,
        left_point=params.left_point,
        right_point=params.right_point,
        x_lim=max_x,
        y_lim=max_y,
        amount_x_min=min_x,
        amount_y_min=min_y,
        deadline=params.deadline,
    ))

    if options["value"]:
        calling = liquidity_manager.multicall([mint_calling, liquidity_manager.refund_eth()])
        return MintCalling(calling=calling, options=options)
    return MintCalling(calling=mint_calling, options=options)


def mint_estimate_gas(
    liquidity_manager: LiquidityManagerContract,
    account: Account,
    chain: ChainConfig,
    params: MintParams,
    gas_price=None
) -> int:
    """Оценка газа для mint."""
    built = get_mint_call(liquidity_manager, account, chain, params, gas_price)
    return estimate_gas(built.calling, build_sending_params(chain, built.options, gas_price))


def mint(
    liquidity_manager: LiquidityManagerContract,
    account: Account,
    chain: ChainConfig,
    params: MintParams,
    gas_price=None,
    gas_limit=None
) -> TransactionHandle:
    """Отправка mint (LocalAccount - локальная подпись, адрес - transact)."""
    built = get_mint_call(liquidity_manager, account, chain, params, gas_price, gas_limit)
    signer = None if isinstance(account, str) else account
    logger.info(
        f"Minting {params.token_a.symbol}/{params.token_b.symbol} fee={params.fee} "
        f"[{params.left_point}, {params.right_point})"
    )
    return submit(
        liquidity_manager.w3,
        built.calling,
        build_sending_params(chain, built.options, gas_price),
        account=signer
    )


def compute_point_range(
    token_a: Token,
    token_b: Token,
    price_low,
    price_high,
    point_delta: int,
    rounding: PriceRoundingType = PriceRoundingType.NEAREST
) -> Tuple[int, int]:
    """
    Диапазон точек для двух цен A в B.

    Цены могут идти в любом порядке (при A = tokenY большая цена даёт
    меньшую точку): левая граница - min точек вниз, правая - max вверх.

    Returns:
        (left_point, right_point), кратные point_delta

    Raises:
        ValueError: обе цены попали в одну точку сетки
    """
    point1 = price_decimal_to_point(token_a, token_b, price_low, rounding)
    point2 = price_decimal_to_point(token_a, token_b, price_high, rounding)

    left_point = point_delta_rounding_down(min(point1, point2), point_delta)
    right_point = point_delta_rounding_up(max(point1, point2), point_delta)
    if left_point >= right_point:
        raise ValueError(
            f"Empty point range [{left_point}, {right_point}) for prices {price_low}, {price_high}"
        )

    logger.debug(f"Price range [{price_low}, {price_high}] -> points [{left_point}, {right_point})")
    return left_point, right_point


def plan_mint(
    token_a: Token,
    token_b: Token,
    fee: int,
    current_point: int,
    point_delta: int,
    price_low,
    price_high,
    amount_a_decimal,
    slippage=DEFAULT_MINT_SLIPPAGE,
    rounding: PriceRoundingType = PriceRoundingType.NEAREST,
    deadline: int = DEFAULT_DEADLINE,
    strict_erc20_token: bool = False,
    sqrt_price_96: Optional[int] = None
) -> MintParams:
    """
    Параметры mint по диапазону цен и сумме token_a.

    Сумма token_b рассчитывается так, чтобы покрыть тот же диапазон
    ликвидности. Минимумы = максимумы * (1 - slippage).
    sqrt_price_96 (из PoolState) уточняет Y на текущей точке.
    """
    slippage = to_decimal(slippage)
    if not 0 <= slippage < 1:
        raise ValueError(f"slippage must be in [0, 1), got {slippage}")

    left_point, right_point = compute_point_range(
        token_a, token_b, price_low, price_high, point_delta, rounding
    )
    max_amount_a = decimal_to_amount(amount_a_decimal, token_a)
    max_amount_b = calculate_liquidity_amount_desired(
        left_point, right_point, current_point, max_amount_a, True, token_a, token_b,
        sqrt_price_96=sqrt_price_96,
    )

    with high_precision():
        keep = 1 - slippage
        min_amount_a = int(max_amount_a * keep)
        min_amount_b = int(max_amount_b * keep)

    return MintParams(
        token_a=token_a,
        token_b=token_b,
        fee=fee,
        left_point=left_point,
        right_point=right_point,
        max_amount_a=max_amount_a,
        max_amount_b=max_amount_b,
        min_amount_a=min_amount_a,
        min_amount_b=min_amount_b,
        deadline=deadline,
        strict_erc20_token=strict_erc20_token,
    )
