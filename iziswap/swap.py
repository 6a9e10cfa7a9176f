"""
Swap Module

Построение вызовов свапа через роутер iZiSwap для четырёх сценариев:
- один пул, точный вход (swapX2Y / swapY2X)
- один пул, точный выход (swapX2YDesireY / swapY2XDesireX)
- цепочка пулов, точный вход (swapAmount)
- цепочка пулов, точный выход (swapDesire)

Нативная монета сети:
- на входе: сумма уходит как value транзакции, затем refundETH
- на выходе: получатель в свапе - нулевой адрес (средства остаются в
  контракте), затем unwrapWETH9 на аккаунт

Если вызов один, он возвращается напрямую, иначе - multicall
(порядок: swap, refund, unwrap). Построение не делает сетевых запросов.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from eth_account.signers.local import LocalAccount
from web3.contract.contract import ContractFunction

from .config import (
    ChainConfig,
    DEFAULT_BOUNDARY_PT_X2Y,
    DEFAULT_BOUNDARY_PT_Y2X,
    DEFAULT_DEADLINE,
    ZERO_ADDRESS,
)
from .contracts.swap import SwapAmountArgs, SwapContract, SwapDesireArgs, SwapSingleArgs
from .errors import InvalidPath
from .path import encode_path, encode_path_reverse
from .token import Token, is_native_coin, is_token_x
from .utils import TransactionHandle, build_sending_params, estimate_gas, submit

logger = logging.getLogger(__name__)

Account = Union[str, LocalAccount]


# ============================================================
# PARAMETERS
# ============================================================

@dataclass(frozen=True)
class SwapSingleWithExactInputParams:
    """
    Свап в одном пуле с точной суммой на входе.

    deadline: по умолчанию DEFAULT_DEADLINE (без ограничения)
    boundary_pt: None - крайняя точка в направлении свапа
    strict_erc20_token: True отключает авто-wrap/unwrap нативной монеты
    """
    input_token: Token
    output_token: Token
    fee: int
    input_amount: int
    min_output_amount: int
    deadline: int = DEFAULT_DEADLINE
    boundary_pt: Optional[int] = None
    strict_erc20_token: bool = False


@dataclass(frozen=True)
class SwapSingleWithExactOutputParams:
    """Свап в одном пуле с точной суммой на выходе."""
    input_token: Token
    output_token: Token
    fee: int
    output_amount: int
    max_input_amount: int
    deadline: int = DEFAULT_DEADLINE
    boundary_pt: Optional[int] = None
    strict_erc20_token: bool = False


@dataclass(frozen=True)
class SwapChainWithExactInputParams:
    """
    Свап через цепочку пулов с точной суммой на входе.

    token_chain: [вход, ..., выход], fee_chain: fee каждого hop
    """
    token_chain: Sequence[Token]
    fee_chain: Sequence[int]
    input_amount: int
    min_output_amount: int
    deadline: int = DEFAULT_DEADLINE
    strict_erc20_token: bool = False


@dataclass(frozen=True)
class SwapChainWithExactOutputParams:
    """Свап через цепочку пулов с точной суммой на выходе."""
    token_chain: Sequence[Token]
    fee_chain: Sequence[int]
    output_amount: int
    max_input_amount: int
    deadline: int = DEFAULT_DEADLINE
    strict_erc20_token: bool = False


SwapParams = Union[
    SwapSingleWithExactInputParams,
    SwapSingleWithExactOutputParams,
    SwapChainWithExactInputParams,
    SwapChainWithExactOutputParams,
]


@dataclass
class SwapCalling:
    """Построенный вызов и параметры транзакции."""
    calling: ContractFunction
    options: Dict[str, Any]


# ============================================================
# CALL BUILDERS
# ============================================================

def _account_address(account: Account) -> str:
    return account if isinstance(account, str) else account.address


def _base_options(account: str, gas_price, gas_limit) -> Dict[str, Any]:
    return {
        "from": account,
        "value": 0,
        "gas": gas_limit,
        "maxFeePerGas": gas_price,
    }


def _default_boundary_pt(is_x2y: bool) -> int:
    return DEFAULT_BOUNDARY_PT_X2Y if is_x2y else DEFAULT_BOUNDARY_PT_Y2X


def _check_single_pool(input_token: Token, output_token: Token) -> None:
    if input_token.sort_key == output_token.sort_key:
        raise InvalidPath(f"Input and output token are the same: {input_token.address}")


def _finish(
    swap_contract: SwapContract,
    account: str,
    swap_calling: ContractFunction,
    options: Dict[str, Any],
    input_is_chain_coin: bool,
    output_is_chain_coin: bool
) -> SwapCalling:
    callings: List[ContractFunction] = [swap_calling]
    if input_is_chain_coin:
        callings.append(swap_contract.refund_eth())
    if output_is_chain_coin:
        callings.append(swap_contract.unwrap_weth9(0, account))

    if len(callings) == 1:
        return SwapCalling(calling=callings[0], options=options)

    logger.debug(f"Swap multicall of {len(callings)} calls, value={options['value']}")
    return SwapCalling(calling=swap_contract.multicall(callings), options=options)


def get_swap_single_with_exact_input_call(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapSingleWithExactInputParams,
    gas_price=None,
    gas_limit=None
) -> SwapCalling:
    """
    Вызов свапа в одном пуле с точным входом.

    X2Y если адрес входного токена меньше адреса выходного.
    minAcquired = min_output_amount, maxPayed не используется (0).
    """
    _check_single_pool(params.input_token, params.output_token)
    account = _account_address(account)

    is_x2y = is_token_x(params.input_token, params.output_token)
    deadline = params.deadline
    boundary_pt = params.boundary_pt if params.boundary_pt is not None else _default_boundary_pt(is_x2y)
    options = _base_options(account, gas_price, gas_limit)

    input_is_chain_coin = is_native_coin(params.input_token, chain, params.strict_erc20_token)
    output_is_chain_coin = is_native_coin(params.output_token, chain, params.strict_erc20_token)
    if input_is_chain_coin:
        options["value"] = int(params.input_amount)
    recipient = ZERO_ADDRESS if output_is_chain_coin else account

    if is_x2y:
        token_x, token_y = params.input_token, params.output_token
    else:
        token_x, token_y = params.output_token, params.input_token

    args = SwapSingleArgs(
        token_x=token_x.address,
        token_y=token_y.address,
        fee=params.fee,
        boundary_pt=boundary_pt,
        recipient=recipient,
        amount=params.input_amount,
        max_payed=0,
        min_acquired=params.min_output_amount,
        deadline=deadline,
    )
    swap_calling = swap_contract.swap_x2y(args) if is_x2y else swap_contract.swap_y2x(args)

    return _finish(swap_contract, account, swap_calling, options, input_is_chain_coin, output_is_chain_coin)


def get_swap_single_with_exact_output_call(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapSingleWithExactOutputParams,
    gas_price=None,
    gas_limit=None
) -> SwapCalling:
    """
    Вызов свапа в одном пуле с точным выходом.

    amount = minAcquired = output_amount, maxPayed = max_input_amount.
    """
    _check_single_pool(params.input_token, params.output_token)
    account = _account_address(account)

    is_x2y = is_token_x(params.input_token, params.output_token)
    deadline = params.deadline
    boundary_pt = params.boundary_pt if params.boundary_pt is not None else _default_boundary_pt(is_x2y)
    options = _base_options(account, gas_price, gas_limit)

    input_is_chain_coin = is_native_coin(params.input_token, chain, params.strict_erc20_token)
    output_is_chain_coin = is_native_coin(params.output_token, chain, params.strict_erc20_token)
    if input_is_chain_coin:
        options["value"] = int(params.max_input_amount)
    recipient = ZERO_ADDRESS if output_is_chain_coin else account

    if is_x2y:
        token_x, token_y = params.input_token, params.output_token
    else:
        token_x, token_y = params.output_token, params.input_token

    args = SwapSingleArgs(
        token_x=token_x.address,
        token_y=token_y.address,
        fee=params.fee,
        boundary_pt=boundary_pt,
        recipient=recipient,
        amount=params.output_amount,
        max_payed=params.max_input_amount,
        min_acquired=params.output_amount,
        deadline=deadline,
    )
    if is_x2y:
        swap_calling = swap_contract.swap_x2y_desire_y(args)
    else:
        swap_calling = swap_contract.swap_y2x_desire_x(args)

    return _finish(swap_contract, account, swap_calling, options, input_is_chain_coin, output_is_chain_coin)


def get_swap_chain_with_exact_input_call(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapChainWithExactInputParams,
    gas_price=None,
    gas_limit=None
) -> SwapCalling:
    """Вызов swapAmount по цепочке пулов (путь от входа к выходу)."""
    path = encode_path(params.token_chain, params.fee_chain)
    account = _account_address(account)

    input_token = params.token_chain[0]
    output_token = params.token_chain[-1]
    options = _base_options(account, gas_price, gas_limit)

    input_is_chain_coin = is_native_coin(input_token, chain, params.strict_erc20_token)
    output_is_chain_coin = is_native_coin(output_token, chain, params.strict_erc20_token)
    if input_is_chain_coin:
        options["value"] = int(params.input_amount)
    recipient = ZERO_ADDRESS if output_is_chain_coin else account

    swap_calling = swap_contract.swap_amount(SwapAmountArgs(
        path=path,
        recipient=recipient,
        amount=params.input_amount,
        min_acquired=params.min_output_amount,
        deadline=params.deadline,
    ))

    return _finish(swap_contract, account, swap_calling, options, input_is_chain_coin, output_is_chain_coin)


def get_swap_chain_with_exact_output_call(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapChainWithExactOutputParams,
    gas_price=None,
    gas_limit=None
) -> SwapCalling:
    """Вызов swapDesire по цепочке пулов (путь от выхода ко входу)."""
    path = encode_path_reverse(params.token_chain, params.fee_chain)
    account = _account_address(account)

    input_token = params.token_chain[0]
    output_token = params.token_chain[-1]
    options = _base_options(account, gas_price, gas_limit)

    input_is_chain_coin = is_native_coin(input_token, chain, params.strict_erc20_token)
    output_is_chain_coin = is_native_coin(output_token, chain, params.strict_erc20_token)
    if input_is_chain_coin:
        options["value"] = int(params.max_input_amount)
    recipient = ZERO_ADDRESS if output_is_chain_coin else account

    swap_calling = swap_contract.swap_desire(SwapDesireArgs(
        path=path,
        recipient=recipient,
        desire=params.output_amount,
        max_payed=params.max_input_amount,
        deadline=params.deadline,
    ))

    return _finish(swap_contract, account, swap_calling, options, input_is_chain_coin, output_is_chain_coin)


_CALL_BUILDERS: Dict[type, Callable[..., SwapCalling]] = {
    SwapSingleWithExactInputParams: get_swap_single_with_exact_input_call,
    SwapSingleWithExactOutputParams: get_swap_single_with_exact_output_call,
    SwapChainWithExactInputParams: get_swap_chain_with_exact_input_call,
    SwapChainWithExactOutputParams: get_swap_chain_with_exact_output_call,
}


def get_swap_call(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapParams,
    gas_price=None,
    gas_limit=None
) -> SwapCalling:
    """Построение вызова по типу параметров свапа."""
    builder = _CALL_BUILDERS.get(type(params))
    if builder is None:
        raise TypeError(f"Unsupported swap params: {type(params).__name__}")
    return builder(swap_contract, account, chain, params, gas_price, gas_limit)


# ============================================================
# ESTIMATE / SEND
# ============================================================

def swap_estimate_gas(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapParams,
    gas_price=None
) -> int:
    """Оценка газа для любого сценария свапа."""
    built = get_swap_call(swap_contract, account, chain, params, gas_price)
    return estimate_gas(built.calling, build_sending_params(chain, built.options, gas_price))


def swap(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapParams,
    gas_price=None,
    gas_limit=None
) -> TransactionHandle:
    """
    Отправка свапа.

    account: адрес (transact через ноду) или LocalAccount (локальная подпись)
    """
    built = get_swap_call(swap_contract, account, chain, params, gas_price, gas_limit)
    signer = None if isinstance(account, str) else account
    logger.info(f"Sending {type(params).__name__} on {chain.name}")
    return submit(
        swap_contract.w3,
        built.calling,
        build_sending_params(chain, built.options, gas_price),
        account=signer
    )


def swap_single_with_exact_input_estimate_gas(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapSingleWithExactInputParams,
    gas_price=None
) -> int:
    return swap_estimate_gas(swap_contract, account, chain, params, gas_price)


def swap_single_with_exact_input(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapSingleWithExactInputParams,
    gas_price=None,
    gas_limit=None
) -> TransactionHandle:
    return swap(swap_contract, account, chain, params, gas_price, gas_limit)


def swap_single_with_exact_output_estimate_gas(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapSingleWithExactOutputParams,
    gas_price=None
) -> int:
    return swap_estimate_gas(swap_contract, account, chain, params, gas_price)


def swap_single_with_exact_output(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapSingleWithExactOutputParams,
    gas_price=None,
    gas_limit=None
) -> TransactionHandle:
    return swap(swap_contract, account, chain, params, gas_price, gas_limit)


def swap_chain_with_exact_input_estimate_gas(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapChainWithExactInputParams,
    gas_price=None
) -> int:
    return swap_estimate_gas(swap_contract, account, chain, params, gas_price)


def swap_chain_with_exact_input(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapChainWithExactInputParams,
    gas_price=None,
    gas_limit=None
) -> TransactionHandle:
    return swap(swap_contract, account, chain, params, gas_price, gas_limit)


def swap_chain_with_exact_output_estimate_gas(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapChainWithExactOutputParams,
    gas_price=None
) -> int:
    return swap_estimate_gas(swap_contract, account, chain, params, gas_price)


def swap_chain_with_exact_output(
    swap_contract: SwapContract,
    account: Account,
    chain: ChainConfig,
    params: SwapChainWithExactOutputParams,
    gas_price=None,
    gas_limit=None
) -> TransactionHandle:
    return swap(swap_contract, account, chain, params, gas_price, gas_limit)
