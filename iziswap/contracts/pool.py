"""
iZiSwap Pool reads.

Состояние пула читается на каждый вызов и не кешируется.
"""

import logging
from dataclasses import dataclass

from web3 import Web3
from web3.contract import Contract

from ..utils import rpc_errors
from .abis import POOL_ABI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolState:
    """Снимок state() пула."""
    sqrt_price_96: int
    current_point: int
    observation_current_index: int
    observation_queue_len: int
    observation_next_queue_len: int
    locked: bool
    liquidity: int
    liquidity_x: int


def get_pool_contract(address: str, w3: Web3) -> Contract:
    """Контракт пула по адресу."""
    return w3.eth.contract(
        address=Web3.to_checksum_address(address),
        abi=POOL_ABI
    )


def get_pool_state(pool: Contract) -> PoolState:
    """Текущее состояние пула."""
    with rpc_errors("get pool state"):
        raw = pool.functions.state().call()

    state = PoolState(
        sqrt_price_96=int(raw[0]),
        current_point=int(raw[1]),
        observation_current_index=int(raw[2]),
        observation_queue_len=int(raw[3]),
        observation_next_queue_len=int(raw[4]),
        locked=bool(raw[5]),
        liquidity=int(raw[6]),
        liquidity_x=int(raw[7]),
    )
    logger.debug(f"Pool {pool.address} current_point={state.current_point}")
    return state


def get_point_delta(pool: Contract) -> int:
    """pointDelta пула (шаг валидных точек)."""
    with rpc_errors("get point delta"):
        return int(pool.functions.pointDelta().call())
