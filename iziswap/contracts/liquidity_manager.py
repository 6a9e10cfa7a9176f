"""
iZiSwap LiquidityManager Integration

Работа с LiquidityManager: создание позиций (mint) и поиск адреса пула.
"""

import logging
from dataclasses import dataclass

from web3 import Web3
from web3.contract.contract import ContractFunction

from ..token import Token, sort_tokens
from ..utils import rpc_errors
from .abis import LIQUIDITY_MANAGER_ABI
from .base import PeripheryContract

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MintArgs:
    """Параметры mint в порядке tokenX / tokenY."""
    miner: str
    token_x: str
    token_y: str
    fee: int
    left_point: int
    right_point: int
    x_lim: int
    y_lim: int
    amount_x_min: int
    amount_y_min: int
    deadline: int

    def to_tuple(self) -> tuple:
        """Конвертация в tuple для контракта."""
        return (
            Web3.to_checksum_address(self.miner),
            Web3.to_checksum_address(self.token_x),
            Web3.to_checksum_address(self.token_y),
            int(self.fee),
            int(self.left_point),
            int(self.right_point),
            int(self.x_lim),
            int(self.y_lim),
            int(self.amount_x_min),
            int(self.amount_y_min),
            int(self.deadline)
        )


class LiquidityManagerContract(PeripheryContract):
    """Привязка к контракту LiquidityManager iZiSwap."""

    ABI = LIQUIDITY_MANAGER_ABI

    def mint(self, args: MintArgs) -> ContractFunction:
        return self.contract.functions.mint(args.to_tuple())

    def pool(self, token_x: str, token_y: str, fee: int) -> ContractFunction:
        return self.contract.functions.pool(
            Web3.to_checksum_address(token_x),
            Web3.to_checksum_address(token_y),
            int(fee)
        )


def get_pool_address(
    liquidity_manager: LiquidityManagerContract,
    token_a: Token,
    token_b: Token,
    fee: int
) -> str:
    """
    Адрес пула для пары и fee tier.

    Токены упорядочиваются в (tokenX, tokenY) перед запросом.
    """
    token_x, token_y = sort_tokens(token_a, token_b)
    with rpc_errors("get pool address"):
        address = liquidity_manager.pool(token_x.address, token_y.address, fee).call()
    logger.debug(f"Pool {token_x.symbol}/{token_y.symbol} fee={fee}: {address}")
    return Web3.to_checksum_address(address)
