"""
Periphery base binding.

Swap и LiquidityManager наследуют в контракте общий Base:
multicall, refundETH, unwrapWETH9.
"""

from typing import List, Sequence

from web3 import Web3
from web3.contract import Contract
from web3.contract.contract import ContractFunction


def encode_call(calling: ContractFunction) -> bytes:
    """Calldata вызова (selector + аргументы) для multicall."""
    return Web3.to_bytes(hexstr=calling._encode_transaction_data())


class PeripheryContract:
    """Базовый класс привязки к периферийному контракту iZiSwap."""

    ABI: List[dict] = []

    def __init__(self, w3: Web3, address: str):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.contract: Contract = w3.eth.contract(
            address=self.address,
            abi=self.ABI
        )

    def refund_eth(self) -> ContractFunction:
        """Вернуть отправителю остаток нативной монеты."""
        return self.contract.functions.refundETH()

    def unwrap_weth9(self, min_amount: int, recipient: str) -> ContractFunction:
        """Развернуть WETH9 контракта и отправить нативную монету recipient."""
        return self.contract.functions.unwrapWETH9(
            int(min_amount),
            Web3.to_checksum_address(recipient)
        )

    def multicall(self, callings: Sequence[ContractFunction]) -> ContractFunction:
        """Объединение нескольких вызовов в одну транзакцию (порядок сохраняется)."""
        return self.contract.functions.multicall([encode_call(c) for c in callings])
