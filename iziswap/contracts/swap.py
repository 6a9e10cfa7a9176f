"""
iZiSwap Swap router binding.
"""

from dataclasses import dataclass

from web3 import Web3
from web3.contract.contract import ContractFunction

from .abis import SWAP_ABI
from .base import PeripheryContract


@dataclass(frozen=True)
class SwapSingleArgs:
    """Параметры swapX2Y / swapY2X / swapX2YDesireY / swapY2XDesireX."""
    token_x: str
    token_y: str
    fee: int
    boundary_pt: int
    recipient: str
    amount: int
    max_payed: int
    min_acquired: int
    deadline: int

    def to_tuple(self) -> tuple:
        """Конвертация в tuple для контракта."""
        return (
            Web3.to_checksum_address(self.token_x),
            Web3.to_checksum_address(self.token_y),
            int(self.fee),
            int(self.boundary_pt),
            Web3.to_checksum_address(self.recipient),
            int(self.amount),
            int(self.max_payed),
            int(self.min_acquired),
            int(self.deadline)
        )


@dataclass(frozen=True)
class SwapAmountArgs:
    """Параметры swapAmount (multi-hop, точный вход)."""
    path: str
    recipient: str
    amount: int
    min_acquired: int
    deadline: int

    def to_tuple(self) -> tuple:
        return (
            Web3.to_bytes(hexstr=self.path),
            Web3.to_checksum_address(self.recipient),
            int(self.amount),
            int(self.min_acquired),
            int(self.deadline)
        )


@dataclass(frozen=True)
class SwapDesireArgs:
    """Параметры swapDesire (multi-hop, точный выход, путь от выхода ко входу)."""
    path: str
    recipient: str
    desire: int
    max_payed: int
    deadline: int

    def to_tuple(self) -> tuple:
        return (
            Web3.to_bytes(hexstr=self.path),
            Web3.to_checksum_address(self.recipient),
            int(self.desire),
            int(self.max_payed),
            int(self.deadline)
        )


class SwapContract(PeripheryContract):
    """
    Привязка к контракту Swap iZiSwap.

    Поддерживает:
    - swapX2Y / swapY2X (точный вход, один пул)
    - swapX2YDesireY / swapY2XDesireX (точный выход, один пул)
    - swapAmount / swapDesire (цепочка пулов)
    - multicall, refundETH, unwrapWETH9
    """

    ABI = SWAP_ABI

    def swap_x2y(self, args: SwapSingleArgs) -> ContractFunction:
        return self.contract.functions.swapX2Y(args.to_tuple())

    def swap_y2x(self, args: SwapSingleArgs) -> ContractFunction:
        return self.contract.functions.swapY2X(args.to_tuple())

    def swap_x2y_desire_y(self, args: SwapSingleArgs) -> ContractFunction:
        return self.contract.functions.swapX2YDesireY(args.to_tuple())

    def swap_y2x_desire_x(self, args: SwapSingleArgs) -> ContractFunction:
        return self.contract.functions.swapY2XDesireX(args.to_tuple())

    def swap_amount(self, args: SwapAmountArgs) -> ContractFunction:
        return self.contract.functions.swapAmount(args.to_tuple())

    def swap_desire(self, args: SwapDesireArgs) -> ContractFunction:
        return self.contract.functions.swapDesire(args.to_tuple())
