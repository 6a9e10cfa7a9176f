"""
Exceptions for the iZiSwap client.

Чистые ошибки (InvalidPath, PrecisionLoss) возникают при построении вызова,
до любого обращения к сети. Сетевые (SimulationReverted, TransportFailure)
поднимаются из utils.estimate_gas / utils.submit.
"""

from typing import Optional


class IziSwapError(Exception):
    """Базовая ошибка клиента iZiSwap."""
    pass


class InvalidPath(IziSwapError, ValueError):
    """Некорректная цепочка токенов / fee для multi-hop свапа."""
    pass


class PrecisionLoss(IziSwapError, ArithmeticError):
    """Вычисление не может сохранить нужную точность."""
    pass


class SimulationReverted(IziSwapError):
    """Контракт отклонил вызов при estimate_gas или отправке."""

    def __init__(self, reason: Optional[str] = None, data: Optional[str] = None):
        self.reason = reason
        self.data = data
        message = f"Execution reverted: {reason}" if reason else "Execution reverted"
        super().__init__(message)


class TransportFailure(IziSwapError):
    """RPC недоступен, таймаут или невалидный ответ ноды."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)
