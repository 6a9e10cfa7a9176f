"""
Gas estimation and transaction submission.

Includes:
- rpc_errors: translation of web3 errors into SimulationReverted / TransportFailure
- build_sending_params: gas pricing per chain (legacy gasPrice or EIP-1559 maxFeePerGas)
- estimate_gas / submit: thin wrappers over a built ContractFunction
- TransactionHandle: waiting for mined / confirmed stages

No operation here retries. Nonce sequencing is left to the node (transact)
or to web3's pending transaction count (local signing).
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract.contract import ContractFunction
from web3.exceptions import (
    ContractLogicError,
    ProviderConnectionError,
    TimeExhausted,
    Web3RPCError,
)
from web3.types import TxReceipt

from .config import ChainConfig
from .errors import SimulationReverted, TransportFailure

logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (
    ProviderConnectionError,
    Web3RPCError,
    requests.exceptions.RequestException,
    ConnectionError,
    TimeoutError,
)

_REVERT_PREFIX = "execution reverted"


def _revert_reason(error: ContractLogicError) -> Optional[str]:
    """Причина revert из сообщения ноды ("execution reverted: <reason>")."""
    message = getattr(error, "message", None) or str(error)
    if not message:
        return None
    if message.lower().startswith(_REVERT_PREFIX):
        message = message[len(_REVERT_PREFIX):].lstrip(": ").strip()
    return message or None


@contextmanager
def rpc_errors(action: str):
    """
    Перевод ошибок web3 в ошибки клиента.

    ContractLogicError -> SimulationReverted (с причиной),
    таймауты и ошибки соединения/RPC -> TransportFailure.
    """
    try:
        yield
    except ContractLogicError as e:
        reason = _revert_reason(e)
        logger.warning(f"{action} reverted: {reason}")
        raise SimulationReverted(reason=reason, data=getattr(e, "data", None)) from e
    except TimeExhausted as e:
        logger.warning(f"{action} timed out: {e}")
        raise TransportFailure(f"{action} timed out: {e}", original_error=e) from e
    except _TRANSPORT_ERRORS as e:
        logger.warning(f"{action} failed: {e}")
        raise TransportFailure(f"{action} failed: {e}", original_error=e) from e


def build_sending_params(chain: ChainConfig, options: Dict[str, Any], gas_price=None) -> Dict[str, Any]:
    """
    Параметры транзакции для estimate_gas / отправки.

    Пустые (None) поля удаляются. Для legacy сетей maxFeePerGas заменяется
    на gasPrice.

    Args:
        chain: Сеть
        options: {'from', 'value', 'gas', 'maxFeePerGas'} от построителя вызова
        gas_price: Цена газа в wei (None - оставить ноде)

    Returns:
        Новый словарь параметров
    """
    params = {k: v for k, v in options.items() if v is not None}
    params.pop("maxFeePerGas", None)
    params.pop("gasPrice", None)

    if gas_price is not None:
        if chain.uses_legacy_gas_price:
            params["gasPrice"] = int(gas_price)
        else:
            params["maxFeePerGas"] = int(gas_price)

    if "value" in params:
        params["value"] = int(params["value"])
    if "gas" in params:
        params["gas"] = int(params["gas"])
    return params


def estimate_gas(calling: ContractFunction, options: Dict[str, Any]) -> int:
    """
    Dry-run вызова на текущем состоянии сети.

    Raises:
        SimulationReverted: контракт отклонил вызов
        TransportFailure: RPC недоступен
    """
    with rpc_errors("estimate_gas"):
        gas = calling.estimate_gas(options)
    logger.debug(f"Gas estimated: {gas}")
    return int(gas)


@dataclass
class TransactionHandle:
    """
    Отправленная транзакция.

    Usage:
        handle = submit(w3, calling, options, account)
        receipt = handle.wait_mined()
        receipt = handle.wait_confirmed(confirmations=3)
    """
    w3: Web3
    tx_hash: bytes

    @property
    def hex(self) -> str:
        return Web3.to_hex(self.tx_hash)

    def wait_mined(self, timeout: float = 120, poll_latency: float = 0.1) -> TxReceipt:
        """
        Ожидание включения в блок.

        Raises:
            SimulationReverted: транзакция включена, но status != 1
            TransportFailure: таймаут или ошибка RPC
        """
        with rpc_errors(f"wait for {self.hex}"):
            receipt = self.w3.eth.wait_for_transaction_receipt(
                self.tx_hash, timeout=timeout, poll_latency=poll_latency
            )

        if receipt["status"] != 1:
            logger.warning(f"Transaction reverted: {self.hex}")
            raise SimulationReverted(reason=f"transaction {self.hex} reverted")

        logger.info(f"Transaction mined: {self.hex}, block {receipt['blockNumber']}")
        return receipt

    def wait_confirmed(
        self,
        confirmations: int = 1,
        timeout: float = 300,
        poll_interval: float = 2.0
    ) -> TxReceipt:
        """
        Ожидание confirmations блоков (блок с транзакцией считается первым).
        """
        started = time.monotonic()
        receipt = self.wait_mined(timeout=timeout)
        target_block = receipt["blockNumber"] + confirmations - 1

        while True:
            with rpc_errors(f"confirm {self.hex}"):
                current_block = self.w3.eth.block_number
            if current_block >= target_block:
                return receipt
            if time.monotonic() - started > timeout:
                raise TransportFailure(
                    f"Transaction {self.hex} not confirmed after {timeout}s "
                    f"(block {current_block}, need {target_block})"
                )
            time.sleep(poll_interval)


def submit(
    w3: Web3,
    calling: ContractFunction,
    options: Dict[str, Any],
    account: Optional[LocalAccount] = None
) -> TransactionHandle:
    """
    Отправка вызова.

    С LocalAccount транзакция подписывается локально и отправляется через
    send_raw_transaction. Без аккаунта используется transact (аккаунт ноды).

    Raises:
        SimulationReverted: нода отклонила транзакцию при симуляции
        TransportFailure: RPC недоступен
    """
    if account is not None:
        tx_params = dict(options)
        tx_params.setdefault("from", account.address)
        with rpc_errors("send transaction"):
            if "nonce" not in tx_params:
                tx_params["nonce"] = w3.eth.get_transaction_count(account.address, "pending")
            tx = calling.build_transaction(tx_params)
            signed = account.sign_transaction(tx)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
    else:
        with rpc_errors("send transaction"):
            tx_hash = calling.transact(options)

    handle = TransactionHandle(w3=w3, tx_hash=tx_hash)
    logger.info(f"TX sent: {handle.hex}")
    return handle
