"""
Tests for gas estimation, sending and transaction waiting.
"""

import pytest
import requests
from unittest.mock import Mock, patch
from web3.exceptions import ContractLogicError, TimeExhausted

from iziswap.errors import SimulationReverted, TransportFailure
from iziswap.utils import (
    TransactionHandle,
    build_sending_params,
    estimate_gas,
    rpc_errors,
    submit,
)

from helpers import ACCOUNT


class TestBuildSendingParams:
    """Tests for build_sending_params."""

    def test_legacy_chain_uses_gas_price(self, chain):
        options = {"from": ACCOUNT, "value": 0, "gas": None, "maxFeePerGas": 10**9}
        params = build_sending_params(chain, options, gas_price=5 * 10**9)

        assert params == {"from": ACCOUNT, "value": 0, "gasPrice": 5 * 10**9}

    def test_eip1559_chain_uses_max_fee(self, eip1559_chain):
        options = {"from": ACCOUNT, "value": 7, "gas": 250_000, "maxFeePerGas": None}
        params = build_sending_params(eip1559_chain, options, gas_price=30 * 10**9)

        assert params == {"from": ACCOUNT, "value": 7, "gas": 250_000, "maxFeePerGas": 30 * 10**9}

    def test_no_gas_price_left_to_node(self, chain):
        options = {"from": ACCOUNT, "value": 0, "gas": None, "maxFeePerGas": 10**9}
        params = build_sending_params(chain, options)

        assert "gasPrice" not in params
        assert "maxFeePerGas" not in params

    def test_does_not_mutate_options(self, chain):
        options = {"from": ACCOUNT, "value": 0, "gas": None, "maxFeePerGas": 10**9}
        build_sending_params(chain, options, gas_price=1)
        assert options == {"from": ACCOUNT, "value": 0, "gas": None, "maxFeePerGas": 10**9}


class TestEstimateGas:
    """Tests for estimate_gas error translation."""

    def test_returns_int(self):
        calling = Mock()
        calling.estimate_gas.return_value = 123_456

        assert estimate_gas(calling, {"from": ACCOUNT}) == 123_456
        calling.estimate_gas.assert_called_once_with({"from": ACCOUNT})

    def test_revert_maps_to_simulation_reverted(self):
        calling = Mock()
        calling.estimate_gas.side_effect = ContractLogicError("execution reverted: P")

        with pytest.raises(SimulationReverted) as exc_info:
            estimate_gas(calling, {})

        assert exc_info.value.reason == "P"
        assert "P" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ContractLogicError)

    def test_connection_error_maps_to_transport_failure(self):
        calling = Mock()
        error = requests.exceptions.ConnectionError("connection refused")
        calling.estimate_gas.side_effect = error

        with pytest.raises(TransportFailure) as exc_info:
            estimate_gas(calling, {})

        assert exc_info.value.original_error is error

    def test_timeout_maps_to_transport_failure(self):
        calling = Mock()
        calling.estimate_gas.side_effect = TimeoutError("read timed out")

        with pytest.raises(TransportFailure):
            estimate_gas(calling, {})

    def test_other_errors_propagate(self):
        calling = Mock()
        calling.estimate_gas.side_effect = KeyError("boom")

        with pytest.raises(KeyError):
            estimate_gas(calling, {})


class TestRpcErrors:
    """Tests for rpc_errors context manager."""

    def test_plain_revert_without_reason(self):
        with pytest.raises(SimulationReverted) as exc_info:
            with rpc_errors("test"):
                raise ContractLogicError("execution reverted")

        assert exc_info.value.reason is None
        assert str(exc_info.value) == "Execution reverted"

    def test_passes_through_success(self):
        with rpc_errors("test"):
            value = 42
        assert value == 42


class TestSubmit:
    """Tests for submit."""

    def test_local_account_signs_and_sends_raw(self, mock_w3, mock_account):
        w3 = mock_w3
        w3.set_nonce(7)
        calling = Mock()
        calling.build_transaction.return_value = {"to": "0xpool", "data": "0x"}

        handle = submit(w3, calling, {"value": 0, "gasPrice": 10**9}, account=mock_account)

        tx_params = calling.build_transaction.call_args[0][0]
        assert tx_params["nonce"] == 7
        assert tx_params["from"] == mock_account.address
        mock_account.sign_transaction.assert_called_once_with({"to": "0xpool", "data": "0x"})
        w3.eth.send_raw_transaction.assert_called_once_with(b'signed_tx')
        assert handle.tx_hash == b'\x12\x34' * 16
        calling.transact.assert_not_called()

    def test_explicit_nonce_kept(self, mock_w3, mock_account):
        w3 = mock_w3
        calling = Mock()
        calling.build_transaction.return_value = {}

        submit(w3, calling, {"nonce": 3}, account=mock_account)

        assert calling.build_transaction.call_args[0][0]["nonce"] == 3
        w3.eth.get_transaction_count.assert_not_called()

    def test_node_account_uses_transact(self, mock_w3):
        w3 = mock_w3
        calling = Mock()
        calling.transact.return_value = b'\xab' * 32

        handle = submit(w3, calling, {"from": ACCOUNT, "value": 0})

        calling.transact.assert_called_once_with({"from": ACCOUNT, "value": 0})
        assert handle.hex == "0x" + "ab" * 32

    def test_send_revert(self, mock_w3):
        w3 = mock_w3
        calling = Mock()
        calling.transact.side_effect = ContractLogicError("execution reverted: X")

        with pytest.raises(SimulationReverted, match="X"):
            submit(w3, calling, {})


class TestTransactionHandle:
    """Tests for TransactionHandle waiting."""

    def test_wait_mined(self, mock_w3, mock_receipt_success):
        w3 = mock_w3
        w3.eth.wait_for_transaction_receipt.return_value = mock_receipt_success
        handle = TransactionHandle(w3=w3, tx_hash=b'\x12\x34' * 16)

        assert handle.wait_mined(timeout=10) is mock_receipt_success
        w3.eth.wait_for_transaction_receipt.assert_called_once_with(
            b'\x12\x34' * 16, timeout=10, poll_latency=0.1
        )

    def test_wait_mined_reverted(self, mock_w3, mock_receipt_fail):
        w3 = mock_w3
        w3.eth.wait_for_transaction_receipt.return_value = mock_receipt_fail
        handle = TransactionHandle(w3=w3, tx_hash=b'\xde\xad' * 16)

        with pytest.raises(SimulationReverted):
            handle.wait_mined()

    def test_wait_mined_timeout(self, mock_w3):
        w3 = mock_w3
        w3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("not mined")
        handle = TransactionHandle(w3=w3, tx_hash=b'\x01' * 32)

        with pytest.raises(TransportFailure):
            handle.wait_mined(timeout=1)

    def test_wait_confirmed(self, mock_w3, mock_receipt_success):
        w3 = mock_w3
        w3.eth.wait_for_transaction_receipt.return_value = mock_receipt_success
        w3.eth.block_number = mock_receipt_success['blockNumber'] + 2
        handle = TransactionHandle(w3=w3, tx_hash=b'\x12\x34' * 16)

        assert handle.wait_confirmed(confirmations=3) is mock_receipt_success

    def test_wait_confirmed_timeout(self, mock_w3, mock_receipt_success):
        w3 = mock_w3
        w3.eth.wait_for_transaction_receipt.return_value = mock_receipt_success
        w3.eth.block_number = mock_receipt_success['blockNumber']
        handle = TransactionHandle(w3=w3, tx_hash=b'\x12\x34' * 16)

        with patch("iziswap.utils.time.monotonic", side_effect=[0.0, 10.0]), \
                patch("iziswap.utils.time.sleep") as sleep:
            with pytest.raises(TransportFailure, match="not confirmed"):
                handle.wait_confirmed(confirmations=5, timeout=5)

        sleep.assert_not_called()
