"""
Shared fixtures for all tests.
"""

import pytest
from unittest.mock import Mock, MagicMock
from web3 import Web3

from iziswap.config import BSC_TESTNET, POLYGON
from iziswap.contracts.liquidity_manager import LiquidityManagerContract
from iziswap.contracts.swap import SwapContract
from iziswap.token import Token

from helpers import ACCOUNT, IZI, LM_ADDRESS, SWAP_ADDRESS, TEST_A, TEST_B, USDT, WBNB


class MockWeb3:
    """Переиспользуемый мок Web3 для тестов."""

    def __init__(self, initial_nonce: int = 100):
        self._nonce = initial_nonce
        self.eth = MagicMock()
        self.eth.get_transaction_count = MagicMock(return_value=self._nonce)
        self.eth.gas_price = 5_000_000_000  # 5 gwei
        self.eth.chain_id = 97
        self.eth.block_number = 40_000_000
        self.eth.send_raw_transaction = MagicMock(return_value=b'\x12\x34' * 16)
        self.eth.wait_for_transaction_receipt = MagicMock(return_value={
            'status': 1,
            'gasUsed': 300_000,
            'logs': [],
            'transactionHash': b'\x12\x34' * 16,
            'blockNumber': 40_000_000,
        })
        self.eth.contract = MagicMock()

    def set_nonce(self, nonce: int):
        self._nonce = nonce
        self.eth.get_transaction_count.return_value = nonce


@pytest.fixture
def mock_w3():
    """Мок Web3 instance."""
    return MockWeb3()


@pytest.fixture
def offline_w3():
    """Web3 без живой ноды: только для построения и кодирования вызовов."""
    return Web3(Web3.HTTPProvider("http://127.0.0.1:8545"))


@pytest.fixture
def mock_account():
    """Мок LocalAccount."""
    account = Mock()
    account.address = Web3.to_checksum_address(ACCOUNT)
    account.sign_transaction = Mock(return_value=Mock(raw_transaction=b'signed_tx'))
    return account


@pytest.fixture
def chain():
    """BSC testnet: нативная монета BNB, legacy gasPrice."""
    return BSC_TESTNET


@pytest.fixture
def eip1559_chain():
    return POLYGON


@pytest.fixture
def swap_contract(offline_w3):
    return SwapContract(offline_w3, SWAP_ADDRESS)


@pytest.fixture
def liquidity_manager(offline_w3):
    return LiquidityManagerContract(offline_w3, LM_ADDRESS)


@pytest.fixture
def izi():
    return Token(address=IZI, symbol="iZi", decimals=18)


@pytest.fixture
def usdt():
    return Token(address=USDT, symbol="USDT", decimals=18)


@pytest.fixture
def wbnb():
    """Обёрнутая нативная монета: символ совпадает с нативным символом сети."""
    return Token(address=WBNB, symbol="BNB", decimals=18)


@pytest.fixture
def token_a():
    return Token(address=TEST_A, symbol="testA", decimals=6)


@pytest.fixture
def token_b():
    return Token(address=TEST_B, symbol="testB", decimals=18)


@pytest.fixture
def mock_receipt_success():
    """Успешный receipt транзакции."""
    return {
        'status': 1,
        'gasUsed': 300_000,
        'logs': [],
        'transactionHash': b'\x12\x34' * 16,
        'blockNumber': 40_000_000,
    }


@pytest.fixture
def mock_receipt_fail():
    """Неуспешный receipt транзакции."""
    return {
        'status': 0,
        'gasUsed': 300_000,
        'logs': [],
        'transactionHash': b'\xde\xad' * 16,
        'blockNumber': 40_000_000,
    }
