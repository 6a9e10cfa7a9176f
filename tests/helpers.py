"""
Тестовые адреса и разбор calldata.
"""

from eth_abi import decode
from web3 import Web3

# Тестовые адреса (нижний регистр - валидны без checksum)
ACCOUNT = "0x1234567890123456789012345678901234567890"
SWAP_ADDRESS = "0x4bd007912911f3ee4b4555352b556b08601ce7ce"
LM_ADDRESS = "0x93c22fbeff4448f2fb6e432579b0638838ff9581"
IZI = "0x1111111111111111111111111111111111111111"
USDT = "0x3333333333333333333333333333333333333333"
WBNB = "0xae13d989dac2f0debff460ac112a837c89baa7cd"

# Пара из примера mint на BSC testnet: A > B по адресу, т.е. tokenX = B
TEST_A = "0xcfd8a067e1fa03474e79be646c5f6b6a27847399"
TEST_B = "0xad1f11fbb288cd13819ccb9397e59faab4cdc16f"

SWAP_SINGLE_TUPLE = "(address,address,uint24,int24,address,uint128,uint256,uint256,uint256)"
SWAP_AMOUNT_TUPLE = "(bytes,address,uint128,uint256,uint256)"
MINT_TUPLE = "(address,address,address,uint24,int24,int24,uint128,uint128,uint128,uint128,uint256)"


def selector(signature: str) -> bytes:
    """4-байтовый selector функции."""
    return Web3.keccak(text=signature)[:4]


def decode_multicall(data: bytes) -> list:
    """Список calldata внутри multicall(bytes[])."""
    assert data[:4] == selector("multicall(bytes[])")
    return list(decode(['bytes[]'], data[4:])[0])


def decode_args(types: list, data: bytes) -> tuple:
    """Аргументы calldata без selector."""
    return decode(types, data[4:])
