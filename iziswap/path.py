"""
Swap path encoding for swapAmount / swapDesire.

Формат (без разделителей, hex с префиксом 0x):
    address (20 байт) | fee (3 байта, big-endian) | address (20 байт) | ... | address

swapDesire получает путь в обратном порядке (от выходного токена к входному).
"""

from typing import List, Sequence, Tuple, Union

from web3 import Web3

from .errors import InvalidPath
from .token import Token

ADDRESS_SIZE = 20
FEE_SIZE = 3
MAX_FEE = 2 ** (8 * FEE_SIZE)

TokenLike = Union[Token, str]


def _address_bytes(token: TokenLike) -> bytes:
    address = token.address if isinstance(token, Token) else token
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidPath(f"Invalid token address in path: {address!r}")
    return bytes.fromhex(address[2:]) if address.startswith(("0x", "0X")) else bytes.fromhex(address)


def _fee_bytes(fee: int) -> bytes:
    if isinstance(fee, bool) or not isinstance(fee, int) or not 0 <= fee < MAX_FEE:
        raise InvalidPath(f"Fee {fee!r} does not fit into {FEE_SIZE} bytes")
    return fee.to_bytes(FEE_SIZE, "big")


def validate_path(tokens: Sequence[TokenLike], fees: Sequence[int]) -> None:
    """
    Проверка цепочки токенов и fee.

    Raises:
        InvalidPath: меньше 2 токенов, len(fees) != len(tokens) - 1,
                     fee вне 24 бит или невалидный адрес
    """
    if len(tokens) < 2:
        raise InvalidPath(f"Path needs at least 2 tokens, got {len(tokens)}")
    if len(fees) != len(tokens) - 1:
        raise InvalidPath(
            f"Path with {len(tokens)} tokens needs {len(tokens) - 1} fees, got {len(fees)}"
        )
    for token in tokens:
        _address_bytes(token)
    for fee in fees:
        _fee_bytes(fee)


def _encode(tokens: Sequence[TokenLike], fees: Sequence[int]) -> str:
    data = _address_bytes(tokens[0])
    for i, fee in enumerate(fees):
        data += _fee_bytes(fee) + _address_bytes(tokens[i + 1])
    return "0x" + data.hex()


def encode_path(tokens: Sequence[TokenLike], fees: Sequence[int]) -> str:
    """
    Кодирование пути в прямом порядке (вход -> выход).

    Args:
        tokens: Токены (Token или адреса), минимум 2
        fees: Fee каждого hop, len(fees) == len(tokens) - 1

    Returns:
        Hex строка с префиксом 0x
    """
    validate_path(tokens, fees)
    return _encode(tokens, fees)


def encode_path_reverse(tokens: Sequence[TokenLike], fees: Sequence[int]) -> str:
    """Кодирование пути в обратном порядке (выход -> вход) для swapDesire."""
    validate_path(tokens, fees)
    return _encode(list(reversed(tokens)), list(reversed(fees)))


def decode_path(path: Union[str, bytes]) -> Tuple[List[str], List[int]]:
    """
    Разбор пути на адреса (checksum) и fee.

    Raises:
        InvalidPath: длина не равна 20 + 23 * k (k >= 1)
    """
    if isinstance(path, str):
        try:
            data = Web3.to_bytes(hexstr=path)
        except ValueError as e:
            raise InvalidPath(f"Path is not valid hex: {path!r}") from e
    else:
        data = bytes(path)

    hop_size = FEE_SIZE + ADDRESS_SIZE
    if len(data) < ADDRESS_SIZE + hop_size or (len(data) - ADDRESS_SIZE) % hop_size != 0:
        raise InvalidPath(f"Path has invalid length: {len(data)} bytes")

    addresses = [Web3.to_checksum_address(data[:ADDRESS_SIZE])]
    fees = []
    offset = ADDRESS_SIZE
    while offset < len(data):
        fees.append(int.from_bytes(data[offset:offset + FEE_SIZE], "big"))
        offset += FEE_SIZE
        addresses.append(Web3.to_checksum_address(data[offset:offset + ADDRESS_SIZE]))
        offset += ADDRESS_SIZE
    return addresses, fees
