"""
Token metadata and amount conversion.

Token неизменяем после загрузки. Порядок токенов в пуле определяется
сравнением адресов в нижнем регистре (эквивалентно сравнению байт).
"""

import logging
from dataclasses import dataclass
from decimal import Context, Decimal, InvalidOperation
from typing import Optional, Tuple

from web3 import Web3

from .config import ChainConfig
from .contracts.abis import ERC20_ABI
from .utils import rpc_errors

logger = logging.getLogger(__name__)

# scaleb округляет до точности контекста, суммы uint256 помещаются в 80 знаков
_EXACT = Context(prec=100)


@dataclass(frozen=True)
class Token:
    """ERC20 токен."""
    address: str
    symbol: str
    decimals: int
    name: str = ""
    chain_id: Optional[int] = None

    @property
    def checksum_address(self) -> str:
        return Web3.to_checksum_address(self.address)

    @property
    def sort_key(self) -> str:
        return self.address.lower()


def is_token_x(token_a: Token, token_b: Token) -> bool:
    """True если token_a - tokenX пула (адрес меньше)."""
    return token_a.sort_key < token_b.sort_key


def sort_tokens(token_a: Token, token_b: Token) -> Tuple[Token, Token]:
    """Упорядочить пару токенов как (tokenX, tokenY)."""
    if is_token_x(token_a, token_b):
        return token_a, token_b
    return token_b, token_a


def is_native_coin(token: Token, chain: ChainConfig, strict_erc20_token: bool = False) -> bool:
    """
    Является ли токен нативной монетой сети (оборачивается контрактом).

    Определяется по символу. strict_erc20_token отключает авто-wrap/unwrap.
    """
    return not strict_erc20_token and token.symbol == chain.native_token


def amount_to_decimal(amount: int, token: Token) -> Decimal:
    """Сумма в минимальных единицах -> человеческая сумма."""
    return Decimal(int(amount)).scaleb(-token.decimals, context=_EXACT)


def decimal_to_amount(amount_decimal, token: Token) -> int:
    """
    Человеческая сумма -> минимальные единицы.

    Дробная часть меньше 1 wei отбрасывается (к нулю).

    Example:
        >>> decimal_to_amount(100, Token("0x...", "USDC", 6))
        100000000
    """
    try:
        d = amount_decimal if isinstance(amount_decimal, Decimal) else Decimal(str(amount_decimal))
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {amount_decimal!r}") from e
    if not d.is_finite():
        raise ValueError(f"Amount is not finite: {amount_decimal}")
    return int(d.scaleb(token.decimals, context=_EXACT))


def fetch_token(address: str, chain: ChainConfig, w3: Web3) -> Token:
    """
    Загрузка метаданных ERC20 токена.

    Args:
        address: Адрес токена
        chain: Сеть (chain_id сохраняется в Token)
        w3: Web3 instance

    Returns:
        Token
    """
    checksum = Web3.to_checksum_address(address)
    contract = w3.eth.contract(address=checksum, abi=ERC20_ABI)

    with rpc_errors(f"fetch token {checksum}"):
        symbol = contract.functions.symbol().call()
        decimals = contract.functions.decimals().call()
        name = contract.functions.name().call()

    token = Token(
        address=checksum,
        symbol=symbol,
        decimals=int(decimals),
        name=name,
        chain_id=chain.chain_id,
    )
    logger.debug(f"Fetched token {token.symbol} ({token.address}), decimals={token.decimals}")
    return token
