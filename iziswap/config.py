"""
Configuration for the iZiSwap client.

Таблица сетей (chain_id -> ChainConfig) собирается один раз при импорте
и дальше только читается. Компоненты получают ChainConfig аргументом.
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional


# Способ указания цены газа при отправке
GAS_PRICING_LEGACY = "legacy"    # gasPrice
GAS_PRICING_EIP1559 = "eip1559"  # maxFeePerGas


class ChainId(IntEnum):
    ETHEREUM = 1
    BSC = 56
    BSC_TESTNET = 97
    POLYGON = 137
    ZKSYNC_ERA = 324
    ARBITRUM = 42161


@dataclass(frozen=True)
class ChainConfig:
    """Конфигурация сети."""
    chain_id: int
    name: str
    native_token: str  # символ нативной монеты (BNB, ETH, ...)
    rpc_url: str
    explorer_url: str
    gas_pricing: str = GAS_PRICING_EIP1559

    @property
    def uses_legacy_gas_price(self) -> bool:
        return self.gas_pricing == GAS_PRICING_LEGACY


@dataclass(frozen=True)
class DeploymentConfig:
    """Адреса контрактов iZiSwap в сети."""
    chain_id: int
    liquidity_manager: str = ""
    swap: str = ""


# ============================================================
# CHAIN CONFIGURATIONS
# ============================================================

ETHEREUM = ChainConfig(
    chain_id=ChainId.ETHEREUM,
    name="Ethereum",
    native_token="ETH",
    rpc_url="https://eth.llamarpc.com",
    explorer_url="https://etherscan.io",
)

BSC = ChainConfig(
    chain_id=ChainId.BSC,
    name="BNB Chain",
    native_token="BNB",
    rpc_url="https://bsc-dataseed.binance.org/",
    explorer_url="https://bscscan.com",
    gas_pricing=GAS_PRICING_LEGACY,
)

BSC_TESTNET = ChainConfig(
    chain_id=ChainId.BSC_TESTNET,
    name="BNB Chain Testnet",
    native_token="BNB",
    rpc_url="https://data-seed-prebsc-1-s1.binance.org:8545/",
    explorer_url="https://testnet.bscscan.com",
    gas_pricing=GAS_PRICING_LEGACY,
)

POLYGON = ChainConfig(
    chain_id=ChainId.POLYGON,
    name="Polygon",
    native_token="MATIC",
    rpc_url="https://polygon-rpc.com",
    explorer_url="https://polygonscan.com",
)

ZKSYNC_ERA = ChainConfig(
    chain_id=ChainId.ZKSYNC_ERA,
    name="zkSync Era",
    native_token="ETH",
    rpc_url="https://mainnet.era.zksync.io",
    explorer_url="https://explorer.zksync.io",
)

ARBITRUM = ChainConfig(
    chain_id=ChainId.ARBITRUM,
    name="Arbitrum One",
    native_token="ETH",
    rpc_url="https://arb1.arbitrum.io/rpc",
    explorer_url="https://arbiscan.io",
)

CHAIN_TABLE: Mapping[int, ChainConfig] = MappingProxyType({
    chain.chain_id: chain
    for chain in (ETHEREUM, BSC, BSC_TESTNET, POLYGON, ZKSYNC_ERA, ARBITRUM)
})

# ============================================================
# DEPLOYMENTS
# ============================================================

DEPLOYMENTS: Mapping[int, DeploymentConfig] = MappingProxyType({
    ChainId.BSC_TESTNET: DeploymentConfig(
        chain_id=ChainId.BSC_TESTNET,
        liquidity_manager="0x93C22Fbeff4448F2fb6e432579b0638838Ff9581",
    ),
})

# ============================================================
# DEFAULT SETTINGS
# ============================================================

# Дедлайн "без ограничения", который принимает роутер
DEFAULT_DEADLINE = 0xffffffff

# Граничные точки свапа по умолчанию (крайние точки в направлении свапа)
DEFAULT_BOUNDARY_PT_X2Y = -799999
DEFAULT_BOUNDARY_PT_Y2X = 799999

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_chain_config(chain_id: int) -> ChainConfig:
    """Получение конфигурации по chain_id."""
    if chain_id not in CHAIN_TABLE:
        raise ValueError(f"Unknown chain_id: {chain_id}")
    return CHAIN_TABLE[chain_id]


def get_deployment(chain_id: int) -> Optional[DeploymentConfig]:
    """Адреса контрактов для сети (None если не известны)."""
    return DEPLOYMENTS.get(chain_id)
