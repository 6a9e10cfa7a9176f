"""
iZiSwap Client Module

Swap router and LiquidityManager calls for iZiSwap pools:
price <-> point math, liquidity amounts, path encoding, call building
with native coin wrap/refund/unwrap and gas estimation / sending.
"""

from .config import ChainConfig, ChainId, get_chain_config, get_deployment
from .errors import IziSwapError, InvalidPath, PrecisionLoss, SimulationReverted, TransportFailure
from .token import Token, fetch_token, is_native_coin, is_token_x
from .path import encode_path, encode_path_reverse, decode_path
from .contracts.swap import SwapContract
from .contracts.liquidity_manager import LiquidityManagerContract, get_pool_address
from .contracts.pool import PoolState, get_pool_contract, get_pool_state, get_point_delta
from .swap import (
    SwapSingleWithExactInputParams,
    SwapSingleWithExactOutputParams,
    SwapChainWithExactInputParams,
    SwapChainWithExactOutputParams,
    get_swap_call,
    swap_estimate_gas,
    swap,
)
from .liquidity_provider import MintParams, compute_point_range, plan_mint, get_mint_call, mint_estimate_gas, mint
from .utils import TransactionHandle

__all__ = [
    'ChainConfig',
    'ChainId',
    'get_chain_config',
    'get_deployment',
    'IziSwapError',
    'InvalidPath',
    'PrecisionLoss',
    'SimulationReverted',
    'TransportFailure',
    'Token',
    'fetch_token',
    'is_native_coin',
    'is_token_x',
    'encode_path',
    'encode_path_reverse',
    'decode_path',
    'SwapContract',
    'LiquidityManagerContract',
    'get_pool_address',
    'PoolState',
    'get_pool_contract',
    'get_pool_state',
    'get_point_delta',
    'SwapSingleWithExactInputParams',
    'SwapSingleWithExactOutputParams',
    'SwapChainWithExactInputParams',
    'SwapChainWithExactOutputParams',
    'get_swap_call',
    'swap_estimate_gas',
    'swap',
    'MintParams',
    'compute_point_range',
    'plan_mint',
    'get_mint_call',
    'mint_estimate_gas',
    'mint',
    'TransactionHandle',
]
