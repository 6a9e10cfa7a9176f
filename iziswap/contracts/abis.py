"""
ABI definitions for iZiSwap Swap router, LiquidityManager, pool and ERC20.
"""

# Общие функции периферии (Swap и LiquidityManager наследуют Base)
_PERIPHERY_ABI = [
    {
        "inputs": [{"name": "data", "type": "bytes[]"}],
        "name": "multicall",
        "outputs": [{"name": "results", "type": "bytes[]"}],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "refundETH",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "inputs": [
            {"name": "minAmount", "type": "uint256"},
            {"name": "recipient", "type": "address"}
        ],
        "name": "unwrapWETH9",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    }
]

# Параметры свапа в одном пуле (swapX2Y, swapY2X, swapX2YDesireY, swapY2XDesireX)
_SWAP_PARAMS_COMPONENTS = [
    {"name": "tokenX", "type": "address"},
    {"name": "tokenY", "type": "address"},
    {"name": "fee", "type": "uint24"},
    {"name": "boundaryPt", "type": "int24"},
    {"name": "recipient", "type": "address"},
    {"name": "amount", "type": "uint128"},
    {"name": "maxPayed", "type": "uint256"},
    {"name": "minAcquired", "type": "uint256"},
    {"name": "deadline", "type": "uint256"}
]


def _single_swap(name: str) -> dict:
    return {
        "inputs": [
            {
                "components": _SWAP_PARAMS_COMPONENTS,
                "name": "swapParams",
                "type": "tuple"
            }
        ],
        "name": name,
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    }


SWAP_ABI = [
    _single_swap("swapX2Y"),
    _single_swap("swapY2X"),
    _single_swap("swapX2YDesireY"),
    _single_swap("swapY2XDesireX"),
    {
        "inputs": [
            {
                "components": [
                    {"name": "path", "type": "bytes"},
                    {"name": "recipient", "type": "address"},
                    {"name": "amount", "type": "uint128"},
                    {"name": "minAcquired", "type": "uint256"},
                    {"name": "deadline", "type": "uint256"}
                ],
                "name": "params",
                "type": "tuple"
            }
        ],
        "name": "swapAmount",
        "outputs": [
            {"name": "cost", "type": "uint256"},
            {"name": "acquire", "type": "uint256"}
        ],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "inputs": [
            {
                "components": [
                    {"name": "path", "type": "bytes"},
                    {"name": "recipient", "type": "address"},
                    {"name": "desire", "type": "uint128"},
                    {"name": "maxPayed", "type": "uint256"},
                    {"name": "deadline", "type": "uint256"}
                ],
                "name": "params",
                "type": "tuple"
            }
        ],
        "name": "swapDesire",
        "outputs": [
            {"name": "cost", "type": "uint256"},
            {"name": "acquire", "type": "uint256"}
        ],
        "stateMutability": "payable",
        "type": "function"
    },
] + _PERIPHERY_ABI

LIQUIDITY_MANAGER_ABI = [
    {
        "inputs": [
            {
                "components": [
                    {"name": "miner", "type": "address"},
                    {"name": "tokenX", "type": "address"},
                    {"name": "tokenY", "type": "address"},
                    {"name": "fee", "type": "uint24"},
                    {"name": "pl", "type": "int24"},
                    {"name": "pr", "type": "int24"},
                    {"name": "xLim", "type": "uint128"},
                    {"name": "yLim", "type": "uint128"},
                    {"name": "amountXMin", "type": "uint128"},
                    {"name": "amountYMin", "type": "uint128"},
                    {"name": "deadline", "type": "uint256"}
                ],
                "name": "mintParam",
                "type": "tuple"
            }
        ],
        "name": "mint",
        "outputs": [
            {"name": "lid", "type": "uint256"},
            {"name": "liquidity", "type": "uint128"},
            {"name": "amountX", "type": "uint256"},
            {"name": "amountY", "type": "uint256"}
        ],
        "stateMutability": "payable",
        "type": "function"
    },
    {
        "inputs": [
            {"name": "tokenX", "type": "address"},
            {"name": "tokenY", "type": "address"},
            {"name": "fee", "type": "uint24"}
        ],
        "name": "pool",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
] + _PERIPHERY_ABI

POOL_ABI = [
    {
        "inputs": [],
        "name": "state",
        "outputs": [
            {"name": "sqrtPrice_96", "type": "uint160"},
            {"name": "currentPoint", "type": "int24"},
            {"name": "observationCurrentIndex", "type": "uint16"},
            {"name": "observationQueueLen", "type": "uint16"},
            {"name": "observationNextQueueLen", "type": "uint16"},
            {"name": "locked", "type": "bool"},
            {"name": "liquidity", "type": "uint128"},
            {"name": "liquidityX", "type": "uint128"}
        ],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "pointDelta",
        "outputs": [{"name": "", "type": "int24"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "tokenX",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "tokenY",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "fee",
        "outputs": [{"name": "", "type": "uint24"}],
        "stateMutability": "view",
        "type": "function"
    }
]

ERC20_ABI = [
    {"inputs": [], "name": "decimals", "outputs": [{"type": "uint8"}], "stateMutability": "view", "type": "function"},
    {"inputs": [], "name": "symbol", "outputs": [{"type": "string"}], "stateMutability": "view", "type": "function"},
    {"inputs": [], "name": "name", "outputs": [{"type": "string"}], "stateMutability": "view", "type": "function"},
    {"inputs": [{"name": "account", "type": "address"}], "name": "balanceOf", "outputs": [{"type": "uint256"}], "stateMutability": "view", "type": "function"},
]
