"""pairswap - constant-product AMM pools and their pair registry."""

from pairswap.amm import LiquidityPool, PairRegistry
from pairswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from pairswap.host import Chain

__version__ = "0.1.0"
__all__ = [
    "Chain",
    "LiquidityPool",
    "PairRegistry",
    "PoolConfig",
    "DEFAULT_POOL_CONFIG",
    "__version__",
]
