"""Constant-product AMM: pools, the pair registry and helpers."""

from pairswap.amm.interfaces import FeeSource, PairDirectory, ReserveSource, SwapCallee
from pairswap.amm.library import (
    ConstantProductMath,
    constant_product,
    get_reserves,
    pair_for,
    pair_salt,
    sort_tokens,
)
from pairswap.amm.oracle import (
    PriceObservation,
    average_prices,
    consult,
    current_cumulative_prices,
)
from pairswap.amm.pool import LiquidityPool
from pairswap.amm.registry import PairRegistry

__all__ = [
    # Contracts
    "LiquidityPool",
    "PairRegistry",
    # Capabilities
    "SwapCallee",
    "FeeSource",
    "PairDirectory",
    "ReserveSource",
    # Pair helpers
    "sort_tokens",
    "pair_salt",
    "pair_for",
    "get_reserves",
    # Quoting
    "ConstantProductMath",
    "constant_product",
    # Price observation
    "PriceObservation",
    "current_cumulative_prices",
    "average_prices",
    "consult",
]
