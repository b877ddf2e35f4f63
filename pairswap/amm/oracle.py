"""Time-weighted average prices from pool accumulators.

A pool only advances its accumulators when it is touched. To observe the
value "as of now" without a ledger write, the counterfactual contribution of
the current reserves since the last update is added here, mirroring the
pool's own arithmetic exactly.
"""

from __future__ import annotations

from dataclasses import dataclass

from pairswap.amm.pool import LiquidityPool
from pairswap.math.uq112x112 import UQ112x112
from pairswap.safe_int import UINT32_MODULUS, S


@dataclass(frozen=True)
class PriceObservation:
    """Accumulator snapshot of one pool at one block timestamp.

    Attributes:
        timestamp: Block timestamp modulo 2^32
        price0_cumulative: UQ112x112 token0 price x seconds, modulo 2^256
        price1_cumulative: UQ112x112 token1 price x seconds, modulo 2^256
    """

    timestamp: int
    price0_cumulative: int
    price1_cumulative: int


def current_block_timestamp(pool: LiquidityPool) -> int:
    """Block timestamp truncated to the 32 bits pools record."""
    return pool.chain.timestamp % UINT32_MODULUS


def current_cumulative_prices(pool: LiquidityPool) -> PriceObservation:
    """Accumulators as they would read if the pool were updated now."""
    block_timestamp = current_block_timestamp(pool)
    price0_cumulative = pool.price0_cumulative_last
    price1_cumulative = pool.price1_cumulative_last

    reserve0, reserve1, block_timestamp_last = pool.get_reserves()
    if block_timestamp_last != block_timestamp and reserve0 != 0 and reserve1 != 0:
        time_elapsed = S(block_timestamp).wrapping_sub(block_timestamp_last).value
        price0_cumulative = (
            S(price0_cumulative)
            .wrapping_add(UQ112x112.ratio(reserve1, reserve0).value * time_elapsed)
            .value
        )
        price1_cumulative = (
            S(price1_cumulative)
            .wrapping_add(UQ112x112.ratio(reserve0, reserve1).value * time_elapsed)
            .value
        )
    return PriceObservation(block_timestamp, price0_cumulative, price1_cumulative)


def average_prices(
    start: PriceObservation, end: PriceObservation
) -> tuple[UQ112x112, UQ112x112]:
    """Time-weighted (price0, price1) between two observations.

    Elapsed time is taken modulo 2^32, so one timestamp wrap between the
    observations is harmless.

    Raises:
        ZeroDivisionError: If both observations share a timestamp
    """
    elapsed = S(end.timestamp).wrapping_sub(start.timestamp).value
    return (
        UQ112x112.average(start.price0_cumulative, end.price0_cumulative, elapsed),
        UQ112x112.average(start.price1_cumulative, end.price1_cumulative, elapsed),
    )


def consult(average_price: UQ112x112, amount_in: int) -> int:
    """Amount out for ``amount_in`` at an averaged price, rounded down."""
    return average_price.mul_decode(amount_in)


__all__ = [
    "PriceObservation",
    "current_block_timestamp",
    "current_cumulative_prices",
    "average_prices",
    "consult",
]
