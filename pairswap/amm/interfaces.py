"""Capabilities a pool consumes from the contracts around it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pairswap.config import PoolConfig


@runtime_checkable
class SwapCallee(Protocol):
    """Flash-swap recipient.

    A pool calls ``swap_callback`` after optimistically sending the requested
    outputs and before checking what was paid back. ``caller`` is whoever
    invoked ``swap``; ``sender`` is the pool itself. The callee repays by
    transferring assets to the pool before returning; anything it does in
    between, including trading on other pools, is allowed.
    """

    def swap_callback(
        self,
        caller: str,
        amount0_out: int,
        amount1_out: int,
        data: bytes,
        *,
        sender: str,
    ) -> None: ...


@runtime_checkable
class FeeSource(Protocol):
    """Read-only view of the registry's protocol-fee configuration.

    Pools hold only the registry's address and resolve it on every fee
    check, so a change of recipient takes effect on the next liquidity
    event without touching any pool.
    """

    @property
    def fee_recipient(self) -> str: ...


@runtime_checkable
class PairDirectory(Protocol):
    """Registry view used to locate a pair's pool without importing the registry."""

    config: PoolConfig

    def get_pair(self, token_a: str, token_b: str) -> str | None: ...


@runtime_checkable
class ReserveSource(Protocol):
    """Anything that reports (reserve0, reserve1, block_timestamp_last)."""

    def get_reserves(self) -> tuple[int, int, int]: ...
