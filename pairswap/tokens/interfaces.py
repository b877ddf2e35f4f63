"""Protocols for the fungible-asset ledger a pool consumes."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AssetLedger(Protocol):
    """Balance-query and transfer primitives of an asset.

    ``transfer`` either succeeds or raises. Some implementations return
    ``True`` on success, others return nothing at all; callers go through
    ``safe_transfer`` so both are accepted.
    """

    address: str

    def balance_of(self, owner: str) -> int: ...

    def transfer(self, to: str, value: int, *, sender: str) -> bool | None: ...
