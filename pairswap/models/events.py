"""Event records emitted by registry, pools and asset ledgers.

Events are appended to the host's event log and discarded with everything
else when an operation rolls back.
"""

from pydantic import BaseModel, ConfigDict

from pairswap.models.types import Address, Uint112, Uint256


class Event(BaseModel):
    """Base event. ``address`` is the emitting contract."""

    model_config = ConfigDict(frozen=True)

    address: Address


class Transfer(Event):
    """Asset or share movement. Mints come from, burns go to, the zero address."""

    sender: Address
    recipient: Address
    value: Uint256


class Approval(Event):
    owner: Address
    spender: Address
    value: Uint256


class PairCreated(Event):
    """A registry created a pool; ``pair_count`` is the new length of all_pairs."""

    token0: Address
    token1: Address
    pair: Address
    pair_count: int


class Mint(Event):
    sender: Address
    amount0: Uint256
    amount1: Uint256


class Burn(Event):
    sender: Address
    amount0: Uint256
    amount1: Uint256
    to: Address


class Swap(Event):
    sender: Address
    amount0_in: Uint256
    amount1_in: Uint256
    amount0_out: Uint256
    amount1_out: Uint256
    to: Address


class Sync(Event):
    reserve0: Uint112
    reserve1: Uint112


class FeeRecipientChanged(Event):
    fee_recipient: Address


class FeeAdminChanged(Event):
    fee_admin: Address


__all__ = [
    "Event",
    "Transfer",
    "Approval",
    "PairCreated",
    "Mint",
    "Burn",
    "Swap",
    "Sync",
    "FeeRecipientChanged",
    "FeeAdminChanged",
]
