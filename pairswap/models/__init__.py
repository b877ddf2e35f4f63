"""Data models for pairswap."""

from pairswap.models.events import (
    Approval,
    Burn,
    Event,
    FeeAdminChanged,
    FeeRecipientChanged,
    Mint,
    PairCreated,
    Swap,
    Sync,
    Transfer,
)
from pairswap.models.types import (
    ZERO_ADDRESS,
    Address,
    is_valid_address,
    normalize_address,
)

__all__ = [
    # Types
    "Address",
    "ZERO_ADDRESS",
    "normalize_address",
    "is_valid_address",
    # Events
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
