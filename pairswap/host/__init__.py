"""In-process host environment: contract table, block time, events, rollback."""

from pairswap.host.address import compute_create2_address, compute_create_address
from pairswap.host.chain import Chain, Contract, external

__all__ = [
    "Chain",
    "Contract",
    "external",
    "compute_create_address",
    "compute_create2_address",
]
