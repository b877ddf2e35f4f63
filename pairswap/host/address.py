"""Contract address derivation.

Both schemes hash with keccak256 and keep the low 20 bytes:
- CREATE-style: keccak256(abi.encodePacked(deployer, nonce))
- CREATE2-style: keccak256(0xff ++ deployer ++ salt ++ init_code_hash)

CREATE2 addresses depend only on their inputs, which is what lets the
registry (and anyone off-ledger) know a pool's address before it exists.
"""

from __future__ import annotations

from eth_abi.packed import encode_packed
from eth_utils import keccak

from pairswap.models.types import address_to_bytes, bytes_to_address

__all__ = ["compute_create_address", "compute_create2_address"]

CREATE2_PREFIX = b"\xff"


def compute_create_address(deployer: str, nonce: int) -> str:
    """Address of the nonce-th contract deployed by ``deployer``.

    Args:
        deployer: Deploying account or contract
        nonce: Number of contracts the deployer created before this one

    Returns:
        Normalized lowercase address
    """
    if nonce < 0:
        raise ValueError(f"Nonce cannot be negative: {nonce}")
    digest = keccak(encode_packed(["address", "uint256"], [address_to_bytes(deployer), nonce]))
    return bytes_to_address(digest)


def compute_create2_address(deployer: str, salt: bytes, init_code_hash: bytes) -> str:
    """Deterministic address for ``(deployer, salt, init_code_hash)``.

    Args:
        deployer: Deploying contract
        salt: 32-byte salt chosen by the deployer
        init_code_hash: 32-byte keccak256 of the contract's init code

    Returns:
        Normalized lowercase address

    Raises:
        ValueError: If salt or init_code_hash is not 32 bytes
    """
    if len(salt) != 32:
        raise ValueError(f"Salt must be 32 bytes, got {len(salt)}")
    if len(init_code_hash) != 32:
        raise ValueError(f"Init code hash must be 32 bytes, got {len(init_code_hash)}")
    digest = keccak(CREATE2_PREFIX + address_to_bytes(deployer) + salt + init_code_hash)
    return bytes_to_address(digest)
