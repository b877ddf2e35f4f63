"""Shared type definitions for pairswap models.

These types are used across events, contracts and helpers.
"""

import re
from typing import Annotated

from pydantic import Field

from pairswap.errors import InvalidAddressError
from pairswap.safe_int import UINT112_MAX, UINT256_MAX

ZERO_ADDRESS = "0x" + "00" * 20

# Ethereum-style address (40 hex chars after 0x prefix)
ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)

# Unsigned integers, validated against their on-ledger widths
Uint112 = Annotated[int, Field(ge=0, le=UINT112_MAX)]
Uint256 = Annotated[int, Field(ge=0, le=UINT256_MAX)]

# Arbitrary bytes carried to a swap callback
Bytes = bytes


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an address to lowercase.

    Lowercase hex of equal length sorts the same way the underlying 160-bit
    integers do, so normalized addresses can be compared directly when
    canonicalizing a pair.

    Args:
        address: An address (with or without 0x prefix)
        validate: If True, raises InvalidAddressError for invalid addresses.
                  If False (default), returns normalized form without validation.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        InvalidAddressError: If validate=True and address is not a valid address
    """
    if not isinstance(address, str):
        raise InvalidAddressError(f"Address must be str, got {type(address).__name__}")

    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise InvalidAddressError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid address.

    Args:
        address: String to validate

    Returns:
        True if valid address format
    """
    if not isinstance(address, str):
        return False
    return _ADDRESS_RE.fullmatch(address) is not None


def address_to_bytes(address: str) -> bytes:
    """Convert a validated address to its 20 raw bytes."""
    return bytes.fromhex(normalize_address(address, validate=True)[2:])


def bytes_to_address(raw: bytes) -> str:
    """Convert the low 20 bytes of a hash or word to a normalized address."""
    return "0x" + raw[-20:].hex()
