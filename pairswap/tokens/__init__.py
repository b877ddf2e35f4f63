"""Fungible-asset ledgers and the checked transfer wrapper."""

from pairswap.tokens.erc20 import FungibleToken, MintableToken
from pairswap.tokens.interfaces import AssetLedger
from pairswap.tokens.safe_transfer import balance_of, safe_transfer

__all__ = [
    "AssetLedger",
    "FungibleToken",
    "MintableToken",
    "safe_transfer",
    "balance_of",
]
