"""Checked asset transfer.

Ledgers disagree on what a successful transfer returns: most return True,
some return nothing. A pool must accept both and must never treat an
explicit False as success.
"""

from __future__ import annotations

from pairswap.errors import TokenError, TransferFailedError, UnknownContractError
from pairswap.host.chain import Chain
from pairswap.tokens.interfaces import AssetLedger

__all__ = ["safe_transfer", "balance_of"]


def safe_transfer(chain: Chain, token: str, to: str, value: int, *, sender: str) -> None:
    """Transfer ``value`` of ``token`` from ``sender`` to ``to`` or fail loudly.

    Args:
        chain: Host the token lives on
        token: Asset address
        to: Recipient address
        value: Amount to move
        sender: Account whose balance is debited (the calling contract)

    Raises:
        TransferFailedError: If the ledger returns False, raises a ledger
            error, or no asset ledger lives at ``token``
    """
    try:
        ledger = chain.get(token, AssetLedger)
        result = ledger.transfer(to, value, sender=sender)
    except (TokenError, UnknownContractError) as err:
        raise TransferFailedError(f"Transfer of {value} {token} to {to} failed: {err}") from err
    if result is not None and result is not True:
        raise TransferFailedError(f"Transfer of {value} {token} to {to} returned {result!r}")


def balance_of(chain: Chain, token: str, owner: str) -> int:
    """Balance of ``owner`` in ``token`` as reported by the ledger."""
    return chain.get(token, AssetLedger).balance_of(owner)
