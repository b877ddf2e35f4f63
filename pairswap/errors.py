"""Error classes for pairswap.

Every error aborts the operation that raised it. The host rolls back all
state the operation (and anything it called) touched, so callers observe a
typed failure and an unchanged ledger.
"""


class PairswapError(Exception):
    """Base error for registry, pool, ledger and host failures."""

    pass


# =============================================================================
# Authorization
# =============================================================================


class AuthorizationError(PairswapError):
    """A restricted setter or initializer was called by the wrong actor."""

    pass


class AlreadyInitializedError(AuthorizationError):
    """Pool initialize() was called a second time."""

    pass


# =============================================================================
# Validation
# =============================================================================


class ValidationError(PairswapError):
    """Arguments are malformed or describe an impossible request."""

    pass


class InvalidAddressError(ValidationError):
    """Value is not a 0x-prefixed 20-byte hex address."""

    pass


class DuplicateAssetError(ValidationError):
    """Both sides of a pair are the same asset."""

    pass


class ZeroAssetError(ValidationError):
    """One side of a pair is the zero address."""

    pass


class PairExistsError(ValidationError):
    """A pool already exists for this unordered pair."""

    pass


class PoolNotInitializedError(ValidationError):
    """Trading or liquidity operation on a pool that was never initialized."""

    pass


class InsufficientOutputAmountError(ValidationError):
    """Swap requested zero output of both assets."""

    pass


class InvalidRecipientError(ValidationError):
    """Swap output directed to one of the pool's own asset contracts."""

    pass


class CallbackNotSupportedError(ValidationError):
    """Swap carried callback data but the recipient has no swap callback."""

    pass


class ReentrancyError(ValidationError):
    """A pool entry point was called while another call on the same pool is running."""

    pass


# =============================================================================
# Liquidity
# =============================================================================


class LiquidityError(PairswapError):
    """Share or reserve amounts are insufficient for the operation."""

    pass


class InsufficientLiquidityMintedError(LiquidityError):
    """Deposit would mint zero shares."""

    pass


class InsufficientLiquidityBurnedError(LiquidityError):
    """Burn would return zero of one of the assets."""

    pass


class InsufficientLiquidityError(LiquidityError):
    """Requested output is not covered by the reserve."""

    pass


# =============================================================================
# Invariant
# =============================================================================


class InvariantViolationError(PairswapError):
    """Fee-adjusted product of balances fell below the product of reserves."""

    pass


class InsufficientInputAmountError(InvariantViolationError):
    """Swap ended without any net input of either asset."""

    pass


# =============================================================================
# Range
# =============================================================================


class RangeError(PairswapError):
    """Balance exceeds the 112-bit width reserves are stored in."""

    pass


# =============================================================================
# Asset ledger
# =============================================================================


class TokenError(PairswapError):
    """Base error for fungible-asset ledger operations."""

    pass


class InsufficientBalanceError(TokenError):
    """Sender balance is lower than the transfer amount."""

    pass


class InsufficientAllowanceError(TokenError):
    """Spender allowance is lower than the transfer amount."""

    pass


class TransferFailedError(TokenError):
    """Asset transfer reported failure or raised a ledger error."""

    pass


# =============================================================================
# Host
# =============================================================================


class HostError(PairswapError):
    """Base error for the in-process host environment."""

    pass


class UnknownContractError(HostError):
    """No contract of the expected kind lives at the address."""

    pass


class AddressCollisionError(HostError):
    """Deterministic deployment targets an occupied address."""

    pass


__all__ = [
    "PairswapError",
    "AuthorizationError",
    "AlreadyInitializedError",
    "ValidationError",
    "InvalidAddressError",
    "DuplicateAssetError",
    "ZeroAssetError",
    "PairExistsError",
    "PoolNotInitializedError",
    "InsufficientOutputAmountError",
    "InvalidRecipientError",
    "CallbackNotSupportedError",
    "ReentrancyError",
    "LiquidityError",
    "InsufficientLiquidityMintedError",
    "InsufficientLiquidityBurnedError",
    "InsufficientLiquidityError",
    "InvariantViolationError",
    "InsufficientInputAmountError",
    "RangeError",
    "TokenError",
    "InsufficientBalanceError",
    "InsufficientAllowanceError",
    "TransferFailedError",
    "HostError",
    "UnknownContractError",
    "AddressCollisionError",
]
