"""Pair registry: deterministic pool creation and the protocol-fee switch.

One pool exists per unordered asset pair. Its address is the CREATE2
address of (registry, keccak256(token0 ++ token1), pool init-code hash),
so it can be computed off-ledger with ``pairswap.amm.library.pair_for``
before or after the pool exists.
"""

from __future__ import annotations

from typing import ClassVar

import structlog

from pairswap.amm.library import pair_salt, sort_tokens
from pairswap.amm.pool import LiquidityPool
from pairswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from pairswap.errors import AuthorizationError, PairExistsError
from pairswap.host.chain import Chain, Contract, external
from pairswap.models.events import FeeAdminChanged, FeeRecipientChanged, PairCreated
from pairswap.models.types import ZERO_ADDRESS, normalize_address

logger = structlog.get_logger()


class PairRegistry(Contract):
    """Creates and indexes pools, and administers the protocol-fee recipient.

    Pools are held as addresses, never as objects; resolve one with
    ``chain.get(address, LiquidityPool)``.

    Args:
        fee_admin: Account allowed to change the fee recipient and itself
        config: Parameters every pool created by this registry uses
    """

    STATE_FIELDS: ClassVar[tuple[str, ...]] = (
        "_fee_recipient",
        "_fee_admin",
        "_pairs",
        "_all_pairs",
    )

    def __init__(
        self,
        chain: Chain,
        address: str,
        *,
        deployer: str,
        fee_admin: str,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        super().__init__(chain, address, deployer=deployer)
        self.config = config
        self._fee_recipient = ZERO_ADDRESS
        self._fee_admin = normalize_address(fee_admin, validate=True)
        # Both orderings of a pair map to the same pool address
        self._pairs: dict[tuple[str, str], str] = {}
        self._all_pairs: list[str] = []

    # --- Views ---

    @property
    def fee_recipient(self) -> str:
        """Protocol-fee recipient; the zero address means the fee is off."""
        return self._fee_recipient

    @property
    def fee_admin(self) -> str:
        return self._fee_admin

    def get_pair(self, token_a: str, token_b: str) -> str | None:
        """Pool address for a pair in either order, or None if never created."""
        return self._pairs.get((normalize_address(token_a), normalize_address(token_b)))

    def all_pairs(self, index: int) -> str:
        """Pool address at ``index`` in creation order.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self._all_pairs):
            raise IndexError(f"Pair index {index} out of range ({len(self._all_pairs)} pairs)")
        return self._all_pairs[index]

    def all_pairs_length(self) -> int:
        return len(self._all_pairs)

    # --- Entry points ---

    @external
    def create_pair(self, token_a: str, token_b: str, *, sender: str) -> str:
        """Deploy and initialize the pool for an unordered pair.

        Args:
            token_a: One asset (either order)
            token_b: The other asset
            sender: Caller; anyone may create a pair

        Returns:
            Address of the new pool

        Raises:
            DuplicateAssetError: If token_a == token_b
            ZeroAssetError: If either asset is the zero address
            PairExistsError: If a pool exists for the pair in either order
        """
        token0, token1 = sort_tokens(token_a, token_b)
        if (token0, token1) in self._pairs:
            raise PairExistsError(f"Pair {token0}/{token1} already exists")

        pool = self.chain.deploy_deterministic(
            LiquidityPool,
            sender=self.address,
            salt=pair_salt(token0, token1),
            init_code_hash=self.config.init_code_hash,
            config=self.config,
        )
        pool.initialize(token0, token1, sender=self.address)

        self._pairs[(token0, token1)] = pool.address
        self._pairs[(token1, token0)] = pool.address
        self._all_pairs.append(pool.address)
        self.emit(
            PairCreated,
            token0=token0,
            token1=token1,
            pair=pool.address,
            pair_count=len(self._all_pairs),
        )

        logger.info(
            "pair_created",
            registry=self.address[-8:],
            pair=pool.address[-8:],
            token0=token0[-8:],
            token1=token1[-8:],
            creator=normalize_address(sender)[-8:],
            pair_count=len(self._all_pairs),
        )
        return pool.address

    @external
    def set_fee_recipient(self, fee_recipient: str, *, sender: str) -> None:
        """Turn the protocol fee on (non-zero recipient) or off (zero address)."""
        self._require_admin(sender)
        self._fee_recipient = normalize_address(fee_recipient, validate=True)
        self.emit(FeeRecipientChanged, fee_recipient=self._fee_recipient)
        logger.info(
            "fee_recipient_changed",
            registry=self.address[-8:],
            fee_recipient=self._fee_recipient[-8:],
        )

    @external
    def set_fee_admin(self, fee_admin: str, *, sender: str) -> None:
        """Hand fee administration to another account."""
        self._require_admin(sender)
        self._fee_admin = normalize_address(fee_admin, validate=True)
        self.emit(FeeAdminChanged, fee_admin=self._fee_admin)
        logger.info(
            "fee_admin_changed",
            registry=self.address[-8:],
            fee_admin=self._fee_admin[-8:],
        )

    def _require_admin(self, sender: str) -> None:
        if normalize_address(sender) != self._fee_admin:
            raise AuthorizationError(f"Only the fee admin {self._fee_admin} may call")


__all__ = ["PairRegistry"]
