"""Constant-product liquidity pool.

A pool holds reserves of two assets and is itself the ledger of the shares
that claim them. Pricing follows x * y = k with a fee charged on input:

    (balance0 * 1000 - amount0_in * 3) * (balance1 * 1000 - amount1_in * 3)
        >= reserve0 * reserve1 * 1000^2

Callers push assets before calling mint/swap and push shares before calling
burn; the pool infers amounts from the difference between its balances and
its recorded reserves and never pulls funds itself.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import ClassVar, Concatenate, ParamSpec, TypeVar

import structlog

from pairswap.amm.interfaces import FeeSource, SwapCallee
from pairswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from pairswap.errors import (
    AlreadyInitializedError,
    AuthorizationError,
    CallbackNotSupportedError,
    DuplicateAssetError,
    InsufficientInputAmountError,
    InsufficientLiquidityBurnedError,
    InsufficientLiquidityError,
    InsufficientLiquidityMintedError,
    InsufficientOutputAmountError,
    InvalidRecipientError,
    InvariantViolationError,
    PoolNotInitializedError,
    RangeError,
    ReentrancyError,
    UnknownContractError,
    ValidationError,
)
from pairswap.host.chain import Chain, external
from pairswap.math import UQ112x112, isqrt
from pairswap.models.events import Burn, Mint, Swap, Sync
from pairswap.models.types import ZERO_ADDRESS, normalize_address
from pairswap.safe_int import UINT32_MODULUS, S
from pairswap.tokens.erc20 import FungibleToken
from pairswap.tokens.safe_transfer import balance_of, safe_transfer

logger = structlog.get_logger()

P = ParamSpec("P")
T = TypeVar("T")
PoolT = TypeVar("PoolT", bound="LiquidityPool")


def lock(fn: Callable[Concatenate[PoolT, P], T]) -> Callable[Concatenate[PoolT, P], T]:
    """Hold the pool's lock for the duration of a state-changing entry point.

    While a mint, burn, swap, skim or sync is running (including the swap
    callback it hands control to), every other one on the same pool raises
    ReentrancyError. Views stay callable.
    """

    @functools.wraps(fn)
    def wrapper(self: PoolT, /, *args: P.args, **kwargs: P.kwargs) -> T:
        if not self._unlocked:
            raise ReentrancyError(f"Pool {self.address} is locked by a call in progress")
        self._unlocked = False
        try:
            return fn(self, *args, **kwargs)
        finally:
            self._unlocked = True

    return wrapper


class LiquidityPool(FungibleToken):
    """Reserves, share ledger and swap/mint/burn logic for one asset pair.

    Created and initialized once by a PairRegistry. The pool keeps only the
    registry's address and reads the protocol-fee recipient from it on
    demand.

    Attributes:
        factory: Address of the registry that created this pool
        token0: Lower-ordered asset (None until initialized)
        token1: Higher-ordered asset (None until initialized)
        price0_cumulative_last: UQ112x112 sum of token0 price (in token1) x seconds
        price1_cumulative_last: UQ112x112 sum of token1 price (in token0) x seconds
        k_last: reserve0 * reserve1 after the last liquidity event, while the
            protocol fee is on
    """

    STATE_FIELDS: ClassVar[tuple[str, ...]] = (
        "token0",
        "token1",
        "_reserve0",
        "_reserve1",
        "_block_timestamp_last",
        "price0_cumulative_last",
        "price1_cumulative_last",
        "k_last",
        "_unlocked",
    )

    def __init__(
        self,
        chain: Chain,
        address: str,
        *,
        deployer: str,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
    ) -> None:
        super().__init__(
            chain,
            address,
            deployer=deployer,
            name=config.share_name,
            symbol=config.share_symbol,
            decimals=config.share_decimals,
        )
        self.config = config
        self.factory = deployer
        self.token0: str | None = None
        self.token1: str | None = None
        self._reserve0 = 0
        self._reserve1 = 0
        self._block_timestamp_last = 0
        self.price0_cumulative_last = 0
        self.price1_cumulative_last = 0
        self.k_last = 0
        self._unlocked = True

    # --- Views ---

    @property
    def initialized(self) -> bool:
        return self.token0 is not None

    def get_reserves(self) -> tuple[int, int, int]:
        """Return (reserve0, reserve1, block_timestamp_last)."""
        return self._reserve0, self._reserve1, self._block_timestamp_last

    # --- Entry points ---

    @external
    def initialize(self, token0: str, token1: str, *, sender: str) -> None:
        """Bind the pool to its assets. Registry-only, exactly once.

        Raises:
            AuthorizationError: If sender is not the creating registry
            AlreadyInitializedError: If the pool is already bound
            DuplicateAssetError: If token0 and token1 are the same asset
            ValidationError: If token0 does not sort below token1
        """
        if normalize_address(sender) != self.factory:
            raise AuthorizationError(f"Only the registry {self.factory} may initialize")
        if self.initialized:
            raise AlreadyInitializedError(f"Pool {self.address} is already initialized")
        token0 = normalize_address(token0, validate=True)
        token1 = normalize_address(token1, validate=True)
        if token0 == token1:
            raise DuplicateAssetError(f"Pool assets are identical: {token0}")
        if token0 > token1:
            raise ValidationError(f"Pool assets out of order: {token0} > {token1}")
        self.token0 = token0
        self.token1 = token1

    @external
    @lock
    def mint(self, to: str, *, sender: str) -> int:
        """Issue shares for the assets sent to the pool since the last update.

        Args:
            to: Share recipient
            sender: Caller (recorded in the Mint event)

        Returns:
            Number of shares minted to ``to``

        Raises:
            InsufficientLiquidityMintedError: If the deposit is worth zero shares
                or a balance is below its reserve
            ReentrancyError: If called while the pool is locked
        """
        token0, token1 = self._require_initialized()
        to = normalize_address(to, validate=True)
        reserve0, reserve1, _ = self.get_reserves()
        balance0 = balance_of(self.chain, token0, self.address)
        balance1 = balance_of(self.chain, token1, self.address)
        if balance0 < reserve0 or balance1 < reserve1:
            raise InsufficientLiquidityMintedError(
                f"Balances ({balance0}, {balance1}) below reserves ({reserve0}, {reserve1})"
            )
        amount0 = (S(balance0) - reserve0).value
        amount1 = (S(balance1) - reserve1).value

        fee_on = self._mint_fee(reserve0, reserve1)
        # Read after _mint_fee, which can grow the supply
        total_supply = self.total_supply
        genesis = total_supply == 0
        if genesis:
            root = S(isqrt((S(amount0) * amount1).value))
            liquidity = root.saturating_sub(self.config.minimum_liquidity).value
        else:
            liquidity = (
                (S(amount0) * total_supply // reserve0)
                .min(S(amount1) * total_supply // reserve1)
                .value
            )
        if liquidity <= 0:
            raise InsufficientLiquidityMintedError(
                f"Deposit of ({amount0}, {amount1}) mints no shares"
            )
        if genesis:
            # Permanently locked: the zero address can never send
            self._mint(ZERO_ADDRESS, self.config.minimum_liquidity)
        self._mint(to, liquidity)

        self._update(balance0, balance1, reserve0, reserve1)
        if fee_on:
            self.k_last = self._reserve0 * self._reserve1
        self.emit(Mint, sender=normalize_address(sender), amount0=amount0, amount1=amount1)

        logger.debug(
            "liquidity_minted",
            pool=self.address[-8:],
            to=to[-8:],
            amount0=amount0,
            amount1=amount1,
            liquidity=liquidity,
            genesis=genesis,
        )
        return liquidity

    @external
    @lock
    def burn(self, to: str, *, sender: str) -> tuple[int, int]:
        """Redeem the shares sent to the pool for a pro-rata slice of both assets.

        Args:
            to: Recipient of the redeemed assets
            sender: Caller (recorded in the Burn event)

        Returns:
            (amount0, amount1) transferred to ``to``

        Raises:
            InsufficientLiquidityBurnedError: If either amount rounds to zero
        """
        token0, token1 = self._require_initialized()
        to = normalize_address(to, validate=True)
        reserve0, reserve1, _ = self.get_reserves()
        balance0 = balance_of(self.chain, token0, self.address)
        balance1 = balance_of(self.chain, token1, self.address)
        liquidity = self.balance_of(self.address)

        fee_on = self._mint_fee(reserve0, reserve1)
        total_supply = self.total_supply
        if total_supply == 0:
            raise InsufficientLiquidityBurnedError(f"Pool {self.address} has no shares")
        # Rounding down keeps the remainder with the pool
        amount0 = (S(liquidity) * balance0 // total_supply).value
        amount1 = (S(liquidity) * balance1 // total_supply).value
        if amount0 <= 0 or amount1 <= 0:
            raise InsufficientLiquidityBurnedError(
                f"Burning {liquidity} shares returns ({amount0}, {amount1})"
            )
        self._burn(self.address, liquidity)
        safe_transfer(self.chain, token0, to, amount0, sender=self.address)
        safe_transfer(self.chain, token1, to, amount1, sender=self.address)
        balance0 = balance_of(self.chain, token0, self.address)
        balance1 = balance_of(self.chain, token1, self.address)

        self._update(balance0, balance1, reserve0, reserve1)
        if fee_on:
            self.k_last = self._reserve0 * self._reserve1
        self.emit(
            Burn,
            sender=normalize_address(sender),
            amount0=amount0,
            amount1=amount1,
            to=to,
        )

        logger.debug(
            "liquidity_burned",
            pool=self.address[-8:],
            to=to[-8:],
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
        )
        return amount0, amount1

    @external
    @lock
    def swap(
        self,
        amount0_out: int,
        amount1_out: int,
        to: str,
        data: bytes = b"",
        *,
        sender: str,
    ) -> None:
        """Send outputs to ``to``, then require the fee-adjusted invariant to hold.

        Outputs leave the pool before any input is checked. If ``data`` is
        non-empty the recipient's swap callback runs in between, so it can
        use the outputs (flash swap) and repay in either asset.

        Args:
            amount0_out: Amount of token0 to send
            amount1_out: Amount of token1 to send
            to: Output recipient (and callback target)
            data: Opaque payload for the recipient's swap callback
            sender: Caller (forwarded to the callback, recorded in the Swap event)

        Raises:
            InsufficientOutputAmountError: If both outputs are zero
            InsufficientLiquidityError: If an output is not below its reserve
            InvalidRecipientError: If ``to`` is one of the pool's assets
            CallbackNotSupportedError: If ``data`` is set but ``to`` has no callback
            InsufficientInputAmountError: If nothing was paid in
            InvariantViolationError: If the fee-adjusted product decreased
            ReentrancyError: If called while the pool is locked
        """
        token0, token1 = self._require_initialized()
        if amount0_out < 0 or amount1_out < 0:
            raise InsufficientOutputAmountError(
                f"Negative output requested: ({amount0_out}, {amount1_out})"
            )
        if amount0_out == 0 and amount1_out == 0:
            raise InsufficientOutputAmountError("Swap requests no output")
        reserve0, reserve1, _ = self.get_reserves()
        if amount0_out >= reserve0 or amount1_out >= reserve1:
            raise InsufficientLiquidityError(
                f"Output ({amount0_out}, {amount1_out}) exceeds reserves ({reserve0}, {reserve1})"
            )
        to = normalize_address(to, validate=True)
        if to in (token0, token1):
            raise InvalidRecipientError(f"Recipient {to} is one of the pool's assets")

        if amount0_out > 0:
            safe_transfer(self.chain, token0, to, amount0_out, sender=self.address)
        if amount1_out > 0:
            safe_transfer(self.chain, token1, to, amount1_out, sender=self.address)
        if data:
            self._invoke_callback(to, normalize_address(sender), amount0_out, amount1_out, data)
        balance0 = balance_of(self.chain, token0, self.address)
        balance1 = balance_of(self.chain, token1, self.address)

        remaining0 = reserve0 - amount0_out
        remaining1 = reserve1 - amount1_out
        amount0_in = balance0 - remaining0 if balance0 > remaining0 else 0
        amount1_in = balance1 - remaining1 if balance1 > remaining1 else 0
        if amount0_in == 0 and amount1_in == 0:
            raise InsufficientInputAmountError("Swap received no input")

        denominator = self.config.swap_fee_denominator
        fee = self.config.swap_fee_numerator
        balance0_adjusted = S(balance0) * denominator - S(amount0_in) * fee
        balance1_adjusted = S(balance1) * denominator - S(amount1_in) * fee
        k_before = S(reserve0) * reserve1 * (denominator * denominator)
        if balance0_adjusted * balance1_adjusted < k_before:
            raise InvariantViolationError(
                f"Fee-adjusted balances ({balance0}, {balance1}) fall below "
                f"reserves ({reserve0}, {reserve1})"
            )

        self._update(balance0, balance1, reserve0, reserve1)
        self.emit(
            Swap,
            sender=normalize_address(sender),
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
            to=to,
        )

        logger.debug(
            "swap_executed",
            pool=self.address[-8:],
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
            flash=bool(data),
        )

    @external
    @lock
    def skim(self, to: str) -> tuple[int, int]:
        """Send balances in excess of the reserves to ``to``.

        Returns:
            (excess0, excess1) transferred
        """
        token0, token1 = self._require_initialized()
        to = normalize_address(to, validate=True)
        excess0 = S(balance_of(self.chain, token0, self.address)).saturating_sub(self._reserve0)
        excess1 = S(balance_of(self.chain, token1, self.address)).saturating_sub(self._reserve1)
        if excess0 > 0:
            safe_transfer(self.chain, token0, to, excess0.value, sender=self.address)
        if excess1 > 0:
            safe_transfer(self.chain, token1, to, excess1.value, sender=self.address)

        logger.debug(
            "excess_skimmed",
            pool=self.address[-8:],
            to=to[-8:],
            excess0=excess0.value,
            excess1=excess1.value,
        )
        return excess0.value, excess1.value

    @external
    @lock
    def sync(self) -> None:
        """Force the reserves to match the current balances."""
        token0, token1 = self._require_initialized()
        self._update(
            balance_of(self.chain, token0, self.address),
            balance_of(self.chain, token1, self.address),
            self._reserve0,
            self._reserve1,
        )

    # --- Internal accounting ---

    def _require_initialized(self) -> tuple[str, str]:
        if self.token0 is None or self.token1 is None:
            raise PoolNotInitializedError(f"Pool {self.address} is not initialized")
        return self.token0, self.token1

    def _invoke_callback(
        self,
        to: str,
        caller: str,
        amount0_out: int,
        amount1_out: int,
        data: bytes,
    ) -> None:
        try:
            callee = self.chain.get(to, SwapCallee)
        except UnknownContractError as err:
            raise CallbackNotSupportedError(
                f"Recipient {to} cannot receive swap callbacks"
            ) from err
        callee.swap_callback(caller, amount0_out, amount1_out, data, sender=self.address)

    def _update(self, balance0: int, balance1: int, reserve0: int, reserve1: int) -> None:
        """Commit balances as reserves and advance the price accumulators.

        The accumulators add the price that held *before* this update, weighted
        by how long it held. Elapsed time wraps with the 32-bit timestamp.

        Raises:
            RangeError: If a balance does not fit in 112 bits
        """
        if not (S(balance0).is_uint112() and S(balance1).is_uint112()):
            raise RangeError(f"Balances ({balance0}, {balance1}) exceed uint112")
        block_timestamp = self.chain.timestamp % UINT32_MODULUS
        time_elapsed = S(block_timestamp).wrapping_sub(self._block_timestamp_last).value
        if time_elapsed > 0 and reserve0 != 0 and reserve1 != 0:
            price0 = UQ112x112.ratio(reserve1, reserve0).value
            price1 = UQ112x112.ratio(reserve0, reserve1).value
            self.price0_cumulative_last = (
                S(self.price0_cumulative_last).wrapping_add(price0 * time_elapsed).value
            )
            self.price1_cumulative_last = (
                S(self.price1_cumulative_last).wrapping_add(price1 * time_elapsed).value
            )
        self._reserve0 = balance0
        self._reserve1 = balance1
        self._block_timestamp_last = block_timestamp
        self.emit(Sync, reserve0=balance0, reserve1=balance1)

        logger.debug(
            "reserves_synced",
            pool=self.address[-8:],
            reserve0=balance0,
            reserve1=balance1,
            time_elapsed=time_elapsed,
        )

    def _mint_fee(self, reserve0: int, reserve1: int) -> bool:
        """Mint the protocol's share of sqrt(k) growth since the last liquidity event.

        Returns:
            True if a fee recipient is configured
        """
        fee_recipient = self.chain.get(self.factory, FeeSource).fee_recipient
        fee_on = fee_recipient != ZERO_ADDRESS
        k_last = self.k_last
        if fee_on:
            if k_last != 0:
                root_k = isqrt(reserve0 * reserve1)
                root_k_last = isqrt(k_last)
                if root_k > root_k_last:
                    numerator = S(self.total_supply) * (S(root_k) - root_k_last)
                    denominator = S(root_k) * self.config.protocol_fee_divisor + root_k_last
                    liquidity = (numerator // denominator).value
                    if liquidity > 0:
                        self._mint(fee_recipient, liquidity)
                        logger.debug(
                            "protocol_fee_minted",
                            pool=self.address[-8:],
                            fee_recipient=fee_recipient[-8:],
                            liquidity=liquidity,
                        )
        elif k_last != 0:
            self.k_last = 0
        return fee_on


__all__ = ["LiquidityPool"]
