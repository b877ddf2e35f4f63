"""Single-pool helpers: pair addressing and constant-product quoting.

Formula: amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)

The 997/1000 factor accounts for the 0.3% fee. get_amount_out rounds down
and get_amount_in rounds up, so a swap sized with either always satisfies
the pool's invariant check.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from eth_abi.packed import encode_packed
from eth_utils import keccak

from pairswap.amm.interfaces import PairDirectory, ReserveSource
from pairswap.config import DEFAULT_POOL_CONFIG, PoolConfig
from pairswap.errors import DuplicateAssetError, ZeroAssetError
from pairswap.host.address import compute_create2_address
from pairswap.models.types import ZERO_ADDRESS, address_to_bytes, normalize_address
from pairswap.safe_int import UINT256_MAX, S

if TYPE_CHECKING:
    from pairswap.host.chain import Chain


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Canonical (token0, token1) ordering of a pair.

    Raises:
        InvalidAddressError: If either value is not an address
        DuplicateAssetError: If both are the same asset
        ZeroAssetError: If either is the zero address
    """
    token_a = normalize_address(token_a, validate=True)
    token_b = normalize_address(token_b, validate=True)
    if token_a == token_b:
        raise DuplicateAssetError(f"Identical assets: {token_a}")
    token0, token1 = (token_a, token_b) if token_a < token_b else (token_b, token_a)
    # token0 is the smaller, so checking it covers both
    if token0 == ZERO_ADDRESS:
        raise ZeroAssetError("Pair contains the zero address")
    return token0, token1


def pair_salt(token0: str, token1: str) -> bytes:
    """keccak256(abi.encodePacked(token0, token1)) for a sorted pair."""
    return keccak(
        encode_packed(["address", "address"], [address_to_bytes(token0), address_to_bytes(token1)])
    )


def pair_for(
    registry: str,
    token_a: str,
    token_b: str,
    config: PoolConfig = DEFAULT_POOL_CONFIG,
) -> str:
    """Pool address for a pair, computed without touching the ledger.

    Args:
        registry: Address of the registry that creates (or created) the pool
        token_a: One asset (either order)
        token_b: The other asset
        config: The registry's pool configuration

    Returns:
        The address create_pair deploys, or deployed, the pool at
    """
    token0, token1 = sort_tokens(token_a, token_b)
    return compute_create2_address(
        normalize_address(registry, validate=True),
        pair_salt(token0, token1),
        config.init_code_hash,
    )


def get_reserves(chain: Chain, registry: str, token_a: str, token_b: str) -> tuple[int, int]:
    """Reserves of the pair's pool ordered as (reserve_a, reserve_b).

    Raises:
        UnknownContractError: If the pool has not been created
    """
    config = chain.get(registry, PairDirectory).config
    token0, _ = sort_tokens(token_a, token_b)
    pool = chain.get(pair_for(registry, token_a, token_b, config), ReserveSource)
    reserve0, reserve1, _ = pool.get_reserves()
    if normalize_address(token_a) == token0:
        return reserve0, reserve1
    return reserve1, reserve0


class ConstantProductMath:
    """Constant-product quoting for one pool.

    Args:
        config: Pool parameters supplying the fee (default 3/1000)
    """

    def __init__(self, config: PoolConfig = DEFAULT_POOL_CONFIG) -> None:
        self.config = config

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        """Equivalent amount of B at the current reserve ratio, without fee.

        Used to size a balanced deposit. Returns 0 for non-positive input or
        an empty pool.
        """
        if amount_a <= 0:
            return 0
        if reserve_a <= 0 or reserve_b <= 0:
            return 0
        return (S(amount_a) * S(reserve_b) // S(reserve_a)).value

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount using constant product formula.

        Formula: amount_out = (in * fee * res_out) / (res_in * denom + in * fee)

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Output token amount (0 for non-positive input or reserves)
        """
        if amount_in <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            return 0

        amount_in_with_fee = S(amount_in) * S(self.config.fee_multiplier)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(self.config.swap_fee_denominator) + amount_in_with_fee

        return (numerator // denominator).value

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate required input for desired output.

        Formula: amount_in = (res_in * out * denom) / ((res_out - out) * fee) + 1

        Args:
            amount_out: Desired output token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Required input token amount; max uint256 if the output would
            drain the reserve
        """
        if amount_out <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            return 0
        if amount_out >= reserve_out:
            return UINT256_MAX

        numerator = S(reserve_in) * S(amount_out) * S(self.config.swap_fee_denominator)
        denominator = (S(reserve_out) - S(amount_out)) * S(self.config.fee_multiplier)

        return ((numerator // denominator) + S(1)).value


# Singleton instance
constant_product = ConstantProductMath()


__all__ = [
    "sort_tokens",
    "pair_salt",
    "pair_for",
    "get_reserves",
    "ConstantProductMath",
    "constant_product",
]
