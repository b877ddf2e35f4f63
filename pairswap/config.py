"""Protocol parameters for pools created by a registry."""

from dataclasses import dataclass

from eth_abi.packed import encode_packed
from eth_utils import keccak

# Shares locked at the zero address on the genesis mint
MINIMUM_LIQUIDITY = 1000

# 0.3% swap fee expressed as 3 / 1000
SWAP_FEE_NUMERATOR = 3
SWAP_FEE_DENOMINATOR = 1000

# Protocol takes 1 / (divisor + 1) of sqrt(k) growth, i.e. one sixth
PROTOCOL_FEE_DIVISOR = 5

# Bumped whenever pool accounting changes in a way that must yield new addresses
POOL_CODE_VERSION = "pairswap.amm.pool.LiquidityPool/2"


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for pool accounting.

    Holds every protocol constant a pool reads, making it easy to test with
    forked parameters (e.g. a 0.25% fee) while keeping the canonical values
    in one place. The registry passes its config to each pool it creates and
    folds it into the pool's init-code hash, so two registries with different
    parameters never derive the same pool address.

    Attributes:
        minimum_liquidity: Shares permanently locked on the genesis mint
        swap_fee_numerator: Fee charged on swap input, over swap_fee_denominator
        swap_fee_denominator: Scale of the fee-adjusted invariant check
        protocol_fee_divisor: Fee shares = T * dRootK / (divisor * rootK + rootKLast)
        share_name: Name of the pool share token
        share_symbol: Symbol of the pool share token
        share_decimals: Decimals of the pool share token
    """

    minimum_liquidity: int = MINIMUM_LIQUIDITY
    swap_fee_numerator: int = SWAP_FEE_NUMERATOR
    swap_fee_denominator: int = SWAP_FEE_DENOMINATOR
    protocol_fee_divisor: int = PROTOCOL_FEE_DIVISOR

    share_name: str = "Pairswap V2"
    share_symbol: str = "PAIR-V2"
    share_decimals: int = 18

    def __post_init__(self) -> None:
        if self.minimum_liquidity <= 0:
            raise ValueError(f"minimum_liquidity must be positive, got {self.minimum_liquidity}")
        if self.swap_fee_denominator <= 0:
            raise ValueError(
                f"swap_fee_denominator must be positive, got {self.swap_fee_denominator}"
            )
        if not 0 <= self.swap_fee_numerator < self.swap_fee_denominator:
            raise ValueError(
                f"swap fee must be in [0, 1), got "
                f"{self.swap_fee_numerator}/{self.swap_fee_denominator}"
            )
        if self.protocol_fee_divisor <= 0:
            raise ValueError(
                f"protocol_fee_divisor must be positive, got {self.protocol_fee_divisor}"
            )

    @property
    def fee_multiplier(self) -> int:
        """Fee-adjusted input multiplier (denominator - numerator).

        For the default 3/1000 fee this returns 997.
        """
        return self.swap_fee_denominator - self.swap_fee_numerator

    @property
    def init_code_hash(self) -> bytes:
        """keccak256 identity of the pool code plus its constructor parameters."""
        return keccak(
            encode_packed(
                ["string", "uint256", "uint256", "uint256", "uint256"],
                [
                    POOL_CODE_VERSION,
                    self.minimum_liquidity,
                    self.swap_fee_numerator,
                    self.swap_fee_denominator,
                    self.protocol_fee_divisor,
                ],
            )
        )


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
