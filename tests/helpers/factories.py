"""Factory functions for deploying and funding test contracts.

Usage:
    from tests.helpers import add_liquidity, deploy_sorted_tokens

    token0, token1 = deploy_sorted_tokens(chain)
    add_liquidity(pool, 5 * ONE, 10 * ONE)
"""

from __future__ import annotations

from pairswap.amm.pool import LiquidityPool
from pairswap.host.chain import Chain
from pairswap.tokens.erc20 import MintableToken
from tests.helpers.constants import ALICE, DEPLOYER, ONE


def expand_to_18_decimals(n: int) -> int:
    return n * ONE


def deploy_token(
    chain: Chain,
    symbol: str,
    *,
    cls: type[MintableToken] = MintableToken,
    sender: str = DEPLOYER,
) -> MintableToken:
    """Deploy a mintable test token owned by ``sender``."""
    return chain.deploy(cls, sender=sender, name=f"Test {symbol}", symbol=symbol)


def deploy_sorted_tokens(
    chain: Chain,
    count: int = 2,
    *,
    cls: type[MintableToken] = MintableToken,
) -> list[MintableToken]:
    """Deploy ``count`` tokens and return them ordered by address.

    Deployment addresses are hash-derived, so the sort makes ``result[0]``
    the token0 of any pair built from the first two.
    """
    tokens = [deploy_token(chain, f"TK{i}", cls=cls) for i in range(count)]
    return sorted(tokens, key=lambda token: token.address)


def fund(token: MintableToken, account: str, amount: int) -> None:
    """Mint ``amount`` of ``token`` to ``account``."""
    token.mint(account, amount, sender=token.deployer)


def add_liquidity(
    pool: LiquidityPool,
    amount0: int,
    amount1: int,
    provider: str = ALICE,
) -> int:
    """Transfer both assets from ``provider`` to the pool and mint shares to them."""
    token0 = pool.chain.get(pool.token0, MintableToken)
    token1 = pool.chain.get(pool.token1, MintableToken)
    token0.transfer(pool.address, amount0, sender=provider)
    token1.transfer(pool.address, amount1, sender=provider)
    return pool.mint(provider, sender=provider)


def remove_liquidity(pool: LiquidityPool, shares: int, provider: str = ALICE) -> tuple[int, int]:
    """Send ``shares`` to the pool and burn them for ``provider``."""
    pool.transfer(pool.address, shares, sender=provider)
    return pool.burn(provider, sender=provider)
