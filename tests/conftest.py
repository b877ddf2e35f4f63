"""Pytest configuration and fixtures."""

import pytest

from pairswap.amm.pool import LiquidityPool
from pairswap.amm.registry import PairRegistry
from pairswap.host.chain import Chain
from pairswap.tokens.erc20 import MintableToken
from tests.helpers import (
    ALICE,
    BOB,
    DEPLOYER,
    FEE_ADMIN,
    INITIAL_BALANCE,
    START_TIMESTAMP,
    FlashBorrower,
    deploy_sorted_tokens,
    fund,
)


@pytest.fixture
def chain() -> Chain:
    """A fresh host at a fixed block timestamp."""
    return Chain(timestamp=START_TIMESTAMP)


@pytest.fixture
def registry(chain: Chain) -> PairRegistry:
    """A registry administered by FEE_ADMIN, protocol fee off."""
    return chain.deploy(PairRegistry, sender=DEPLOYER, fee_admin=FEE_ADMIN)


@pytest.fixture
def tokens(chain: Chain) -> list[MintableToken]:
    """Two tokens ordered by address, with ALICE and BOB funded in both."""
    deployed = deploy_sorted_tokens(chain)
    for token in deployed:
        fund(token, ALICE, INITIAL_BALANCE)
        fund(token, BOB, INITIAL_BALANCE)
    return deployed


@pytest.fixture
def token0(tokens: list[MintableToken]) -> MintableToken:
    return tokens[0]


@pytest.fixture
def token1(tokens: list[MintableToken]) -> MintableToken:
    return tokens[1]


@pytest.fixture
def pool(
    chain: Chain,
    registry: PairRegistry,
    token0: MintableToken,
    token1: MintableToken,
) -> LiquidityPool:
    """An initialized, empty pool for (token0, token1)."""
    address = registry.create_pair(token0.address, token1.address, sender=ALICE)
    return chain.get(address, LiquidityPool)


@pytest.fixture
def borrower(chain: Chain) -> FlashBorrower:
    """A flash-swap recipient with no repayments configured."""
    return chain.deploy(FlashBorrower, sender=BOB)
