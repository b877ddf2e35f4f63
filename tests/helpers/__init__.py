"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Accounts, timestamps and common amounts
- factories: Token deployment, funding and liquidity helpers
- contracts: Non-standard ledgers and flash-swap recipients
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    DEPLOYER,
    FEE_ADMIN,
    FEE_RECIPIENT,
    INITIAL_BALANCE,
    MINIMUM_LIQUIDITY,
    ONE,
    OTHER,
    START_TIMESTAMP,
)
from tests.helpers.contracts import FalseReturnToken, FlashBorrower, NoReturnToken
from tests.helpers.factories import (
    add_liquidity,
    deploy_sorted_tokens,
    deploy_token,
    expand_to_18_decimals,
    fund,
    remove_liquidity,
)

__all__ = [
    # Constants
    "ALICE",
    "BOB",
    "DEPLOYER",
    "FEE_ADMIN",
    "FEE_RECIPIENT",
    "OTHER",
    "START_TIMESTAMP",
    "ONE",
    "INITIAL_BALANCE",
    "MINIMUM_LIQUIDITY",
    # Factories
    "deploy_token",
    "deploy_sorted_tokens",
    "fund",
    "add_liquidity",
    "remove_liquidity",
    "expand_to_18_decimals",
    # Contracts
    "NoReturnToken",
    "FalseReturnToken",
    "FlashBorrower",
]
