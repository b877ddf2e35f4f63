"""Tests for safe_transfer against ledgers with non-standard return values."""

import pytest

from pairswap.errors import TransferFailedError
from pairswap.tokens.safe_transfer import balance_of, safe_transfer
from tests.helpers import (
    ALICE,
    BOB,
    FalseReturnToken,
    NoReturnToken,
    deploy_token,
    fund,
)


class TestSafeTransfer:
    def test_true_return(self, chain):
        token = deploy_token(chain, "STD")
        fund(token, ALICE, 100)
        safe_transfer(chain, token.address, BOB, 40, sender=ALICE)
        assert balance_of(chain, token.address, BOB) == 40

    def test_no_return_value_is_success(self, chain):
        token = deploy_token(chain, "USDT", cls=NoReturnToken)
        fund(token, ALICE, 100)
        safe_transfer(chain, token.address, BOB, 40, sender=ALICE)
        assert token.balance_of(BOB) == 40

    def test_false_return_value_fails(self, chain):
        token = deploy_token(chain, "BAD", cls=FalseReturnToken)
        fund(token, ALICE, 100)
        with pytest.raises(TransferFailedError):
            safe_transfer(chain, token.address, BOB, 40, sender=ALICE)

    def test_ledger_error_is_wrapped(self, chain):
        token = deploy_token(chain, "STD")
        with pytest.raises(TransferFailedError) as exc_info:
            safe_transfer(chain, token.address, BOB, 1, sender=ALICE)
        assert "balance" in str(exc_info.value)

    def test_missing_ledger(self, chain):
        with pytest.raises(TransferFailedError):
            safe_transfer(chain, BOB, ALICE, 1, sender=ALICE)

    def test_registry_is_not_a_ledger(self, chain, registry):
        with pytest.raises(TransferFailedError):
            safe_transfer(chain, registry.address, BOB, 1, sender=ALICE)
