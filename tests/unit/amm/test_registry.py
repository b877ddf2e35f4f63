"""Tests for the pair registry."""

import pytest

from pairswap.amm.library import pair_for
from pairswap.amm.pool import LiquidityPool
from pairswap.amm.registry import PairRegistry
from pairswap.config import PoolConfig
from pairswap.errors import (
    AuthorizationError,
    DuplicateAssetError,
    InvalidAddressError,
    PairExistsError,
    ZeroAssetError,
)
from pairswap.models.events import FeeAdminChanged, FeeRecipientChanged, PairCreated
from pairswap.models.types import ZERO_ADDRESS
from tests.helpers import (
    ALICE,
    BOB,
    DEPLOYER,
    FEE_ADMIN,
    FEE_RECIPIENT,
    OTHER,
    deploy_sorted_tokens,
)


class TestCreatePair:
    def test_defaults(self, registry):
        assert registry.fee_recipient == ZERO_ADDRESS
        assert registry.fee_admin == FEE_ADMIN
        assert registry.all_pairs_length() == 0

    def test_create_pair(self, chain, registry, token0, token1):
        address = registry.create_pair(token1.address, token0.address, sender=ALICE)

        assert address == pair_for(registry.address, token0.address, token1.address)
        assert registry.get_pair(token0.address, token1.address) == address
        assert registry.get_pair(token1.address, token0.address) == address
        assert registry.all_pairs(0) == address
        assert registry.all_pairs_length() == 1

        (event,) = chain.get_events(PairCreated)
        assert event.address == registry.address
        assert (event.token0, event.token1) == (token0.address, token1.address)
        assert event.pair == address
        assert event.pair_count == 1

    def test_pool_is_initialized(self, chain, registry, token0, token1):
        address = registry.create_pair(token0.address, token1.address, sender=ALICE)
        pool = chain.get(address, LiquidityPool)
        assert pool.factory == registry.address
        assert (pool.token0, pool.token1) == (token0.address, token1.address)
        assert pool.get_reserves() == (0, 0, 0)
        assert pool.total_supply == 0
        assert (pool.name, pool.symbol, pool.decimals) == ("Pairswap V2", "PAIR-V2", 18)

    @pytest.mark.parametrize("reverse", [False, True])
    def test_duplicate_pair(self, registry, token0, token1, reverse):
        registry.create_pair(token0.address, token1.address, sender=ALICE)
        a, b = (token1, token0) if reverse else (token0, token1)
        with pytest.raises(PairExistsError):
            registry.create_pair(a.address, b.address, sender=BOB)
        assert registry.all_pairs_length() == 1

    def test_identical_tokens(self, registry, token0):
        with pytest.raises(DuplicateAssetError):
            registry.create_pair(token0.address, token0.address, sender=ALICE)

    def test_zero_address(self, registry, token0):
        with pytest.raises(ZeroAssetError):
            registry.create_pair(token0.address, ZERO_ADDRESS, sender=ALICE)
        with pytest.raises(ZeroAssetError):
            registry.create_pair(ZERO_ADDRESS, token0.address, sender=ALICE)

    @pytest.mark.parametrize(
        "bad",
        [
            "not-an-address",
            "0x_" + "1" * 39,
            "0x" + "1" * 40 + "\n",
            "0x" + "1" * 39 + "\u0661",
            "0x" + "g" * 40,
            " 0x" + "1" * 39,
        ],
        ids=["text", "separator", "newline", "unicode-digit", "non-hex", "whitespace"],
    )
    def test_invalid_address(self, chain, registry, token0, bad):
        with pytest.raises(InvalidAddressError):
            registry.create_pair(token0.address, bad, sender=ALICE)
        with pytest.raises(InvalidAddressError):
            registry.create_pair(bad, token0.address, sender=ALICE)
        assert chain.get_events(PairCreated) == []

    def test_failed_create_leaves_no_pool(self, chain, registry, token0):
        with pytest.raises(DuplicateAssetError):
            registry.create_pair(token0.address, token0.address, sender=ALICE)
        assert chain.get_events(PairCreated) == []

    def test_unknown_pair(self, registry, token0, token1):
        assert registry.get_pair(token0.address, token1.address) is None

    def test_all_pairs_out_of_range(self, registry):
        with pytest.raises(IndexError):
            registry.all_pairs(0)

    def test_many_pairs(self, chain, registry):
        tokens = deploy_sorted_tokens(chain, count=3)
        first = registry.create_pair(tokens[0].address, tokens[1].address, sender=ALICE)
        second = registry.create_pair(tokens[2].address, tokens[0].address, sender=ALICE)
        third = registry.create_pair(tokens[1].address, tokens[2].address, sender=ALICE)

        assert len({first, second, third}) == 3
        assert [registry.all_pairs(i) for i in range(3)] == [first, second, third]
        assert [e.pair_count for e in chain.get_events(PairCreated)] == [1, 2, 3]

    def test_registries_with_different_configs(self, chain, registry, token0, token1):
        forked = chain.deploy(
            PairRegistry,
            sender=DEPLOYER,
            fee_admin=FEE_ADMIN,
            config=PoolConfig(swap_fee_numerator=25, swap_fee_denominator=10_000),
        )
        address = forked.create_pair(token0.address, token1.address, sender=ALICE)
        assert address == pair_for(forked.address, token0.address, token1.address, forked.config)
        assert chain.get(address, LiquidityPool).config.swap_fee_numerator == 25


class TestFeeAdministration:
    def test_set_fee_recipient(self, chain, registry):
        registry.set_fee_recipient(FEE_RECIPIENT, sender=FEE_ADMIN)
        assert registry.fee_recipient == FEE_RECIPIENT
        (event,) = chain.get_events(FeeRecipientChanged)
        assert event.fee_recipient == FEE_RECIPIENT

    def test_set_fee_recipient_unauthorized(self, registry):
        with pytest.raises(AuthorizationError):
            registry.set_fee_recipient(OTHER, sender=OTHER)
        with pytest.raises(AuthorizationError):
            registry.set_fee_recipient(OTHER, sender=DEPLOYER)
        assert registry.fee_recipient == ZERO_ADDRESS

    def test_fee_can_be_turned_off(self, registry):
        registry.set_fee_recipient(FEE_RECIPIENT, sender=FEE_ADMIN)
        registry.set_fee_recipient(ZERO_ADDRESS, sender=FEE_ADMIN)
        assert registry.fee_recipient == ZERO_ADDRESS

    def test_set_fee_admin(self, chain, registry):
        registry.set_fee_admin(OTHER, sender=FEE_ADMIN)
        assert registry.fee_admin == OTHER
        (event,) = chain.get_events(FeeAdminChanged)
        assert event.fee_admin == OTHER

        with pytest.raises(AuthorizationError):
            registry.set_fee_admin(FEE_ADMIN, sender=FEE_ADMIN)
        registry.set_fee_recipient(FEE_RECIPIENT, sender=OTHER)
        assert registry.fee_recipient == FEE_RECIPIENT
