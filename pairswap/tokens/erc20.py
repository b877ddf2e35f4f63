"""ERC20-style fungible token ledger.

FungibleToken is the share ledger every pool inherits and the asset ledger
pools trade. Amounts are unsigned 256-bit integers; an allowance of
2^256 - 1 is treated as infinite and never decremented.
"""

from __future__ import annotations

from typing import ClassVar

import structlog

from pairswap.errors import AuthorizationError, InsufficientAllowanceError, InsufficientBalanceError
from pairswap.host.chain import Chain, Contract, external
from pairswap.models.events import Approval, Transfer
from pairswap.models.types import ZERO_ADDRESS, normalize_address
from pairswap.safe_int import UINT256_MAX, S

logger = structlog.get_logger()


class FungibleToken(Contract):
    """Balance and allowance ledger with Transfer/Approval events."""

    STATE_FIELDS: ClassVar[tuple[str, ...]] = ("total_supply", "_balances", "_allowances")

    def __init__(
        self,
        chain: Chain,
        address: str,
        *,
        deployer: str,
        name: str = "",
        symbol: str = "",
        decimals: int = 18,
    ) -> None:
        super().__init__(chain, address, deployer=deployer)
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}

    # --- Views ---

    def balance_of(self, owner: str) -> int:
        return self._balances.get(normalize_address(owner), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    # --- Entry points ---

    @external
    def approve(self, spender: str, value: int, *, sender: str) -> bool | None:
        owner = normalize_address(sender, validate=True)
        spender = normalize_address(spender, validate=True)
        self._approve(owner, spender, S(value).to_uint256())
        return True

    @external
    def transfer(self, to: str, value: int, *, sender: str) -> bool | None:
        self._transfer(
            normalize_address(sender, validate=True),
            normalize_address(to, validate=True),
            value,
        )
        return True

    @external
    def transfer_from(self, owner: str, to: str, value: int, *, sender: str) -> bool | None:
        owner = normalize_address(owner, validate=True)
        spender = normalize_address(sender, validate=True)
        current = self.allowance(owner, spender)
        if current != UINT256_MAX:
            if current < value:
                raise InsufficientAllowanceError(
                    f"Allowance {current} of {spender} over {owner} is below {value}"
                )
            self._approve(owner, spender, current - value)
        self._transfer(owner, normalize_address(to, validate=True), value)
        return True

    # --- Internal ledger operations ---

    def _approve(self, owner: str, spender: str, value: int) -> None:
        if owner == ZERO_ADDRESS:
            raise AuthorizationError("The zero address cannot grant allowances")
        self._allowances[(owner, spender)] = value
        self.emit(Approval, owner=owner, spender=spender, value=value)

    def _transfer(self, sender: str, to: str, value: int) -> None:
        # Minted-to-zero balances (the locked minimum liquidity) never move
        if sender == ZERO_ADDRESS:
            raise AuthorizationError("The zero address cannot send")
        amount = S(value).to_uint256()
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalanceError(
                f"{self.symbol or self.address}: balance {balance} of {sender} is below {amount}"
            )
        self._balances[sender] = balance - amount
        self._balances[to] = self.balance_of(to) + amount
        self.emit(Transfer, sender=sender, recipient=to, value=amount)

    def _mint(self, to: str, value: int) -> None:
        self.total_supply = (S(self.total_supply) + value).to_uint256()
        self._balances[to] = self.balance_of(to) + value
        self.emit(Transfer, sender=ZERO_ADDRESS, recipient=to, value=value)

    def _burn(self, owner: str, value: int) -> None:
        balance = self.balance_of(owner)
        if balance < value:
            raise InsufficientBalanceError(f"Burn of {value} exceeds balance {balance} of {owner}")
        self._balances[owner] = balance - value
        self.total_supply = (S(self.total_supply) - value).value
        self.emit(Transfer, sender=owner, recipient=ZERO_ADDRESS, value=value)


class MintableToken(FungibleToken):
    """Asset whose deployer can create supply, used to fund accounts."""

    @external
    def mint(self, to: str, value: int, *, sender: str) -> None:
        if normalize_address(sender) != self.deployer:
            raise AuthorizationError(f"Only {self.deployer} may mint {self.symbol}")
        self._mint(normalize_address(to, validate=True), S(value).to_uint256())
        logger.debug("token_minted", token=self.symbol, to=to[-8:], value=value)


__all__ = ["FungibleToken", "MintableToken"]
