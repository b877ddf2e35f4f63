"""In-process host environment for registry, pool and ledger contracts.

The host furnishes what the contracts assume from their execution
environment:
- a table of deployed contracts, addressed deterministically
- the current block timestamp
- an append-only event log
- all-or-nothing execution: every ``@external`` entry point runs inside
  ``Chain.atomic()``, which restores every contract's declared state, the
  contract table, nonces and the event log if the call raises

Scopes nest. A contract that catches a failed inner call still sees the
inner call's mutations undone, exactly like a reverted sub-call.
"""

from __future__ import annotations

import copy
import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, ClassVar, Concatenate, ParamSpec, TypeVar

import structlog

from pairswap.errors import AddressCollisionError, UnknownContractError
from pairswap.host.address import compute_create2_address, compute_create_address
from pairswap.models.events import Event
from pairswap.models.types import normalize_address

logger = structlog.get_logger()

C = TypeVar("C")
E = TypeVar("E", bound=Event)
P = ParamSpec("P")
T = TypeVar("T")
ContractT = TypeVar("ContractT", bound="Contract")


class Contract:
    """Base class for anything deployed on a Chain.

    Subclasses list the attributes that make up their persistent state in
    STATE_FIELDS; the host snapshots exactly those for rollback. Fields are
    inherited, so a subclass only declares what it adds.
    """

    STATE_FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init__(self, chain: Chain, address: str, *, deployer: str) -> None:
        self.chain = chain
        self.address = address
        self.deployer = deployer

    @classmethod
    def state_fields(cls) -> tuple[str, ...]:
        """All persistent fields declared along the class hierarchy."""
        fields: list[str] = []
        for klass in reversed(cls.__mro__):
            for name in klass.__dict__.get("STATE_FIELDS", ()):
                if name not in fields:
                    fields.append(name)
        return tuple(fields)

    def snapshot(self) -> dict[str, Any]:
        return {name: copy.deepcopy(getattr(self, name)) for name in self.state_fields()}

    def restore(self, state: dict[str, Any]) -> None:
        for name, value in state.items():
            setattr(self, name, value)

    def emit(self, event_type: type[E], **fields: Any) -> E:
        """Build an event stamped with this contract's address and log it."""
        event = event_type(address=self.address, **fields)
        self.chain.emit(event)
        return event

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"


def external(
    fn: Callable[Concatenate[ContractT, P], T],
) -> Callable[Concatenate[ContractT, P], T]:
    """Run a contract entry point atomically on its chain."""

    @functools.wraps(fn)
    def wrapper(self: ContractT, /, *args: P.args, **kwargs: P.kwargs) -> T:
        with self.chain.atomic():
            return fn(self, *args, **kwargs)

    return wrapper


class Chain:
    """Deterministic, single-threaded ledger host.

    Args:
        timestamp: Initial block timestamp in seconds (defaults to wall clock)
    """

    def __init__(self, timestamp: int | None = None) -> None:
        self._timestamp = int(time.time()) if timestamp is None else timestamp
        if self._timestamp < 0:
            raise ValueError(f"Timestamp cannot be negative: {self._timestamp}")
        self._contracts: dict[str, Contract] = {}
        self._nonces: dict[str, int] = {}
        self._events: list[Event] = []
        self._depth = 0

    # --- Block time ---

    @property
    def timestamp(self) -> int:
        """Current block timestamp in seconds."""
        return self._timestamp

    def advance(self, seconds: int) -> int:
        """Move block time forward and return the new timestamp."""
        if seconds < 0:
            raise ValueError(f"Cannot advance time backwards: {seconds}")
        self._timestamp += seconds
        return self._timestamp

    def set_timestamp(self, timestamp: int) -> None:
        if timestamp < self._timestamp:
            raise ValueError(f"Timestamp {timestamp} is before current {self._timestamp}")
        self._timestamp = timestamp

    # --- Events ---

    @property
    def events(self) -> list[Event]:
        """Copy of the event log, oldest first."""
        return list(self._events)

    def emit(self, event: Event) -> None:
        self._events.append(event)

    def get_events(self, event_type: type[E], address: str | None = None) -> list[E]:
        """Events of ``event_type`` (and subclasses), optionally from one emitter."""
        emitter = normalize_address(address) if address is not None else None
        return [
            event
            for event in self._events
            if isinstance(event, event_type) and (emitter is None or event.address == emitter)
        ]

    # --- Contracts ---

    def has_code(self, address: str) -> bool:
        return normalize_address(address) in self._contracts

    def get(self, address: str, kind: type[C]) -> C:
        """Resolve the contract at ``address``.

        Args:
            address: Contract address (any case)
            kind: Expected class or runtime-checkable protocol

        Raises:
            UnknownContractError: If nothing lives there or it is not a ``kind``
        """
        contract = self._contracts.get(normalize_address(address))
        if contract is None:
            raise UnknownContractError(f"No contract at {address}")
        if not isinstance(contract, kind):
            raise UnknownContractError(
                f"Contract at {address} is {type(contract).__name__}, expected {kind.__name__}"
            )
        return contract

    def deploy(self, cls: type[ContractT], *, sender: str, **kwargs: Any) -> ContractT:
        """Deploy at the next nonce-derived address of ``sender``."""
        deployer = normalize_address(sender, validate=True)
        nonce = self._nonces.get(deployer, 0)
        address = compute_create_address(deployer, nonce)
        return self._install(cls, address, deployer, kwargs)

    def deploy_deterministic(
        self,
        cls: type[ContractT],
        *,
        sender: str,
        salt: bytes,
        init_code_hash: bytes,
        **kwargs: Any,
    ) -> ContractT:
        """Deploy at the address fixed by ``(sender, salt, init_code_hash)``.

        Raises:
            AddressCollisionError: If a contract already lives at that address
        """
        deployer = normalize_address(sender, validate=True)
        address = compute_create2_address(deployer, salt, init_code_hash)
        return self._install(cls, address, deployer, kwargs)

    def _install(
        self,
        cls: type[ContractT],
        address: str,
        deployer: str,
        kwargs: dict[str, Any],
    ) -> ContractT:
        if address in self._contracts:
            raise AddressCollisionError(f"Address {address} already has code")
        self._nonces[deployer] = self._nonces.get(deployer, 0) + 1
        contract = cls(self, address, deployer=deployer, **kwargs)
        self._contracts[address] = contract
        logger.debug(
            "contract_deployed",
            kind=cls.__name__,
            address=address[-8:],
            deployer=deployer[-8:],
        )
        return contract

    # --- Atomicity ---

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Roll back every state change made inside the block if it raises."""
        contracts = dict(self._contracts)
        states = {address: contract.snapshot() for address, contract in contracts.items()}
        nonces = dict(self._nonces)
        event_count = len(self._events)

        self._depth += 1
        try:
            yield
        except Exception as err:
            self._contracts = contracts
            for address, state in states.items():
                contracts[address].restore(state)
            self._nonces = nonces
            del self._events[event_count:]
            if self._depth == 1:
                logger.warning(
                    "operation_reverted",
                    error=type(err).__name__,
                    reason=str(err),
                )
            raise
        finally:
            self._depth -= 1
