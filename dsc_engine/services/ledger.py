"""Position ledger: collateral and debt per user."""
from __future__ import annotations

import logging
from typing import Any

from ..errors import InsufficientBalance, NeedsMoreThanZero
from ..models import CollateralDeposited, CollateralRedeemed, Event
from ..registry import CollateralRegistry

logger = logging.getLogger(__name__)


class PositionLedger:
    """Sole owner and mutator of every position's collateral and debt.

    Collateral is keyed by ``(user, asset)``, debt by ``user``. Balances never
    go negative: removing more than is recorded raises
    ``InsufficientBalance`` and leaves the balance untouched.
    """

    def __init__(self, registry: CollateralRegistry) -> None:
        self._registry = registry
        self._collateral: dict[tuple[str, str], int] = {}
        self._debt: dict[str, int] = {}
        self._events: list[Event] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def collateral_of(self, user: str, asset: str) -> int:
        return self._collateral.get((user, asset), 0)

    def debt_of(self, user: str) -> int:
        return self._debt.get(user, 0)

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def deposit(self, user: str, asset: str, amount: int) -> None:
        _require_positive(amount)
        self._registry.get(asset)
        self._collateral[(user, asset)] = self.collateral_of(user, asset) + amount
        self._emit(CollateralDeposited(user=user, asset=asset, amount=amount))

    def withdraw(self, asset: str, amount: int, from_: str, to: str) -> None:
        _require_positive(amount)
        balance = self.collateral_of(from_, asset)
        if amount > balance:
            raise InsufficientBalance(f"collateral {asset} of {from_}", balance, amount)
        self._collateral[(from_, asset)] = balance - amount
        self._emit(
            CollateralRedeemed(
                redeemed_from=from_, redeemed_to=to, asset=asset, amount=amount
            )
        )

    def increase_debt(self, user: str, amount: int) -> None:
        _require_positive(amount)
        self._debt[user] = self.debt_of(user) + amount

    def decrease_debt(self, user: str, amount: int) -> None:
        _require_positive(amount)
        debt = self.debt_of(user)
        if amount > debt:
            raise InsufficientBalance(f"debt of {user}", debt, amount)
        self._debt[user] = debt - amount

    def _emit(self, event: Event) -> None:
        self._events.append(event)
        logger.info("%s", event)

    # ------------------------------------------------------------------
    # Journaling
    # ------------------------------------------------------------------

    def snapshot(self) -> Any:
        return dict(self._collateral), dict(self._debt), len(self._events)

    def restore(self, snapshot: Any) -> None:
        collateral, debt, event_count = snapshot
        self._collateral = dict(collateral)
        self._debt = dict(debt)
        del self._events[event_count:]


def _require_positive(amount: int) -> None:
    if amount <= 0:
        raise NeedsMoreThanZero(amount)
