"""Transferable-balance tokens with allowances."""
from __future__ import annotations

import logging
from typing import Any

from ..errors import InsufficientAllowance, InsufficientFunds, NeedsMoreThanZero

logger = logging.getLogger(__name__)


class BaseToken:
    """Balances, allowances and supply held in plain dicts.

    Transfers raise on insufficient funds or allowance, as the usual token
    contracts revert; callers that expect a boolean treat a raise as ``False``.
    State can be snapshotted and restored, which lets the engine roll back a
    failed operation.
    """

    def __init__(self, name: str, symbol: str, address: str, decimals: int = 18) -> None:
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._address = address
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol!r}, {self._address!r})"

    @property
    def address(self) -> str:
        return self._address

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        if amount < 0:
            raise ValueError("Allowance cannot be negative")
        self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        self._move(sender, to, amount)
        return True

    def transfer_from(self, spender: str, src: str, dst: str, amount: int) -> bool:
        allowed = self.allowance(src, spender)
        if allowed < amount:
            raise InsufficientAllowance(
                f"{spender} may move {allowed} {self.symbol} of {src}, not {amount}"
            )
        self._move(src, dst, amount)
        self._allowances[(src, spender)] = allowed - amount
        return True

    # ------------------------------------------------------------------
    # Journaling
    # ------------------------------------------------------------------

    def snapshot(self) -> Any:
        return dict(self._balances), dict(self._allowances), self._total_supply

    def restore(self, snapshot: Any) -> None:
        balances, allowances, total_supply = snapshot
        self._balances = dict(balances)
        self._allowances = dict(allowances)
        self._total_supply = total_supply

    # ------------------------------------------------------------------
    # Supply changes
    # ------------------------------------------------------------------

    def _move(self, src: str, dst: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Transfer amount cannot be negative")
        balance = self.balance_of(src)
        if balance < amount:
            raise InsufficientFunds(
                f"{src} holds {balance} {self.symbol}, cannot send {amount}"
            )
        self._balances[src] = balance - amount
        self._balances[dst] = self.balance_of(dst) + amount

    def _mint(self, to: str, amount: int) -> None:
        if amount <= 0:
            raise NeedsMoreThanZero(amount)
        self._balances[to] = self.balance_of(to) + amount
        self._total_supply += amount

    def _burn(self, account: str, amount: int) -> None:
        balance = self.balance_of(account)
        if balance < amount:
            raise InsufficientFunds(
                f"{account} holds {balance} {self.symbol}, cannot burn {amount}"
            )
        self._balances[account] = balance - amount
        self._total_supply -= amount


class Token(BaseToken):
    """Collateral token with an open faucet, for tests and simulations."""

    def mint_to(self, to: str, amount: int) -> None:
        self._mint(to, amount)
        logger.debug("Minted %s %s to %s", amount, self.symbol, to)
