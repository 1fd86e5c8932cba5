"""The engine-governed stable coin."""
from __future__ import annotations

import logging

from ..constants import ZERO_ADDRESS
from ..errors import BurnAmountExceedsBalance, NeedsMoreThanZero, NotOwner, NotZeroAddress
from .token import BaseToken

logger = logging.getLogger(__name__)


class DecentralizedStableCoin(BaseToken):
    """USD-pegged debt token; only ``owner`` (the engine) may mint or burn."""

    def __init__(
        self,
        owner: str,
        address: str,
        name: str = "DecentralizedStableCoin",
        symbol: str = "DSC",
    ) -> None:
        super().__init__(name, symbol, address)
        self._owner = owner

    @property
    def owner(self) -> str:
        return self._owner

    def _only_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise NotOwner(f"{caller} is not the owner of {self.symbol}")

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self._only_owner(caller)
        if new_owner == ZERO_ADDRESS:
            raise NotZeroAddress("New owner cannot be the zero address")
        logger.info("%s ownership moved from %s to %s", self.symbol, self._owner, new_owner)
        self._owner = new_owner

    def mint(self, caller: str, to: str, amount: int) -> bool:
        self._only_owner(caller)
        if to == ZERO_ADDRESS:
            raise NotZeroAddress("Cannot mint to the zero address")
        if amount <= 0:
            raise NeedsMoreThanZero(amount)
        self._mint(to, amount)
        return True

    def burn(self, caller: str, amount: int) -> None:
        """Burn ``amount`` from the owner's own balance."""
        self._only_owner(caller)
        if amount <= 0:
            raise NeedsMoreThanZero(amount)
        if self.balance_of(caller) < amount:
            raise BurnAmountExceedsBalance(
                f"Burn of {amount} exceeds balance {self.balance_of(caller)}"
            )
        self._burn(caller, amount)
