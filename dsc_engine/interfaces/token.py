"""Token protocols: collateral and debt token capabilities."""
from typing import Protocol


class CollateralToken(Protocol):
    """Transferable-balance token accepted as collateral.

    ``False`` from a transfer means the transfer did not happen.
    """

    @property
    def address(self) -> str: ...

    def balance_of(self, account: str) -> int: ...

    def transfer(self, sender: str, to: str, amount: int) -> bool: ...

    def transfer_from(self, spender: str, src: str, dst: str, amount: int) -> bool: ...


class DebtToken(CollateralToken, Protocol):
    """The engine-owned stable coin; only its owner may mint or burn."""

    def mint(self, caller: str, to: str, amount: int) -> bool: ...

    def burn(self, caller: str, amount: int) -> None: ...
