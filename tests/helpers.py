"""Constants and fake collaborators shared across test modules."""
from __future__ import annotations

from dsc_engine.services import DSCEngine
from dsc_engine.tokens import DecentralizedStableCoin, Token

ENGINE = "0xe000000000000000000000000000000000000001"
DSC_ADDRESS = "0xd5c0000000000000000000000000000000000002"
WETH_ADDRESS = "0xeeee000000000000000000000000000000000003"
WBTC_ADDRESS = "0xbbbb000000000000000000000000000000000004"
USER = "0x1111111111111111111111111111111111111111"
LIQUIDATOR = "0x2222222222222222222222222222222222222222"

ETH_USD_PRICE = 2000 * 10**8
BTC_USD_PRICE = 1000 * 10**8

STARTING_BALANCE = 100 * 10**18
COLLATERAL_AMOUNT = 10 * 10**18
AMOUNT_TO_MINT = 100 * 10**18
COLLATERAL_TO_COVER = 20 * 10**18

GENESIS = 1_700_000_000
THREE_HOURS = 3 * 60 * 60


class FakeClock:
    """Settable unix-seconds clock shared by feeds and the engine."""

    def __init__(self, now: int = GENESIS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


class FailingTransferFromToken(Token):
    """Collateral token whose ``transfer_from`` reports failure."""

    def transfer_from(self, spender: str, src: str, dst: str, amount: int) -> bool:
        return False


class FailingTransferToken(Token):
    """Collateral token whose ``transfer`` reports failure."""

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        return False


class FailingMintStableCoin(DecentralizedStableCoin):
    def mint(self, caller: str, to: str, amount: int) -> bool:
        self._only_owner(caller)
        return False


class ReentrantToken(Token):
    """Calls back into the engine while the engine pulls its collateral."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.engine = None

    def transfer_from(self, spender: str, src: str, dst: str, amount: int) -> bool:
        moved = super().transfer_from(spender, src, dst, amount)
        if self.engine is not None:
            self.engine.deposit_collateral(src, self.address, amount)
        return moved


class PlainToken:
    """Conforming collateral token with no snapshot support.

    Reports failure by returning ``False`` instead of raising.
    """

    def __init__(self, address: str) -> None:
        self._address = address
        self.balances: dict[str, int] = {}
        self.allowances: dict[tuple[str, str], int] = {}

    @property
    def address(self) -> str:
        return self._address

    def balance_of(self, account: str) -> int:
        return self.balances.get(account, 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        self.allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        if self.balance_of(sender) < amount:
            return False
        self.balances[sender] = self.balance_of(sender) - amount
        self.balances[to] = self.balance_of(to) + amount
        return True

    def transfer_from(self, spender: str, src: str, dst: str, amount: int) -> bool:
        allowed = self.allowances.get((src, spender), 0)
        if allowed < amount or not self.transfer(src, dst, amount):
            return False
        self.allowances[(src, spender)] = allowed - amount
        return True


class PlainStableCoin(PlainToken):
    """Conforming debt token with no snapshot support."""

    def __init__(self, owner: str, address: str) -> None:
        super().__init__(address)
        self.owner = owner
        self.total_supply = 0

    def mint(self, caller: str, to: str, amount: int) -> bool:
        if caller != self.owner:
            return False
        self.balances[to] = self.balance_of(to) + amount
        self.total_supply += amount
        return True

    def burn(self, caller: str, amount: int) -> None:
        if caller != self.owner or self.balance_of(caller) < amount:
            raise RuntimeError(f"burn of {amount} by {caller} failed")
        self.balances[caller] -= amount
        self.total_supply -= amount


def make_engine(tokens, feeds, dsc, clock, **kwargs) -> DSCEngine:
    return DSCEngine(tokens, feeds, dsc, address=ENGINE, clock=clock, **kwargs)
