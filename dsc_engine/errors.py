"""Exception hierarchy for the engine and its collaborators.

Every engine error is fatal for the call that raised it: the engine restores
its pre-call state and re-raises, nothing is retried.
"""
from __future__ import annotations


class EngineError(Exception):
    """Base class for all engine failures."""


# ---------------------------------------------------------------------------
# Validation (caller's fault)
# ---------------------------------------------------------------------------


class ValidationError(EngineError, ValueError):
    """Rejected input; raised before any state is touched."""


class NeedsMoreThanZero(ValidationError):
    def __init__(self, amount: int = 0) -> None:
        super().__init__(f"Amount must be more than zero, got {amount}")
        self.amount = amount


class NotAllowedToken(ValidationError):
    def __init__(self, asset: str) -> None:
        super().__init__(f"Token {asset} is not an allowed collateral asset")
        self.asset = asset


class LengthMismatch(ValidationError):
    def __init__(self, tokens: int, feeds: int) -> None:
        super().__init__(
            f"Token and price feed lists must have the same length ({tokens} != {feeds})"
        )
        self.tokens = tokens
        self.feeds = feeds


# ---------------------------------------------------------------------------
# Invariant violations
# ---------------------------------------------------------------------------


class InvariantViolation(EngineError):
    """The operation would leave a position in a forbidden state."""


class HealthFactorBroken(InvariantViolation):
    def __init__(self, health_factor: int) -> None:
        super().__init__(f"Health factor broken: {health_factor}")
        self.health_factor = health_factor


class HealthFactorNotImproved(InvariantViolation):
    def __init__(self, starting: int, ending: int) -> None:
        super().__init__(
            f"Liquidation did not improve health factor ({starting} -> {ending})"
        )
        self.starting = starting
        self.ending = ending


class InsufficientBalance(EngineError):
    """Ledger subtraction beyond the recorded balance."""

    def __init__(self, what: str, balance: int, amount: int) -> None:
        super().__init__(f"Cannot remove {amount} {what}, balance is {balance}")
        self.balance = balance
        self.amount = amount


# ---------------------------------------------------------------------------
# External collaborators
# ---------------------------------------------------------------------------


class ExternalCallFailed(EngineError):
    """A collaborator reported failure."""


class TransferFailed(ExternalCallFailed):
    pass


class MintFailed(ExternalCallFailed):
    pass


# ---------------------------------------------------------------------------
# Oracle
# ---------------------------------------------------------------------------


class OracleError(EngineError):
    pass


class StalePrice(OracleError):
    def __init__(self, asset: str, updated_at: int, now: int) -> None:
        super().__init__(
            f"Price for {asset} is stale: updated at {updated_at}, now {now}"
        )
        self.asset = asset
        self.updated_at = updated_at
        self.now = now


class InvalidPrice(OracleError):
    def __init__(self, asset: str, price: int) -> None:
        super().__init__(f"Feed for {asset} reported non-positive price {price}")
        self.asset = asset
        self.price = price


# ---------------------------------------------------------------------------
# Liquidation / reentrancy
# ---------------------------------------------------------------------------


class LiquidationError(EngineError):
    pass


class HealthFactorOk(LiquidationError):
    def __init__(self, user: str, health_factor: int) -> None:
        super().__init__(
            f"Position of {user} is healthy ({health_factor}), cannot liquidate"
        )
        self.user = user
        self.health_factor = health_factor


class LiquidationTooSmall(LiquidationError):
    def __init__(self, asset: str, debt_to_cover: int) -> None:
        super().__init__(
            f"Covering {debt_to_cover} of debt is worth less than one unit of {asset}"
        )
        self.asset = asset
        self.debt_to_cover = debt_to_cover


class ReentrantCall(EngineError):
    pass


# ---------------------------------------------------------------------------
# Token collaborators
# ---------------------------------------------------------------------------


class TokenError(Exception):
    """Raised by the in-process token implementations."""


class NotOwner(TokenError):
    pass


class NotZeroAddress(TokenError):
    pass


class BurnAmountExceedsBalance(TokenError):
    pass


class InsufficientAllowance(TokenError):
    pass


class InsufficientFunds(TokenError):
    pass
