"""Data models: all frozen (immutable)."""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .interfaces import CollateralToken, PriceFeed


@dataclass(frozen=True)
class RoundData:
    """One answer as reported by a price feed."""

    round_id: int = 0
    answer: int = 0
    started_at: int = 0
    updated_at: int = 0
    answered_in_round: int = 0


@dataclass(frozen=True)
class PriceObservation:
    """Raw feed price (8 decimals) and when it was observed."""

    price: int
    observed_at: int


@dataclass(frozen=True)
class SupportedAsset:
    """Collateral asset accepted by the engine and the feed that prices it."""

    address: str
    token: CollateralToken
    price_feed: PriceFeed


@dataclass(frozen=True)
class AccountInformation:
    total_debt: int
    collateral_value_usd: int

    def __iter__(self) -> Iterator[int]:
        yield self.total_debt
        yield self.collateral_value_usd


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CollateralDeposited:
    user: str
    asset: str
    amount: int


@dataclass(frozen=True)
class CollateralRedeemed:
    redeemed_from: str
    redeemed_to: str
    asset: str
    amount: int


Event = CollateralDeposited | CollateralRedeemed
