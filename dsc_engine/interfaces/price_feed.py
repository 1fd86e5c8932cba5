"""Price feed protocol: external price source abstraction."""
from collections.abc import Callable
from typing import Protocol

from ..models import RoundData

Clock = Callable[[], int]


class PriceFeed(Protocol):
    """Abstract interface for an aggregator-style price feed."""

    def latest_round_data(self) -> RoundData: ...
