"""Price oracle adapter: staleness-checked prices and USD conversions."""
from __future__ import annotations

import logging
import time

from ..constants import ADDITIONAL_FEED_PRECISION, PRECISION, STALENESS_TIMEOUT
from ..errors import InvalidPrice, StalePrice
from ..interfaces import Clock
from ..models import PriceObservation
from ..registry import CollateralRegistry

logger = logging.getLogger(__name__)


def _wall_clock() -> int:
    return int(time.time())


class PriceOracleAdapter:
    """Read collateral prices, refusing anything older than the timeout.

    The adapter fails closed: a stalled feed makes every valuation raise
    ``StalePrice`` instead of falling back to the last known answer.
    """

    def __init__(
        self,
        registry: CollateralRegistry,
        staleness_timeout: int = STALENESS_TIMEOUT,
        clock: Clock | None = None,
    ) -> None:
        self._registry = registry
        self.staleness_timeout = staleness_timeout
        self._clock = clock or _wall_clock

    def now(self) -> int:
        return self._clock()

    def get_price(self, asset: str) -> PriceObservation:
        """Fetch a fresh observation for ``asset``.

        Raises:
            NotAllowedToken: ``asset`` is not registered.
            StalePrice: the feed never reported, reported from the future, or
                its last update is older than ``staleness_timeout``.
            InvalidPrice: the feed answer is zero or negative.
        """
        feed = self._registry.get(asset).price_feed
        round_data = feed.latest_round_data()
        now = self._clock()

        updated_at = round_data.updated_at
        if updated_at <= 0 or updated_at > now or now - updated_at > self.staleness_timeout:
            logger.warning(
                "Stale price for %s: updated_at=%s now=%s timeout=%ss",
                asset,
                updated_at,
                now,
                self.staleness_timeout,
            )
            raise StalePrice(asset, updated_at, now)

        if round_data.answer <= 0:
            logger.warning("Invalid price for %s: %s", asset, round_data.answer)
            raise InvalidPrice(asset, round_data.answer)

        return PriceObservation(price=round_data.answer, observed_at=updated_at)

    def usd_value(self, asset: str, amount: int) -> int:
        """USD value (18 decimals) of ``amount`` of ``asset``."""
        price = self.get_price(asset).price
        return (price * ADDITIONAL_FEED_PRECISION) * amount // PRECISION

    def asset_amount_for_usd(self, asset: str, usd_amount: int) -> int:
        """Amount of ``asset`` worth ``usd_amount`` (inverse of ``usd_value``)."""
        price = self.get_price(asset).price
        return usd_amount * PRECISION // (price * ADDITIONAL_FEED_PRECISION)
