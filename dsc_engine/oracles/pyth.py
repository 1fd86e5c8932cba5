"""Pyth Network price feeds backed by the Hermes HTTP API."""
from __future__ import annotations

import asyncio
import logging
import ssl

import aiohttp
import certifi

from ..config import PythConfig
from ..constants import FEED_DECIMALS
from ..models import RoundData

logger = logging.getLogger(__name__)


def _normalize_id(feed_id: str) -> str:
    return feed_id.lower().removeprefix("0x")


def to_feed_decimals(price_raw: int, expo: int) -> int:
    """Rescale a Pyth ``price * 10**expo`` to an 8-decimal integer answer."""
    shift = expo + FEED_DECIMALS
    if shift >= 0:
        return price_raw * 10**shift
    scaled = abs(price_raw) // 10**-shift
    return scaled if price_raw >= 0 else -scaled


class PythPriceFeed:
    """Last Hermes observation for one asset, served as aggregator rounds.

    Until the first successful refresh ``updated_at`` is 0, which the oracle
    adapter treats as stale.
    """

    def __init__(self, symbol: str, feed_id: str) -> None:
        self.symbol = symbol
        self.feed_id = _normalize_id(feed_id)
        self.decimals = FEED_DECIMALS
        self._round = RoundData()

    def latest_round_data(self) -> RoundData:
        return self._round

    def record(self, price_raw: int, expo: int, publish_time: int) -> bool:
        """Store a new observation; older or duplicate publish times are ignored."""
        if publish_time <= self._round.updated_at:
            return False
        round_id = self._round.round_id + 1
        self._round = RoundData(
            round_id=round_id,
            answer=to_feed_decimals(price_raw, expo),
            started_at=publish_time,
            updated_at=publish_time,
            answered_in_round=round_id,
        )
        return True


class PythOracle:
    """Fetch prices from Pyth Network and push them into per-asset feeds."""

    def __init__(self, config: PythConfig) -> None:
        self.hermes_url = config.hermes_url
        self.timeout = config.timeout
        self._feeds = {
            symbol: PythPriceFeed(symbol, feed_id)
            for symbol, feed_id in config.feeds.items()
        }

    @property
    def feeds(self) -> dict[str, PythPriceFeed]:
        return dict(self._feeds)

    def feed(self, symbol: str) -> PythPriceFeed:
        try:
            return self._feeds[symbol]
        except KeyError:
            raise ValueError(f"No Pyth feed configured for '{symbol}'") from None

    async def refresh(self, symbols: list[str] | None = None) -> dict[str, RoundData]:
        """Fetch the latest Hermes prices and record them in the feeds.

        Args:
            symbols: Optional list of symbols to refresh. If None, refreshes
                all configured feeds.

        Returns the rounds that were updated. On HTTP or network failure the
        feeds keep their previous round, so a long outage surfaces as
        ``StalePrice`` at valuation time.
        """
        updated: dict[str, RoundData] = {}

        feeds = self._feeds
        if symbols is not None:
            feeds = {k: v for k, v in self._feeds.items() if k in symbols}

        feed_ids = sorted({feed.feed_id for feed in feeds.values()})
        if not feed_ids:
            return updated

        query_params = "&".join([f"ids[]={fid}" for fid in feed_ids])
        url = f"{self.hermes_url}?{query_params}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from Pyth: HTTP %s", response.status
                        )
                        return updated

                    data = await response.json()
        except (aiohttp.ClientError, OSError, asyncio.TimeoutError, ValueError) as e:
            logger.error("Error fetching prices from Pyth: %s", e)
            return updated

        id_to_feeds: dict[str, list[PythPriceFeed]] = {}
        for feed in feeds.values():
            id_to_feeds.setdefault(feed.feed_id, []).append(feed)

        for item in data.get("parsed", []):
            feed_id = _normalize_id(item.get("id", ""))
            price_data = item.get("price", {})
            price_raw = int(price_data.get("price", 0))
            expo = int(price_data.get("expo", 0))
            publish_time = int(price_data.get("publish_time", 0))

            for feed in id_to_feeds.get(feed_id, []):
                if feed.record(price_raw, expo, publish_time):
                    updated[feed.symbol] = feed.latest_round_data()

        logger.info("Fetched prices from Pyth Network:")
        for symbol, round_data in sorted(updated.items()):
            logger.info(
                "  %s: %s (1e-%d) at %s",
                symbol,
                round_data.answer,
                FEED_DECIMALS,
                round_data.updated_at,
            )

        return updated
