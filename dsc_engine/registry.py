"""Collateral registry: supported assets and the feeds that price them."""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from types import MappingProxyType

from .errors import LengthMismatch, NotAllowedToken, ValidationError
from .interfaces import CollateralToken, PriceFeed
from .models import SupportedAsset

logger = logging.getLogger(__name__)


class CollateralRegistry:
    """Immutable, ordered mapping of collateral address to ``SupportedAsset``.

    Built 1:1 from two parallel lists; fails before storing anything when
    the lists differ in length or repeat a token.
    """

    def __init__(
        self,
        collateral_tokens: Sequence[CollateralToken],
        price_feeds: Sequence[PriceFeed],
    ) -> None:
        if len(collateral_tokens) != len(price_feeds):
            raise LengthMismatch(len(collateral_tokens), len(price_feeds))

        assets: dict[str, SupportedAsset] = {}
        for token, feed in zip(collateral_tokens, price_feeds):
            if token.address in assets:
                raise ValidationError(f"Collateral token {token.address} listed twice")
            assets[token.address] = SupportedAsset(
                address=token.address, token=token, price_feed=feed
            )

        self._assets = MappingProxyType(assets)
        self._order = tuple(assets)
        logger.debug("Collateral registry built with %d assets", len(self._order))

    @property
    def addresses(self) -> tuple[str, ...]:
        return self._order

    def __iter__(self) -> Iterator[SupportedAsset]:
        return (self._assets[address] for address in self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, asset: object) -> bool:
        return asset in self._assets

    def is_supported(self, asset: str) -> bool:
        return asset in self._assets

    def get(self, asset: str) -> SupportedAsset:
        """Return the registered asset or raise ``NotAllowedToken``."""
        try:
            return self._assets[asset]
        except KeyError:
            raise NotAllowedToken(asset) from None
