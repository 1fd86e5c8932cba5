"""Health factor: risk-adjusted collateral value over debt."""
from __future__ import annotations

import logging

from ..config import EngineConfig
from ..constants import MAX_HEALTH_FACTOR, PRECISION
from ..errors import HealthFactorBroken
from ..oracles import PriceOracleAdapter
from ..registry import CollateralRegistry
from .ledger import PositionLedger

logger = logging.getLogger(__name__)


class HealthFactorCalculator:
    """Read-only solvency maths over the ledger and live prices."""

    def __init__(
        self,
        registry: CollateralRegistry,
        ledger: PositionLedger,
        oracle: PriceOracleAdapter,
        config: EngineConfig,
    ) -> None:
        self._registry = registry
        self._ledger = ledger
        self._oracle = oracle
        self._config = config

    def collateral_value_usd(self, user: str) -> int:
        """Sum of the USD value of every supported asset ``user`` deposited.

        Every feed is read, so a stale feed fails the whole valuation.
        """
        return sum(
            self._oracle.usd_value(asset, self._ledger.collateral_of(user, asset))
            for asset in self._registry.addresses
        )

    def calculate(self, total_debt: int, collateral_value_usd: int) -> int:
        if total_debt == 0:
            return MAX_HEALTH_FACTOR
        adjusted = (
            collateral_value_usd
            * self._config.liquidation_threshold
            // self._config.liquidation_precision
        )
        return adjusted * PRECISION // total_debt

    def health_factor(self, user: str) -> int:
        return self.calculate(self._ledger.debt_of(user), self.collateral_value_usd(user))

    def assert_healthy(self, user: str) -> None:
        health_factor = self.health_factor(user)
        if health_factor < self._config.min_health_factor:
            logger.warning("Health factor of %s broken: %s", user, health_factor)
            raise HealthFactorBroken(health_factor)
