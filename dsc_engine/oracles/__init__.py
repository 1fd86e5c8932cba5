"""Price feeds and the staleness-checked oracle adapter."""
from .adapter import PriceOracleAdapter
from .manual import ManualPriceFeed
from .pyth import PythOracle, PythPriceFeed

__all__ = ["ManualPriceFeed", "PriceOracleAdapter", "PythOracle", "PythPriceFeed"]
