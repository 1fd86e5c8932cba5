"""Protocol interfaces for the engine's collaborators."""
from .journaled import Journaled
from .price_feed import Clock, PriceFeed
from .token import CollateralToken, DebtToken

__all__ = ["Clock", "CollateralToken", "DebtToken", "Journaled", "PriceFeed"]
