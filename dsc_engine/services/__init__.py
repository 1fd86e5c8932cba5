"""Service modules"""
from .engine import DSCEngine
from .guard import ReentrancyGuard
from .health import HealthFactorCalculator
from .ledger import PositionLedger

__all__ = ["DSCEngine", "HealthFactorCalculator", "PositionLedger", "ReentrancyGuard"]
