"""Collateralized-debt engine for the DSC stable coin."""
from .config import AppConfig, EngineConfig, load_config
from .models import (
    AccountInformation,
    CollateralDeposited,
    CollateralRedeemed,
    PriceObservation,
    RoundData,
    SupportedAsset,
)
from .oracles import ManualPriceFeed, PriceOracleAdapter, PythOracle, PythPriceFeed
from .registry import CollateralRegistry
from .services import DSCEngine, HealthFactorCalculator, PositionLedger
from .tokens import DecentralizedStableCoin, Token

__all__ = [
    "AccountInformation",
    "AppConfig",
    "CollateralDeposited",
    "CollateralRedeemed",
    "CollateralRegistry",
    "DSCEngine",
    "DecentralizedStableCoin",
    "EngineConfig",
    "HealthFactorCalculator",
    "ManualPriceFeed",
    "PositionLedger",
    "PriceObservation",
    "PriceOracleAdapter",
    "PythOracle",
    "PythPriceFeed",
    "RoundData",
    "SupportedAsset",
    "Token",
    "load_config",
]
