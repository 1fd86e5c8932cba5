"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from dsc_engine.config import PythConfig
from dsc_engine.oracles import ManualPriceFeed
from dsc_engine.services import DSCEngine
from dsc_engine.tokens import DecentralizedStableCoin, Token
from tests.helpers import (
    AMOUNT_TO_MINT,
    BTC_USD_PRICE,
    COLLATERAL_AMOUNT,
    DSC_ADDRESS,
    ENGINE,
    ETH_USD_PRICE,
    LIQUIDATOR,
    STARTING_BALANCE,
    USER,
    WBTC_ADDRESS,
    WETH_ADDRESS,
    FakeClock,
    make_engine,
)

# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def weth() -> Token:
    token = Token("Wrapped Ether", "WETH", WETH_ADDRESS)
    token.mint_to(USER, STARTING_BALANCE)
    token.mint_to(LIQUIDATOR, STARTING_BALANCE)
    return token


@pytest.fixture()
def wbtc() -> Token:
    token = Token("Wrapped Bitcoin", "WBTC", WBTC_ADDRESS)
    token.mint_to(USER, STARTING_BALANCE)
    token.mint_to(LIQUIDATOR, STARTING_BALANCE)
    return token


@pytest.fixture()
def eth_usd(clock: FakeClock) -> ManualPriceFeed:
    return ManualPriceFeed(ETH_USD_PRICE, clock=clock)


@pytest.fixture()
def btc_usd(clock: FakeClock) -> ManualPriceFeed:
    return ManualPriceFeed(BTC_USD_PRICE, clock=clock)


@pytest.fixture()
def dsc() -> DecentralizedStableCoin:
    return DecentralizedStableCoin(owner=ENGINE, address=DSC_ADDRESS)


@pytest.fixture()
def engine(
    weth: Token,
    wbtc: Token,
    eth_usd: ManualPriceFeed,
    btc_usd: ManualPriceFeed,
    dsc: DecentralizedStableCoin,
    clock: FakeClock,
) -> DSCEngine:
    return make_engine([weth, wbtc], [eth_usd, btc_usd], dsc, clock)


# ---------------------------------------------------------------------------
# Prepared positions
# ---------------------------------------------------------------------------


@pytest.fixture()
def deposited(engine: DSCEngine, weth: Token) -> DSCEngine:
    """USER has 10 WETH ($20,000) deposited and no debt."""
    weth.approve(USER, ENGINE, COLLATERAL_AMOUNT)
    engine.deposit_collateral(USER, WETH_ADDRESS, COLLATERAL_AMOUNT)
    return engine


@pytest.fixture()
def minted(deposited: DSCEngine) -> DSCEngine:
    """USER has 10 WETH deposited and 100 DSC minted (health factor 100)."""
    deposited.mint_dsc(USER, AMOUNT_TO_MINT)
    return deposited


@pytest.fixture()
def sample_pyth_config() -> PythConfig:
    return PythConfig(
        hermes_url="https://hermes.example.com/v2/updates/price/latest",
        feeds={"WETH": "0xAAA111", "WBTC": "bbb222", "USDC": "ccc333"},
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    engine:
      staleness_timeout_seconds: 3600
      liquidation_threshold: 50
      liquidation_precision: 100
      liquidation_bonus: 10
    price_oracle:
      provider: pyth
      pyth:
        hermes_url: "https://hermes.example.com"
        timeout: 5
        feeds: {WETH: "aaa", WBTC: "bbb"}
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
