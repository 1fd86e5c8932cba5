"""Fixed-point constants shared by the engine and its oracle adapter."""

# Token amounts and USD values carry 18 decimals.
PRECISION = 10**18

# Feeds report 8 decimals; this lifts a raw answer to 18.
FEED_DECIMALS = 8
ADDITIONAL_FEED_PRECISION = 10**10

# 50 / 100 -> positions must be 200% overcollateralized.
LIQUIDATION_THRESHOLD = 50
LIQUIDATION_PRECISION = 100
LIQUIDATION_BONUS = 10  # percent of the covered collateral

MIN_HEALTH_FACTOR = PRECISION
MAX_HEALTH_FACTOR = 2**256 - 1

STALENESS_TIMEOUT = 3 * 60 * 60  # seconds

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
DEFAULT_ENGINE_ADDRESS = "0x00000000000000000000000000000000000d5ce0"
