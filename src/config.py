"""
Configuration constants for the swapfeed project.

swapfeed - Thin clients for market sentiment, exchange tickers and DEX routing.
"""

# =============================================================================
# HTTP Configuration
# =============================================================================

# Every outbound request is bounded by this deadline
REQUEST_TIMEOUT_SECONDS = 5.0

# =============================================================================
# Alternative.me (Fear & Greed Index)
# =============================================================================

ALTERNATIVE_FNG_URL = "https://api.alternative.me/fng/"

# =============================================================================
# Kraken Public API
# =============================================================================

KRAKEN_TICKER_URL = "https://api.kraken.com/0/public/Ticker"

# Kraken ticker field holding [price, whole lot volume, lot volume]
KRAKEN_ASK_FIELD = "a"

# =============================================================================
# 1inch Aggregation API
# =============================================================================

# Requests go to <base>/<chain_id>/<path>
ONEINCH_BASE_URL = "https://api.1inch.io/v4.0"
ONEINCH_TX_GATEWAY_URL = "https://tx-gateway.1inch.io/v1.1"

# Passing this amount to the approve endpoint requests an unlimited approval
UNLIMITED_APPROVAL_AMOUNT = "-1"

# Well-known chain identifiers
CHAIN_IDS = {
    "ethereum": 1,
    "optimism": 10,
    "bsc": 56,
    "gnosis": 100,
    "polygon": 137,
    "fantom": 250,
    "arbitrum": 42161,
    "avalanche": 43114,
}

DEFAULT_CHAIN_ID = CHAIN_IDS["ethereum"]

# =============================================================================
# Price Monitor
# =============================================================================

# Take-profit distance from the reference price, in percent
DEFAULT_LIMIT_PERCENT = 0.5

# Stop-loss distance from the reference price, in percent
DEFAULT_STOP_LOSS_PERCENT = 1.0

# Polling interval for the watch command
WATCH_INTERVAL_SECONDS = 10.0
