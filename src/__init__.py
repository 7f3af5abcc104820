"""
swapfeed - Thin clients for market sentiment, exchange tickers and DEX routing.

This package provides tools to:
- Read the crypto Fear & Greed index from alternative.me
- Read ticker prices from the Kraken public API
- Query and build transactions against the 1inch aggregation router
- Watch a price for trailing buy/sell triggers
"""

__app_name__ = "swapfeed"
