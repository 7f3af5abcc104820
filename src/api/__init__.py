"""
API client modules for external services.

- Alternative.me: crypto Fear & Greed index
- Kraken: public ticker prices
- 1inch: DEX aggregation router (quotes, swaps, approvals, broadcast)
"""

from .alternative import AlternativeClient, SentimentReading
from .errors import (
    ApplicationError,
    ClientError,
    PairNotFoundError,
    TransportError,
    UpstreamError,
)
from .kraken import KrakenClient
from .oneinch import OneInchRouter, Token, parse_uint

__all__ = [
    # Errors
    "ClientError",
    "UpstreamError",
    "TransportError",
    "ApplicationError",
    "PairNotFoundError",
    # Alternative.me
    "AlternativeClient",
    "SentimentReading",
    # Kraken
    "KrakenClient",
    # 1inch
    "OneInchRouter",
    "Token",
    "parse_uint",
]
