"""
Alternative.me API client for the crypto Fear & Greed index.

API Documentation: https://alternative.me/crypto/fear-and-greed-index/#api
"""

from dataclasses import dataclass
from typing import Any

from api.base import BaseClient
from config import ALTERNATIVE_FNG_URL, REQUEST_TIMEOUT_SECONDS


@dataclass
class SentimentReading:
    """A single Fear & Greed index reading."""

    fear_greed_index: float
    fear_greed_index_classification: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for output."""
        return {
            "fear_greed_index": self.fear_greed_index,
            "fear_greed_index_classification": self.fear_greed_index_classification,
        }


class AlternativeClient(BaseClient):
    """
    Client for the alternative.me Fear & Greed index.

    Usage:
        client = AlternativeClient()
        reading = client.get_crypto_fear_index()
    """

    def __init__(
        self,
        base_url: str = ALTERNATIVE_FNG_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        super().__init__(base_url=base_url, timeout=timeout)

    def get_crypto_fear_index(self) -> SentimentReading:
        """
        Fetch the latest Fear & Greed index.

        Returns:
            SentimentReading built from the first entry of the response

        Raises:
            UpstreamError: The service answered with an error body
            TransportError: The request failed without a usable answer
        """
        data = self._request("GET", f"{self.base_url}/")

        latest = data["data"][0]

        return SentimentReading(
            fear_greed_index=float(latest["value"]),
            fear_greed_index_classification=str(latest["value_classification"]),
        )
