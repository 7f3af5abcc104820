"""
Kraken public API client for ticker prices.

Kraken wraps every payload as {"error": [...], "result": {...}}. A non-empty
error list means the call failed even though the HTTP status was 200.

API Documentation: https://docs.kraken.com/rest/#tag/Spot-Market-Data
"""

from api.base import BaseClient
from api.errors import ApplicationError, PairNotFoundError
from config import KRAKEN_ASK_FIELD, KRAKEN_TICKER_URL, REQUEST_TIMEOUT_SECONDS
from utils.logging import get_logger

logger = get_logger(__name__)


class KrakenClient(BaseClient):
    """
    Client for the Kraken public ticker endpoint.

    Usage:
        client = KrakenClient()
        price = client.get_coin_price("SOLUSD")
    """

    # Kraken error responses are surfaced as-is, even when empty
    surface_empty_error_body = True

    def __init__(
        self,
        base_url: str = KRAKEN_TICKER_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        super().__init__(base_url=base_url, timeout=timeout)

    def get_coin_price(self, pair: str) -> float:
        """
        Get the current ask price for a trading pair.

        Args:
            pair: Kraken ticker symbol (e.g., "SOLUSD", case-insensitive)

        Returns:
            Ask price of one unit of the base currency, in the quote currency

        Raises:
            ApplicationError: Kraken reported an error in the payload
            PairNotFoundError: The pair is missing from the result
            UpstreamError: Non-2xx HTTP response
            TransportError: No response received
        """
        data = self._request("GET", self.base_url, params={"pair": pair})

        errors = data.get("error") or []
        if errors:
            logger.warning("Kraken rejected pair %s: %s", pair, errors[0])
            raise ApplicationError(errors[0])

        result = data.get("result") or {}
        key = pair.upper()
        if key not in result:
            raise PairNotFoundError(key)

        return float(result[key][KRAKEN_ASK_FIELD][0])
