"""
1inch Aggregation API client (v4.0) and transaction gateway (v1.1).

Provides methods to:
- Build swap and approval transactions
- Fetch quotes, supported tokens, spender address and allowances
- Broadcast a signed raw transaction

Every request targets <base-url>/<chain_id>/<path>.

API Documentation: https://docs.1inch.io/docs/aggregation-protocol/api/swagger
"""

from dataclasses import dataclass
from typing import Any

from api.base import BaseClient
from config import (
    ONEINCH_BASE_URL,
    ONEINCH_TX_GATEWAY_URL,
    REQUEST_TIMEOUT_SECONDS,
    UNLIMITED_APPROVAL_AMOUNT,
)
from utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Token:
    """Represents a token supported by the 1inch router."""

    id: str = ""
    name: str = ""
    decimals: int = 0
    symbol: str = ""
    address: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        """
        Build a Token from an upstream token record.

        Missing or empty fields fall back to "" (strings) and 0 (decimals).
        """
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            decimals=int(data.get("decimals") or 0),
            symbol=data.get("symbol") or "",
            address=data.get("address") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for output."""
        return {
            "id": self.id,
            "name": self.name,
            "decimals": self.decimals,
            "symbol": self.symbol,
            "address": self.address,
        }


def parse_uint(value: int | str) -> int:
    """
    Convert a decimal or 0x-prefixed hex amount to a non-negative int.

    Raises:
        ValueError: If the value is not an integer or is negative
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an integer amount: {value!r}")

    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        if text.lower().startswith("0x"):
            number = int(text, 16)
        else:
            number = int(text)

    if number < 0:
        raise ValueError(f"Amount must be non-negative: {value!r}")

    return number


class OneInchRouter(BaseClient):
    """
    1inch router client bound to a single chain.

    Usage:
        router = OneInchRouter(chain_id=1)
        spender = router.get_contract_address()
        tokens = router.get_supported_tokens()
    """

    def __init__(
        self,
        chain_id: int,
        base_url: str = ONEINCH_BASE_URL,
        tx_gateway_url: str = ONEINCH_TX_GATEWAY_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        """
        Initialize the router client.

        Args:
            chain_id: Blockchain network identifier (e.g., 1 for Ethereum)
            base_url: Aggregation API base URL
            tx_gateway_url: Transaction gateway base URL
            timeout: Per-request deadline in seconds
        """
        super().__init__(base_url=base_url, timeout=timeout)
        self._chain_id = int(chain_id)
        self.tx_gateway_url = tx_gateway_url.rstrip("/")

    @property
    def chain_id(self) -> int:
        """Chain identifier this router was created for."""
        return self._chain_id

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{self._chain_id}/{path}"

    def get_swap_transaction_data(self, params: dict[str, Any]) -> dict[str, Any]:
        """
        Build a swap transaction.

        Args:
            params: Query parameters passed through to the swap endpoint
                (fromTokenAddress, toTokenAddress, amount, fromAddress,
                slippage, ...)

        Returns:
            The ``tx`` object of the response (from, to, data, value, gas, ...)
        """
        data = self._request("GET", self._url("swap"), params=params)
        return data["tx"]

    def get_quote(self, params: dict[str, Any]) -> dict[str, Any]:
        """
        Fetch a swap quote.

        Args:
            params: Query parameters passed through to the quote endpoint

        Returns:
            Full quote response body
        """
        return self._request("GET", self._url("quote"), params=params)

    def get_health_status(self) -> bool:
        """
        Check that the router API for this chain is healthy.

        Returns:
            True when the healthcheck succeeds. Failures raise instead of
            returning False.
        """
        self._send("GET", self._url("healthcheck"))
        return True

    def get_contract_address(self) -> str:
        """Get the address of the spender contract that needs approval."""
        data = self._request("GET", self._url("approve/spender"))
        return data["address"]

    def get_supported_tokens(self) -> list[Token]:
        """
        List tokens supported on this chain.

        Returns:
            Tokens in the order the API lists them
        """
        data = self._request("GET", self._url("tokens"))

        tokens = [Token.from_dict(record) for record in data["tokens"].values()]
        logger.debug("Chain %d supports %d tokens", self._chain_id, len(tokens))

        return tokens

    def get_approved_allowance(self, token_address: str, wallet_address: str) -> int:
        """
        Get how much of a token the spender may move for a wallet.

        Args:
            token_address: Token contract address
            wallet_address: Holder wallet address

        Returns:
            Allowance in the token's smallest unit
        """
        data = self._request(
            "GET",
            self._url("approve/allowance"),
            params={
                "tokenAddress": token_address,
                "walletAddress": wallet_address,
            },
        )
        return parse_uint(data["allowance"])

    def get_approve_transaction_data(
        self,
        token_address: str,
        amount: str = UNLIMITED_APPROVAL_AMOUNT,
    ) -> dict[str, Any]:
        """
        Build an approval transaction for the spender contract.

        Args:
            token_address: Token contract address
            amount: Amount to approve in the token's smallest unit. "-1"
                leaves the amount out, which requests an unlimited approval.

        Returns:
            Full response body (data, gasPrice, to, value)
        """
        params = {"tokenAddress": token_address}
        if amount != UNLIMITED_APPROVAL_AMOUNT:
            params["amount"] = amount

        return self._request("GET", self._url("approve/transaction"), params=params)

    def broadcast_raw_transaction(self, raw_transaction: str) -> str:
        """
        Submit a signed transaction through the 1inch transaction gateway.

        Calling this twice submits the transaction twice.

        Args:
            raw_transaction: Signed transaction, hex encoded

        Returns:
            Transaction hash, or "" if the gateway did not return one
        """
        data = self._request(
            "POST",
            f"{self.tx_gateway_url}/{self._chain_id}/broadcast",
            json={"rawTransaction": raw_transaction},
        )
        return data.get("transactionHash") or ""
