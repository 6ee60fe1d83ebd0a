# trusttime/verify/ledger.py
"""
Trusted timestamp lookup against a public ledger index.

One GET per lookup, no retries, no pagination: the first page of transactions
at an address is enough to find when it was first seen.
"""

import logging
import math
from datetime import datetime, timezone
from typing import List, Optional

import httpx

from trusttime.config import DEFAULT_LEDGER_HOST, DEFAULT_TIMEOUT
from trusttime.core.errors import AddressNotSeenError, LedgerQueryError
from trusttime.core.types import DocumentAddress, LedgerTimestamp, LedgerTransaction

logger = logging.getLogger(__name__)


class LedgerClient:
    """
    Read-only client for the ledger index `/address/{address}?format=json` endpoint.

    Example:
        with LedgerClient(timeout=5.0) as client:
            txs = client.fetch_transactions("1L7YHmb2Qtk7MABJGhDfvmRLiLGGeZeMVY")
    """

    def __init__(
        self,
        host: str = DEFAULT_LEDGER_HOST,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.host = host.rstrip("/")
        self._client = httpx.Client(
            base_url=self.host,
            timeout=timeout,
            transport=transport or httpx.HTTPTransport(retries=0),
        )

    def __enter__(self) -> "LedgerClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def address_url(self, address: str) -> str:
        return f"{self.host}/address/{address}"

    def fetch_transactions(self, address: str) -> List[LedgerTransaction]:
        """
        Fetch the transactions recorded at `address`.
        A response without a `txs` list entry counts as no transactions.
        """
        path = f"/address/{address}"
        logger.debug("GET %s%s?format=json", self.host, path)
        try:
            response = self._client.get(path, params={"format": "json"})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise LedgerQueryError(f"Ledger query for {address} failed: {e}") from e
        except ValueError as e:
            raise LedgerQueryError(f"Ledger returned malformed JSON for {address}: {e}") from e

        if not isinstance(data, dict):
            raise LedgerQueryError(f"Unexpected ledger response for {address}: not a JSON object")

        raw_txs = data.get("txs")
        if raw_txs is None:
            return []
        if not isinstance(raw_txs, list):
            raise LedgerQueryError(f"Unexpected ledger response for {address}: 'txs' is not a list")

        return [_parse_transaction(address, i, tx) for i, tx in enumerate(raw_txs)]

    def close(self) -> None:
        self._client.close()


def _parse_transaction(address: str, index: int, tx) -> LedgerTransaction:
    time = tx.get("time") if isinstance(tx, dict) else None
    if isinstance(time, bool) or not isinstance(time, (int, float)):
        raise LedgerQueryError(f"Transaction #{index} at {address} has no numeric 'time'")
    if not math.isfinite(time):
        raise LedgerQueryError(f"Transaction #{index} at {address} has non-finite time {time}")
    try:
        datetime.fromtimestamp(int(time), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise LedgerQueryError(f"Transaction #{index} at {address} has out-of-range time {time}") from e
    return LedgerTransaction(time=int(time), tx_hash=str(tx.get("hash", "")))


def earliest_transaction(transactions: List[LedgerTransaction]) -> LedgerTransaction:
    """Transaction with the smallest time; the first one wins on ties."""
    if not transactions:
        raise ValueError("No transactions to choose from")
    return min(transactions, key=lambda tx: tx.time)


class TimestampVerifier:
    """Finds the trusted timestamp of a derived document address."""

    def __init__(self, client: LedgerClient):
        self.client = client

    def verify_timestamp(self, document: DocumentAddress) -> LedgerTimestamp:
        """
        Earliest time the document's address was seen on the ledger.

        Raises LedgerQueryError if the index cannot be queried,
        AddressNotSeenError if it has nothing for this address.
        """
        transactions = self.client.fetch_transactions(document.address)
        if not transactions:
            logger.warning("Address %s not seen in the network", document.address)
            raise AddressNotSeenError(document.address)

        first = earliest_transaction(transactions)
        logger.debug(
            "Earliest of %d transactions at %s: %s", len(transactions), document.address, first.time
        )
        return LedgerTimestamp(
            address=document.address,
            unix_time=first.time,
            transaction_count=len(transactions),
        )
