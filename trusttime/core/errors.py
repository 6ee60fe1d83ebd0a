# trusttime/core/errors.py
"""
Error taxonomy.

File problems surface as the built-in OSError (IOError) from the digest engine.
Ledger problems are split into transport/parse failures and the "nothing seen yet"
domain outcome, so callers can tell a flaky network apart from an unanchored document.
"""


class TrustTimeError(Exception):
    """Base class for all trusttime errors."""


class LedgerQueryError(TrustTimeError):
    """The ledger index could not be queried or returned an unusable response."""


class AddressNotSeenError(TrustTimeError):
    """The ledger index answered, but has no transactions for the address."""

    def __init__(self, address: str):
        super().__init__(f"Address not seen in the network: {address}")
        self.address = address
