# trusttime/core/types.py
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional

from trusttime.core.canon import export_record


@dataclass(frozen=True)
class AddressTrace:
    """Every intermediate value of an address derivation, hex encoded for auditing."""
    document_sha256: str            # the content digest the address was derived from
    ripemd160: str                  # h1: RIPEMD160(digest), 20 bytes
    versioned: str                  # h2: version byte + h1, 21 bytes
    sha256_once: str                # h3: SHA256(h2)
    sha256_twice: str               # h4: SHA256(h3)
    checksum: str                   # h4[0:4]
    with_checksum: str              # h5: h2 + checksum, 25 bytes
    base58: str                     # base58(h5), the address itself


@dataclass(frozen=True)
class DocumentAddress:
    """Public identity of a document. Holds no secret material, safe to log or share."""
    address: str
    sha256: str
    detail: AddressTrace

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        """RFC 8785 canonical JSON of the full record (address, digest, trace)."""
        return export_record(self.to_dict())


@dataclass(frozen=True)
class LedgerTransaction:
    """A transaction observed at an address. Only the time is read."""
    time: int                       # unix seconds
    tx_hash: str = ""


@dataclass(frozen=True)
class LedgerTimestamp:
    """Earliest time an address was seen on the ledger."""
    address: str
    unix_time: int
    transaction_count: int = 1

    @property
    def timestamp(self) -> datetime:
        return datetime.fromtimestamp(self.unix_time, tz=timezone.utc)

    def utc_string(self) -> str:
        """RFC 1123 form, e.g. 'Thu, 01 Jan 1970 00:01:40 GMT'."""
        return format_datetime(self.timestamp, usegmt=True)

    def to_dict(self) -> dict:
        return {
            "unix_time": self.unix_time,
            "utc": self.utc_string(),
            "transaction_count": self.transaction_count,
        }


@dataclass
class AddressResult:
    """Outcome of the file -> digest -> address pipeline."""
    ok: bool
    address: Optional[DocumentAddress] = None
    error: Optional[Exception] = None

    def __bool__(self):
        return self.ok

    def __str__(self):
        if self.ok:
            return f"Address {self.address.address} ✓"
        return f"Address derivation FAILED: {self.error}"
