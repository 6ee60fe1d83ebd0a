# trusttime/core/canon.py
"""
Canonical JSON export of address records.

Records go through RFC 8785 (JSON Canonicalization Scheme), so one document and
one ledger answer always export the same bytes regardless of dict ordering.
"""
from typing import Any, Optional

try:
    import jcs
except ImportError:
    raise ImportError("Please install jcs: pip install jcs")


def canonical_json(obj: Any) -> bytes:
    return jcs.canonicalize(obj)


def export_record(record: dict, trusted_timestamp: Optional[dict] = None) -> str:
    """Canonical JSON text of an address record, with the ledger timestamp merged in when known."""
    if trusted_timestamp is not None:
        record = {**record, "trusted_timestamp": trusted_timestamp}
    return canonical_json(record).decode("utf-8")
