# trusttime/address/codec.py
"""
Document address derivation.

Follows the legacy P2PKH address algorithm, except that the document's SHA-256
takes the place of the public key:

    h1 = RIPEMD160(digest)
    h2 = version_byte || h1
    h4 = SHA256(SHA256(h2))
    h5 = h2 || h4[0:4]
    address = base58(h5)

See https://en.bitcoin.it/wiki/Technical_background_of_version_1_Bitcoin_addresses
"""

import hashlib
import logging
from pathlib import Path
from typing import Optional, Union

from Crypto.Hash import RIPEMD160

from trusttime.config import DEFAULT_VERSION_BYTE
from trusttime.core.encoding import b58decode, b58encode, to_hex
from trusttime.core.types import AddressResult, AddressTrace, DocumentAddress
from trusttime.digest.engine import DEFAULT_CHUNK_SIZE, DIGEST_SIZE, digest_file

logger = logging.getLogger(__name__)

CHECKSUM_SIZE = 4


def ripemd160(data: bytes) -> bytes:
    # hashlib only has ripemd160 when the system OpenSSL still ships it
    return RIPEMD160.new(data).digest()


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def checksum_is_valid(address: str) -> bool:
    """Check that the trailing 4 bytes of a decoded address match its double SHA-256."""
    try:
        payload = b58decode(address)
    except ValueError:
        return False
    if len(payload) <= CHECKSUM_SIZE:
        return False
    body, checksum = payload[:-CHECKSUM_SIZE], payload[-CHECKSUM_SIZE:]
    return sha256(sha256(body))[:CHECKSUM_SIZE] == checksum


class AddressCodec:
    """Turns a 32-byte content digest into a DocumentAddress with a full trace."""

    def __init__(self, version_byte: int = DEFAULT_VERSION_BYTE):
        if not 0 <= version_byte <= 0xFF:
            raise ValueError(f"version_byte must fit in one byte, got {version_byte}")
        self.version_byte = version_byte

    def _add_version_byte(self, data: bytes) -> bytes:
        return bytes([self.version_byte]) + data

    def derive_address(self, digest: bytes) -> DocumentAddress:
        if len(digest) != DIGEST_SIZE:
            raise ValueError(f"Content digest must be {DIGEST_SIZE} bytes, got {len(digest)}")

        h1 = ripemd160(digest)
        h2 = self._add_version_byte(h1)
        h3 = sha256(h2)
        h4 = sha256(h3)
        checksum = h4[:CHECKSUM_SIZE]
        h5 = h2 + checksum
        address = b58encode(h5)

        trace = AddressTrace(
            document_sha256=to_hex(digest),
            ripemd160=to_hex(h1),
            versioned=to_hex(h2),
            sha256_once=to_hex(h3),
            sha256_twice=to_hex(h4),
            checksum=to_hex(checksum),
            with_checksum=to_hex(h5),
            base58=address,
        )
        logger.debug("Derived address %s for digest %s", address, trace.document_sha256)
        return DocumentAddress(address=address, sha256=trace.document_sha256, detail=trace)


def address_for_file(
    path: Union[str, Path],
    codec: Optional[AddressCodec] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AddressResult:
    """
    Digest the file, then derive its address. Stops at the first failure and
    reports it in the result instead of raising.
    """
    codec = codec or AddressCodec()
    try:
        digest = digest_file(path, chunk_size=chunk_size)
    except OSError as e:
        logger.debug("Could not digest %s: %s", path, e)
        return AddressResult(False, error=e)

    return AddressResult(True, address=codec.derive_address(digest))
