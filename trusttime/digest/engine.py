# trusttime/digest/engine.py
import hashlib
import logging
from pathlib import Path
from typing import BinaryIO, Union

logger = logging.getLogger(__name__)

DIGEST_SIZE = 32
DEFAULT_CHUNK_SIZE = 64 * 1024


def digest_bytes(data: bytes) -> bytes:
    """SHA-256 of in-memory content."""
    return hashlib.sha256(data).digest()


def digest_stream(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Feed an open binary stream into SHA-256 block by block.
    Memory use is bounded by chunk_size regardless of stream length.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    sha256sum = hashlib.sha256()
    for block in iter(lambda: stream.read(chunk_size), b""):
        sha256sum.update(block)
    return sha256sum.digest()


def digest_file(path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """
    Stream the file at `path` through SHA-256 and return the 32-byte digest.
    Raises OSError if the file cannot be opened or read; no partial digest is returned.
    """
    path = Path(path)
    with open(path, "rb") as f:
        digest = digest_stream(f, chunk_size)
    logger.debug("Digested %s: %s", path, digest.hex())
    return digest
