# trusttime/core/encoding.py
import base58


def b58encode(data: bytes) -> str:
    """Encode bytes to base58 (Bitcoin alphabet, leading zero bytes become '1')."""
    return base58.b58encode(data).decode("ascii")


def b58decode(s: str) -> bytes:
    """Decode base58 string back to bytes. Raises ValueError on invalid characters."""
    return base58.b58decode(s)


def to_hex(data: bytes) -> str:
    return data.hex()
