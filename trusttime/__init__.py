# trusttime/__init__.py
"""
TrustTime — content-addressed document identities with trusted existence timestamps.
A document's SHA-256 is folded into a legacy-style base58 ledger address; the earliest
transaction seen at that address on a public ledger index proves the document existed by then.
"""

__version__ = "0.1.0"
