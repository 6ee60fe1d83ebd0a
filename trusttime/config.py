# trusttime/config.py
"""
Process-wide configuration, resolved once at startup and passed explicitly
to the address codec and the ledger client.
"""

import math
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_LEDGER_HOST = "https://blockchain.info"
DEFAULT_VERSION_BYTE = 0x00
DEFAULT_TIMEOUT = 10.0

HOST_ENV = "TRUSTTIME_LEDGER_HOST"
TIMEOUT_ENV = "TRUSTTIME_TIMEOUT"


@dataclass(frozen=True)
class TrustTimeConfig:
    ledger_host: str = DEFAULT_LEDGER_HOST
    version_byte: int = DEFAULT_VERSION_BYTE
    timeout: float = DEFAULT_TIMEOUT

    def address_url(self, address: str) -> str:
        """Browseable page for an address on the ledger index."""
        return f"{self.ledger_host.rstrip('/')}/address/{address}"


def load_config(host: Optional[str] = None, timeout: Optional[float] = None) -> TrustTimeConfig:
    """Resolve configuration in this order:
    1. explicit argument (CLI flag)
    2. TRUSTTIME_LEDGER_HOST / TRUSTTIME_TIMEOUT environment variables
    3. defaults
    """
    if host is None:
        host = os.environ.get(HOST_ENV) or DEFAULT_LEDGER_HOST

    if timeout is None:
        env_timeout = os.environ.get(TIMEOUT_ENV)
        if env_timeout:
            try:
                timeout = float(env_timeout)
            except ValueError:
                raise ValueError(f"{TIMEOUT_ENV} must be a number of seconds, got {env_timeout!r}")
        else:
            timeout = DEFAULT_TIMEOUT

    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(f"timeout must be a positive number of seconds, got {timeout}")

    return TrustTimeConfig(ledger_host=host.rstrip("/"), timeout=timeout)
