# /src/hubsig/crypto.py
"""
Crypto helpers. No secrets logged.

- to_bytes(value)
- hmac_hex(key, data, digestmod)
- constant_time_equals(a, b) -> bool
"""

from __future__ import annotations

import hmac
from typing import Any, Callable

# --------- coercion -------------------------------------------------------------------

def to_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)

# --------- digests --------------------------------------------------------------------

def hmac_hex(key: bytes | str, data: bytes | str, digestmod: Callable[..., Any]) -> str:
    """Lowercase hex HMAC of ``data`` keyed with ``key``."""
    return hmac.new(to_bytes(key), to_bytes(data), digestmod).hexdigest()

# --------- comparison -----------------------------------------------------------------

def constant_time_equals(a: bytes | str, b: bytes | str) -> bool:
    """
    Compare two values without short-circuiting on the first differing byte.

    Both sides are compared as bytes, so a non-ASCII claimed signature is
    rejected instead of raising.
    """
    return hmac.compare_digest(to_bytes(a), to_bytes(b))
