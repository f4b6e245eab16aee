"""
Digest-algorithm bindings.

A binding is any callable ``(body, signature, secret) -> bool``. The built-in
bindings form a closed set in :class:`DigestAlgorithm`; each member knows its
hash function, its signature prefix and the header GitHub-style senders use
for it.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Any, Callable, Union

from hubsig.crypto import constant_time_equals, hmac_hex

Secret = Union[str, bytes]
SignatureValidator = Callable[[bytes, str, Secret], bool]

GITHUB_SIGNATURE_HEADER = "X-Hub-Signature"
GITHUB_SIGNATURE_HEADER_256 = "X-Hub-Signature-256"


class DigestAlgorithm(str, Enum):
    SHA1 = "sha1"
    SHA256 = "sha256"

    @property
    def prefix(self) -> str:
        return self.value

    @property
    def digestmod(self) -> Callable[..., Any]:
        return _DIGESTS[self]

    @property
    def default_header(self) -> str:
        return _DEFAULT_HEADERS[self]

    @classmethod
    def from_name(cls, name: str) -> "DigestAlgorithm":
        """Resolve ``sha256``, ``SHA-256``, ``sha_256`` and friends."""
        key = name.strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unsupported digest algorithm: {name!r}")

    def sign(self, body: bytes, secret: Secret) -> str:
        """Expected signature string for ``body``: ``<prefix>=<hex>``."""
        return f"{self.prefix}={hmac_hex(secret, body, self.digestmod)}"

    def verify(self, body: bytes, signature: str, secret: Secret) -> bool:
        return constant_time_equals(self.sign(body, secret), signature)

    __call__ = verify


_DIGESTS = {
    DigestAlgorithm.SHA1: hashlib.sha1,
    DigestAlgorithm.SHA256: hashlib.sha256,
}

_DEFAULT_HEADERS = {
    DigestAlgorithm.SHA1: GITHUB_SIGNATURE_HEADER,
    DigestAlgorithm.SHA256: GITHUB_SIGNATURE_HEADER_256,
}

sha1_validator: SignatureValidator = DigestAlgorithm.SHA1
sha256_validator: SignatureValidator = DigestAlgorithm.SHA256
