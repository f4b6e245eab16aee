"""HMAC signature verification gate for webhook receivers."""

from hubsig.exceptions import (
    MSG_FAILED_HMAC,
    MSG_MISSING_SIGNATURE,
    MissingSignatureError,
    SignatureError,
    TransportReadError,
    VerificationMismatchError,
)
from hubsig.handlers import default_missing_signature_handler, default_verify_failed_handler
from hubsig.middleware import GateConfig, HmacSha256SignatureMiddleware, HmacSignatureMiddleware
from hubsig.validators import (
    GITHUB_SIGNATURE_HEADER,
    GITHUB_SIGNATURE_HEADER_256,
    DigestAlgorithm,
    SignatureValidator,
    sha1_validator,
    sha256_validator,
)

__all__ = [
    "DigestAlgorithm",
    "GITHUB_SIGNATURE_HEADER",
    "GITHUB_SIGNATURE_HEADER_256",
    "GateConfig",
    "HmacSha256SignatureMiddleware",
    "HmacSignatureMiddleware",
    "MSG_FAILED_HMAC",
    "MSG_MISSING_SIGNATURE",
    "MissingSignatureError",
    "SignatureError",
    "SignatureValidator",
    "TransportReadError",
    "VerificationMismatchError",
    "default_missing_signature_handler",
    "default_verify_failed_handler",
    "sha1_validator",
    "sha256_validator",
]
