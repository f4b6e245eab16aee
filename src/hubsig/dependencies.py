"""
Route-level signature verification.

For apps that only need to protect a few routes, ``HubSignature`` performs the
same check as the middleware as a FastAPI dependency and hands the verified
body to the endpoint::

    verify = HubSignature(secret, validator=DigestAlgorithm.SHA256)

    @router.post("/webhooks/github")
    async def github_webhook(body: Annotated[bytes, Depends(verify)]):
        ...

Unlike the middleware, which always falls back to ``X-Hub-Signature`` unless
told otherwise, the dependency takes its default header from the validator
(``X-Hub-Signature-256`` for ``DigestAlgorithm.SHA256``). Rejections are raised
as exceptions; call ``register_exception_handlers(app)`` to turn them into the
same plain-text responses the middleware sends.
"""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from starlette.responses import PlainTextResponse

from hubsig.crypto import to_bytes
from hubsig.exceptions import (
    MissingSignatureError,
    SignatureError,
    VerificationMismatchError,
)
from hubsig.handlers import error_response
from hubsig.logging import get_logger, log_security_event
from hubsig.middleware import read_body
from hubsig.validators import DigestAlgorithm, Secret, SignatureValidator

logger = get_logger(__name__)


class HubSignature:
    """Callable dependency returning the verified raw body."""

    def __init__(
        self,
        secret: Secret,
        *,
        header: Optional[str] = None,
        validator: SignatureValidator = DigestAlgorithm.SHA1,
    ) -> None:
        self._secret = to_bytes(secret)
        self.validator = validator
        if header is None:
            header = getattr(validator, "default_header", DigestAlgorithm.SHA1.default_header)
        self.header = header

    async def __call__(self, request: Request) -> bytes:
        body = await read_body(request)

        claimed = request.headers.get(self.header, "")
        if not claimed:
            log_security_event("missing_signature", path=request.url.path, header=self.header)
            raise MissingSignatureError()

        if not self.validator(body, claimed, self._secret):
            log_security_event("verification_failed", path=request.url.path, header=self.header)
            raise VerificationMismatchError()

        return body


async def signature_error_handler(request: Request, exc: SignatureError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("signature_gate_error", code=exc.code, error=exc.message, path=request.url.path)
    return error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Map gate errors to plain-text responses (403 for rejections, 500 for read errors)."""
    app.add_exception_handler(SignatureError, signature_error_handler)
