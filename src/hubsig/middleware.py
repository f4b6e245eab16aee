# src/hubsig/middleware.py
"""
HMAC signature verification gate for GitHub-style webhooks.

The gate buffers the request body, recomputes ``<prefix>=<hex hmac>`` over the
exact bytes received and compares it to the configured header in constant time.
On a match the downstream app sees the original scope and a body it can read
from the start; otherwise exactly one rejection handler answers.

see: https://docs.github.com/webhooks/using-webhooks/validating-webhook-deliveries

Usage::

    app.add_middleware(HmacSha256SignatureMiddleware, secret=settings.SECRET.get_secret_value())
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

from starlette.requests import ClientDisconnect, Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from hubsig.crypto import to_bytes
from hubsig.exceptions import TransportReadError
from hubsig.handlers import (
    default_missing_signature_handler,
    default_verify_failed_handler,
    read_error_handler,
)
from hubsig.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    log_security_event,
)
from hubsig.validators import (
    GITHUB_SIGNATURE_HEADER,
    DigestAlgorithm,
    Secret,
    SignatureValidator,
)

log = get_logger("hubsig.gate")


@dataclass(frozen=True)
class GateConfig:
    """
    Options of a gate, fixed for its lifetime.

    - header: request header carrying the claimed signature
    - validator: digest binding ``(body, signature, secret) -> bool``
    - on_missing_signature: ASGI app answering when the header is absent or empty
    - on_verification_failed: ASGI app answering when the signature does not match
    """
    header: str = GITHUB_SIGNATURE_HEADER
    validator: SignatureValidator = DigestAlgorithm.SHA1
    on_missing_signature: ASGIApp = default_missing_signature_handler
    on_verification_failed: ASGIApp = default_verify_failed_handler

    @classmethod
    def sha256(cls) -> "GateConfig":
        return cls(
            header=DigestAlgorithm.SHA256.default_header,
            validator=DigestAlgorithm.SHA256,
        )

    def with_overrides(self, **overrides) -> "GateConfig":
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes) if changes else self


def _replay_receive(body: bytes, receive: Receive) -> Receive:
    """Yield the buffered body once, then defer to the server (disconnects)."""
    sent = False

    async def replay() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


async def read_body(request: Request) -> bytes:
    """Drain the request body. Raises TransportReadError if it cannot be read in full."""
    try:
        return await request.body()
    except ClientDisconnect as exc:
        raise TransportReadError(str(exc) or "client disconnected before the request body was fully read") from exc
    except OSError as exc:
        raise TransportReadError(str(exc) or exc.__class__.__name__) from exc


class HmacSignatureMiddleware:
    """
    Pure ASGI middleware validating an HMAC signature header (SHA-1 by default).

    If no ``header`` is given, ``X-Hub-Signature`` is read. Keyword overrides are
    applied on top of ``config`` (or the class defaults) and the result is frozen.
    Non-HTTP scopes pass through untouched.
    """
    default_config: GateConfig = GateConfig()

    def __init__(
        self,
        app: ASGIApp,
        secret: Secret,
        *,
        header: Optional[str] = None,
        validator: Optional[SignatureValidator] = None,
        on_missing_signature: Optional[ASGIApp] = None,
        on_verification_failed: Optional[ASGIApp] = None,
        config: Optional[GateConfig] = None,
    ) -> None:
        self.app = app
        self._secret = to_bytes(secret)
        self.config = (config or self.default_config).with_overrides(
            header=header,
            validator=validator,
            on_missing_signature=on_missing_signature,
            on_verification_failed=on_verification_failed,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        bind_request_context(method=scope.get("method"), path=scope.get("path"))
        try:
            await self._authenticate(scope, receive, send)
        finally:
            clear_request_context()

    async def _authenticate(self, scope: Scope, receive: Receive, send: Send) -> None:
        # 1) Buffer the whole body; HMAC needs every byte
        try:
            body = await read_body(Request(scope, receive=receive))
        except TransportReadError as err:
            log.error("body_read_failed", error=err.message)
            await read_error_handler(err)(scope, receive, send)
            return

        replay = _replay_receive(body, receive)
        request = Request(scope, receive=replay)

        # 2) Claimed signature
        claimed = request.headers.get(self.config.header, "")
        if not claimed:
            log_security_event("missing_signature", header=self.config.header)
            await self.config.on_missing_signature(scope, replay, send)
            return

        # 3) + 4) Recompute and compare in constant time
        if not self.config.validator(body, claimed, self._secret):
            log_security_event("verification_failed", header=self.config.header)
            await self.config.on_verification_failed(scope, replay, send)
            return

        # 5) Forward with a fresh view over the same bytes
        log.debug("signature_verified", body_size=len(body))
        await self.app(scope, replay, send)


class HmacSha256SignatureMiddleware(HmacSignatureMiddleware):
    """
    Same gate defaulting to SHA-256 and ``X-Hub-Signature-256``.

    Explicit ``header``/``validator`` overrides still win.
    """
    default_config: GateConfig = GateConfig.sha256()
