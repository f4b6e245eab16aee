# /src/hubsig/handlers.py
"""
Default rejection handlers.

Each handler is a plain ASGI app, so any Starlette ``Response`` instance or
custom ASGI callable can replace it.
"""

from __future__ import annotations

from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from hubsig.exceptions import (
    MSG_FAILED_HMAC,
    MSG_MISSING_SIGNATURE,
    SignatureError,
    TransportReadError,
)


def error_response(err: SignatureError) -> PlainTextResponse:
    return PlainTextResponse(err.message, status_code=err.status_code)


async def default_missing_signature_handler(scope: Scope, receive: Receive, send: Send) -> None:
    response = PlainTextResponse(MSG_MISSING_SIGNATURE, status_code=403)
    await response(scope, receive, send)


async def default_verify_failed_handler(scope: Scope, receive: Receive, send: Send) -> None:
    response = PlainTextResponse(MSG_FAILED_HMAC, status_code=403)
    await response(scope, receive, send)


def read_error_handler(err: TransportReadError) -> ASGIApp:
    # 500 with the underlying error text
    return error_response(err)
