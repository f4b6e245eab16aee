from typing import Annotated

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from hubsig import MSG_FAILED_HMAC, MSG_MISSING_SIGNATURE, DigestAlgorithm
from hubsig.dependencies import HubSignature, register_exception_handlers
from tests.helpers import call_asgi, http_scope, sign, sign256


def _app(verify: HubSignature) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.post("/webhooks/github")
    async def github_webhook(body: Annotated[bytes, Depends(verify)]):
        return {"size": len(body), "body": body.decode()}

    @app.post("/open")
    async def open_route():
        return {"ok": True}

    return app


@pytest.fixture
def client():
    return TestClient(_app(HubSignature("s3cr3t", validator=DigestAlgorithm.SHA256)))


def test_valid_signature_returns_verified_body(client):
    body = b'{"hello":"world"}'
    r = client.post("/webhooks/github", content=body, headers={"X-Hub-Signature-256": sign256("s3cr3t", body)})
    assert r.status_code == 200
    assert r.json() == {"size": len(body), "body": body.decode()}


def test_missing_signature(client):
    r = client.post("/webhooks/github", content=b"{}")
    assert r.status_code == 403
    assert r.text == MSG_MISSING_SIGNATURE


def test_bad_signature(client):
    r = client.post("/webhooks/github", content=b"{}", headers={"X-Hub-Signature-256": "sha256=deadbeef"})
    assert r.status_code == 403
    assert r.text == MSG_FAILED_HMAC


def test_unprotected_route_is_untouched(client):
    r = client.post("/open", content=b"{}")
    assert r.status_code == 200


def test_header_defaults_follow_validator():
    assert HubSignature("k").header == "X-Hub-Signature"
    assert HubSignature("k", validator=DigestAlgorithm.SHA256).header == "X-Hub-Signature-256"
    assert HubSignature("k", header="X-Sig", validator=DigestAlgorithm.SHA256).header == "X-Sig"


def test_sha1_dependency_with_custom_header():
    verify = HubSignature("k", header="X-Sig")
    client = TestClient(_app(verify))
    r = client.post("/webhooks/github", content=b"payload", headers={"X-Sig": sign("k", b"payload")})
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_socket_error_while_reading_body_is_500():
    app = _app(HubSignature("k"))
    scope = http_scope({"X-Hub-Signature": sign("k", b"payload")}, path="/webhooks/github")
    sent = []

    async def receive():
        raise OSError("connection reset by peer")

    async def send(message):
        sent.append(message)

    await app(scope, receive, send)
    assert sent[0]["status"] == 500
    assert sent[1]["body"] == b"connection reset by peer"


@pytest.mark.asyncio
async def test_client_disconnect_while_reading_body_is_500():
    app = _app(HubSignature("k"))
    scope = http_scope({"X-Hub-Signature": sign("k", b"payload")}, path="/webhooks/github")
    sent = await call_asgi(app, scope, [{"type": "http.request", "body": b"pay", "more_body": True}])
    assert sent[0]["status"] == 500
    assert sent[1]["body"] == b"client disconnected before the request body was fully read"
