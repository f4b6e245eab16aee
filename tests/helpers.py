import hashlib
import hmac

from starlette.requests import Request
from starlette.responses import Response

class EchoApp:
    """Downstream app: records what it saw and echoes the body back."""

    def __init__(self):
        self.calls = []

    async def __call__(self, scope, receive, send):
        request = Request(scope, receive=receive)
        body = await request.body()
        self.calls.append(
            {
                "method": request.method,
                "path": request.url.path,
                "headers": dict(request.headers),
                "body": body,
            }
        )
        await Response(content=body, media_type="application/octet-stream")(scope, receive, send)


def sign(secret, body, digestmod=hashlib.sha1, prefix="sha1"):
    if isinstance(secret, str):
        secret = secret.encode()
    return f"{prefix}=" + hmac.new(secret, body, digestmod).hexdigest()

def sign256(secret, body):
    return sign(secret, body, hashlib.sha256, "sha256")

async def call_asgi(app, scope, messages):
    """Drive an ASGI app with a scripted receive; returns everything it sent."""
    inbox = list(messages)
    sent = []

    async def receive():
        if inbox:
            return inbox.pop(0)
        return {"type": "http.disconnect"}

    async def send(message):
        sent.append(message)

    await app(scope, receive, send)
    return sent

def http_scope(headers=None, method="POST", path="/hook"):
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "root_path": "",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": ("127.0.0.1", 12345),
        "server": ("testserver", 80),
    }
