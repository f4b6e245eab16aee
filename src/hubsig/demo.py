"""
Demo webhook receiver: a handler answering "success", guarded by the gate.

    HUBSIG_SECRET=supersecret HUBSIG_ALGORITHM=sha256 hubsig-demo
"""
from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from hubsig.config import Settings, get_settings
from hubsig.logging import get_logger, setup_logging
from hubsig.middleware import HmacSignatureMiddleware
from hubsig.validators import DigestAlgorithm

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    if settings.SECRET is None or not settings.SECRET.get_secret_value():
        raise RuntimeError("HUBSIG_SECRET not set in environment")
    algorithm = DigestAlgorithm.from_name(settings.ALGORITHM)

    app = FastAPI(title=settings.PROJECT_NAME, docs_url=None, redoc_url=None, openapi_url=None)

    @app.post("/", response_class=PlainTextResponse)
    async def receive_webhook() -> str:
        return "success"

    app.add_middleware(
        HmacSignatureMiddleware,
        secret=settings.SECRET.get_secret_value(),
        header=settings.HEADER or algorithm.default_header,
        validator=algorithm,
    )

    logger.info(
        "demo_app_created",
        algorithm=algorithm.value,
        header=settings.HEADER or algorithm.default_header,
    )
    return app


def main() -> None:
    settings = get_settings()
    setup_logging()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
