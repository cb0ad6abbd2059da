from __future__ import annotations
import logging
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zoom_receiver import __version__
from zoom_receiver.api import zoom_webhook
from zoom_receiver.config_loader import Settings, load_settings
from zoom_receiver.errors import ReceiverError
from zoom_receiver.obs.structured_log import setup_logging
from zoom_receiver.utils.logger import log


async def receiver_error_handler(request: Request, exc: ReceiverError) -> JSONResponse:
    return JSONResponse(exc.to_body(), status_code=exc.status_code, headers=exc.headers)


def log_startup(settings: Settings) -> None:
    log.info("Server running on port %s", settings.port)
    log.info("Environment: %s", settings.environment)
    log.info(
        "Verification token: %s",
        "Configured" if settings.verification_token_configured else "NOT CONFIGURED",
    )
    log.info("Basic Auth: %s", "Enabled" if settings.basic_auth_enabled else "Disabled")
    log.info("Custom Header: %s", "Enabled" if settings.custom_header_enabled else "Disabled")
    log.info("Strict auth: %s", "Enabled" if settings.strict_auth else "Disabled")
    if not settings.verification_token_configured:
        log.warning("ZOOM_VERIFICATION_TOKEN is empty; url_validation challenges will not verify")
    log.info("Ready for Zoom webhook requests")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the receiver app around one immutable Settings value."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)
    log.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Every path belongs to the webhook route, so the docs endpoints are off
    app = FastAPI(
        title="Zoom Webhook Receiver",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.add_exception_handler(ReceiverError, receiver_error_handler)
    zoom_webhook.register_routes(app)

    log_startup(settings)
    return app


def run(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
