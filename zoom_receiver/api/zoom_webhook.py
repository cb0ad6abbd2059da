from __future__ import annotations
import json
import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zoom_receiver.config_loader import Settings
from zoom_receiver.errors import AuthDenied, UnsupportedMethod
from zoom_receiver.events.dispatcher import dispatch
from zoom_receiver.obs.structured_log import mask_secret, redact_headers
from zoom_receiver.security.authorizer import authorize
from zoom_receiver.security.models import AuthReason
from zoom_receiver.utils.logger import log


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_authorized(request: Request) -> Settings:
    """Reject the request with 401 before its body is read if credentials fail."""
    settings = get_settings(request)
    log.info("[zoom] %s %s", request.method, request.url.path)
    log.info("[zoom] Query: %s", dict(request.query_params))
    log.info(
        "[zoom] Headers: %s",
        json.dumps(redact_headers(request.headers, [settings.custom_header_name]), indent=2),
    )

    decision = authorize(request.headers, settings)
    if not decision.allowed:
        log.warning("[zoom] Authorization failed: %s", decision.reason.value)
        raise AuthDenied(decision.reason)
    if decision.reason is not AuthReason.NONE_CONFIGURED:
        log.info("[zoom] Authorization successful: %s", decision.reason.value)
    return settings


def status_payload(request: Request, settings: Settings) -> Dict[str, Any]:
    started = getattr(request.app.state, "started_at", None)
    uptime = round(time.monotonic() - started, 3) if started is not None else 0.0
    return {
        "message": "Zoom Webhook Server",
        "status": "running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "uptime_secs": uptime,
        "auth": {
            "basic_auth": settings.basic_auth_enabled,
            "custom_header": settings.custom_header_enabled,
            "verification_token": settings.verification_token_configured,
        },
    }


async def zoom_webhook(request: Request) -> JSONResponse:
    """
    Single entry point for every path; behaviour depends on the method only.
    GET reports status, POST handles a webhook event, anything else is 405.
    """
    settings = require_authorized(request)

    if request.method == "GET":
        return JSONResponse(status_payload(request, settings))

    if request.method != "POST":
        raise UnsupportedMethod()

    body = await request.body()
    log.info("[zoom] Request body (%d bytes): %s", len(body), body.decode("utf-8", errors="replace"))

    result = dispatch(body, settings)

    if result.challenge:
        log.info("[zoom] Plain token: %s", result.body["plainToken"])
        log.info("[zoom] Verification token: %s", mask_secret(settings.verification_token))
        if not settings.verification_token_configured:
            log.warning("[zoom] ZOOM_VERIFICATION_TOKEN not set; challenge digest uses an empty key")
        log.info("[zoom] Sent validation response: %s", result.body)
    else:
        log.info("[zoom] Regular webhook event received: %s", result.body["event"])
        if result.recording is not None:
            log.info("[zoom] Recording completed webhook received")
            log.info("[zoom] Meeting topic: %s", result.recording.topic)
            log.info("[zoom] Recording files: %s", json.dumps(result.recording.recording_files))

    return JSONResponse(result.body, status_code=result.status_code)


def register_routes(app: FastAPI) -> None:
    # No method list: every verb reaches the handler, which authorizes first
    app.add_route("/{path:path}", zoom_webhook, include_in_schema=False)
