"""
Request-scoped errors raised by the webhook router.

Each error carries the HTTP status and the `error` message that ends up in the
JSON body. Handlers registered in `zoom_receiver.main.create_app` convert them
into responses, so none of them escapes a single request.
"""
from __future__ import annotations

from typing import Dict, Optional

from zoom_receiver.security.models import AuthReason


class ReceiverError(Exception):
    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, error: Optional[str] = None) -> None:
        if error is not None:
            self.error = error
        super().__init__(self.error)

    @property
    def headers(self) -> Dict[str, str]:
        return {}

    def to_body(self) -> Dict[str, str]:
        return {"error": self.error}


class AuthDenied(ReceiverError):
    """Credentials were presented and rejected."""

    status_code = 401

    def __init__(self, reason: AuthReason) -> None:
        self.reason = reason
        if reason is AuthReason.BASIC_FAIL:
            super().__init__("Unauthorized: Invalid credentials")
        else:
            super().__init__("Unauthorized: Invalid header token")

    @property
    def headers(self) -> Dict[str, str]:
        if self.reason is AuthReason.BASIC_FAIL:
            return {"WWW-Authenticate": "Basic"}
        return {}


class BodyParseError(ReceiverError):
    status_code = 400
    error = "Invalid request format"


class UnsupportedMethod(ReceiverError):
    status_code = 405
    error = "Method not allowed"


class ConfigError(Exception):
    """Raised at startup when a configuration value cannot be used."""
