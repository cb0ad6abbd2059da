from __future__ import annotations
import base64
import binascii
from typing import Mapping, Optional, Tuple

from zoom_receiver.config_loader import Settings
from zoom_receiver.security.models import AuthDecision, AuthReason
from zoom_receiver.utils.hashing import constant_time_equals

BASIC_PREFIX = "Basic "


def _lower_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {k.lower(): v for k, v in headers.items()}


def decode_basic_credentials(header_value: str) -> Optional[Tuple[str, str]]:
    """
    Decode the `username:password` pair of a Basic Authorization header.

    Only the first colon separates the two, so passwords may contain colons.
    Returns None when the value is not valid base64, not UTF-8, or has no colon.
    """
    encoded = header_value[len(BASIC_PREFIX):].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None

    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def _check_basic(headers: dict[str, str], settings: Settings) -> Optional[AuthReason]:
    authorization = headers.get("authorization")
    if authorization is None or not authorization.startswith(BASIC_PREFIX):
        return AuthReason.BASIC_FAIL if settings.strict_auth else None

    credentials = decode_basic_credentials(authorization)
    if credentials is None:
        return AuthReason.BASIC_FAIL

    username, password = credentials
    # Both comparisons always run
    user_ok = constant_time_equals(username, settings.basic_auth_username or "")
    pass_ok = constant_time_equals(password, settings.basic_auth_password or "")
    return AuthReason.BASIC_OK if user_ok and pass_ok else AuthReason.BASIC_FAIL


def _check_custom_header(headers: dict[str, str], settings: Settings) -> Optional[AuthReason]:
    name = (settings.custom_header_name or "").lower()
    if name not in headers:
        return AuthReason.HEADER_FAIL if settings.strict_auth else None

    if constant_time_equals(headers[name], settings.custom_header_value or ""):
        return AuthReason.HEADER_OK
    return AuthReason.HEADER_FAIL


def authorize(headers: Mapping[str, str], settings: Settings) -> AuthDecision:
    """
    Evaluate request headers against the configured auth modes.

    Basic auth runs first, then the custom header; a request must pass every
    mode that is configured. A mode whose header is missing is skipped unless
    `settings.strict_auth` is on.
    """
    lowered = _lower_headers(headers)
    reason = AuthReason.NONE_CONFIGURED

    if settings.basic_auth_enabled:
        outcome = _check_basic(lowered, settings)
        if outcome is AuthReason.BASIC_FAIL:
            return AuthDecision(allowed=False, reason=outcome)
        if outcome is not None:
            reason = outcome

    if settings.custom_header_enabled:
        outcome = _check_custom_header(lowered, settings)
        if outcome is AuthReason.HEADER_FAIL:
            return AuthDecision(allowed=False, reason=outcome)
        if outcome is not None:
            reason = outcome

    return AuthDecision(allowed=True, reason=reason)
