"""
Send a url_validation challenge to a running receiver and check the proof.

Used by scripts/probe_receiver.py; kept here so it can be imported and tested.
"""
from __future__ import annotations
import secrets
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from zoom_receiver.security.challenge import compute_challenge
from zoom_receiver.utils.logger import log


@dataclass(slots=True)
class ProbeResult:
    ok: bool
    status_code: int
    message: str
    expected: Optional[str] = None
    received: Optional[str] = None


def build_challenge_body(plain_token: str) -> Dict[str, object]:
    return {"event": "endpoint.url_validation", "payload": {"plainToken": plain_token}}


def probe(
    url: str,
    secret: str,
    plain_token: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    header_name: Optional[str] = None,
    header_value: Optional[str] = None,
    timeout: float = 10.0,
) -> ProbeResult:
    """POST a challenge to `url` and compare encryptedToken with a local HMAC."""
    token = plain_token or secrets.token_urlsafe(16)
    headers = {"Content-Type": "application/json"}
    if header_name and header_value:
        headers[header_name] = header_value
    auth = (username, password) if username and password else None

    try:
        resp = requests.post(
            url, json=build_challenge_body(token), headers=headers, auth=auth, timeout=timeout
        )
    except requests.RequestException as e:
        log.error("[probe] Request to %s failed: %s", url, e)
        return ProbeResult(ok=False, status_code=0, message=f"request failed: {e}")

    if resp.status_code != 200:
        return ProbeResult(
            ok=False, status_code=resp.status_code, message=f"unexpected status: {resp.text}"
        )

    try:
        data = resp.json()
    except ValueError:
        return ProbeResult(ok=False, status_code=resp.status_code, message="response is not JSON")

    if not isinstance(data, dict):
        return ProbeResult(ok=False, status_code=resp.status_code, message="response is not an object")

    expected = compute_challenge(token, secret).encrypted_token
    received = data.get("encryptedToken")
    if data.get("plainToken") != token:
        return ProbeResult(
            ok=False,
            status_code=resp.status_code,
            message="plainToken was not echoed",
            expected=expected,
            received=received,
        )
    if received != expected:
        return ProbeResult(
            ok=False,
            status_code=resp.status_code,
            message="encryptedToken mismatch",
            expected=expected,
            received=received,
        )
    return ProbeResult(
        ok=True, status_code=resp.status_code, message="challenge verified",
        expected=expected, received=received,
    )
