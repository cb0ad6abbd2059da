"""
Classify webhook bodies and build their responses.

Only two event names get special treatment: `endpoint.url_validation` is
answered with the challenge proof, and `recording.completed` has its topic and
file list pulled out for logging. Every other event is acknowledged as-is.
"""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from zoom_receiver.config_loader import Settings
from zoom_receiver.errors import BodyParseError
from zoom_receiver.security.challenge import compute_challenge

URL_VALIDATION_EVENT = "endpoint.url_validation"
RECORDING_COMPLETED_EVENT = "recording.completed"


@dataclass(frozen=True, slots=True)
class WebhookEvent:
    event_name: Any
    payload: Optional[Dict[str, Any]]


@dataclass(frozen=True, slots=True)
class ChallengeRequest:
    plain_token: str


@dataclass(frozen=True, slots=True)
class RecordingSummary:
    topic: Optional[str]
    recording_files: List[Any] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    body: Dict[str, Any]
    status_code: int = 200
    challenge: bool = False
    recording: Optional[RecordingSummary] = None


def parse_event(raw_body: bytes) -> WebhookEvent:
    """Parse a buffered body into a WebhookEvent or raise BodyParseError."""
    try:
        data = json.loads(raw_body)
    except (ValueError, RecursionError) as e:
        raise BodyParseError() from e

    if not isinstance(data, dict):
        raise BodyParseError()

    payload = data.get("payload")
    return WebhookEvent(
        event_name=data.get("event"),
        payload=payload if isinstance(payload, dict) else None,
    )


def extract_challenge(event: WebhookEvent) -> Optional[ChallengeRequest]:
    if event.event_name != URL_VALIDATION_EVENT or event.payload is None:
        return None
    plain_token = event.payload.get("plainToken")
    if not isinstance(plain_token, str):
        return None
    return ChallengeRequest(plain_token=plain_token)


def extract_recording(event: WebhookEvent) -> Optional[RecordingSummary]:
    if event.event_name != RECORDING_COMPLETED_EVENT or event.payload is None:
        return None
    obj = event.payload.get("object")
    if not isinstance(obj, dict):
        return None
    files = obj.get("recording_files")
    return RecordingSummary(
        topic=obj.get("topic"),
        recording_files=files if isinstance(files, list) else [],
    )


def dispatch(raw_body: bytes, settings: Settings) -> DispatchResult:
    event = parse_event(raw_body)

    challenge = extract_challenge(event)
    if challenge is not None:
        response = compute_challenge(challenge.plain_token, settings.verification_token)
        return DispatchResult(body=response.to_dict(), challenge=True)

    return DispatchResult(
        body={"message": "Webhook received", "event": event.event_name or "unknown"},
        recording=extract_recording(event),
    )
