import hashlib
import hmac
import json

import pytest

from zoom_receiver.config_loader import Settings
from zoom_receiver.errors import BodyParseError
from zoom_receiver.events.dispatcher import (
    WebhookEvent,
    dispatch,
    extract_challenge,
    extract_recording,
    parse_event,
)

SETTINGS = Settings(verification_token="mysecret")


def _body(data) -> bytes:
    return json.dumps(data).encode("utf-8")


def test_url_validation_returns_challenge():
    raw = b'{"event":"endpoint.url_validation","payload":{"plainToken":"abc123"}}'
    result = dispatch(raw, SETTINGS)

    expected = hmac.new(b"mysecret", b"abc123", hashlib.sha256).hexdigest()
    assert result.status_code == 200
    assert result.challenge is True
    assert result.body == {"plainToken": "abc123", "encryptedToken": expected}


def test_generic_event_is_acknowledged():
    result = dispatch(b'{"event":"meeting.started"}', SETTINGS)
    assert result.status_code == 200
    assert result.challenge is False
    assert result.body == {"message": "Webhook received", "event": "meeting.started"}


@pytest.mark.parametrize("raw", [b"{}", b'{"event":""}', b'{"event":null}'])
def test_missing_event_name_reports_unknown(raw):
    assert dispatch(raw, SETTINGS).body["event"] == "unknown"


DEEP_NESTING = b"[" * 200000 + b"]" * 200000


@pytest.mark.parametrize(
    "raw", [b"not json", b"", b"[1, 2]", b'"text"', b"null", b"\xff\xfe", DEEP_NESTING]
)
def test_malformed_body_raises(raw):
    with pytest.raises(BodyParseError) as exc:
        dispatch(raw, SETTINGS)
    assert exc.value.status_code == 400
    assert exc.value.to_body() == {"error": "Invalid request format"}


def test_validation_without_token_falls_through():
    raw = _body({"event": "endpoint.url_validation", "payload": {}})
    result = dispatch(raw, SETTINGS)
    assert result.challenge is False
    assert result.body["event"] == "endpoint.url_validation"


def test_validation_with_non_string_token_falls_through():
    raw = _body({"event": "endpoint.url_validation", "payload": {"plainToken": 12345}})
    assert dispatch(raw, SETTINGS).challenge is False


def test_validation_with_non_object_payload_falls_through():
    raw = _body({"event": "endpoint.url_validation", "payload": "abc123"})
    assert dispatch(raw, SETTINGS).challenge is False


def test_empty_plain_token_is_answered():
    raw = _body({"event": "endpoint.url_validation", "payload": {"plainToken": ""}})
    result = dispatch(raw, SETTINGS)
    assert result.challenge is True
    assert result.body["plainToken"] == ""


def test_empty_secret_still_answers():
    raw = _body({"event": "endpoint.url_validation", "payload": {"plainToken": "abc123"}})
    result = dispatch(raw, Settings())
    expected = hmac.new(b"", b"abc123", hashlib.sha256).hexdigest()
    assert result.body["encryptedToken"] == expected


def test_recording_completed_summary():
    raw = _body(
        {
            "event": "recording.completed",
            "payload": {
                "object": {
                    "topic": "Weekly sync",
                    "recording_files": [{"id": "f1", "file_type": "MP4"}],
                }
            },
        }
    )
    result = dispatch(raw, SETTINGS)
    assert result.body == {"message": "Webhook received", "event": "recording.completed"}
    assert result.recording is not None
    assert result.recording.topic == "Weekly sync"
    assert result.recording.recording_files == [{"id": "f1", "file_type": "MP4"}]


def test_recording_completed_without_object():
    result = dispatch(_body({"event": "recording.completed", "payload": {}}), SETTINGS)
    assert result.recording is None
    assert result.body["event"] == "recording.completed"


def test_recording_files_default_to_empty_list():
    event = WebhookEvent(event_name="recording.completed", payload={"object": {"topic": "t"}})
    summary = extract_recording(event)
    assert summary.recording_files == []


def test_parse_event_narrows_payload():
    event = parse_event(b'{"event":"x","payload":[1]}')
    assert event.event_name == "x"
    assert event.payload is None
    assert extract_challenge(event) is None
