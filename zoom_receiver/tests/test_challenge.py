import hashlib
import hmac

from zoom_receiver.security.challenge import compute_challenge


def _expected(token: str, secret: str) -> str:
    return hmac.new(secret.encode(), token.encode(), hashlib.sha256).hexdigest()


def test_challenge_matches_hmac_sha256():
    out = compute_challenge("abc123", "mysecret")
    assert out.plain_token == "abc123"
    assert out.encrypted_token == _expected("abc123", "mysecret")
    assert out.encrypted_token == out.encrypted_token.lower()
    assert len(out.encrypted_token) == 64


def test_challenge_is_deterministic():
    first = compute_challenge("qgg8vlvZRS6UYooatFL8Aw", "s3cr3t")
    second = compute_challenge("qgg8vlvZRS6UYooatFL8Aw", "s3cr3t")
    assert first == second


def test_plain_token_echoed_verbatim():
    token = "  Mixed-Case_token/with+chars=  "
    assert compute_challenge(token, "k").plain_token == token


def test_secret_changes_digest():
    digests = {
        compute_challenge("abc123", secret).encrypted_token
        for secret in ("mysecret", "mysecreT", "mysecret2")
    }
    assert len(digests) == 3


def test_empty_inputs_still_produce_digest():
    empty_secret = compute_challenge("abc123", "")
    assert empty_secret.encrypted_token == _expected("abc123", "")

    empty_token = compute_challenge("", "mysecret")
    assert empty_token.plain_token == ""
    assert empty_token.encrypted_token == _expected("", "mysecret")


def test_to_dict_uses_wire_names():
    out = compute_challenge("abc123", "mysecret").to_dict()
    assert set(out) == {"plainToken", "encryptedToken"}
    assert out["plainToken"] == "abc123"
