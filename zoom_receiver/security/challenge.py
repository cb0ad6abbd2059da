from __future__ import annotations

from zoom_receiver.security.models import ChallengeResponse
from zoom_receiver.utils.hashing import hmac_sha256_hex


def compute_challenge(plain_token: str, secret: str) -> ChallengeResponse:
    """
    Zoom expects encryptedToken = hex(HMAC-SHA256(key=secret, msg=plainToken)).
    plainToken is echoed back unchanged. An empty secret still yields a digest.
    """
    return ChallengeResponse(
        plain_token=plain_token,
        encrypted_token=hmac_sha256_hex(secret, plain_token),
    )
