import hashlib
import hmac


def hmac_sha256_hex(key: str, message: str) -> str:
    """Return the lowercase hex HMAC-SHA256 of `message` keyed with `key`."""
    return hmac.new(key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def constant_time_equals(left: str, right: str) -> bool:
    # compare_digest rejects non-ASCII str, so compare the encoded bytes
    return hmac.compare_digest(left.encode("utf-8"), right.encode("utf-8"))
