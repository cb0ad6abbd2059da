from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class AuthReason(str, Enum):
    NONE_CONFIGURED = "none_configured"
    BASIC_OK = "basic_ok"
    BASIC_FAIL = "basic_fail"
    HEADER_OK = "header_ok"
    HEADER_FAIL = "header_fail"


@dataclass(frozen=True, slots=True)
class AuthDecision:
    """Outcome of evaluating one request's credentials."""

    allowed: bool
    reason: AuthReason


@dataclass(frozen=True, slots=True)
class ChallengeResponse:
    plain_token: str
    encrypted_token: str

    def to_dict(self) -> Dict[str, str]:
        return {"plainToken": self.plain_token, "encryptedToken": self.encrypted_token}
