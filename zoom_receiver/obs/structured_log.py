# zoom_receiver/obs/structured_log.py
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Mapping, Optional

REDACTED = "***"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.info(f"Structured logging initialized at {datetime.now(timezone.utc).isoformat()}")


def redact_headers(
    headers: Mapping[str, str],
    sensitive: Iterable[Optional[str]] = (),
) -> Dict[str, str]:
    """Copy headers with Authorization and any extra sensitive names masked."""
    hidden = {"authorization"} | {name.lower() for name in sensitive if name}
    return {k: (REDACTED if k.lower() in hidden else v) for k, v in headers.items()}


def mask_secret(secret: str, visible: int = 5) -> str:
    """Show only the first characters of a secret, or 'Not set'."""
    if not secret:
        return "Not set"
    return f"{secret[:visible]}..."
