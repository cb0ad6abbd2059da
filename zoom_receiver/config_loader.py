from __future__ import annotations
import os
import re
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from zoom_receiver.errors import ConfigError


CONFIG_PATH_ENV = "ZOOM_RECEIVER_CONFIG"
DEFAULT_PORT = 3000

_SIMPLE_YAML_LINE = re.compile(r"^\s*([A-Za-z0-9_.\-]+)\s*:\s*(.*?)\s*$")
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide configuration, built once at startup and never mutated."""

    verification_token: str = ""
    basic_auth_username: Optional[str] = None
    basic_auth_password: Optional[str] = None
    custom_header_name: Optional[str] = None
    custom_header_value: Optional[str] = None
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    environment: str = "development"
    log_level: str = "INFO"
    strict_auth: bool = False

    @property
    def basic_auth_enabled(self) -> bool:
        return bool(self.basic_auth_username and self.basic_auth_password)

    @property
    def custom_header_enabled(self) -> bool:
        return bool(self.custom_header_name and self.custom_header_value)

    @property
    def verification_token_configured(self) -> bool:
        return bool(self.verification_token)


def _convert_value(raw_val: str) -> Any:
    """Convert raw string value to bool, number, or string."""
    val = raw_val.strip()
    lower = val.lower()

    if not val:
        return ""
    if lower in {"true", "false"}:
        return lower == "true"
    if (val.startswith('"') and val.endswith('"')) or (
        val.startswith("'") and val.endswith("'")
    ):
        return val[1:-1]
    try:
        return float(val) if "." in val else int(val)
    except ValueError:
        return val


def _parse_simple_yaml(text: str) -> Dict[str, Any]:
    """
    Minimal YAML parser for flat key:value pairs.
    Supports numbers, booleans, and quoted/unquoted strings.
    Ignores blank lines and comments starting with '#'.
    """
    cfg: Dict[str, Any] = {}

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        match = _SIMPLE_YAML_LINE.match(line)
        if not match:
            continue

        key, raw_val = match.groups()
        cfg[key] = _convert_value(raw_val)

    return cfg


def load_config(path: str) -> Dict[str, Any]:
    """Load configuration from JSON or minimal YAML file."""
    if not os.path.isfile(path):
        return {}

    with open(path, encoding="utf-8") as f:
        text = f.read().strip()

    if not text:
        return {}

    if path.endswith(".json"):
        try:
            data = json.loads(text)
        except ValueError as e:
            raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        return data

    return _parse_simple_yaml(text)


def _optional(value: Optional[str]) -> Optional[str]:
    # Empty strings mean "not configured"
    return value or None


def _parse_port(raw: Any) -> int:
    if raw is None or raw == "":
        return DEFAULT_PORT
    try:
        port = int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"PORT must be an integer, got {raw!r}") from e
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")
    return port


def _merged_values(environ: Mapping[str, str], config_path: Optional[str]) -> Dict[str, str]:
    """File values first (keys upper-cased), environment on top."""
    path = config_path or environ.get(CONFIG_PATH_ENV)
    values: Dict[str, str] = {}
    if path:
        for key, val in load_config(path).items():
            if isinstance(val, bool):
                val = "true" if val else "false"
            values[str(key).upper()] = "" if val is None else str(val)
    for key, val in environ.items():
        values[key] = val
    return values


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
) -> Settings:
    """
    Build `Settings` from the process environment.

    When `environ` is omitted, a `.env` file is loaded first (without
    overriding variables already set) and `os.environ` is read. An optional
    flat JSON/YAML file named by ZOOM_RECEIVER_CONFIG supplies defaults that
    the environment overrides.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        environ = os.environ

    values = _merged_values(environ, config_path)

    def get(key: str, default: str = "") -> str:
        return (values.get(key) or default).strip()

    def raw(key: str) -> str:
        # Credentials are compared byte for byte, whitespace included
        return values.get(key) or ""

    return Settings(
        verification_token=get("ZOOM_VERIFICATION_TOKEN"),
        basic_auth_username=_optional(raw("BASIC_AUTH_USERNAME")),
        basic_auth_password=_optional(raw("BASIC_AUTH_PASSWORD")),
        custom_header_name=_optional(get("CUSTOM_HEADER_NAME")),
        custom_header_value=_optional(raw("CUSTOM_HEADER_VALUE")),
        port=_parse_port(get("PORT")),
        host=get("HOST", "0.0.0.0"),
        environment=get("APP_ENV") or get("ENVIRONMENT", "development"),
        log_level=get("LOG_LEVEL", "INFO").upper(),
        strict_auth=get("AUTH_STRICT").lower() in _TRUTHY,
    )
