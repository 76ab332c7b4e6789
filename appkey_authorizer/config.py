# appkey_authorizer/config.py
"""Process-wide settings, read once at cold start.

Everything here comes from environment variables (or, for the command line
tool, a YAML/JSON file with the same keys in lower case) and is frozen after
construction.
"""
from __future__ import annotations

import codecs
import json
import os
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

import yaml

from .errors import ConfigurationError

DEFAULT_DECRYPT_TIMEOUT = 3.0
DEFAULT_PLAINTEXT_ENCODING = "ascii"
DEFAULT_PRINCIPAL_ID = 1

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _as_key_ids(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value or [])
    return tuple(str(item).strip() for item in items if str(item).strip())


def _as_principal(value: Any) -> Union[int, str]:
    # Integer-looking values stay integers so the default document shape
    # ("principalId": 1) is kept when the value comes from the environment.
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        raise ConfigurationError("PRINCIPAL_ID must not be empty")
    try:
        return int(text)
    except ValueError:
        return text


@dataclass(frozen=True)
class KeyringConfig:
    generator_key_id: str
    key_ids: Tuple[str, ...]
    timeout: float = DEFAULT_DECRYPT_TIMEOUT

    def __post_init__(self):
        if not self.generator_key_id:
            raise ConfigurationError("GENERATOR_KEY_ID is required")
        if not self.key_ids:
            raise ConfigurationError("KEY_IDS must name at least one key")
        if self.timeout <= 0:
            raise ConfigurationError("DECRYPT_TIMEOUT must be positive")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "KeyringConfig":
        try:
            timeout = float(data.get("decrypt_timeout", DEFAULT_DECRYPT_TIMEOUT))
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"DECRYPT_TIMEOUT must be a number, got {data.get('decrypt_timeout')!r}"
            )
        return cls(
            generator_key_id=str(data.get("generator_key_id") or "").strip(),
            key_ids=_as_key_ids(data.get("key_ids")),
            timeout=timeout,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "KeyringConfig":
        return cls.from_mapping(_env_mapping(environ))


@dataclass(frozen=True)
class AuthorizerSettings:
    principal_id: Union[int, str] = DEFAULT_PRINCIPAL_ID
    plaintext_encoding: str = DEFAULT_PLAINTEXT_ENCODING
    log_events: bool = True
    log_plaintext: bool = False
    redact_secrets: bool = True

    def __post_init__(self):
        try:
            codecs.lookup(self.plaintext_encoding)
        except LookupError:
            raise ConfigurationError(f"Unknown PLAINTEXT_ENCODING: {self.plaintext_encoding}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AuthorizerSettings":
        encoding = str(data.get("plaintext_encoding") or DEFAULT_PLAINTEXT_ENCODING).strip().lower()
        return cls(
            principal_id=_as_principal(data.get("principal_id", DEFAULT_PRINCIPAL_ID)),
            plaintext_encoding=encoding,
            log_events=_as_bool("LOG_EVENTS", data.get("log_events", True)),
            log_plaintext=_as_bool("LOG_PLAINTEXT", data.get("log_plaintext", False)),
            redact_secrets=_as_bool("REDACT_SECRETS", data.get("redact_secrets", True)),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "AuthorizerSettings":
        return cls.from_mapping(_env_mapping(environ))


_ENV_KEYS = (
    "GENERATOR_KEY_ID",
    "KEY_IDS",
    "DECRYPT_TIMEOUT",
    "PLAINTEXT_ENCODING",
    "PRINCIPAL_ID",
    "LOG_EVENTS",
    "LOG_PLAINTEXT",
    "REDACT_SECRETS",
)


def _env_mapping(environ: Mapping[str, str]) -> dict:
    return {key.lower(): environ[key] for key in _ENV_KEYS if key in environ}


def load_config_file(path: str) -> dict:
    """Load a YAML or JSON settings file into a lower-cased mapping."""
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith((".yaml", ".yml")):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    return {str(key).lower(): value for key, value in data.items()}
