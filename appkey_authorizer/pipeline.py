# appkey_authorizer/pipeline.py
"""The authorization decision pipeline.

    START -> HEADERS_EXTRACTED -> VALIDATED -> DECRYPTING -> DECIDED
                                                        \\-> FAILED

Every failure is terminal for the request. Nothing is retried here; the
gateway issues a new request if it wants another answer.
"""
from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import AuthorizerSettings
from .errors import AuthorizationError, MissingCredentials
from .policy import generate_policy
from .tokens import decrypt_token

logger = logging.getLogger(__name__)

# Application identifier header
API_KEY_HEADER = "X-api-key"
# Application authorization key header (base64 ciphertext)
APP_KEY_HEADER = "X-APP-KEY"

REDACTED = "***"
MISSING_TOKEN_MESSAGE = "Can not find token."


class State(enum.Enum):
    START = "start"
    HEADERS_EXTRACTED = "headers_extracted"
    VALIDATED = "validated"
    DECRYPTING = "decrypting"
    DECIDED = "decided"
    FAILED = "failed"


@dataclass(frozen=True)
class Credentials:
    api_key: str
    authorization_key: str


@dataclass
class Outcome:
    state: State
    document: Optional[Dict[str, Any]] = None
    error: Optional[AuthorizationError] = None

    @property
    def decided(self) -> bool:
        return self.state is State.DECIDED


def extract_credentials(event: Dict[str, Any]) -> Credentials:
    headers = event.get("headers") or {}
    return Credentials(
        api_key=headers.get(API_KEY_HEADER) or "",
        authorization_key=headers.get(APP_KEY_HEADER) or "",
    )


def validate_request(event: Dict[str, Any], credentials: Credentials) -> str:
    """Return the method ARN, or raise MissingCredentials."""
    method_arn = event.get("methodArn") or ""
    missing = []
    if not credentials.authorization_key:
        missing.append(f"{APP_KEY_HEADER} header")
    if not credentials.api_key:
        missing.append(f"{API_KEY_HEADER} header")
    if not method_arn:
        missing.append("methodArn")
    if missing:
        raise MissingCredentials(
            MISSING_TOKEN_MESSAGE,
            cause=LookupError(f"missing {', '.join(missing)}"),
        )
    return method_arn


def redact_event(event: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``event`` with credential header values masked."""
    redacted = dict(event)
    for field in ("headers", "multiValueHeaders"):
        headers = event.get(field)
        if not isinstance(headers, dict):
            continue
        redacted[field] = {
            name: (REDACTED if name in (API_KEY_HEADER, APP_KEY_HEADER) and value else value)
            for name, value in headers.items()
        }
    return redacted


def summarize_plaintext(plaintext: str) -> str:
    return f"<{len(plaintext)} chars redacted>"


def authorize(event: Dict[str, Any], keyring, settings: Optional[AuthorizerSettings] = None) -> Outcome:
    """Run one request through the pipeline.

    ``keyring`` is the process-wide keyring built by
    :func:`appkey_authorizer.keyring.build_keyring`.
    """
    settings = settings or AuthorizerSettings()
    state = State.START

    if settings.log_events:
        logged = redact_event(event) if settings.redact_secrets else event
        logger.info("request: %s", json.dumps(logged, default=str))

    try:
        credentials = extract_credentials(event)
        state = _advance(state, State.HEADERS_EXTRACTED)

        method_arn = validate_request(event, credentials)
        state = _advance(state, State.VALIDATED)

        state = _advance(state, State.DECRYPTING)
        plaintext = decrypt_token(credentials.authorization_key, keyring, settings.plaintext_encoding)
    except AuthorizationError as e:
        logger.warning("Authorization failed in state %s: %s (%s)", state.value, e.kind, e.message)
        return Outcome(state=State.FAILED, error=e)

    if settings.log_plaintext:
        shown = summarize_plaintext(plaintext) if settings.redact_secrets else plaintext
        logger.info("text: %s", shown)

    document = generate_policy(method_arn, principal_id=settings.principal_id)
    _advance(state, State.DECIDED)
    logger.info("Allowing %s for principal %s", method_arn, settings.principal_id)
    return Outcome(state=State.DECIDED, document=document)


def _advance(current: State, target: State) -> State:
    logger.debug("pipeline: %s -> %s", current.value, target.value)
    return target
