# appkey_authorizer/handler.py
"""Lambda entry point for the API Gateway REQUEST authorizer.

The keyring and settings are built once per execution environment (cold
start) and shared by every invocation that follows.
"""
import logging
import os

from .config import AuthorizerSettings, KeyringConfig
from .keyring import build_keyring
from .pipeline import authorize
from .reporting import report_error

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

SETTINGS = AuthorizerSettings.from_env()
KEYRING = build_keyring(KeyringConfig.from_env())


def lambda_handler(event, context):
    outcome = authorize(event, KEYRING, SETTINGS)
    if not outcome.decided:
        report_error(outcome.error)
    return outcome.document
