# appkey_authorizer/cli.py
"""
Developer CLI for the application key authorizer.

Example usage:
  # Mint a token for a client under the generator key
  appkey-authorizer encrypt "client-secret-123"

  # Check what a token decrypts to
  appkey-authorizer decrypt AYADeH...

  # Run the authorizer on a captured API Gateway event
  appkey-authorizer authorize event.yaml

Configuration is read from the environment (GENERATOR_KEY_ID, KEY_IDS, ...)
unless --config points at a YAML/JSON file with the same keys.
"""
import argparse
import json
import logging
import os
import sys

import yaml

from .config import AuthorizerSettings, KeyringConfig, load_config_file
from .errors import AuthorizationError, ConfigurationError
from .keyring import build_keyring
from .pipeline import authorize
from .reporting import format_error
from .tokens import decrypt_token, encrypt_token


def _load_event(path):
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith((".yaml", ".yml")):
            return yaml.safe_load(f)
        return json.load(f)


def build_parser():
    parser = argparse.ArgumentParser(description="Application key authorizer CLI")
    parser.add_argument("--config", help="YAML/JSON settings file (default: environment)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    e = sub.add_parser("encrypt", help="Encrypt TEXT into a base64 application key")
    e.add_argument("text", help="Plaintext application key")

    d = sub.add_parser("decrypt", help="Decrypt a base64 application key")
    d.add_argument("token", help="Base64 application key")

    a = sub.add_parser("authorize", help="Run the authorizer on an event file")
    a.add_argument("event", help="Path to API Gateway event JSON/YAML file")

    return parser


def cli(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        data = load_config_file(args.config) if args.config else None
        if data is None:
            keyring_config = KeyringConfig.from_env(os.environ)
            settings = AuthorizerSettings.from_env(os.environ)
        else:
            keyring_config = KeyringConfig.from_mapping(data)
            settings = AuthorizerSettings.from_mapping(data)
    except ConfigurationError as e:
        print(f"[✗] Configuration error: {e}", file=sys.stderr)
        return 2

    keyring = build_keyring(keyring_config)

    if args.command == "encrypt":
        try:
            print(encrypt_token(args.text, keyring, settings.plaintext_encoding))
        except AuthorizationError as e:
            print(format_error(e.message), file=sys.stderr)
            return 1

    elif args.command == "decrypt":
        try:
            print(decrypt_token(args.token, keyring, settings.plaintext_encoding))
        except AuthorizationError as e:
            print(format_error(e.message), file=sys.stderr)
            return 1

    elif args.command == "authorize":
        outcome = authorize(_load_event(args.event), keyring, settings)
        if not outcome.decided:
            print(format_error(outcome.error.message, outcome.error.cause), file=sys.stderr)
            return 1
        print(json.dumps(outcome.document, indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(cli())
