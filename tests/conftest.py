# tests/conftest.py
"""Shared fixtures: real envelope encryption with static wrapping keys instead of KMS."""
import os

import pytest
from aws_encryption_sdk.identifiers import EncryptionKeyType, WrappingAlgorithm
from aws_encryption_sdk.internal.crypto.wrapping_keys import WrappingKey
from aws_encryption_sdk.key_providers.raw import RawMasterKeyProvider

from appkey_authorizer.keyring import Keyring

GENERATOR_KEY_ID = b"authorizer-generator"
FOREIGN_KEY_ID = b"someone-elses-key"


class StaticKeyProvider(RawMasterKeyProvider):
    """Raw AES wrapping keys held in memory, one per key id."""

    provider_id = "authorizer-static"

    def __init__(self, **kwargs):  # pylint: disable=unused-argument
        self._static_keys = {}

    def _get_raw_key(self, key_id):
        static_key = self._static_keys.setdefault(key_id, os.urandom(32))
        return WrappingKey(
            wrapping_algorithm=WrappingAlgorithm.AES_256_GCM_IV12_TAG16_NO_PADDING,
            wrapping_key=static_key,
            wrapping_key_type=EncryptionKeyType.SYMMETRIC,
        )


class ForeignKeyProvider(StaticKeyProvider):
    provider_id = "foreign-static"


@pytest.fixture
def keyring():
    provider = StaticKeyProvider()
    provider.add_master_key(GENERATOR_KEY_ID)
    return Keyring(provider)


@pytest.fixture
def foreign_keyring():
    provider = ForeignKeyProvider()
    provider.add_master_key(FOREIGN_KEY_ID)
    return Keyring(provider)


def make_event(api_key="app-123", app_key="", method_arn="arn:aws:execute-api:ap-northeast-1:123456789012:abcdef/prod/GET/items"):
    return {
        "type": "REQUEST",
        "methodArn": method_arn,
        "headers": {"X-api-key": api_key, "X-APP-KEY": app_key},
    }
