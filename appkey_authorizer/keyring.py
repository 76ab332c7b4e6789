# appkey_authorizer/keyring.py
"""Envelope decryption behind a small keyring adapter.

The adapter holds an AWS Encryption SDK client and a master key provider.
In production the provider is a strict KMS provider limited to the
configured key ARNs, so a token wrapped under any other key is refused by
the SDK itself.
"""
import logging

import aws_encryption_sdk
import botocore.session
from aws_encryption_sdk import CommitmentPolicy
from aws_encryption_sdk.exceptions import AWSEncryptionSDKClientError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from cryptography.exceptions import InvalidSignature, InvalidTag

from .errors import AuthorizationError, DecryptError

logger = logging.getLogger(__name__)

_BACKEND_ERRORS = (
    AWSEncryptionSDKClientError,
    BotoCoreError,
    ClientError,
    InvalidSignature,
    InvalidTag,
)


class Keyring:
    """Decrypts (and encrypts) envelope-encrypted payloads.

    Instances are immutable after construction and may be shared by
    concurrent invocations.
    """

    def __init__(self, key_provider, commitment_policy=CommitmentPolicy.FORBID_ENCRYPT_ALLOW_DECRYPT):
        self._key_provider = key_provider
        self._client = aws_encryption_sdk.EncryptionSDKClient(commitment_policy=commitment_policy)

    def decrypt(self, ciphertext: bytes) -> bytes:
        try:
            plaintext, header = self._client.decrypt(source=ciphertext, key_provider=self._key_provider)
        except _BACKEND_ERRORS as e:
            logger.warning("Keyring rejected ciphertext: %s", type(e).__name__)
            raise DecryptError(f"Unable to decrypt token: {e}", cause=e)
        logger.debug("Decrypted %d bytes with %d data key(s)", len(plaintext), len(header.encrypted_data_keys))
        return plaintext

    def encrypt(self, plaintext: bytes) -> bytes:
        """Wrap ``plaintext`` under the generator key."""
        try:
            ciphertext, _header = self._client.encrypt(source=plaintext, key_provider=self._key_provider)
        except _BACKEND_ERRORS as e:
            raise AuthorizationError(f"Unable to encrypt token: {e}", cause=e)
        return ciphertext


def _kms_session(timeout: float):
    session = botocore.session.Session()
    # Retries are off: a stalled KMS call must fail inside the invocation.
    session.set_default_client_config(
        Config(connect_timeout=timeout, read_timeout=timeout, retries={"max_attempts": 0})
    )
    return session


def build_keyring(config) -> Keyring:
    """Build the process-wide keyring from a :class:`KeyringConfig`.

    The generator key comes first so the SDK uses it to originate data keys;
    the remaining ARNs are the ones accepted on decrypt.
    """
    key_ids = [config.generator_key_id]
    key_ids.extend(k for k in config.key_ids if k != config.generator_key_id)
    provider = aws_encryption_sdk.StrictAwsKmsMasterKeyProvider(
        key_ids=key_ids,
        botocore_session=_kms_session(config.timeout),
    )
    logger.info("Keyring ready: generator=%s keys=%d timeout=%.1fs",
                config.generator_key_id, len(config.key_ids), config.timeout)
    return Keyring(provider)
