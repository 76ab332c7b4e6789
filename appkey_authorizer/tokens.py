# appkey_authorizer/tokens.py
"""Application key tokens: base64 text around an encrypted message."""
import base64
import binascii

from .errors import EncodingError

ASCII = "ascii"


def decode_plaintext(data: bytes, encoding: str = ASCII) -> str:
    """Turn decrypted bytes into text.

    ``ascii`` is single-byte and lenient: the high bit of every byte is
    dropped instead of raising, so any byte string decodes. Other codec
    names decode strictly.
    """
    if encoding == ASCII:
        return bytes(b & 0x7F for b in data).decode(ASCII)
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise EncodingError(f"Decrypted token is not valid {encoding}", cause=e)


def decrypt_token(encoded: str, keyring, encoding: str = ASCII) -> str:
    try:
        ciphertext = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError("Authorization key is not valid base64", cause=e)
    return decode_plaintext(keyring.decrypt(ciphertext), encoding)


def encrypt_token(text: str, keyring, encoding: str = ASCII) -> str:
    """Mint a token for ``text``; the inverse of :func:`decrypt_token`."""
    try:
        plaintext = text.encode(encoding)
    except UnicodeEncodeError as e:
        raise EncodingError(f"Token text is not valid {encoding}", cause=e)
    return base64.b64encode(keyring.encrypt(plaintext)).decode(ASCII)
