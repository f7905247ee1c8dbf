"""Encoding of raw secrets to and from their transport form."""

import base64
import binascii
import logging
import re

from .config import Base
from .errors import DecodeError

log = logging.getLogger(__name__)

# RFC 4648 Base32 alphabet, either case
RE_BASE32 = re.compile(r'^[A-Za-z2-7]*$')

# Unpadded Base32 lengths that cannot come from whole bytes
INVALID_BASE32_REMAINDERS = {1, 3, 6}


def encode(base: Base, data: bytes) -> str:
    """Encode raw secret bytes.

    Base32 output is unpadded, as authenticator apps expect it.
    Base64 output is padded.
    """
    if base is Base.BASE32:
        return base64.b32encode(data).decode("ascii").rstrip("=")
    if base is Base.BASE64:
        return base64.b64encode(data).decode("ascii")
    raise ValueError(f"Unsupported base: {base!r}")


def _check_canonical(base: Base, secret: str, data: bytes):
    # Unused trailing bits must be zero, so each secret has one spelling
    if encode(base, data) != secret:
        raise DecodeError(f"Non-canonical {base.value} secret")


def _decode_base32(text: str) -> bytes:
    # Secrets are often shown grouped and in lower case
    secret = text.strip().replace(" ", "").rstrip("=")
    if not RE_BASE32.fullmatch(secret):
        raise DecodeError("Secret contains characters outside the Base32 alphabet")
    if not secret:
        raise DecodeError("Empty Base32 secret")
    if len(secret) % 8 in INVALID_BASE32_REMAINDERS:
        raise DecodeError(f"Invalid Base32 secret length: {len(secret)}")
    secret = secret.upper()
    padded = secret + "=" * (-len(secret) % 8)
    try:
        data = base64.b32decode(padded)
    except binascii.Error as e:
        raise DecodeError(f"Invalid Base32 secret: {e}") from e
    _check_canonical(Base.BASE32, secret, data)
    return data


def _decode_base64(text: str) -> bytes:
    secret = text.strip()
    if not secret:
        raise DecodeError("Empty Base64 secret")
    try:
        data = base64.b64decode(secret, validate=True)
    except ValueError as e:
        raise DecodeError(f"Invalid Base64 secret: {e}") from e
    _check_canonical(Base.BASE64, secret, data)
    return data


def decode(base: Base, text: str) -> bytes:
    """Decode a secret string back to raw bytes.

    Args:
        base: Encoding the secret was produced with
        text: Encoded secret

    Returns:
        Raw secret bytes

    Raises:
        DecodeError: If the secret is malformed
    """
    if not isinstance(text, str):
        raise DecodeError(f"Secret must be a string, got {type(text).__name__}")
    try:
        if base is Base.BASE32:
            return _decode_base32(text)
        if base is Base.BASE64:
            return _decode_base64(text)
    except DecodeError as e:
        log.debug(f"Secret decode failed ({base.value}): {e}")
        raise
    raise ValueError(f"Unsupported base: {base!r}")
