"""TOTP code calculation (RFC 4226 dynamic truncation over RFC 6238 time steps)."""

import hashlib
import hmac
import struct

from .config import AuthConfig

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MASK = (1 << 64) - 1


def counter_bytes(time_step: int) -> bytes:
    """Pack a signed 64-bit time step as 8 big-endian unsigned bytes."""
    if isinstance(time_step, bool) or not isinstance(time_step, int):
        raise TypeError(f"time_step must be an integer, got {type(time_step).__name__}")
    if not INT64_MIN <= time_step <= INT64_MAX:
        raise ValueError(f"time_step out of signed 64-bit range: {time_step}")
    return struct.pack(">Q", time_step & UINT64_MASK)


def truncate(digest: bytes) -> int:
    """Dynamic truncation of an HMAC-SHA1 digest to a 31-bit integer."""
    offset = digest[19] & 0x0F
    return struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF


def calculate_code(config: AuthConfig, secret: bytes, time_step: int) -> int:
    """Calculate the code for a raw secret at a time step.

    Args:
        config: Authenticator configuration (code_digits is used)
        secret: Raw (decoded) secret bytes, used as the HMAC key
        time_step: Signed 64-bit time step counter

    Returns:
        Code as an integer below 10 ** code_digits. Leading zeros are
        significant, use format_code() for display.
    """
    digest = hmac.new(secret, counter_bytes(time_step), hashlib.sha1).digest()
    return truncate(digest) % (10 ** config.code_digits)


def format_code(config: AuthConfig, code: int) -> str:
    """Zero-pad a code to the configured number of digits."""
    return str(code).zfill(config.code_digits)


def time_step_for(config: AuthConfig, timestamp: int) -> int:
    """Time step containing a Unix timestamp, truncating toward zero."""
    step = abs(timestamp) // config.window_timestep_size
    return -step if timestamp < 0 else step
