"""TOTP authenticator core.

Google Authenticator compatible secret generation, code calculation and
code validation.
"""

from .authenticator import (
    AuthKey,
    Authenticator,
    code_at,
    create_credentials,
    validate_code,
    window_offsets,
)
from .codec import decode, encode
from .config import AuthConfig, Base, load_config
from .errors import AuthError, ConfigError, DecodeError, RandomSourceError
from .totp import calculate_code, format_code, time_step_for

__all__ = [
    # Config
    "AuthConfig",
    "Base",
    "load_config",
    # Authenticator
    "AuthKey",
    "Authenticator",
    "create_credentials",
    "validate_code",
    "code_at",
    "window_offsets",
    # Codec
    "encode",
    "decode",
    # Code calculation
    "calculate_code",
    "format_code",
    "time_step_for",
    # Errors
    "AuthError",
    "ConfigError",
    "DecodeError",
    "RandomSourceError",
]
