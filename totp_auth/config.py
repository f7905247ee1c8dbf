"""Authenticator configuration.

All policy (secret length, code length, time step, tolerance window and
secret encoding) lives in one immutable AuthConfig value that is passed
explicitly to every operation.
"""

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional

from .errors import ConfigError


class Base(str, Enum):
    """Encoding used for the transport form of a secret."""

    BASE32 = "base32"
    BASE64 = "base64"


# code_digits above 9 exceeds the range of the 31-bit truncated value
MAX_CODE_DIGITS = 9

# Environment variable -> AuthConfig field
ENV_VARS = {
    "TOTP_SECRET_BITS": "secret_bits",
    "TOTP_CODE_DIGITS": "code_digits",
    "TOTP_TIMESTEP": "window_timestep_size",
    "TOTP_WINDOW_SIZE": "window_size",
    "TOTP_BASE": "base",
}


def _check_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class AuthConfig:
    """Immutable TOTP policy.

    Args:
        secret_bits: Entropy of generated secrets, multiple of 8
        code_digits: Length of generated codes (1-9)
        window_timestep_size: Seconds per time step
        window_size: Odd number of time steps checked during validation
        base: Encoding of secret strings

    Raises:
        ConfigError: If any field violates its constraint
    """

    secret_bits: int = 80
    code_digits: int = 6
    window_timestep_size: int = 30
    window_size: int = 3
    base: Base = Base.BASE32

    def __post_init__(self):
        try:
            base = Base(self.base.lower() if isinstance(self.base, str) else self.base)
        except ValueError:
            raise ConfigError(f"Unknown base: {self.base!r}") from None
        object.__setattr__(self, "base", base)

        secret_bits = _check_int("secret_bits", self.secret_bits)
        if secret_bits <= 0 or secret_bits % 8:
            raise ConfigError(f"secret_bits must be a positive multiple of 8, got {secret_bits}")

        code_digits = _check_int("code_digits", self.code_digits)
        if not 1 <= code_digits <= MAX_CODE_DIGITS:
            raise ConfigError(f"code_digits must be between 1 and {MAX_CODE_DIGITS}, got {code_digits}")

        step = _check_int("window_timestep_size", self.window_timestep_size)
        if step < 1:
            raise ConfigError(f"window_timestep_size must be at least 1, got {step}")

        window_size = _check_int("window_size", self.window_size)
        if window_size < 1 or window_size % 2 == 0:
            raise ConfigError(f"window_size must be odd and at least 1, got {window_size}")

    @classmethod
    def default(cls) -> "AuthConfig":
        """80-bit Base32 secrets, 6 digits, 30 second steps, 3 step window."""
        return cls()

    @property
    def secret_bytes(self) -> int:
        return self.secret_bits // 8

    def replace(self, **changes) -> "AuthConfig":
        """Return a validated copy with the given fields changed."""
        return replace(self, **changes)


def load_config(environ: Optional[Mapping[str, str]] = None) -> AuthConfig:
    """Build an AuthConfig from environment variables.

    Missing variables keep their defaults.

    Args:
        environ: Mapping to read from, os.environ if omitted

    Returns:
        Validated AuthConfig

    Raises:
        ConfigError: If a value cannot be parsed or is out of range
    """
    if environ is None:
        environ = os.environ

    fields = {}
    for var, field in ENV_VARS.items():
        value = environ.get(var)
        if value is None or not value.strip():
            continue
        value = value.strip()
        if field == "base":
            fields[field] = value
            continue
        try:
            fields[field] = int(value)
        except ValueError:
            raise ConfigError(f"{var} must be an integer, got {value!r}") from None

    return AuthConfig(**fields)
