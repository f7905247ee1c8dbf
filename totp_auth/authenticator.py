"""Secret generation and code validation."""

import logging
import secrets
from dataclasses import dataclass, field
from typing import Optional

from . import codec
from .config import AuthConfig
from .errors import RandomSourceError
from .totp import calculate_code, time_step_for

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthKey:
    """Encoded shared secret, owned by the caller."""

    key: str = field(repr=False)

    def __str__(self):
        return self.key


def create_credentials(config: AuthConfig) -> AuthKey:
    """Generate a new random secret.

    Args:
        config: Authenticator configuration (secret_bits and base are used)

    Returns:
        AuthKey holding the encoded secret

    Raises:
        RandomSourceError: If the OS random source is unavailable
    """
    try:
        buffer = secrets.token_bytes(config.secret_bytes)
    except (NotImplementedError, OSError) as e:
        raise RandomSourceError(f"Failed to obtain OS random source: {e}") from e

    log.debug(f"Created {config.secret_bits}-bit {config.base.value} secret")
    return AuthKey(key=codec.encode(config.base, buffer))


def window_offsets(config: AuthConfig) -> range:
    """Step offsets checked around the current step, e.g. -1, 0, 1 for a window of 3."""
    half = (config.window_size - 1) // 2
    return range(-half, half + 1)


def code_at(config: AuthConfig, key: AuthKey, timestamp: int) -> int:
    """Code for the time step containing a Unix timestamp.

    Raises:
        DecodeError: If the key is malformed
    """
    secret = codec.decode(config.base, key.key)
    return calculate_code(config, secret, time_step_for(config, timestamp))


def validate_code(config: AuthConfig, key: AuthKey, time: int, code: int) -> bool:
    """Check a code against the window of steps around a timestamp.

    Args:
        config: Authenticator configuration
        key: Encoded shared secret
        time: Unix timestamp in seconds
        code: Code supplied by the user

    Returns:
        True if the code matches any step in the window

    Raises:
        DecodeError: If the key is malformed. A broken secret is never
            reported as a mismatch.
    """
    secret = codec.decode(config.base, key.key)
    time_window = time_step_for(config, time)

    for offset in window_offsets(config):
        if calculate_code(config, secret, time_window + offset) == code:
            log.debug(f"Code matched at step offset {offset}")
            return True

    log.debug("Code did not match any step in window")
    return False


class Authenticator:
    """TOTP authenticator bound to one configuration.

    Holds no state besides its (immutable) config, so instances can be
    shared between threads.
    """

    def __init__(self, config: Optional[AuthConfig] = None):
        self._config = config if config is not None else AuthConfig.default()

    @property
    def config(self) -> AuthConfig:
        return self._config

    def create_credentials(self) -> AuthKey:
        return create_credentials(self._config)

    def calculate_code(self, secret: bytes, time_step: int) -> int:
        return calculate_code(self._config, secret, time_step)

    def code_at(self, key: AuthKey, timestamp: int) -> int:
        return code_at(self._config, key, timestamp)

    def validate_code(self, key: AuthKey, time: int, code: int) -> bool:
        return validate_code(self._config, key, time, code)

    def __repr__(self):
        return f"Authenticator({self._config!r})"
