"""Exceptions raised by totp_auth."""


class AuthError(Exception):
    """Base class for all totp_auth errors."""


class ConfigError(AuthError, ValueError):
    """Invalid authenticator configuration."""


class DecodeError(AuthError, ValueError):
    """Secret string could not be decoded.

    Raised for corrupted or malformed stored secrets. This is never folded
    into a failed validation.
    """


class RandomSourceError(AuthError, RuntimeError):
    """The operating system random source is unavailable."""
