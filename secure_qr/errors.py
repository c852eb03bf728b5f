"""Exception types raised at configuration and encode time."""

from __future__ import annotations


class SecureQRError(Exception):
    """Base class for all secure_qr exceptions."""


class ConfigError(SecureQRError, ValueError):
    """Raised when a configuration cannot be built from the given parameters."""


class GenerationError(SecureQRError):
    """Raised when a token cannot be produced.

    The underlying failure is chained as ``__cause__``.
    """
