"""Security parameters shared by codecs."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

MIN_SECRET_BYTES = 32

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class SecureQRConfig:
    """Immutable codec settings.

    ``secret_key`` keys both the HMAC signature and, padded or truncated to
    32 bytes, the AES key. When encryption is enabled it must be at least
    32 bytes once UTF-8 encoded. ``validity`` is not checked: a zero or
    negative window makes every token decode as expired.

    ``random_iv`` switches the cipher from the fixed all-zero IV to a fresh
    IV per token, carried in front of the ciphertext. Tokens produced that
    way cannot be read by fixed-IV codecs and vice versa.
    """

    secret_key: str | bytes
    validity: timedelta = timedelta(minutes=5)
    enable_encryption: bool = True
    enable_signature: bool = True
    random_iv: bool = False

    def __post_init__(self) -> None:
        if self.enable_encryption and len(self.secret_bytes) < MIN_SECRET_BYTES:
            raise ConfigError(
                f"secret_key must be at least {MIN_SECRET_BYTES} bytes when encryption is enabled"
            )

    @property
    def secret_bytes(self) -> bytes:
        """Secret as raw bytes (UTF-8 encoded when given as text)."""
        if isinstance(self.secret_key, bytes):
            return self.secret_key
        return self.secret_key.encode("utf-8")

    @property
    def validity_ms(self) -> int:
        """Validity window in whole milliseconds, truncated.

        Expiry checks use the exact ``validity``; sub-millisecond windows do
        not collapse to zero there.
        """
        return int(self.validity / timedelta(milliseconds=1))

    @classmethod
    def from_env(
        cls,
        prefix: str = "SECURE_QR_",
        *,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "SecureQRConfig":
        """Build a config from ``<prefix>*`` environment variables.

        Recognised names: ``SECRET``, ``VALIDITY_SECONDS``,
        ``ENABLE_ENCRYPTION``, ``ENABLE_SIGNATURE`` and ``RANDOM_IV``.
        Keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        kwargs: Dict[str, Any] = {}

        secret = env.get(f"{prefix}SECRET")
        if secret:
            kwargs["secret_key"] = secret

        seconds = env.get(f"{prefix}VALIDITY_SECONDS")
        if seconds is not None:
            try:
                kwargs["validity"] = timedelta(seconds=float(seconds))
            except ValueError as exc:
                raise ConfigError(f"{prefix}VALIDITY_SECONDS must be a number, got {seconds!r}") from exc

        for field_name, suffix in (
            ("enable_encryption", "ENABLE_ENCRYPTION"),
            ("enable_signature", "ENABLE_SIGNATURE"),
            ("random_iv", "RANDOM_IV"),
        ):
            raw = env.get(f"{prefix}{suffix}")
            if raw is not None:
                kwargs[field_name] = _parse_bool(f"{prefix}{suffix}", raw)

        kwargs.update(overrides)
        if not kwargs.get("secret_key"):
            raise ConfigError(f"{prefix}SECRET is not set")

        logger.debug(
            "Loaded config from environment (encryption=%s, signature=%s)",
            kwargs.get("enable_encryption", True),
            kwargs.get("enable_signature", True),
        )
        return cls(**kwargs)
