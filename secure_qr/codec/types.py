"""Token envelope and decode outcome datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

FORMAT_VERSION = 1


class InvalidReason(str, Enum):
    """Fixed reasons reported by the codec for rejected tokens."""

    BASE64 = "base64 decode error"
    DECRYPTION = "decryption error"
    MALFORMED = "malformed payload"
    VERSION = "unsupported version"
    SIGNATURE = "signature mismatch"


@dataclass(frozen=True)
class Envelope:
    """Payload plus the metadata carried alongside it inside a token."""

    data: Any
    timestamp: int
    token_id: str
    version: int = FORMAT_VERSION
    signature: Optional[str] = None

    def to_dict(self, *, include_signature: bool = True) -> Dict[str, Any]:
        """Serialize to the wire mapping."""
        out: Dict[str, Any] = {
            "data": self.data,
            "timestamp": self.timestamp,
            "id": self.token_id,
            "version": self.version,
        }
        if include_signature and self.signature is not None:
            out["signature"] = self.signature
        return out


class Outcome:
    """Result of decoding a token: ``Valid``, ``Invalid`` or ``Expired``."""

    @property
    def is_valid(self) -> bool:
        return False

    @property
    def is_expired(self) -> bool:
        return False

    @property
    def error(self) -> Optional[str]:
        return None

    @property
    def user_message(self) -> str:
        """Short message suitable for showing to whoever scanned the token."""
        return self.error or "token invalid"

    def has_data(self, key: str) -> bool:
        return False

    def get_data(self, key: str, default: Any = None, expected: Optional[type] = None) -> Any:
        return default


@dataclass(frozen=True)
class Valid(Outcome):
    data: Any

    @property
    def is_valid(self) -> bool:
        return True

    @property
    def user_message(self) -> str:
        return "token valid"

    def has_data(self, key: str) -> bool:
        return isinstance(self.data, dict) and key in self.data

    def get_data(self, key: str, default: Any = None, expected: Optional[type] = None) -> Any:
        """Return ``data[key]``, or ``default`` when absent or not of type ``expected``."""
        if not isinstance(self.data, dict) or key not in self.data:
            return default
        value = self.data[key]
        if expected is not None and not isinstance(value, expected):
            return default
        return value


@dataclass(frozen=True)
class Invalid(Outcome):
    reason: str

    @property
    def error(self) -> Optional[str]:
        return self.reason


@dataclass(frozen=True)
class Expired(Outcome):
    @property
    def is_expired(self) -> bool:
        return True

    @property
    def error(self) -> Optional[str]:
        return "token expired"
