"""Canonical serialization and digest helpers."""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any


def canonical_json(value: Any) -> str:
    """Return stable compact JSON with sorted keys for signing."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def sha256_hex(value: str) -> str:
    """Return SHA-256 hex digest for the provided string value."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def hmac_sha256_hex(key: bytes, value: str) -> str:
    """Return lowercase hex HMAC-SHA-256 of the UTF-8 bytes of ``value``."""
    return hmac.new(key, value.encode("utf-8"), hashlib.sha256).hexdigest()


def token_fingerprint(token: str) -> str:
    """Short digest used to refer to a token in logs without exposing it."""
    return sha256_hex(token)[:16]
