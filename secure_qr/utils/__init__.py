"""Utility helpers for hashing and time operations."""

from .hashing import canonical_json, hmac_sha256_hex, sha256_hex, token_fingerprint
from .time import now_ms, utc_now

__all__ = ["canonical_json", "hmac_sha256_hex", "sha256_hex", "token_fingerprint", "now_ms", "utc_now"]
