"""Self-expiring, tamper-evident token codec."""

from __future__ import annotations

import base64
import binascii
import hmac
import json
import logging
from dataclasses import replace
from datetime import timedelta
from typing import Any, Callable, Dict, Mapping, Optional
from uuid import uuid4

from ..config import SecureQRConfig
from ..errors import GenerationError
from ..utils.hashing import canonical_json, hmac_sha256_hex, token_fingerprint
from ..utils.time import now_ms
from .cipher import BlockCipher, derive_key
from .types import FORMAT_VERSION, Envelope, Expired, Invalid, InvalidReason, Outcome, Valid

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


class SecureQRCodec:
    """Encode records into signed, optionally encrypted, expiring tokens.

    The codec holds only the config and the key material derived from it,
    so ``encode`` and ``decode`` may run concurrently on one instance.
    """

    def __init__(self, config: SecureQRConfig, *, clock: Optional[Clock] = None) -> None:
        self.config = config
        self._secret = config.secret_bytes
        self._clock: Clock = clock or now_ms
        self._cipher: Optional[BlockCipher] = None
        if config.enable_encryption:
            self._cipher = BlockCipher(derive_key(self._secret), random_iv=config.random_iv)

    def sign(self, fields: Mapping[str, Any]) -> str:
        """Return the hex HMAC-SHA-256 of the canonical JSON form of ``fields``."""
        # Sorted keys, so tokens signed over insertion-ordered JSON do not verify here.
        return hmac_sha256_hex(self._secret, canonical_json(fields))

    def encode(self, data: Any) -> str:
        """Wrap ``data`` in a fresh envelope and return it as a base64 token.

        Raises :class:`GenerationError` when the payload is not JSON
        serializable or the encryption step fails.
        """
        envelope = Envelope(data=data, timestamp=self._clock(), token_id=str(uuid4()))
        try:
            if self.config.enable_signature:
                signature = self.sign(envelope.to_dict(include_signature=False))
                envelope = replace(envelope, signature=signature)
            raw = json.dumps(envelope.to_dict(), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as exc:
            raise GenerationError(f"payload is not serializable: {exc}") from exc

        body = raw.encode("utf-8")
        if self._cipher is not None:
            try:
                body = self._cipher.encrypt(body)
            except Exception as exc:
                raise GenerationError(f"encryption failed: {exc}") from exc

        token = base64.b64encode(body).decode("ascii")
        logger.debug("Issued token id=%s fingerprint=%s", envelope.token_id, token_fingerprint(token))
        return token

    def decode(self, token: str) -> Outcome:
        """Validate ``token`` and return its outcome. Never raises."""
        try:
            outcome = self._decode(token)
        except Exception as exc:
            logger.warning("Unexpected failure while decoding token", exc_info=True)
            outcome = Invalid(f"unexpected error: {exc}")
        if not outcome.is_valid:
            logger.debug("Rejected token: %s", outcome.error)
        return outcome

    def _decode(self, token: str) -> Outcome:
        try:
            body = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError):
            return Invalid(InvalidReason.BASE64.value)

        if self._cipher is not None:
            try:
                text = self._cipher.decrypt(body).decode("utf-8")
            except ValueError:
                return Invalid(InvalidReason.DECRYPTION.value)
        else:
            try:
                text = body.decode("utf-8")
            except UnicodeDecodeError:
                return Invalid(InvalidReason.MALFORMED.value)

        try:
            fields = json.loads(text)
        except ValueError:
            return Invalid(InvalidReason.MALFORMED.value)
        if not isinstance(fields, dict):
            return Invalid(InvalidReason.MALFORMED.value)

        version = fields.get("version")
        if isinstance(version, bool) or not isinstance(version, int) or version != FORMAT_VERSION:
            return Invalid(InvalidReason.VERSION.value)

        if self.config.enable_signature and not self._signature_matches(fields):
            return Invalid(InvalidReason.SIGNATURE.value)

        timestamp = _read_timestamp(fields)
        window_ms = self.config.validity / timedelta(milliseconds=1)
        if window_ms <= 0 or self._clock() - timestamp > window_ms:
            return Expired()

        if "data" not in fields:
            return Invalid(InvalidReason.MALFORMED.value)
        return Valid(data=fields["data"])

    def _signature_matches(self, fields: Dict[str, Any]) -> bool:
        provided = fields.pop("signature", None)
        if not isinstance(provided, str):
            return False
        expected = self.sign(fields)
        return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def _read_timestamp(fields: Mapping[str, Any]) -> int:
    timestamp = fields.get("timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise TypeError(f"timestamp must be an integer, got {type(timestamp).__name__}")
    return timestamp
