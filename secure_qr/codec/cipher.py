"""AES-256-CBC wrapper used to seal serialized envelopes."""

from __future__ import annotations

import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

KEY_BYTES = 32
BLOCK_BYTES = 16
ZERO_IV = bytes(BLOCK_BYTES)


def derive_key(secret: bytes) -> bytes:
    """Right-pad ``secret`` with spaces and truncate it to the AES-256 key size."""
    return secret.ljust(KEY_BYTES, b" ")[:KEY_BYTES]


class BlockCipher:
    """AES-256-CBC with PKCS7 padding.

    With ``random_iv`` off every message is encrypted under the same all-zero
    IV, so equal plaintexts give equal ciphertexts. With it on, a fresh IV is
    generated per message and prepended to the ciphertext.

    Cipher contexts are created per call; an instance can be shared between
    threads.
    """

    def __init__(self, key: bytes, *, random_iv: bool = False) -> None:
        if len(key) != KEY_BYTES:
            raise ValueError(f"key must be {KEY_BYTES} bytes, got {len(key)}")
        self._key = key
        self.random_iv = random_iv

    def _cipher(self, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(self._key), modes.CBC(iv))

    def encrypt(self, plaintext: bytes) -> bytes:
        iv = os.urandom(BLOCK_BYTES) if self.random_iv else ZERO_IV
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext) + padder.finalize()
        encryptor = self._cipher(iv).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return iv + ciphertext if self.random_iv else ciphertext

    def decrypt(self, blob: bytes) -> bytes:
        """Reverse :meth:`encrypt`; raises ``ValueError`` on any malformed input."""
        if self.random_iv:
            if len(blob) < 2 * BLOCK_BYTES:
                raise ValueError("ciphertext too short to carry an IV")
            iv, ciphertext = blob[:BLOCK_BYTES], blob[BLOCK_BYTES:]
        else:
            iv, ciphertext = ZERO_IV, blob
        if not ciphertext or len(ciphertext) % BLOCK_BYTES:
            raise ValueError("ciphertext length is not a positive multiple of the block size")
        decryptor = self._cipher(iv).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
