"""Token encoding and decoding."""

from .codec import SecureQRCodec
from .types import FORMAT_VERSION, Envelope, Expired, Invalid, InvalidReason, Outcome, Valid

__all__ = [
    "SecureQRCodec",
    "Envelope",
    "Outcome",
    "Valid",
    "Invalid",
    "Expired",
    "InvalidReason",
    "FORMAT_VERSION",
]
