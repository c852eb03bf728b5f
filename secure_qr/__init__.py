"""secure_qr package.

Self-expiring, tamper-evident tokens for QR codes: records are signed with
HMAC-SHA-256, optionally sealed with AES, stamped with their issue time and
rejected once their validity window has passed.
"""

from .codec import Expired, Invalid, Outcome, SecureQRCodec, Valid
from .config import SecureQRConfig
from .errors import ConfigError, GenerationError, SecureQRError
from .refresh import TokenRefresher
from .rules import RuleValidator, number_in_range, required_field

__all__ = [
    "SecureQRConfig",
    "SecureQRCodec",
    "Outcome",
    "Valid",
    "Invalid",
    "Expired",
    "SecureQRError",
    "ConfigError",
    "GenerationError",
    "RuleValidator",
    "required_field",
    "number_in_range",
    "TokenRefresher",
]
