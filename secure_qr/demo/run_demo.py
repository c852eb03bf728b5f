"""Run an end-to-end encode/decode demo with tampering and expiry."""

from __future__ import annotations

import asyncio
import base64
from datetime import timedelta

from ..codec import SecureQRCodec
from ..config import SecureQRConfig
from ..refresh import TokenRefresher
from ..rules import RuleValidator, number_in_range, required_field

DEMO_SECRET = "demo-secret-please-change-me-0123456789"


def _tamper(token: str) -> str:
    replacement = "A" if token[-5] != "A" else "B"
    return token[:-5] + replacement + token[-4:]


async def main() -> None:
    codec = SecureQRCodec(SecureQRConfig(secret_key=DEMO_SECRET))
    record = {"user_id": "u-42", "access_level": 3}

    token = codec.encode(record)
    print("TOKEN:", token)
    print("DECODE:", codec.decode(token))
    print("TAMPERED:", codec.decode(_tamper(token)))

    validator = RuleValidator([required_field("user_id"), number_in_range("access_level", 0, 2)])
    print("RULES:", validator.decode(codec, token))

    plain = SecureQRCodec(SecureQRConfig(secret_key="short", enable_encryption=False))
    plain_token = plain.encode(record)
    print("PLAIN TEXT:", base64.b64decode(plain_token).decode("utf-8"))

    short_lived = SecureQRCodec(SecureQRConfig(secret_key=DEMO_SECRET, validity=timedelta(seconds=1)))
    refresher = TokenRefresher(
        short_lived,
        record,
        interval=timedelta(milliseconds=500),
        on_regenerate=lambda t: print("REFRESHED:", t[:24] + "..."),
    )
    refresher.start()
    try:
        await asyncio.sleep(1.2)
        first = refresher.current_token
    finally:
        await refresher.close()

    if first is None:
        print("No token was generated. Skipping expiry check.")
        return

    print("FRESH:", short_lived.decode(first))
    await asyncio.sleep(1.5)
    print("STALE:", short_lived.decode(first))


if __name__ == "__main__":
    asyncio.run(main())
