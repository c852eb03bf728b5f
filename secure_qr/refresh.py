"""Periodic token regeneration for displays that must stay fresh."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Any, Callable, Optional

from .codec.codec import SecureQRCodec

logger = logging.getLogger(__name__)

RegenerateCallback = Callable[[str], Any]


class TokenRefresher:
    """Re-encode a record on a fixed cadence and publish each new token.

    Keep ``interval`` somewhat shorter than the codec's validity window so a
    displayed token never goes stale. Must be started from a running event
    loop.
    """

    def __init__(
        self,
        codec: SecureQRCodec,
        data: Any,
        *,
        interval: timedelta = timedelta(minutes=4),
        on_regenerate: Optional[RegenerateCallback] = None,
    ) -> None:
        self.codec = codec
        self.data = data
        self.interval = interval
        self.on_regenerate = on_regenerate
        self.current_token: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def regenerate(self) -> Optional[str]:
        """Encode the current record now; keep the previous token on failure."""
        try:
            token = self.codec.encode(self.data)
        except Exception:
            logger.exception("Token regeneration failed; keeping previous token")
            return None
        self.current_token = token
        if self.on_regenerate is not None:
            try:
                self.on_regenerate(token)
            except Exception:
                logger.exception("on_regenerate callback failed")
        return token

    def start(self) -> None:
        if self.running:
            return
        self.regenerate()
        self._task = asyncio.create_task(self._loop())

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def close(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def update_data(self, data: Any) -> Optional[str]:
        """Swap the record and regenerate immediately."""
        self.data = data
        return self.regenerate()

    def set_interval(self, interval: timedelta) -> None:
        """Change the cadence, restarting the loop when it is running."""
        self.interval = interval
        if self.running:
            self.stop()
            self._task = asyncio.create_task(self._loop())

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval.total_seconds())
            self.regenerate()
