"""Background sweep removing request records past their retention window."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from playscribe.common import setup_logging
from playscribe.proxy.infrastructure.interfaces import RequestAuditStore

logger = setup_logging()


class RetentionSweeper:
    """Periodically purges expired anonymized request records."""

    def __init__(
        self,
        store: RequestAuditStore,
        interval_seconds: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._store = store
        self._interval = interval_seconds
        self._sleep = sleep
        self._clock = clock

    async def run_once(self) -> int:
        """Purges once and returns the number of records removed."""
        return await self._store.purge_expired(self._clock())

    async def run_forever(self) -> None:
        """Sweeps until cancelled. A failed sweep is logged and retried next interval."""
        while True:
            try:
                await self.run_once()
            except SQLAlchemyError:
                logger.exception("Retention sweep failed")
            await self._sleep(self._interval)
