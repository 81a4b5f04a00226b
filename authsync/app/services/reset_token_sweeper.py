import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.domain.base import utcnow

logger = logging.getLogger(__name__)


class ResetTokenSweeper:
    """
    Periodically purges expired reset tokens.

    Runs as a background asyncio task for the lifetime of the application.
    Store mutations go through the repository, which owns its own locking.
    """

    def __init__(
        self,
        tokens: IResetTokenRepository,
        interval_seconds: float = 300,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.tokens = tokens
        self.interval_seconds = interval_seconds
        self.clock = clock
        self._task: Optional[asyncio.Task] = None

    async def sweep_once(self) -> int:
        purged = await self.tokens.purge_expired(self.clock())
        if purged:
            logger.info(f"Purged {purged} expired password reset token(s)")
        return purged

    async def run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("Reset token sweep failed")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self.run(), name="reset-token-sweeper")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
