from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from authsync.domain.entities import ResetToken


class IResetTokenRepository(ABC):
    """ResetToken store interface - application layer"""

    @abstractmethod
    async def create(self, token: ResetToken) -> ResetToken:
        """Insert a reset token, replacing any record with the same hash"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[ResetToken]:
        """Get a snapshot of the reset token with this hash"""
        pass

    @abstractmethod
    async def delete(self, token_hash: str) -> None:
        """Remove the reset token with this hash, if present"""
        pass

    @abstractmethod
    async def mark_used(self, token_hash: str) -> bool:
        """
        Atomically flip ``used`` from False to True.

        Returns False when the token is absent or already used, so exactly one
        of several concurrent callers wins.
        """
        pass

    @abstractmethod
    async def release(self, token_hash: str) -> None:
        """Undo a ``mark_used`` claim after the password update failed"""
        pass

    @abstractmethod
    async def purge_expired(self, now: datetime) -> int:
        """Delete every token whose expiry has passed; returns the count"""
        pass
