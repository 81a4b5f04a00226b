import asyncio
from datetime import datetime
from typing import Dict, Optional

from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.domain.entities import ResetToken


class InMemoryResetTokenRepository(IResetTokenRepository):
    """
    Process-local ResetToken store.

    A single asyncio.Lock guards the mapping; callers only ever receive
    copies. Not durable and not shared between instances.
    """

    def __init__(self):
        self._tokens: Dict[str, ResetToken] = {}
        self._lock = asyncio.Lock()

    async def create(self, token: ResetToken) -> ResetToken:
        async with self._lock:
            self._tokens[token.token_hash] = token.model_copy()
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[ResetToken]:
        async with self._lock:
            stored = self._tokens.get(token_hash)
            return stored.model_copy() if stored is not None else None

    async def delete(self, token_hash: str) -> None:
        async with self._lock:
            self._tokens.pop(token_hash, None)

    async def mark_used(self, token_hash: str) -> bool:
        async with self._lock:
            stored = self._tokens.get(token_hash)
            if stored is None or stored.used:
                return False
            stored.used = True
            return True

    async def release(self, token_hash: str) -> None:
        async with self._lock:
            stored = self._tokens.get(token_hash)
            if stored is not None:
                stored.used = False

    async def purge_expired(self, now: datetime) -> int:
        async with self._lock:
            expired = [key for key, token in self._tokens.items() if token.is_expired(now)]
            for key in expired:
                del self._tokens[key]
            return len(expired)

    def __len__(self) -> int:
        return len(self._tokens)
