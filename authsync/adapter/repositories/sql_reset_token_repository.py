from datetime import datetime
from typing import Callable, Optional

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.domain.entities import ResetToken, ResetTokenRecord


class SqlResetTokenRepository(IResetTokenRepository):
    """
    ResetToken store implementation using SQLModel.

    Each call runs in its own short session. ``mark_used`` is a conditional
    UPDATE, so the claim stays atomic across processes sharing the database.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def create(self, token: ResetToken) -> ResetToken:
        async with self.session_factory() as session:
            await session.merge(ResetTokenRecord(**token.model_dump()))
            await session.commit()
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[ResetToken]:
        async with self.session_factory() as session:
            record = await session.get(ResetTokenRecord, token_hash)
            if record is None:
                return None
            return ResetToken(**record.model_dump())

    async def delete(self, token_hash: str) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(ResetTokenRecord).where(ResetTokenRecord.token_hash == token_hash))
            await session.commit()

    async def mark_used(self, token_hash: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                update(ResetTokenRecord)
                .where(ResetTokenRecord.token_hash == token_hash, ResetTokenRecord.used == False)  # noqa: E712
                .values(used=True)
            )
            await session.commit()
            return result.rowcount == 1

    async def release(self, token_hash: str) -> None:
        async with self.session_factory() as session:
            await session.execute(
                update(ResetTokenRecord)
                .where(ResetTokenRecord.token_hash == token_hash)
                .values(used=False)
            )
            await session.commit()

    async def purge_expired(self, now: datetime) -> int:
        async with self.session_factory() as session:
            result = await session.execute(delete(ResetTokenRecord).where(ResetTokenRecord.expires_at < now))
            await session.commit()
            return result.rowcount
