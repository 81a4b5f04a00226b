import hashlib
from datetime import datetime

from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.domain.entities import ErrorKind, ResetToken, ResetTokenState
from authsync.libs.result import Error, Result, Return


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


async def load_valid_reset_token(
    tokens: IResetTokenRepository, token: str, now: datetime
) -> Result[ResetToken]:
    """
    Look up a reset token and check it is still usable at ``now``.

    Expired tokens are deleted on first access. Verification and consumption
    both go through here so consumption never trusts an earlier verify.
    """
    token_hash = hash_reset_token(token)
    reset_token = await tokens.get_by_token_hash(token_hash)

    if reset_token is None:
        return Return.err(Error(ErrorKind.invalid_token.value, "Reset token is invalid or expired"))

    state = reset_token.state_at(now)
    if state is ResetTokenState.expired:
        await tokens.delete(token_hash)
        return Return.err(Error(ErrorKind.expired_token.value, "Reset token has expired"))

    if state is ResetTokenState.used:
        return Return.err(Error(ErrorKind.used_token.value, "Reset token has already been used"))

    return Return.ok(reset_token)
