"""
Verify Reset Token Use Case

Reports whether a reset token is still usable, without consuming it.
"""

from datetime import datetime
from typing import Callable

from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.domain.base import utcnow
from authsync.domain.entities import ErrorKind
from authsync.libs.result import Error, Result, Return
from .dtos import VerifyResetTokenResponse
from .token_validation import load_valid_reset_token


class VerifyResetTokenUseCase:
    """
    Use case for verifying a password reset token.

    The check is advisory: it neither locks nor consumes the token.
    """

    def __init__(self, tokens: IResetTokenRepository, clock: Callable[[], datetime] = utcnow):
        self.tokens = tokens
        self.clock = clock

    async def execute(self, token: str) -> Result[VerifyResetTokenResponse]:
        """
        Errors:
            - Bad Request: token missing
            - Invalid Token: token unknown
            - Expired Token: token past expiry (it is purged)
            - Used Token: token already consumed
        """
        if not token:
            return Return.err(Error(ErrorKind.bad_request.value, "Reset token is required"))

        result = await load_valid_reset_token(self.tokens, token, self.clock())
        if result.is_err():
            return Return.err(result.error)

        return Return.ok(VerifyResetTokenResponse(email=result.value.email, message="Token is valid"))
