"""
Reset Password Use Case

Consumes a reset token and sets the new password at the identity provider.
"""

import logging
from datetime import datetime
from typing import Callable

from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from authsync.domain.base import utcnow
from authsync.domain.entities import ErrorKind
from authsync.libs.result import Error, Result, Return
from .dtos import ResetPasswordResponse
from .token_validation import load_valid_reset_token

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - Password shorter than the minimum fails before any token lookup
    - Token validity is re-checked here; an earlier verify call guarantees nothing
    - The token is claimed before the provider call so concurrent consumers
      cannot both change the password
    - If the provider update fails, the claim is released and the token stays usable
    """

    def __init__(
        self,
        tokens: IResetTokenRepository,
        identity_provider: IIdentityProvider,
        min_password_length: int = 6,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.tokens = tokens
        self.identity_provider = identity_provider
        self.min_password_length = min_password_length
        self.clock = clock

    async def execute(self, token: str, new_password: str) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            token: Plain reset token from the emailed link
            new_password: Password to set

        Returns:
            Result with confirmation, or Error

        Errors:
            - Bad Request: token or password missing
            - Weak Password: password shorter than the minimum
            - Invalid Token / Expired Token / Used Token: see VerifyResetTokenUseCase
            - Internal Server Error: provider update failed or timed out
        """
        if not token or not new_password:
            return Return.err(
                Error(ErrorKind.bad_request.value, "Reset token and new password are required")
            )

        if len(new_password) < self.min_password_length:
            return Return.err(
                Error(
                    ErrorKind.weak_password.value,
                    f"Password must be at least {self.min_password_length} characters long",
                )
            )

        result = await load_valid_reset_token(self.tokens, token, self.clock())
        if result.is_err():
            return Return.err(result.error)
        reset_token = result.value

        if not await self.tokens.mark_used(reset_token.token_hash):
            return Return.err(Error(ErrorKind.used_token.value, "Reset token has already been used"))

        try:
            await self.identity_provider.update_password(reset_token.subject_id, new_password)
        except IdentityProviderError as exc:
            await self.tokens.release(reset_token.token_hash)
            logger.error(f"Password update failed for uid={reset_token.subject_id}: {exc}")
            return Return.err(
                Error(ErrorKind.internal.value, "Failed to reset password", details=str(exc))
            )
        except BaseException:
            # Unexpected failures and cancellation must not burn the token either
            await self.tokens.release(reset_token.token_hash)
            raise

        logger.info(f"Password reset completed for uid={reset_token.subject_id}")
        return Return.ok(ResetPasswordResponse(message="Password has been reset successfully"))
