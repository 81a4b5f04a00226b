"""
Request Password Reset Use Case

Handles generating reset tokens and emailing the reset deep link.
"""

import logging
import re
import secrets
from datetime import datetime, timedelta
from typing import Callable

from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.app.services.identity_provider import (
    IdentityProviderError,
    IIdentityProvider,
    UserNotFoundError,
)
from authsync.app.services.mailer import IMailer, MailDeliveryError
from authsync.domain.base import utcnow
from authsync.domain.entities import ErrorKind, ResetToken
from authsync.libs.result import Error, Result, Return
from .dtos import RequestPasswordResetResponse
from .token_validation import hash_reset_token

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
GENERIC_SENT_MESSAGE = "If an account with this email exists, a reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Email must match a basic syntactic pattern
    - No email enumeration: unknown accounts get the same response as known ones
    - Token carries 256 bits of randomness; only its SHA-256 hash is stored
    - Token expires 30 minutes after issuance by default
    - Delivery failure is reported, but the stored token is kept
    """

    def __init__(
        self,
        tokens: IResetTokenRepository,
        identity_provider: IIdentityProvider,
        mailer: IMailer,
        app_scheme: str = "myapp",
        token_ttl: timedelta = timedelta(minutes=30),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.tokens = tokens
        self.identity_provider = identity_provider
        self.mailer = mailer
        self.app_scheme = app_scheme
        self.token_ttl = token_ttl
        self.clock = clock

    def build_reset_link(self, token: str) -> str:
        return f"{self.app_scheme}://forgot-password?token={token}"

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Address the reset link should be sent to

        Returns:
            Result with the generic "sent" response, or Error

        Errors:
            - Bad Request: email missing or malformed
            - Internal Server Error: provider lookup or email delivery failed
        """
        if not email:
            return Return.err(Error(ErrorKind.bad_request.value, "Email is required"))

        if not EMAIL_PATTERN.fullmatch(email):
            return Return.err(Error(ErrorKind.bad_request.value, "Invalid email format"))

        sent = RequestPasswordResetResponse(message=GENERIC_SENT_MESSAGE)

        try:
            user = await self.identity_provider.get_user_by_email(email)
        except UserNotFoundError:
            return Return.ok(sent)
        except IdentityProviderError as exc:
            logger.error(f"Account lookup failed during password reset request: {exc}")
            return Return.err(
                Error(ErrorKind.internal.value, "Failed to send password reset email", details=str(exc))
            )

        token = secrets.token_hex(32)
        expires_at = self.clock() + self.token_ttl

        await self.tokens.create(
            ResetToken(
                token_hash=hash_reset_token(token),
                email=email,
                subject_id=user.uid,
                expires_at=expires_at,
            )
        )

        try:
            await self.mailer.send_password_reset(
                to_email=email,
                reset_link=self.build_reset_link(token),
                expires_minutes=int(self.token_ttl.total_seconds() // 60),
            )
        except MailDeliveryError as exc:
            logger.error(f"Password reset email delivery failed for uid={user.uid}: {exc}")
            return Return.err(
                Error(ErrorKind.internal.value, "Failed to send password reset email", details=str(exc))
            )

        logger.info(f"Password reset email sent for uid={user.uid}")
        return Return.ok(sent)
