from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict, Field

from authsync.api.error import ClientError, ServerError
from authsync.api.utils.rate_limit import enforce_password_reset_rate_limit
from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.app.services.identity_provider import IIdentityProvider
from authsync.app.services.mailer import IMailer
from authsync.app.use_cases.password_reset import (
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ResetPasswordUseCase,
    RequestPasswordResetResponse,
    VerifyResetTokenResponse,
    ResetPasswordResponse,
)
from authsync.depends import get_identity_provider, get_mailer, get_reset_token_repository
from authsync.domain.entities import ErrorKind
from authsync.libs.result import Error

router = APIRouter(tags=["Password Reset"])

CLIENT_ERROR_KINDS = {
    ErrorKind.bad_request.value,
    ErrorKind.invalid_token.value,
    ErrorKind.expired_token.value,
    ErrorKind.used_token.value,
    ErrorKind.weak_password.value,
}


def _raise_for_error(error: Error):
    if error.code in CLIENT_ERROR_KINDS:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


class SendPasswordResetRequest(BaseModel):
    """
    Send password reset HTTP request payload

    Presence and format are checked by the use case so the error messages
    stay specific.
    """

    email: Optional[str] = Field(None, description="Account email address")


@router.post(
    "/sendPasswordReset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    dependencies=[Depends(enforce_password_reset_rate_limit)],
)
async def send_password_reset(
    body: SendPasswordResetRequest,
    request: Request,
    tokens: IResetTokenRepository = Depends(get_reset_token_repository),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    mailer: IMailer = Depends(get_mailer),
):
    """
    Send Password Reset Email

    Issues a 30 minute reset token and emails a deep link carrying it.

    Security:
        - No email enumeration (same response for known and unknown emails)
        - 5 requests per 15 minutes per client

    Raises:
        - 400 Bad Request: Email missing or malformed
        - 429 Too Many Requests: Rate limit exceeded
        - 500 Internal Server Error: Provider lookup or email delivery failed
    """
    config = request.app.state.config
    use_case = RequestPasswordResetUseCase(
        tokens,
        identity_provider,
        mailer,
        app_scheme=config.APP_SCHEME,
        token_ttl=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
    )
    result = await use_case.execute(body.email)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value


class VerifyResetTokenRequest(BaseModel):
    token: Optional[str] = Field(None, description="Password reset token from the emailed link")


@router.post("/verifyResetToken", status_code=status.HTTP_200_OK, response_model=VerifyResetTokenResponse)
async def verify_reset_token(
    body: VerifyResetTokenRequest,
    tokens: IResetTokenRepository = Depends(get_reset_token_repository),
):
    """
    Verify Reset Token

    Reports whether the token can still be used; does not consume it.

    Raises:
        - 400 Bad Request / Invalid Token / Expired Token / Used Token
    """
    use_case = VerifyResetTokenUseCase(tokens)
    result = await use_case.execute(body.token)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: Optional[str] = Field(None, description="Password reset token from the emailed link")
    new_password: Optional[str] = Field(None, alias="newPassword", description="New password (min 6 chars)")


@router.post("/resetPassword", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse)
async def reset_password(
    body: ResetPasswordRequest,
    request: Request,
    tokens: IResetTokenRepository = Depends(get_reset_token_repository),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Reset Password

    Re-validates the token, sets the new password at the identity provider
    and marks the token used. A failed provider update leaves the token
    usable so the client can retry.

    Raises:
        - 400 Bad Request / Weak Password / Invalid Token / Expired Token / Used Token
        - 500 Internal Server Error: Provider update failed
    """
    use_case = ResetPasswordUseCase(
        tokens,
        identity_provider,
        min_password_length=request.app.state.config.MIN_PASSWORD_LENGTH,
    )
    result = await use_case.execute(body.token, body.new_password)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value
