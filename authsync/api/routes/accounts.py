from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict, Field

from authsync.api.error import ClientError, ServerError
from authsync.app.services.identity_provider import IIdentityProvider
from authsync.app.use_cases.accounts import (
    GenerateCustomTokenUseCase,
    GetUserProfileUseCase,
    ValidateCustomTokenUseCase,
    GenerateCustomTokenResponse,
    UserProfileResponse,
    ValidateCustomTokenResponse,
)
from authsync.depends import get_current_identity, get_identity_provider
from authsync.domain.entities import ErrorKind, VerifiedIdentity

router = APIRouter(tags=["Accounts"])

CLIENT_ERROR_STATUS = {
    ErrorKind.bad_request.value: status.HTTP_400_BAD_REQUEST,
    ErrorKind.forbidden.value: status.HTTP_403_FORBIDDEN,
    ErrorKind.not_found.value: status.HTTP_404_NOT_FOUND,
}


class GenerateCustomTokenRequest(BaseModel):
    uid: Optional[str] = Field(None, description="UID to mint a sign-in token for; must be the caller's own")


@router.post(
    "/generateCustomToken",
    status_code=status.HTTP_200_OK,
    response_model=GenerateCustomTokenResponse,
)
async def generate_custom_token(
    body: GenerateCustomTokenRequest,
    request: Request,
    identity: VerifiedIdentity = Depends(get_current_identity),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Generate Custom Token (account switching)

    Raises:
        - 400 Bad Request: UID missing
        - 401 Unauthorized: Missing or rejected bearer token
        - 403 Forbidden: UID is not the caller's
        - 500 Internal Server Error: Token minting failed
    """
    use_case = GenerateCustomTokenUseCase(
        identity_provider, expires_in=request.app.state.config.CUSTOM_TOKEN_EXPIRES_IN
    )
    result = await use_case.execute(identity, body.uid)

    if result.is_err():
        error = result.error
        if error.code in CLIENT_ERROR_STATUS:
            raise ClientError(error, status_code=CLIENT_ERROR_STATUS[error.code])
        raise ServerError(error)

    return result.value


@router.get("/userProfile/{uid}", status_code=status.HTTP_200_OK, response_model=UserProfileResponse)
async def get_user_profile(
    uid: str,
    identity: VerifiedIdentity = Depends(get_current_identity),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Get User Profile

    Raises:
        - 401 Unauthorized: Missing or rejected bearer token
        - 403 Forbidden: Not the caller's profile and caller is not an admin
        - 404 Not Found: No such account
        - 500 Internal Server Error: Provider lookup failed
    """
    use_case = GetUserProfileUseCase(identity_provider)
    result = await use_case.execute(identity, uid)

    if result.is_err():
        error = result.error
        if error.code in CLIENT_ERROR_STATUS:
            raise ClientError(error, status_code=CLIENT_ERROR_STATUS[error.code])
        raise ServerError(error)

    return result.value


class ValidateTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    custom_token: Optional[str] = Field(None, alias="customToken")


@router.post("/validateToken", status_code=status.HTTP_200_OK, response_model=ValidateCustomTokenResponse)
async def validate_token(body: ValidateTokenRequest):
    """
    Validate Custom Token (debugging aid)

    Only checks the token is shaped like a JWT; the signature is verified by
    Firebase Auth when the client signs in with it.

    Raises:
        - 400 Bad Request: Token missing or not a JWT
    """
    use_case = ValidateCustomTokenUseCase()
    result = await use_case.execute(body.custom_token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_400_BAD_REQUEST)

    return result.value
