"""
Get User Profile Use Case

Returns the limited profile of an account to its owner or an administrator.
"""

import logging

from authsync.app.services.identity_provider import (
    IdentityProviderError,
    IIdentityProvider,
    UserNotFoundError,
)
from authsync.domain.entities import ErrorKind, VerifiedIdentity
from authsync.libs.result import Error, Result, Return
from .dtos import UserProfile, UserProfileResponse

logger = logging.getLogger(__name__)


class GetUserProfileUseCase:
    """
    Business Rules:
    - Callers may read their own profile
    - Callers holding the provider-issued admin claim may read any profile
    """

    def __init__(self, identity_provider: IIdentityProvider):
        self.identity_provider = identity_provider

    async def execute(self, identity: VerifiedIdentity, uid: str) -> Result[UserProfileResponse]:
        if identity.uid != uid and not identity.is_admin:
            return Return.err(Error(ErrorKind.forbidden.value, "Access denied"))

        try:
            user = await self.identity_provider.get_user(uid)
        except UserNotFoundError:
            return Return.err(Error(ErrorKind.not_found.value, "User not found"))
        except IdentityProviderError as exc:
            logger.error(f"Profile lookup failed for uid={uid}: {exc}")
            return Return.err(
                Error(ErrorKind.internal.value, "Failed to fetch user profile", details=str(exc))
            )

        profile = UserProfile(
            uid=user.uid,
            email=user.email,
            display_name=user.display_name,
            photo_url=user.photo_url,
            email_verified=user.email_verified,
            creation_time=user.creation_time,
            last_sign_in_time=user.last_sign_in_time,
        )
        return Return.ok(UserProfileResponse(user=profile))
