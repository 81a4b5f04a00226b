"""
Generate Custom Token Use Case

Mints a custom sign-in token so a client can switch between its accounts.
"""

import logging

from authsync.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from authsync.domain.entities import ErrorKind, VerifiedIdentity
from authsync.libs.result import Error, Result, Return
from .dtos import GenerateCustomTokenResponse

logger = logging.getLogger(__name__)


class GenerateCustomTokenUseCase:
    """
    Business Rules:
    - A caller may only mint a token for its own verified uid
    - The admin claim does not widen this; minting for others is never allowed
    - The minted token itself is never logged
    """

    def __init__(self, identity_provider: IIdentityProvider, expires_in: str = "1h"):
        self.identity_provider = identity_provider
        self.expires_in = expires_in

    async def execute(self, identity: VerifiedIdentity, uid: str) -> Result[GenerateCustomTokenResponse]:
        if not uid:
            return Return.err(Error(ErrorKind.bad_request.value, "UID is required"))

        if identity.uid != uid:
            logger.warning(f"Custom token for uid={uid} refused to caller uid={identity.uid}")
            return Return.err(
                Error(
                    ErrorKind.forbidden.value,
                    "You do not have permission to request a custom token for this UID",
                )
            )

        try:
            custom_token = await self.identity_provider.create_custom_token(uid)
        except IdentityProviderError as exc:
            logger.error(f"Custom token minting failed for uid={uid}: {exc}")
            return Return.err(
                Error(ErrorKind.internal.value, "Failed to generate custom token", details=str(exc))
            )

        logger.info(f"Custom token generated for uid={uid}")
        return Return.ok(GenerateCustomTokenResponse(custom_token=custom_token, expires_in=self.expires_in))
