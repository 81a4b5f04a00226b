"""
Validate Custom Token Use Case

Debugging aid: checks that a custom token is shaped like a JWT. The signature
is NOT checked; real validation happens when the client signs in with it.
"""

from jose import JWTError, jwt

from authsync.domain.entities import ErrorKind
from authsync.libs.result import Error, Result, Return
from .dtos import ValidateCustomTokenResponse


class ValidateCustomTokenUseCase:
    async def execute(self, custom_token: str) -> Result[ValidateCustomTokenResponse]:
        if not custom_token:
            return Return.err(Error(ErrorKind.bad_request.value, "Custom token is required"))

        try:
            jwt.get_unverified_header(custom_token)
            jwt.get_unverified_claims(custom_token)
        except JWTError:
            return Return.err(Error(ErrorKind.bad_request.value, "Custom token format is invalid"))

        return Return.ok(
            ValidateCustomTokenResponse(
                message="Token format appears valid",
                note="Actual validation should be done by Firebase Auth on client side",
            )
        )
