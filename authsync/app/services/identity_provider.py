from abc import ABC, abstractmethod

from authsync.domain.entities import IdentityUser, VerifiedIdentity


class IdentityProviderError(Exception):
    """The identity provider failed or returned an unexpected error"""


class UserNotFoundError(IdentityProviderError):
    """No account matches the requested uid or email"""


class InvalidCredentialError(IdentityProviderError):
    """The presented credential is malformed, expired, revoked or forged"""


class ProviderTimeoutError(IdentityProviderError):
    """The provider call did not complete within the configured timeout"""


class IIdentityProvider(ABC):
    """
    Narrow view of the external identity provider.

    Everything security critical (credential verification, token minting,
    password mutation) happens on the provider side; this service only
    brokers the calls.
    """

    @abstractmethod
    async def verify_id_token(self, id_token: str) -> VerifiedIdentity:
        """Verify a bearer ID token; raises InvalidCredentialError when rejected"""
        pass

    @abstractmethod
    async def create_custom_token(self, uid: str) -> str:
        """Mint a custom sign-in token for uid"""
        pass

    @abstractmethod
    async def get_user(self, uid: str) -> IdentityUser:
        """Fetch an account by uid; raises UserNotFoundError when absent"""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> IdentityUser:
        """Fetch an account by email; raises UserNotFoundError when absent"""
        pass

    @abstractmethod
    async def update_password(self, uid: str, new_password: str) -> None:
        """Replace the password of an account"""
        pass
