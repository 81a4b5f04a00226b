from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from config import ApplicationConfig
from authsync.adapter.repositories.in_memory_reset_token_repository import InMemoryResetTokenRepository
from authsync.adapter.repositories.sql_reset_token_repository import SqlResetTokenRepository
from authsync.adapter.services.firebase_identity_provider import FirebaseIdentityProvider
from authsync.adapter.services.smtp_mailer import LoggingMailer, SmtpMailer
from authsync.api.error import ClientError, ServerError
from authsync.app.repositories.reset_token_repository import IResetTokenRepository
from authsync.app.services.identity_provider import (
    IdentityProviderError,
    IIdentityProvider,
    InvalidCredentialError,
)
from authsync.app.services.mailer import IMailer
from authsync.domain.entities import ErrorKind, VerifiedIdentity
from authsync.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


@lru_cache
def get_reset_token_repository() -> IResetTokenRepository:
    if ApplicationConfig.TOKEN_STORE_BACKEND == "sql":
        return SqlResetTokenRepository(AsyncSessionLocal)
    return InMemoryResetTokenRepository()


@lru_cache
def get_identity_provider() -> IIdentityProvider:
    # Lazy so the app (and its tests) can start without Firebase credentials
    return FirebaseIdentityProvider.from_config(ApplicationConfig)


@lru_cache
def get_mailer() -> IMailer:
    if ApplicationConfig.SMTP_HOST:
        return SmtpMailer.from_config(ApplicationConfig)
    return LoggingMailer(log_links=ApplicationConfig.ENVIRONMENT != "production")


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
) -> VerifiedIdentity:
    """
    Dependency to extract and verify the bearer ID token.

    Verification is delegated to the identity provider; the decoded
    identity is returned to the route and its uid is recorded on
    request.state for request logging.

    Raises:
        ClientError: 401 if the header is missing/malformed or the token is rejected
        ServerError: 500 if the provider itself failed
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise ClientError(
            Error(ErrorKind.unauthorized.value, "Missing or invalid authorization header"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        identity = await identity_provider.verify_id_token(credentials.credentials)
    except InvalidCredentialError:
        raise ClientError(
            Error(ErrorKind.unauthorized.value, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    except IdentityProviderError as exc:
        raise ServerError(Error(ErrorKind.internal.value, "Failed to verify token", details=str(exc)))

    request.state.uid = identity.uid
    return identity
