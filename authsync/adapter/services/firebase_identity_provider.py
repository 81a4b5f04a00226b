import asyncio
import json
import logging
import os
from datetime import UTC, datetime
from functools import partial
from typing import Any, Callable, Optional

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from authsync.app.services.identity_provider import (
    IdentityProviderError,
    IIdentityProvider,
    InvalidCredentialError,
    ProviderTimeoutError,
    UserNotFoundError,
)
from authsync.domain.entities import IdentityUser, VerifiedIdentity

logger = logging.getLogger(__name__)


def _from_millis(value: Optional[int]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromtimestamp(value / 1000, tz=UTC)


def _to_identity_user(record: auth.UserRecord) -> IdentityUser:
    metadata = record.user_metadata
    return IdentityUser(
        uid=record.uid,
        email=record.email,
        display_name=record.display_name,
        photo_url=record.photo_url,
        email_verified=record.email_verified,
        disabled=record.disabled,
        creation_time=_from_millis(metadata.creation_timestamp if metadata else None),
        last_sign_in_time=_from_millis(metadata.last_sign_in_timestamp if metadata else None),
    )


class FirebaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by the Firebase Admin SDK.

    The SDK is synchronous, so every call runs in a worker thread and is
    bounded by ``timeout_seconds``.
    """

    def __init__(self, app: firebase_admin.App, timeout_seconds: float = 10.0):
        self.app = app
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(cls, config) -> "FirebaseIdentityProvider":
        """
        Initialize the default Firebase app from ApplicationConfig.

        The service account comes from FIREBASE_SERVICE_ACCOUNT_KEY (inline
        JSON) when set, otherwise from FIREBASE_SERVICE_ACCOUNT_FILE.
        """
        try:
            app = firebase_admin.get_app()
        except ValueError:
            if config.FIREBASE_SERVICE_ACCOUNT_KEY:
                service_account = json.loads(config.FIREBASE_SERVICE_ACCOUNT_KEY)
            elif os.path.exists(config.FIREBASE_SERVICE_ACCOUNT_FILE):
                service_account = config.FIREBASE_SERVICE_ACCOUNT_FILE
            else:
                raise RuntimeError(
                    "Firebase credentials missing: set FIREBASE_SERVICE_ACCOUNT_KEY "
                    "or provide FIREBASE_SERVICE_ACCOUNT_FILE"
                )
            options = {"projectId": config.FIREBASE_PROJECT_ID} if config.FIREBASE_PROJECT_ID else None
            app = firebase_admin.initialize_app(credentials.Certificate(service_account), options)
            logger.info("Firebase Admin SDK initialized")
        return cls(app, timeout_seconds=config.PROVIDER_TIMEOUT_SECONDS)

    async def _call(self, fn: Callable[..., Any], *args, **kwargs) -> Any:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(partial(fn, *args, app=self.app, **kwargs)),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"{fn.__name__} timed out after {self.timeout_seconds}s"
            ) from exc

    async def verify_id_token(self, id_token: str) -> VerifiedIdentity:
        try:
            decoded = await self._call(auth.verify_id_token, id_token)
        except (auth.InvalidIdTokenError, ValueError) as exc:
            raise InvalidCredentialError(str(exc)) from exc
        except FirebaseError as exc:
            raise IdentityProviderError(str(exc)) from exc

        return VerifiedIdentity(uid=decoded["uid"], email=decoded.get("email"), claims=decoded)

    async def create_custom_token(self, uid: str) -> str:
        try:
            token = await self._call(auth.create_custom_token, uid)
        except (FirebaseError, ValueError) as exc:
            raise IdentityProviderError(str(exc)) from exc
        return token.decode() if isinstance(token, bytes) else token

    async def get_user(self, uid: str) -> IdentityUser:
        try:
            record = await self._call(auth.get_user, uid)
        except auth.UserNotFoundError as exc:
            raise UserNotFoundError(uid) from exc
        except (FirebaseError, ValueError) as exc:
            raise IdentityProviderError(str(exc)) from exc
        return _to_identity_user(record)

    async def get_user_by_email(self, email: str) -> IdentityUser:
        try:
            record = await self._call(auth.get_user_by_email, email)
        except auth.UserNotFoundError as exc:
            raise UserNotFoundError(email) from exc
        except (FirebaseError, ValueError) as exc:
            raise IdentityProviderError(str(exc)) from exc
        return _to_identity_user(record)

    async def update_password(self, uid: str, new_password: str) -> None:
        try:
            await self._call(auth.update_user, uid, password=new_password)
        except (FirebaseError, ValueError) as exc:
            raise IdentityProviderError(str(exc)) from exc
