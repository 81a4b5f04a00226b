"""
Identity Entities

Read-only views of data owned by the external identity provider.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class VerifiedIdentity(BaseModel):
    """
    Decoded, provider-verified bearer credential.

    Business Rules:
    - uid is the verified subject id; ownership checks compare against it
    - Administrative access is granted only by a provider-issued ``admin`` claim
    """

    uid: str
    email: Optional[str] = None
    claims: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.claims.get("admin") is True


class IdentityUser(BaseModel):
    """Account record as returned by the identity provider"""

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    email_verified: bool = False
    disabled: bool = False
    creation_time: Optional[datetime] = None
    last_sign_in_time: Optional[datetime] = None
