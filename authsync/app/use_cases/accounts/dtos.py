"""
Account Use Case DTOs (Data Transfer Objects)

Field aliases keep the camelCase wire names the mobile clients already use.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateCustomTokenResponse(BaseModel):
    """Response for generate custom token use case"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    custom_token: str = Field(..., alias="customToken")
    expires_in: str = Field(..., alias="expiresIn")


class UserProfile(BaseModel):
    """Profile fields exposed to the account owner"""

    model_config = ConfigDict(populate_by_name=True)

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    photo_url: Optional[str] = Field(None, alias="photoURL")
    email_verified: bool = Field(False, alias="emailVerified")
    creation_time: Optional[datetime] = Field(None, alias="creationTime")
    last_sign_in_time: Optional[datetime] = Field(None, alias="lastSignInTime")


class UserProfileResponse(BaseModel):
    """Response for get user profile use case"""

    success: bool = True
    user: UserProfile


class ValidateCustomTokenResponse(BaseModel):
    """Response for validate custom token use case"""

    success: bool = True
    message: str
    note: str
