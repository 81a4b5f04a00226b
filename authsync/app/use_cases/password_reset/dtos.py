"""
Password Reset Use Case DTOs (Data Transfer Objects)

Response classes for the password reset flow.
"""

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case (identical for unknown emails)"""

    success: bool = True
    message: str


class VerifyResetTokenResponse(BaseModel):
    """Response for verify reset token use case"""

    success: bool = True
    email: str
    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    success: bool = True
    message: str
