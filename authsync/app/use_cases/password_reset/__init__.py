"""
Password Reset Use Cases

Issuance, verification and consumption of password reset tokens.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .token_validation import hash_reset_token, load_valid_reset_token
from .dtos import (
    RequestPasswordResetResponse,
    VerifyResetTokenResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ResetPasswordUseCase",
    # Helpers
    "hash_reset_token",
    "load_valid_reset_token",
    # DTOs - Responses
    "RequestPasswordResetResponse",
    "VerifyResetTokenResponse",
    "ResetPasswordResponse",
]
