"""
Use Cases

Organized into domain folders:
- password_reset/: Reset token issuance, verification and consumption
- accounts/: Custom token minting and profile access

Re-exported here for convenience.
"""

from .password_reset import (
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ResetPasswordUseCase,
)
from .accounts import (
    GenerateCustomTokenUseCase,
    GetUserProfileUseCase,
    ValidateCustomTokenUseCase,
)

__all__ = [
    # Password reset
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ResetPasswordUseCase",
    # Accounts
    "GenerateCustomTokenUseCase",
    "GetUserProfileUseCase",
    "ValidateCustomTokenUseCase",
]
