"""
Account Use Cases

Account switching and profile access for verified callers.
"""

from .generate_custom_token_use_case import GenerateCustomTokenUseCase
from .get_user_profile_use_case import GetUserProfileUseCase
from .validate_custom_token_use_case import ValidateCustomTokenUseCase
from .dtos import (
    GenerateCustomTokenResponse,
    UserProfile,
    UserProfileResponse,
    ValidateCustomTokenResponse,
)

__all__ = [
    # Use Cases
    "GenerateCustomTokenUseCase",
    "GetUserProfileUseCase",
    "ValidateCustomTokenUseCase",
    # DTOs - Responses
    "GenerateCustomTokenResponse",
    "UserProfileResponse",
    # DTOs - Nested Models
    "UserProfile",
    "ValidateCustomTokenResponse",
]
