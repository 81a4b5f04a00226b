"""
authsync Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ErrorKind,
    ResetTokenState,
)

# Export all entities
from .reset_token import ResetToken, ResetTokenRecord
from .identity import IdentityUser, VerifiedIdentity

__all__ = [
    # Enums
    "ErrorKind",
    "ResetTokenState",
    # Entities
    "ResetToken",
    "ResetTokenRecord",
    "IdentityUser",
    "VerifiedIdentity",
]
