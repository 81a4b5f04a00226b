"""
authsync Domain Enums

All enumeration types used across domain entities and use cases.
"""

from enum import Enum


class ResetTokenState(str, Enum):
    """Lifecycle state of a password reset token at a given instant"""

    issued = "issued"
    used = "used"
    expired = "expired"


class ErrorKind(str, Enum):
    """
    Stable error kinds returned in the ``error`` field of every error body.

    Values are part of the public HTTP contract; clients match on them.
    """

    bad_request = "Bad Request"
    unauthorized = "Unauthorized"
    forbidden = "Forbidden"
    not_found = "Not Found"
    method_not_allowed = "Method Not Allowed"
    too_many_requests = "Too Many Requests"
    invalid_token = "Invalid Token"
    expired_token = "Expired Token"
    used_token = "Used Token"
    weak_password = "Weak Password"
    internal = "Internal Server Error"
