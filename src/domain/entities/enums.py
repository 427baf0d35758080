"""
Credential Domain Enums
"""

from enum import Enum


class ResetTokenState(str, Enum):
    """Outcome of looking up a password reset token"""

    not_found = "not_found"
    expired = "expired"
    used = "used"
    valid = "valid"
