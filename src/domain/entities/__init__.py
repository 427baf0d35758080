"""
Tweeter Auth Domain Entities

Each entity lives in its own module.
"""

from .enums import ResetTokenState

from .account import Account, normalize_email
from .password_reset_token import PasswordResetToken
from .rate_limit_record import RateLimitRecord

__all__ = [
    # Enums
    "ResetTokenState",
    # Entities
    "Account",
    "PasswordResetToken",
    "RateLimitRecord",
    # Helpers
    "normalize_email",
]
