"""
Authentication Use Cases

Signup, signin, forgot-password and reset-password flows.
"""

from .signup_use_case import SignupUseCase
from .signin_use_case import SigninUseCase
from .get_current_account_use_case import GetCurrentAccountUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    SignupCommand,
    AccountInfo,
    AuthenticatedAccount,
    ForgotPasswordResponse,
    VerifyResetTokenResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "SigninUseCase",
    "GetCurrentAccountUseCase",
    "ForgotPasswordUseCase",
    "VerifyResetTokenUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "AccountInfo",
    "AuthenticatedAccount",
    "ForgotPasswordResponse",
    "VerifyResetTokenResponse",
]
