"""
Maintenance Use Cases

Background jobs run outside the request path.
"""

from .cleanup_credentials_use_case import CleanupCredentialsUseCase, CleanupResponse

__all__ = [
    "CleanupCredentialsUseCase",
    "CleanupResponse",
]
