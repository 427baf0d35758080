from abc import ABC, abstractmethod

from libs.result import Result


class IEmailSender(ABC):
    """Transactional email port - application layer"""

    @abstractmethod
    async def send_reset_link(self, email: str, token: str, base_url: str) -> Result[None]:
        """Send the password reset link carrying the plaintext token"""
        pass

    @abstractmethod
    async def send_password_changed_notice(self, email: str) -> Result[None]:
        """Tell the account owner their password was changed"""
        pass


def build_reset_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/reset-password/{token}"
