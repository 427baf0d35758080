import logging

from libs.result import Result, Return
from src.app.services.email_sender import IEmailSender, build_reset_url

logger = logging.getLogger(__name__)


class LoggingEmailSender(IEmailSender):
    """Development sender: logs instead of delivering"""

    async def send_reset_link(self, email: str, token: str, base_url: str) -> Result[None]:
        logger.info(f"Password reset link for {email}: {build_reset_url(base_url, token)}")
        return Return.ok(None)

    async def send_password_changed_notice(self, email: str) -> Result[None]:
        logger.info(f"Password changed notice for {email}")
        return Return.ok(None)
