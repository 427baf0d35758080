"""
Mailgun Email Sender

Sends transactional email through the Mailgun HTTP API.
"""

import logging
from typing import Optional

import httpx

from libs.result import Error, Result, Return
from src.app.services.email_sender import IEmailSender, build_reset_url

logger = logging.getLogger(__name__)

DEFAULT_MAILGUN_BASE_URL = "https://api.mailgun.net"


class MailgunEmailSender(IEmailSender):
    """IEmailSender implementation backed by Mailgun"""

    def __init__(
        self,
        api_key: str,
        domain: str,
        from_email: str,
        from_name: str = "Tweeter",
        base_url: str = DEFAULT_MAILGUN_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.domain = domain
        self.sender = f"{from_name} <{from_email}>"
        self.messages_url = f"{base_url.rstrip('/')}/v3/{domain}/messages"
        self._client = client

    async def send_reset_link(self, email: str, token: str, base_url: str) -> Result[None]:
        reset_url = build_reset_url(base_url, token)
        return await self._send(
            to=email,
            subject="Reset Your Password - Tweeter",
            text=(
                "You requested to reset your password for your Tweeter account.\n\n"
                "Open the link below to choose a new password. "
                "This link will expire in 1 hour.\n\n"
                f"{reset_url}\n\n"
                "If you didn't request this password reset, you can safely ignore "
                "this email. Your password will not be changed.\n"
            ),
            html=(
                "<h1>Reset Your Password</h1>"
                "<p>You requested to reset your password for your Tweeter account.</p>"
                "<p>This link will expire in <strong>1 hour</strong>.</p>"
                f'<p><a href="{reset_url}">Reset Password</a></p>'
                "<p>If you didn't request this password reset, you can safely ignore "
                "this email.</p>"
            ),
        )

    async def send_password_changed_notice(self, email: str) -> Result[None]:
        return await self._send(
            to=email,
            subject="Your Tweeter password was changed",
            text=(
                "The password for your Tweeter account was just changed.\n\n"
                "If you did not make this change, reset your password immediately.\n"
            ),
            html=(
                "<p>The password for your Tweeter account was just changed.</p>"
                "<p>If you did not make this change, reset your password immediately.</p>"
            ),
        )

    async def _send(self, to: str, subject: str, text: str, html: str) -> Result[None]:
        data = {
            "from": self.sender,
            "to": to,
            "subject": subject,
            "text": text,
            "html": html,
        }
        try:
            if self._client is not None:
                response = await self._post(self._client, data)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await self._post(client, data)
            response.raise_for_status()
        except httpx.HTTPError as e:
            # Never log the message body: it carries the reset token
            logger.error(f"Mailgun delivery failed for subject '{subject}': {e!r}")
            return Return.err(Error("EMAIL_DELIVERY_FAILED", "Email could not be sent"))

        return Return.ok(None)

    async def _post(self, client: httpx.AsyncClient, data: dict) -> httpx.Response:
        return await client.post(self.messages_url, auth=("api", self.api_key), data=data)
