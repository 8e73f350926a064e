"""
contacts_api/services/email_service.py

Purpose: Verification email delivery

- Sends mail through the SendGrid v3 HTTP API
- Falls back to logging the link when no API key is configured (development)
"""

import httpx
from typing import Any, Dict, Optional

from contacts_api.core.config import Settings
from contacts_api.core.exceptions import ExternalServiceError
from contacts_api.core.logging import get_logger
from utils.constants import (
    MAIL_FAILED,
    VERIFICATION_EMAIL_HTML,
    VERIFICATION_EMAIL_SUBJECT,
    VERIFICATION_EMAIL_TEXT,
)

logger = get_logger(__name__)


class EmailService:
    """Service for sending transactional email via SendGrid"""

    def __init__(self, config: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = config.SENDGRID_API_KEY
        self.sender = config.MAIL_FROM
        self.app_url = config.APP_URL.rstrip("/")
        self.base_url = config.SENDGRID_BASE_URL.rstrip("/")
        self._transport = transport

    def verification_link(self, verification_token: str) -> str:
        return f"{self.app_url}/auth/verify/{verification_token}"

    async def send_message(self, to_email: str, subject: str, html: str, text: str) -> Dict[str, Any]:
        """
        Sends one email.

        Returns:
            {
                "success": True/False,
                "message_id": "Optional provider message id",
                "error": "Optional error message"
            }
        """
        if not self.is_configured():
            logger.info(f"Mail disabled, would send '{subject}' to {to_email}: {text}")
            return {"success": True, "message_id": None}

        payload = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.sender},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text},
                {"type": "text/html", "value": html},
            ],
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/v3/mail/send",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=10.0
                )

            if response.status_code in (200, 202):
                message_id = response.headers.get("X-Message-Id")
                logger.info(f"Email sent to {to_email}", extra={"email": to_email})
                return {"success": True, "message_id": message_id}

            logger.error(f"SendGrid API error: {response.status_code} - {response.text}")
            return {"success": False, "error": f"SendGrid API error: {response.status_code}"}

        except httpx.TimeoutException:
            logger.error("SendGrid API timeout")
            return {"success": False, "error": "SendGrid API timeout"}
        except httpx.HTTPError as e:
            logger.error(f"Error sending email: {e}", exc_info=True)
            return {"success": False, "error": str(e)}

    async def send_verification_email(self, to_email: str, verification_token: str) -> None:
        """
        Sends the verification link for a freshly registered (or unverified) account.

        Raises:
            ExternalServiceError: If the provider rejected or never received the message
        """
        link = self.verification_link(verification_token)
        result = await self.send_message(
            to_email,
            VERIFICATION_EMAIL_SUBJECT,
            VERIFICATION_EMAIL_HTML.format(link=link),
            VERIFICATION_EMAIL_TEXT.format(link=link),
        )
        if not result["success"]:
            raise ExternalServiceError(MAIL_FAILED, details=result.get("error"))

    def is_configured(self) -> bool:
        return bool(self.api_key)
