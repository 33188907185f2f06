"""
Transactional email via the Resend HTTP API.

Without RESEND_API_KEY every send is a logged no-op that reports success, so
local and offline runs behave like a working mail setup. Delivery failures are
returned as ``EmailResult(success=False)``, never raised.
"""
from dataclasses import dataclass
from html import escape
from typing import Optional

import httpx
import structlog

from portal.config import settings
from portal.utils.constants import DEFAULT_STATUS_COLOR, STATUS_COLORS

logger = structlog.get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


@dataclass(frozen=True)
class EmailResult:
    success: bool
    error: Optional[str] = None
    message_id: Optional[str] = None


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def _wrap(body: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; '
        'background: #000; color: #fff; padding: 20px;">'
        f"{body}"
        "</div>"
    )


def render_application_confirmation(name: str, role_title: str, brand: str) -> str:
    return _wrap(
        '<h1 style="color: #FFD700;">Application Received!</h1>'
        f"<p>Hi {escape(name)},</p>"
        f"<p>Thank you for applying to the <strong>{escape(role_title)}</strong> internship at {escape(brand)}.</p>"
        "<p>We've received your application and will review it shortly. "
        "You'll hear from us within 5-7 business days.</p>"
        f"<p>Best regards,<br>The {escape(brand)} Team</p>"
    )


def render_status_update(name: str, role_title: str, status: str, message: str, brand: str) -> str:
    color = status_color(status)
    extra = f"<p>{escape(message)}</p>" if message else ""
    return _wrap(
        f'<h1 style="color: {color};">Application Update</h1>'
        f"<p>Hi {escape(name)},</p>"
        f"<p>Your application for <strong>{escape(role_title)}</strong> has been "
        f'<strong style="color: {color}">{escape(status)}</strong>.</p>'
        f"{extra}"
        f"<p>Best regards,<br>The {escape(brand)} Team</p>"
    )


class EmailService:
    """Notification collaborator backed by Resend."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.RESEND_API_KEY if api_key is None else api_key
        self.sender = sender or settings.EMAIL_FROM
        self.timeout = timeout or settings.EMAIL_TIMEOUT_SECONDS
        self.brand = settings.BRAND_NAME
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def send_email(self, to: str, subject: str, html: str) -> EmailResult:
        if not self.enabled:
            logger.info("email_would_be_sent", to=to, subject=subject)
            return EmailResult(success=True)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    RESEND_API_URL,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={
                        "from": self.sender,
                        "to": [to],
                        "subject": subject,
                        "html": html,
                    },
                )
            response.raise_for_status()
            message_id = response.json().get("id")
            logger.info("email_sent", to=to, subject=subject, message_id=message_id)
            return EmailResult(success=True, message_id=message_id)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("email_send_failed", to=to, subject=subject, error=str(e))
            return EmailResult(success=False, error=str(e))

    async def send_application_confirmation(self, email: str, name: str, role_title: str) -> EmailResult:
        html = render_application_confirmation(name, role_title, self.brand)
        return await self.send_email(email, f"Application Received - {self.brand} Internship", html)

    async def send_status_update(
        self, email: str, name: str, role_title: str, status: str, message: str = ""
    ) -> EmailResult:
        html = render_status_update(name, role_title, status, message or "", self.brand)
        return await self.send_email(email, f"Application {status.capitalize()} - {self.brand}", html)
