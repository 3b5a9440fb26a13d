"""
Email service for sending notification and verification emails.
Handles SMTP connections, template rendering, and delivery. When SMTP is
not configured, emails are logged instead.
"""

import asyncio
import logging
import re
import smtplib
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Deque, List, Dict, Any, Optional, Tuple

from skilllink.config import settings
from skilllink.domain.services.email_service import EmailServiceInterface
from .template_loader import EmailTemplateLoader, TemplateNotFound


logger = logging.getLogger(__name__)

# Logged emails kept in memory when SMTP is not configured
SENT_EMAIL_LOG_SIZE = 100


@dataclass
class EmailMessage:
    """Email message data."""
    to: str
    subject: str
    template: str
    context: Dict[str, Any]
    from_name: Optional[str] = None
    from_address: Optional[str] = None


class EmailService(EmailServiceInterface):
    """SMTP email service with a logging fallback."""

    def __init__(self):
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.from_name = settings.email_from_name
        self.from_address = settings.email_from_address
        self.template_loader = EmailTemplateLoader()
        self.sent_emails: Deque[Dict[str, Any]] = deque(maxlen=SENT_EMAIL_LOG_SIZE)

    async def send_email(self, message: EmailMessage) -> Dict[str, Any]:
        """
        Send an email message.

        Raises:
            Exception: on render or transport failure; callers decide
                whether the failure matters
        """
        html_content, text_content = self._render_template(message.template, message.context)

        if not self._is_smtp_configured():
            return self._log_email(message, text_content)

        mime_message = self._create_mime_message(message, html_content, text_content)
        await asyncio.to_thread(self._send_via_smtp, mime_message, message.to)
        logger.info(f"Email sent successfully to {message.to}: {message.subject}")
        return {
            "success": True,
            "recipients": [message.to],
            "timestamp": datetime.utcnow().isoformat()
        }

    async def send_notification_email(
        self,
        to: str,
        recipient_name: str,
        title: Optional[str],
        message: str,
        link: Optional[str] = None,
    ) -> bool:
        result = await self.send_email(EmailMessage(
            to=to,
            subject=title or "New notification",
            template="notification",
            context={
                "recipient_name": recipient_name,
                "title": title or "New notification",
                "message": message,
                "link": self._absolute_link(link),
            },
        ))
        return bool(result.get("success"))

    async def send_otp_code(self, to: str, code: str, ttl_minutes: int) -> bool:
        result = await self.send_email(EmailMessage(
            to=to,
            subject="Your verification code",
            template="otp_code",
            context={"code": code, "ttl_minutes": ttl_minutes},
        ))
        return bool(result.get("success"))

    def _absolute_link(self, link: Optional[str]) -> Optional[str]:
        if not link or link.startswith("http"):
            return link
        return f"{settings.frontend_url.rstrip('/')}/{link.lstrip('/')}"

    def _render_template(self, template_name: str, context: Dict[str, Any]) -> Tuple[str, str]:
        """Render the HTML and text variants; text falls back to stripped HTML."""
        html_content = self.template_loader.render_template(f"{template_name}.html", context)
        try:
            text_content = self.template_loader.render_template(f"{template_name}.txt", context)
        except TemplateNotFound:
            text_content = re.sub(r"<[^>]+>", "", html_content)
        return html_content, text_content

    def _create_mime_message(self, message: EmailMessage, html_content: str, text_content: str) -> MIMEMultipart:
        mime_msg = MIMEMultipart("alternative")
        mime_msg["Subject"] = message.subject
        mime_msg["From"] = f"{message.from_name or self.from_name} <{message.from_address or self.from_address}>"
        mime_msg["To"] = message.to
        mime_msg.attach(MIMEText(text_content, "plain", "utf-8"))
        mime_msg.attach(MIMEText(html_content, "html", "utf-8"))
        return mime_msg

    def _send_via_smtp(self, mime_message: MIMEMultipart, recipient: str) -> None:
        if self.smtp_port == 465:
            server = smtplib.SMTP_SSL(self.smtp_host, self.smtp_port)
        else:
            server = smtplib.SMTP(self.smtp_host, self.smtp_port)
        with server:
            if self.smtp_port != 465:
                server.starttls()
            server.login(self.smtp_user, self.smtp_password)
            server.send_message(mime_message, to_addrs=[recipient])

    def _log_email(self, message: EmailMessage, text_content: str) -> Dict[str, Any]:
        """Log email instead of sending (for development)."""
        email_log = {
            "timestamp": datetime.utcnow().isoformat(),
            "to": message.to,
            "subject": message.subject,
            "template": message.template,
            "text": text_content,
        }
        self.sent_emails.append(email_log)
        logger.info(f"Email logged (SMTP not configured): {message.subject} to {message.to}")
        return {"success": True, "logged": True, "timestamp": email_log["timestamp"]}

    def _is_smtp_configured(self) -> bool:
        return all([self.smtp_host, self.smtp_user, self.smtp_password])

    def get_sent_emails(self) -> List[Dict[str, Any]]:
        """Get list of logged emails (for development/testing)."""
        return list(self.sent_emails)

    def clear_sent_emails(self) -> None:
        self.sent_emails.clear()


# Singleton instance
_email_service = None


def get_email_service() -> EmailService:
    """Get singleton email service instance."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
