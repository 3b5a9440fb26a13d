"""
Unit tests for template rendering and the logging email transport.
"""

import pytest

from skilllink.infrastructure.email.email_service import EmailService, SENT_EMAIL_LOG_SIZE
from skilllink.infrastructure.email.template_loader import EmailTemplateLoader


class TestEmailTemplateLoader:
    """Test cases for the Jinja2 loader."""

    def test_renders_notification(self):
        loader = EmailTemplateLoader()

        text = loader.render_template("notification.txt", {
            "recipient_name": "Tunde Bello",
            "title": "New invite",
            "message": "Okafor Builds invited you",
            "link": None,
        })

        assert "Hi Tunde Bello," in text
        assert "Okafor Builds invited you" in text
        assert "Open:" not in text

    def test_html_is_escaped(self):
        html = EmailTemplateLoader().render_template("notification.html", {
            "recipient_name": "<b>Tunde</b>",
            "title": "New invite",
            "message": "Hello",
        })

        assert "<b>Tunde</b>" not in html


class TestLoggingTransport:
    """Without SMTP settings emails are logged and count as sent."""

    @pytest.mark.asyncio
    async def test_notification_logged(self):
        service = EmailService()

        sent = await service.send_notification_email(
            "worker@example.com", "Tunde Bello", "New invite", "Okafor Builds invited you", "/invites/1"
        )

        assert sent is True
        logged = service.get_sent_emails()
        assert [(e["to"], e["subject"]) for e in logged] == [("worker@example.com", "New invite")]
        assert "/invites/1" in logged[0]["text"]

    @pytest.mark.asyncio
    async def test_log_is_bounded(self):
        service = EmailService()

        for index in range(SENT_EMAIL_LOG_SIZE + 5):
            await service.send_otp_code(f"user{index}@example.com", "123456", 10)

        logged = service.get_sent_emails()
        assert len(logged) == SENT_EMAIL_LOG_SIZE
        assert logged[0]["to"] == "user5@example.com"
        assert logged[-1]["to"] == f"user{SENT_EMAIL_LOG_SIZE + 4}@example.com"
