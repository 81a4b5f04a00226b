"""
Unit tests for the password reset email template and mail adapters
"""
import logging
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from authsync.adapter.services.email_templates import render_password_reset_email
from authsync.adapter.services.smtp_mailer import LoggingMailer, SmtpMailer
from authsync.app.services.mailer import MailDeliveryError

LINK = "myapp://forgot-password?token=abc123"


def test_template_contains_link_and_expiry():
    rendered = render_password_reset_email(LINK, 30)

    assert rendered.subject == "Password Reset Request"
    assert "30 minutes" in rendered.html
    assert "30 minutes" in rendered.text
    assert LINK in rendered.text
    assert 'href="myapp://forgot-password?token=abc123"' in rendered.html


def test_template_escapes_link_markup():
    rendered = render_password_reset_email('myapp://x?token="><script>', 30)

    assert "<script>" not in rendered.html
    assert "&lt;script&gt;" in rendered.html


@pytest.mark.asyncio
async def test_smtp_mailer_sends_multipart_message():
    mailer = SmtpMailer(
        host="smtp.example.com",
        username="noreply@example.com",
        password="secret",
        from_name="Accounts",
    )
    server = MagicMock()

    with patch("authsync.adapter.services.smtp_mailer.smtplib.SMTP") as smtp:
        smtp.return_value.__enter__.return_value = server
        await mailer.send_password_reset(to_email="alice@example.com", reset_link=LINK, expires_minutes=30)

    smtp.assert_called_once_with("smtp.example.com", 587, timeout=10.0)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("noreply@example.com", "secret")
    msg = server.send_message.call_args.args[0]
    assert msg["To"] == "alice@example.com"
    assert msg["From"] == "Accounts <noreply@example.com>"
    assert msg["Subject"] == "Password Reset Request"


@pytest.mark.asyncio
async def test_smtp_failure_raises_mail_delivery_error():
    mailer = SmtpMailer(host="smtp.example.com", use_tls=False)

    with patch("authsync.adapter.services.smtp_mailer.smtplib.SMTP") as smtp:
        smtp.side_effect = smtplib.SMTPConnectError(421, b"service not available")
        with pytest.raises(MailDeliveryError):
            await mailer.send_password_reset(to_email="alice@example.com", reset_link=LINK, expires_minutes=30)


@pytest.mark.asyncio
async def test_connection_refused_raises_mail_delivery_error():
    mailer = SmtpMailer(host="smtp.example.com")

    with patch("authsync.adapter.services.smtp_mailer.smtplib.SMTP", side_effect=ConnectionRefusedError()):
        with pytest.raises(MailDeliveryError):
            await mailer.send_password_reset(to_email="alice@example.com", reset_link=LINK, expires_minutes=30)


@pytest.mark.asyncio
async def test_logging_mailer_logs_link_when_enabled(caplog):
    with caplog.at_level(logging.INFO, logger="authsync.adapter.services.smtp_mailer"):
        await LoggingMailer(log_links=True).send_password_reset(
            to_email="alice@example.com", reset_link=LINK, expires_minutes=30
        )

    assert LINK in caplog.text


@pytest.mark.asyncio
async def test_logging_mailer_never_logs_token_by_default(caplog):
    with caplog.at_level(logging.DEBUG, logger="authsync.adapter.services.smtp_mailer"):
        await LoggingMailer().send_password_reset(
            to_email="alice@example.com", reset_link=LINK, expires_minutes=30
        )

    assert "alice@example.com" in caplog.text
    assert "abc123" not in caplog.text
