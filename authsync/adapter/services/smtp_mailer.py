import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from authsync.app.services.mailer import IMailer, MailDeliveryError
from .email_templates import render_password_reset_email

logger = logging.getLogger(__name__)


class SmtpMailer(IMailer):
    """Delivers email over SMTP; the blocking client runs in a worker thread"""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
        timeout_seconds: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_email = from_email or username
        self.from_name = from_name
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(cls, config) -> "SmtpMailer":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
            use_tls=config.SMTP_USE_TLS,
            from_email=config.EMAIL_FROM,
            from_name=config.EMAIL_FROM_NAME,
            timeout_seconds=config.MAIL_TIMEOUT_SECONDS,
        )

    def _build_message(self, to_email: str, subject: str, html: str, text: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.from_name} <{self.from_email}>" if self.from_name else self.from_email
        msg["To"] = to_email
        msg.attach(MIMEText(text, "plain"))
        msg.attach(MIMEText(html, "html"))
        return msg

    def _send_sync(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

    async def send_password_reset(self, *, to_email: str, reset_link: str, expires_minutes: int) -> None:
        rendered = render_password_reset_email(reset_link, expires_minutes)
        msg = self._build_message(to_email, rendered.subject, rendered.html, rendered.text)
        try:
            await asyncio.wait_for(asyncio.to_thread(self._send_sync, msg), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise MailDeliveryError(f"SMTP delivery timed out after {self.timeout_seconds}s") from exc
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(str(exc)) from exc


class LoggingMailer(IMailer):
    """
    Mailer used when no SMTP host is configured; logs instead of sending.

    The reset link carries a live token, so it is only logged when
    ``log_links`` is set. Production wiring leaves it off.
    """

    def __init__(self, log_links: bool = False):
        self.log_links = log_links

    async def send_password_reset(self, *, to_email: str, reset_link: str, expires_minutes: int) -> None:
        if self.log_links:
            logger.info(
                f"[DEV MAIL] password reset for {to_email}: {reset_link} (expires in {expires_minutes} min)"
            )
        else:
            logger.warning(f"No SMTP host configured; password reset email for {to_email} was not sent")
