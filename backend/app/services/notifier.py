"""
Summary email rendering and delivery over SMTP.
"""

import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from app.config import Settings
from app.errors import EmailDeliveryFailed
from app.models.upload import EmailMessage

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465

EMAIL_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #333;">Hello {name}!</h2>
  <p style="color: #666;">Thank you for uploading your PDF document. Here is the summary:</p>

  <div style="background-color: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3 style="color: #444; margin-top: 0;">Document Summary</h3>
    <div style="color: #555; line-height: 1.6;">{summary}</div>
  </div>

  <p style="color: #666; font-size: 14px;">
    <strong>Original File:</strong> {filename}
  </p>

  <hr style="border: none; border-top: 1px solid #ddd; margin: 20px 0;">

  <p style="color: #999; font-size: 12px;">
    This is an automated email. Please do not reply to this message.
  </p>
</div>
"""


class Notifier:
    """
    Sends one summary email per call through the configured SMTP relay.

    Port 465 uses implicit TLS (SMTP_SSL); any other port upgrades with
    STARTTLS when the server offers it. Every connection is bounded by
    ``timeout`` seconds. There are no retries here: a failed send surfaces
    as EmailDeliveryFailed.
    """

    def __init__(
        self,
        host: Optional[str],
        port: int = 587,
        user: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        timeout: float = 10,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender or user
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "Notifier":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            sender=settings.email_from,
            timeout=settings.smtp_timeout,
        )

    def render(self, recipient: str, name: str, summary_html: str, filename: str) -> EmailMessage:
        """Build the summary email. ``summary_html`` is trusted; name and filename are escaped."""
        return EmailMessage(
            to=recipient,
            subject=f"PDF Summary: {filename}",
            html_body=EMAIL_TEMPLATE.format(
                name=html.escape(name),
                summary=summary_html,
                filename=html.escape(filename),
            ),
            sender=self.sender,
        )

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.port == IMPLICIT_TLS_PORT:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)

        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        # Not yet inside the caller's ``with``: close the socket ourselves
        # if the handshake fails.
        try:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls(context=context)
                server.ehlo()
        except BaseException:
            server.close()
            raise
        return server

    def send(self, message: EmailMessage) -> None:
        """
        Deliver ``message``.

        Raises:
            EmailDeliveryFailed: Relay not configured, unreachable, refused
                                 the credentials, or rejected the message.
                                 The transport error text is kept.
        """
        mime = MIMEMultipart("alternative")
        mime["From"] = message.sender or self.sender or ""
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.attach(MIMEText(message.html_body, "html", "utf-8"))

        try:
            if not self.host:
                raise smtplib.SMTPException("SMTP_HOST is not configured")
            with self._connect() as server:
                if self.user:
                    server.login(self.user, self.password or "")
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending email to {message.to}: {e}")
            raise EmailDeliveryFailed(f"Failed to send email: {e}")

        logger.info(f"Email sent to {message.to}")

    def send_summary(self, recipient: str, name: str, summary_html: str, filename: str) -> EmailMessage:
        message = self.render(recipient, name, summary_html, filename)
        self.send(message)
        return message
