import smtplib
import ssl
from email.errors import MessageError
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from pathlib import Path
from typing import Iterable, Optional

import requests
from fastapi import Request
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.platform.config import Settings, settings as default_settings
from app.platform.exceptions import EmailDeliveryError
from app.platform.logger import get_logger

logger = get_logger("email_service")

FEATURES_DIR = Path(__file__).resolve().parent.parent.parent / "features"
DEFAULT_TEMPLATE_DIRS = [FEATURES_DIR / "contact" / "templates"]


class Mailer:
    """
    Sends HTML e-mail through the HTTP relay when configured, SMTP otherwise.

    Built once at startup and handed to routes through ``get_mailer``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        template_dirs: Optional[Iterable[Path]] = None,
    ):
        self.settings = settings or default_settings
        dirs = [str(d) for d in (template_dirs or DEFAULT_TEMPLATE_DIRS)]
        self.env = Environment(
            loader=FileSystemLoader(dirs),
            autoescape=select_autoescape(["html", "xml"]),
        )

    @property
    def from_header(self) -> str:
        return formataddr((self.settings.MAIL_FROM_NAME, self.settings.MAIL_FROM_ADDRESS))

    def render(self, template_name: str, **context) -> str:
        return self.env.get_template(template_name).render(**context)

    def send_email(self, to_email: str, subject: str, body: str, reply_to: Optional[str] = None):
        """
        Send email via HTTP relay service.
        Falls back to direct SMTP if relay is not configured or fails.
        Raises EmailDeliveryError when nothing accepted the message.
        """
        if self.settings.EMAIL_RELAY_URL and self.settings.EMAIL_RELAY_API_KEY:
            try:
                self.send_email_via_relay(to_email, subject, body, reply_to)
                return
            except EmailDeliveryError as e:
                logger.error(f"Email relay failed: {str(e)}")
                logger.info("Attempting direct SMTP as fallback...")
        else:
            logger.warning("Email relay not configured, attempting direct SMTP")

        self.send_email_direct_smtp(to_email, subject, body, reply_to)

    def send_email_via_relay(self, to_email: str, subject: str, body: str, reply_to: Optional[str] = None):
        """Send email via HTTP relay service"""
        payload = {
            "to_email": to_email,
            "subject": subject,
            "body": body,
            "from_address": self.settings.MAIL_FROM_ADDRESS,
        }
        if reply_to:
            payload["reply_to"] = reply_to

        headers = {
            "X-API-Key": self.settings.EMAIL_RELAY_API_KEY,
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.settings.EMAIL_RELAY_URL,
                json=payload,
                headers=headers,
                timeout=self.settings.EMAIL_RELAY_TIMEOUT,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error(f"Email relay timeout for {to_email}")
            raise EmailDeliveryError("Email relay service timeout") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Email relay request failed: {str(e)}")
            if e.response is not None:
                logger.error(f"Response status: {e.response.status_code}")
            raise EmailDeliveryError(f"Email relay service error: {str(e)}") from e

        logger.info(f"Email sent via relay to {to_email}")

    def send_email_direct_smtp(self, to_email: str, subject: str, body: str, reply_to: Optional[str] = None):
        """Base function to send email via SMTP"""
        msg = MIMEMultipart("alternative")
        msg.attach(MIMEText(body, "html"))
        try:
            msg["Subject"] = subject
            msg["From"] = self.from_header
            msg["To"] = to_email
            if reply_to:
                msg["Reply-To"] = reply_to
            raw = msg.as_string()
        except MessageError as e:
            logger.error(f"Refusing to send malformed email to {to_email}: {str(e)}")
            raise EmailDeliveryError(f"Invalid email headers: {str(e)}") from e

        s = self.settings
        try:
            if s.MAIL_PORT == 465:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(s.MAIL_HOST, s.MAIL_PORT, context=context) as server:
                    server.login(s.MAIL_USERNAME, s.MAIL_PASSWORD)
                    server.sendmail(s.MAIL_FROM_ADDRESS, to_email, raw)
            else:
                with smtplib.SMTP(s.MAIL_HOST, s.MAIL_PORT) as server:
                    server.ehlo()

                    if str(s.MAIL_ENCRYPTION).upper() in ["TLS", "TRUE"]:
                        server.starttls()
                        server.ehlo()

                    server.login(s.MAIL_USERNAME, s.MAIL_PASSWORD)
                    server.sendmail(s.MAIL_FROM_ADDRESS, to_email, raw)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"CRITICAL EMAIL ERROR: {str(e)}")
            raise EmailDeliveryError(f"SMTP delivery failed: {str(e)}") from e

        logger.info(f"Email sent via SMTP to {to_email}")


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer
