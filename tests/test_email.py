import smtplib
from unittest.mock import MagicMock, patch

import pytest
import requests

from app.platform.config import Settings
from app.platform.exceptions import EmailDeliveryError
from app.platform.services.email import Mailer


def make_mailer(**overrides) -> Mailer:
    values = {
        "DATABASE_URL": "sqlite+aiosqlite://",
        "MAIL_HOST": "smtp.example.com",
        "MAIL_PORT": 587,
        "MAIL_FROM_ADDRESS": "no-reply@example.com",
        "MAIL_FROM_NAME": "Rental Site",
        "EMAIL_RELAY_URL": "",
        "EMAIL_RELAY_API_KEY": "",
    }
    values.update(overrides)
    return Mailer(settings=Settings(**values))


def test_render_reply_template():
    body = make_mailer().render(
        "contact_reply.html",
        company_name="Lebbnb",
        name="Ada",
        reply="See you soon",
        subject="Viewing",
        original_message="Is it free?",
    )

    assert "Ada" in body
    assert "See you soon" in body
    assert "Is it free?" in body


def test_relay_used_when_configured():
    mailer = make_mailer(EMAIL_RELAY_URL="https://relay.example.com/send", EMAIL_RELAY_API_KEY="key")

    with patch("app.platform.services.email.requests.post") as mock_post, patch(
        "app.platform.services.email.smtplib.SMTP"
    ) as mock_smtp:
        mock_post.return_value = MagicMock(raise_for_status=MagicMock())
        mailer.send_email("ada@example.com", "Hello", "<p>Hi</p>", reply_to="owner@example.com")

    mock_post.assert_called_once()
    kwargs = mock_post.call_args.kwargs
    assert kwargs["json"]["to_email"] == "ada@example.com"
    assert kwargs["json"]["reply_to"] == "owner@example.com"
    assert kwargs["headers"]["X-API-Key"] == "key"
    mock_smtp.assert_not_called()


def test_relay_failure_falls_back_to_smtp():
    mailer = make_mailer(EMAIL_RELAY_URL="https://relay.example.com/send", EMAIL_RELAY_API_KEY="key")

    with patch(
        "app.platform.services.email.requests.post",
        side_effect=requests.exceptions.Timeout(),
    ), patch("app.platform.services.email.smtplib.SMTP") as mock_smtp:
        mailer.send_email("ada@example.com", "Hello", "<p>Hi</p>")

    server = mock_smtp.return_value.__enter__.return_value
    server.starttls.assert_called_once()
    server.sendmail.assert_called_once()
    assert server.sendmail.call_args.args[1] == "ada@example.com"


def test_smtp_failure_raises_delivery_error():
    mailer = make_mailer()

    with patch("app.platform.services.email.smtplib.SMTP") as mock_smtp:
        server = mock_smtp.return_value.__enter__.return_value
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")

        with pytest.raises(EmailDeliveryError):
            mailer.send_email("ada@example.com", "Hello", "<p>Hi</p>")


def test_header_injection_raises_delivery_error():
    mailer = make_mailer()

    with patch("app.platform.services.email.smtplib.SMTP") as mock_smtp:
        with pytest.raises(EmailDeliveryError):
            mailer.send_email("ada@example.com", "Viewing\nBcc: victim@evil.test", "<p>Hi</p>")

    mock_smtp.assert_not_called()
