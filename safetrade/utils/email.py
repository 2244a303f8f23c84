"""Plain-text SMTP delivery for SafeTrade account and moderation notices."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from safetrade.config import settings

logger = logging.getLogger(__name__)


def is_email_enabled() -> bool:
    """SMTP server and sender must both be configured, and the switch on."""
    return bool(
        settings.EMAIL_NOTIFICATIONS_ENABLED
        and settings.SMTP_SERVER
        and settings.EMAIL_FROM
    )


def _build_message(to_email: str, subject: str, body_text: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = settings.EMAIL_FROM
    message["To"] = to_email
    message["Subject"] = subject
    message.set_content(body_text)
    return message


def _connect() -> smtplib.SMTP:
    smtp_class = smtplib.SMTP_SSL if settings.SMTP_USE_SSL else smtplib.SMTP
    return smtp_class(
        settings.SMTP_SERVER,
        settings.SMTP_PORT,
        timeout=settings.SMTP_TIMEOUT_SECONDS,
    )


def send_email(*, to_email: str, subject: str, body_text: str) -> bool:
    """Send one notice; SMTP and socket errors are logged and reported as False."""
    if not is_email_enabled():
        return False

    message = _build_message(to_email, subject, body_text)
    try:
        with _connect() as server:
            if settings.SMTP_USE_TLS and not settings.SMTP_USE_SSL:
                server.starttls()
            if settings.EMAIL_PASSWORD:
                server.login(settings.SMTP_USERNAME or settings.EMAIL_FROM, settings.EMAIL_PASSWORD)
            server.send_message(message)
    except (smtplib.SMTPException, OSError) as exc:
        logger.warning("Email to %s failed (subject=%r): %s", to_email, subject, exc)
        return False

    logger.info("Email sent to %s (subject=%r)", to_email, subject)
    return True
