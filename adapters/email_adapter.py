"""SMTP email adapter.

Sending never raises: callers get ``True``/``False`` and failures are logged,
so a mail outage cannot break registration or the expiry check.
"""

from typing import Optional
from email.message import EmailMessage
import logging
import smtplib

from app.config import settings
from adapters import email_templates

logger = logging.getLogger("kitchensathi.email")


def is_configured() -> bool:
    return settings.email_enabled()


def send(to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
    """Send one message; returns whether the SMTP server accepted it."""
    if not is_configured():
        logger.warning("email_disabled to=%s subject=%r (no SMTP credentials)", to, subject)
        return False

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = f"KitchenSathi <{settings.email_from or settings.email_user}>"
    msg["To"] = to
    msg.set_content(text or subject)
    msg.add_alternative(html, subtype="html")

    try:
        with smtplib.SMTP(
            settings.email_host, settings.email_port, timeout=settings.email_timeout_sec
        ) as smtp:
            if settings.email_use_tls:
                smtp.starttls()
            smtp.login(settings.email_user, settings.email_password)
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("email_send_failed to=%s subject=%r error=%s", to, subject, exc)
        return False

    logger.info("email_sent to=%s subject=%r", to, subject)
    return True


def send_verification_email(to: str, name: str, code: str) -> bool:
    subject, html, text = email_templates.verification_email(
        name, code, settings.verification_code_ttl_minutes
    )
    return send(to, subject, html, text)


def send_password_reset_email(to: str, name: str, code: str) -> bool:
    subject, html, text = email_templates.password_reset_email(
        name, code, settings.verification_code_ttl_minutes
    )
    return send(to, subject, html, text)


def send_expiry_alert(
    to: str, name: str, item_name: str, expiry_label: str, days_until_expiry: int
) -> bool:
    subject, html, text = email_templates.expiry_alert_email(
        name, item_name, expiry_label, days_until_expiry
    )
    return send(to, subject, html, text)
