"""HTML and plain-text bodies for outgoing email.

Each builder returns ``(subject, html, text)``.
"""

from html import escape
from typing import Tuple

_LAYOUT = """\
<!DOCTYPE html>
<html>
<body style="margin:0;padding:0;background:#f3f4f6;font-family:Arial,Helvetica,sans-serif;">
  <table role="presentation" width="100%" cellspacing="0" cellpadding="0">
    <tr><td align="center" style="padding:40px 20px;">
      <table role="presentation" width="600" cellspacing="0" cellpadding="0"
             style="background:#ffffff;border-radius:12px;overflow:hidden;">
        <tr><td style="background:#ea580c;padding:32px;text-align:center;">
          <h1 style="margin:0;color:#ffffff;font-size:28px;">KitchenSathi</h1>
          <p style="margin:8px 0 0;color:#ffffff;font-size:15px;">{tagline}</p>
        </td></tr>
        <tr><td style="padding:32px;color:#1f2937;font-size:16px;line-height:1.6;">
          {body}
        </td></tr>
        <tr><td style="background:#f9fafb;padding:20px;text-align:center;color:#9ca3af;font-size:12px;">
          You received this email because you have a KitchenSathi account.
        </td></tr>
      </table>
    </td></tr>
  </table>
</body>
</html>
"""

_CODE_BLOCK = """\
<div style="margin:24px 0;padding:20px;background:#fef3c7;border-radius:8px;text-align:center;">
  <p style="margin:0 0 8px;color:#78350f;font-size:13px;font-weight:bold;text-transform:uppercase;">{label}</p>
  <p style="margin:0;color:#ea580c;font-size:34px;font-weight:bold;letter-spacing:8px;font-family:'Courier New',monospace;">{code}</p>
</div>
"""


def _page(tagline: str, body: str) -> str:
    return _LAYOUT.format(tagline=escape(tagline), body=body)


def verification_email(name: str, code: str, ttl_minutes: int) -> Tuple[str, str, str]:
    subject = "Verify Your KitchenSathi Account"
    body = (
        f"<h2 style=\"margin:0 0 16px;\">Welcome, {escape(name)}!</h2>"
        "<p>Thanks for signing up. Enter this code to verify your email address:</p>"
        + _CODE_BLOCK.format(label="Your Verification Code", code=escape(code))
        + f"<p style=\"color:#6b7280;font-size:14px;\">The code expires in {ttl_minutes} minutes. "
        "If you did not create an account, you can ignore this email.</p>"
    )
    text = (
        f"Welcome, {name}!\n\nYour KitchenSathi verification code is {code}.\n"
        f"It expires in {ttl_minutes} minutes."
    )
    return subject, _page("Your Smart Kitchen Companion", body), text


def password_reset_email(name: str, code: str, ttl_minutes: int) -> Tuple[str, str, str]:
    subject = "Reset Your KitchenSathi Password"
    body = (
        f"<h2 style=\"margin:0 0 16px;\">Hi {escape(name)},</h2>"
        "<p>We received a request to reset your password. Use this code to choose a new one:</p>"
        + _CODE_BLOCK.format(label="Your Reset Code", code=escape(code))
        + f"<p style=\"color:#6b7280;font-size:14px;\">The code expires in {ttl_minutes} minutes.</p>"
        "<p style=\"color:#991b1b;font-size:14px;\">If you did not ask for a reset, "
        "ignore this email. Your password stays unchanged.</p>"
    )
    text = (
        f"Hi {name},\n\nYour KitchenSathi password reset code is {code}.\n"
        f"It expires in {ttl_minutes} minutes."
    )
    return subject, _page("Password Reset Request", body), text


def expiry_alert_email(
    name: str, item_name: str, expiry_label: str, days_until_expiry: int
) -> Tuple[str, str, str]:
    if days_until_expiry <= 0:
        when = "today"
    elif days_until_expiry == 1:
        when = "tomorrow"
    else:
        when = f"in {days_until_expiry} days"

    subject = f"Expiry Alert: {item_name} expires {when}"
    body = (
        f"<p>Hi {escape(name)},</p>"
        f"<p>Your grocery item <strong>{escape(item_name)}</strong> expires {when}.</p>"
        f"<p style=\"color:#4b5563;font-size:14px;\">Expiry date: {escape(expiry_label)}</p>"
        "<p>Plan a meal around it or mark it as used in KitchenSathi to keep your "
        "list tidy and reduce food waste.</p>"
    )
    text = (
        f"Hi {name},\n\n{item_name} expires {when} ({expiry_label}).\n"
        "Use it soon to avoid waste."
    )
    return subject, _page("Expiry Alert", body), text
