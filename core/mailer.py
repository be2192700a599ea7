import asyncio
import logging
import smtplib
from email.message import EmailMessage

from core import state
from core.constants import main_values

logger = logging.getLogger("donorbook.mail")


def build_message(to: str, subject: str, text: str | None = None, html: str | None = None) -> EmailMessage:
    message = EmailMessage()
    message["From"] = main_values.SMTP_FROM
    message["To"] = to
    message["Subject"] = subject
    message.set_content(text or "")
    if html:
        message.add_alternative(html, subtype="html")
    return message


def _deliver(message: EmailMessage):
    """Synchronous helper for one SMTP session"""
    if not main_values.SMTP_HOST:
        raise ValueError("SMTP_HOST is not configured")

    with smtplib.SMTP(main_values.SMTP_HOST, main_values.SMTP_PORT, timeout=30) as smtp:
        smtp.ehlo()
        if smtp.has_extn("starttls"):
            smtp.starttls()
            smtp.ehlo()
        if main_values.SMTP_USER:
            smtp.login(main_values.SMTP_USER, main_values.SMTP_PASS)
        smtp.send_message(message)


def _append_failure(line: str):
    with open(main_values.EMAIL_LOG_FILE, 'a', encoding='utf-8') as f:
        f.write(line + "\n")


async def _record_failure(line: str):
    try:
        async with state.email_lock:
            await asyncio.to_thread(_append_failure, line)
    except OSError as e:
        logger.error(f"Failed to write email log: {e}")


async def send_email(to: str, subject: str, text: str | None = None, html: str | None = None) -> None:
    """
    Sends one message through the configured SMTP server.

    Failures are logged, appended to the email log file and re-raised.
    smtplib errors are OSError subclasses; bad headers or a missing
    SMTP_HOST raise ValueError.
    """
    try:
        message = build_message(to, subject, text, html)
        await asyncio.to_thread(_deliver, message)
    except (OSError, ValueError) as e:
        line = f"Failed to send email to {to}: {e}"
        logger.error(line)
        await _record_failure(line)
        raise

    logger.info(f"Email sent to {to}")
