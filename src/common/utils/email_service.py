import logging
from email.message import EmailMessage
from typing import List, Optional

import aiosmtplib

from src.common.config import settings

logger = logging.getLogger(__name__)


async def send_email(subject: str, body: str, recipients: List[str], html_body: Optional[str] = None) -> None:
    """
    Sends an email asynchronously using aiosmtplib.

    Does nothing when SMTP_HOST is not configured.

    Args:
        subject (str): The subject of the email.
        body (str): The plain text content of the email.
        recipients (List[str]): List of recipient email addresses.
    """
    if not settings.SMTP_HOST:
        logger.info(f"SMTP not configured, skipping email '{subject}'")
        return

    message = EmailMessage()
    message["From"] = settings.EMAIL_SENDER
    message["To"] = ", ".join(recipients)
    message["Subject"] = subject
    message.set_content(body)

    # If HTML content is provided, add it as an alternative.
    if html_body:
        message.add_alternative(html_body, subtype="html")

    try:
        await aiosmtplib.send(
            message,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER or None,
            password=settings.SMTP_PASSWORD or None,
            start_tls=True,
        )
    except aiosmtplib.SMTPException as e:
        # Runs as a background task after the response; nothing to propagate to.
        logger.error(f"Failed to send email '{subject}' to {recipients}: {e}")


async def send_welcome_email(recipient_email: str, first_name: str, role: str) -> None:
    """
    Sends a welcome email after sign-up.

    Args:
        recipient_email (str): The email address of the recipient.
        first_name (str): The first name of the user.
        role (str): "client" or "caregiver"; decides the next step we point them to.
    """
    if role == "caregiver":
        next_step = "Complete your caregiver profile so clients can find you"
        link = f"{settings.FRONTEND_URL}/caregiver/onboarding"
    else:
        next_step = "Book your first care service"
        link = f"{settings.FRONTEND_URL}/client/book-service"

    email_content = f"""
Dear {first_name},

Welcome to Elder Care Connect!

{next_step}:
{link}

Best regards,
The Elder Care Connect Team
"""

    html_content = f"""
<p>Dear <strong>{first_name}</strong>,</p>
<p>Welcome to Elder Care Connect!</p>
<p><a href="{link}">{next_step}</a></p>
<p>Best regards,<br>The Elder Care Connect Team</p>
"""

    await send_email("Welcome to Elder Care Connect", email_content, [recipient_email], html_body=html_content)


async def send_booking_confirmation_email(
    recipient_email: str,
    first_name: str,
    caregiver_name: str,
    service_date: str,
    start_time: str,
    total_amount: float
) -> None:
    """Sends the client a summary of a booking request they just placed."""
    dashboard_link = f"{settings.FRONTEND_URL}/client/dashboard"

    email_content = f"""
Dear {first_name},

Your booking with {caregiver_name} on {service_date} at {start_time} has been received.
Estimated total: ${total_amount:.2f}

The caregiver will confirm shortly. Track your booking here:
{dashboard_link}

Best regards,
The Elder Care Connect Team
"""

    html_content = f"""
<p>Dear <strong>{first_name}</strong>,</p>
<p>Your booking with <strong>{caregiver_name}</strong> on {service_date} at {start_time} has been received.</p>
<p>Estimated total: <strong>${total_amount:.2f}</strong></p>
<p>The caregiver will confirm shortly. <a href="{dashboard_link}">Track your booking</a>.</p>
"""

    await send_email("Your care booking request", email_content, [recipient_email], html_body=html_content)
