"""
Celery tasks for background processing.

Tasks are thin entry points: build the message, hand it to the transport,
log the outcome. Sign-in links are sent from here so the API request that
asked for one never waits on SMTP.
"""
import smtplib
from email.message import EmailMessage

from app.workers.celery_app import celery_app
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def build_magic_link_message(email: str, link: str) -> EmailMessage:
    message = EmailMessage()
    message["Subject"] = f"Your sign-in link for {settings.app_name}"
    message["From"] = settings.smtp_from_email
    message["To"] = email
    message.set_content(
        "Click the link below to sign in. It expires in "
        f"{settings.magic_link_expire_minutes} minutes and can be used once.\n\n"
        f"{link}\n\n"
        "If you did not ask for this e-mail you can ignore it."
    )
    return message


def deliver(message: EmailMessage) -> None:
    """Send through the configured SMTP relay (STARTTLS when credentials are set)."""
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as smtp:
        if settings.smtp_user and settings.smtp_password:
            smtp.starttls()
            smtp.login(settings.smtp_user, settings.smtp_password)
        smtp.send_message(message)


@celery_app.task(bind=True, max_retries=3)
def send_magic_link_email(self, email: str, link: str):
    """
    E-mail a passwordless sign-in link.

    Without SMTP configuration (local development) the link is only logged.
    """
    if not settings.smtp_host:
        logger.info("magic_link_email_skipped", email=email, link=link)
        return {"sent": False}

    try:
        deliver(build_magic_link_message(email, link))
    except (smtplib.SMTPException, OSError) as exc:
        logger.warning("magic_link_email_failed", email=email, error=str(exc))
        raise self.retry(exc=exc)

    logger.info("magic_link_email_sent", email=email)
    return {"sent": True}
