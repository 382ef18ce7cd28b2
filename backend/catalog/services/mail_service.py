"""Mail notifications"""
from email.message import EmailMessage
import smtplib
import logging

from catalog.config import settings

logger = logging.getLogger(__name__)


class MailService:
    """Sends notification mails over SMTP"""

    def __init__(
        self,
        enabled: bool = settings.mail_enabled,
        host: str = settings.mail_host,
        port: int = settings.mail_port,
        sender: str = settings.mail_sender,
        recipient: str = settings.mail_recipient,
        timeout: float = settings.mail_timeout,
    ):
        self.enabled = enabled
        self.host = host
        self.port = port
        self.sender = sender
        self.recipient = recipient
        self.timeout = timeout

    def send(self, subject: str, body: str) -> None:
        """
        Send an HTML mail to the configured recipient

        Does nothing but log when mail is disabled.

        Args:
            subject: Mail subject
            body: HTML body

        Raises:
            OSError: if the SMTP server cannot be reached
            smtplib.SMTPException: if the server rejects the mail
        """
        if not self.enabled:
            logger.info(f"Mail disabled, not sending: {subject}")
            return

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = self.recipient
        message.set_content(body, subtype="html")

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.send_message(message)
        logger.info(f"Mail sent: {subject}")


class BackgroundMailService:
    """
    Defers mails to FastAPI background tasks, so they go out after the
    response has been sent. Delivery errors are logged.
    """

    def __init__(self, background_tasks, mail_service: MailService):
        self.background_tasks = background_tasks
        self.mail_service = mail_service

    def send(self, subject: str, body: str) -> None:
        self.background_tasks.add_task(self._deliver, subject, body)

    def _deliver(self, subject: str, body: str) -> None:
        try:
            self.mail_service.send(subject, body)
        except OSError as e:
            logger.error(f"Failed to send mail '{subject}': {e}")
