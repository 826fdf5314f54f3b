"""
SMTP delivery of outgoing unsubscribe emails.
"""

import smtplib
import socket
from email.mime.text import MIMEText
from typing import Optional

from src.config import Config
from src.utils.logging import SubscriptionLogger


class SmtpEmailSender:
    """Send plain-text emails through an SMTP relay."""

    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[int] = None,
        use_tls: Optional[bool] = None
    ):
        """
        Initialize SMTP sender. Unset arguments fall back to Config.

        Args:
            smtp_host: SMTP server host
            smtp_port: SMTP server port
            username: SMTP login (no login when empty)
            password: SMTP password
            timeout: SMTP timeout in seconds
            use_tls: Whether to issue STARTTLS before sending
        """
        self.smtp_host = smtp_host or Config.SMTP_HOST
        self.smtp_port = smtp_port or Config.SMTP_PORT
        self.username = username if username is not None else Config.SMTP_USERNAME
        self.password = password if password is not None else Config.SMTP_PASSWORD
        self.timeout = timeout or Config.SMTP_TIMEOUT
        self.use_tls = Config.SMTP_USE_TLS if use_tls is None else use_tls
        self.logger = SubscriptionLogger("email_sender")

    def _compose_message(self, to: str, subject: str, text: str, from_address: str) -> MIMEText:
        msg = MIMEText(text)
        msg['From'] = from_address
        msg['To'] = to
        msg['Subject'] = subject
        return msg

    def send_email(self, to: str, subject: str, text: str, from_address: str) -> bool:
        """
        Send an email.

        Returns:
            True if the relay accepted the message
        """
        msg = self._compose_message(to, subject, text, from_address)

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                refused = server.send_message(msg)
        except (smtplib.SMTPException, socket.timeout, OSError) as e:
            self.logger.info("Failed to send email", {
                "to": to, "smtp_host": self.smtp_host, "error": str(e)
            })
            return False

        if refused:
            self.logger.info("Recipient refused", {"to": to, "refused": list(refused)})
            return False
        return True
