"""
Email Unsubscribe Executor

Handles unsubscribe via mailto targets by sending a short disclosure email
from the newsletter's own receiving address.
"""

from typing import Optional

from src.config import Config
from .base_executor import BaseUnsubscribeExecutor
from .email_sender import SmtpEmailSender
from .exceptions import InvalidAddressError
from .mailto import parse_unsubscribe_mailto
from .types import ExecutionResult, ERROR_REJECTED, ERROR_VALIDATION


class EmailUnsubscribeExecutor(BaseUnsubscribeExecutor):
    """Execute unsubscribe requests by email."""

    def __init__(self, email_sender=None, text: Optional[str] = None):
        """
        Initialize email executor.

        Args:
            email_sender: Object with send_email(to, subject, text, from_address) -> bool
            text: Body of the unsubscribe email
        """
        super().__init__()
        self.email_sender = email_sender or SmtpEmailSender()
        self.text = text or Config.UNSUBSCRIBE_EMAIL_TEXT

    @property
    def method_name(self) -> str:
        return 'email'

    def _perform_execution(self, target: str, from_address: Optional[str] = None) -> ExecutionResult:
        try:
            address = parse_unsubscribe_mailto(target)
        except InvalidAddressError as e:
            return ExecutionResult.failure(ERROR_VALIDATION, str(e))

        sent = self.email_sender.send_email(
            to=address.to,
            subject=address.subject,
            text=self.text,
            from_address=from_address
        )
        if not sent:
            return ExecutionResult.failure(ERROR_REJECTED, f'Email to {address.to} was not sent')

        self.logger.info("Unsubscribe email sent", {"to": address.to, "subject": address.subject})
        return ExecutionResult.ok()
