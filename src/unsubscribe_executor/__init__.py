"""
Unsubscribe Executor Module

Leaf strategies that attempt one unsubscribe request and report the
outcome without raising.
"""

from .types import ExecutionResult, UnsubscribeAddress
from .exceptions import InvalidAddressError
from .mailto import parse_unsubscribe_mailto
from .email_sender import SmtpEmailSender
from .email_executor import EmailUnsubscribeExecutor
from .http_executor import HttpUnsubscribeExecutor

__all__ = [
    'ExecutionResult', 'UnsubscribeAddress', 'InvalidAddressError',
    'parse_unsubscribe_mailto', 'SmtpEmailSender',
    'EmailUnsubscribeExecutor', 'HttpUnsubscribeExecutor',
]
