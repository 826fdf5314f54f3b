"""
Shared utilities.
"""

from .logging import SubscriptionLogger, SensitiveDataFilter, configure_logging

__all__ = ['SubscriptionLogger', 'SensitiveDataFilter', 'configure_logging']
