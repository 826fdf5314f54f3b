"""
Unsubscribe orchestration module.
"""

from .types import BulkUnsubscribeReport, UnsubscribeOutcome
from .unsubscriber import Unsubscriber

__all__ = ['Unsubscriber', 'UnsubscribeOutcome', 'BulkUnsubscribeReport']
