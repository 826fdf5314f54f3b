"""
Base Unsubscribe Executor

Provides what every unsubscribe method shares:
- Template method wrapping the method-specific attempt
- Normalisation of any escaped exception into a failed result
- Structured logging of failed attempts

Executors never raise; callers only inspect the returned ExecutionResult.
"""

from abc import ABC, abstractmethod

from src.utils.logging import SubscriptionLogger
from .types import ExecutionResult, ERROR_UNEXPECTED


class BaseUnsubscribeExecutor(ABC):
    """Abstract base class for all unsubscribe executors."""

    def __init__(self):
        self.logger = SubscriptionLogger(f"executor.{self.method_name}")

    @property
    @abstractmethod
    def method_name(self) -> str:
        """Return the method name (email, http_get)."""
        pass

    def execute(self, target: str, **kwargs) -> ExecutionResult:
        """
        Attempt one unsubscribe request (template method).

        Args:
            target: Unsubscribe mailto address or URL
            **kwargs: Method-specific options

        Returns:
            ExecutionResult, failed rather than raised on any error
        """
        try:
            result = self._perform_execution(target, **kwargs)
        except Exception as e:
            result = ExecutionResult.failure(ERROR_UNEXPECTED, f'Unexpected error: {str(e)}')

        if not result.success:
            self.logger.info(f"Failed to send unsubscribe {self.method_name} request", {
                "target": target, **result.to_dict()
            })
        return result

    @abstractmethod
    def _perform_execution(self, target: str, **kwargs) -> ExecutionResult:
        """Perform the method-specific attempt."""
        pass
