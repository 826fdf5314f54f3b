"""
Persistence exceptions raised by the subscription store.
"""

from typing import Dict, Any, Optional


class PersistenceError(Exception):
    """Exception raised when a store operation fails."""

    def __init__(self, message: str, operation: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.operation = operation
        self.details = details or {}

    def __str__(self) -> str:
        base_message = super().__str__()
        context_parts = []

        if self.operation:
            context_parts.append(f"operation={self.operation}")

        if self.details:
            context_parts.extend(f"{k}={v}" for k, v in self.details.items())

        if context_parts:
            return f"{base_message} ({', '.join(context_parts)})"
        return base_message


class SubscriptionConflictError(PersistenceError):
    """Raised when a (user, name, type) insert collides and no winner row can be found."""
