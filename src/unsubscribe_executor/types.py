"""
Result types returned by the unsubscribe executors.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


# Failure kinds
ERROR_VALIDATION = 'validation'   # Unsubscribe target could not be parsed
ERROR_TRANSPORT = 'transport'     # Network failure, timeout or non-2xx response
ERROR_REJECTED = 'rejected'       # Mail sender refused the message
ERROR_UNEXPECTED = 'unexpected'


@dataclass(frozen=True)
class UnsubscribeAddress:
    """Destination of a mailto unsubscribe request."""

    to: str
    subject: str


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a single unsubscribe attempt. Truthy only on success."""

    success: bool
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def ok(cls, status_code: Optional[int] = None) -> 'ExecutionResult':
        return cls(success=True, status_code=status_code)

    @classmethod
    def failure(cls, error_kind: str, error_message: str, status_code: Optional[int] = None) -> 'ExecutionResult':
        return cls(success=False, error_kind=error_kind, error_message=error_message, status_code=status_code)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        result = {'success': self.success}
        if self.error_kind:
            result['error_kind'] = self.error_kind
        if self.error_message:
            result['error_message'] = self.error_message
        if self.status_code is not None:
            result['status_code'] = self.status_code
        return result
