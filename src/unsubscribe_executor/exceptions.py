"""
Exceptions raised while preparing unsubscribe requests.
"""

from typing import Optional


class InvalidAddressError(Exception):
    """Exception raised when an unsubscribe mailto target is malformed."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address

    def __str__(self) -> str:
        base_message = super().__str__()
        if self.address is not None:
            return f"{base_message} (address={self.address})"
        return base_message
