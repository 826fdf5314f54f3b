"""
Structured logging for subscription management.

Every record is a single JSON object carrying the emitting component, any
scoped context (for example the receiving address being bulk-processed)
and per-call extras. Unsubscribe URLs and provider payloads regularly
carry tokens, so values are masked before they are serialised.
"""

import logging
import json
import re
import time
from typing import Dict, Any, Optional
from contextlib import contextmanager
from datetime import datetime, timezone


SECRET_NAMES = ('token', 'password', 'secret', 'key')

# name=value / "name": "value" pairs whose value must never be logged
_SECRET_ASSIGNMENT = re.compile(
    r'(?P<name>\w*(?:token|password|secret|key))["\']?\s*[:=]\s*["\']?[^"\'\s&]+',
    re.IGNORECASE
)


class SensitiveDataFilter:
    """Masks secrets in log messages and structured extras."""

    def filter_message(self, message: str) -> str:
        return _SECRET_ASSIGNMENT.sub(r'\g<name>=***', message)

    def is_secret_key(self, key: str) -> bool:
        return key.lower().endswith(SECRET_NAMES)

    def filter_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Copy of ``data`` with secret keys blanked and string values scrubbed."""
        masked = {}
        for key, value in data.items():
            if self.is_secret_key(key):
                masked[key] = '***'
            elif isinstance(value, dict):
                masked[key] = self.filter_dict(value)
            elif isinstance(value, str):
                masked[key] = self.filter_message(value)
            else:
                masked[key] = value
        return masked


class SubscriptionLogger:
    """JSON logger for one component of the subscription workflows."""

    def __init__(self, component: str):
        self.component = component
        self.logger = logging.getLogger(f"subscriptions.{component}")
        self.context: Dict[str, Any] = {}
        self.filter = SensitiveDataFilter()

    def _record(self, message: str, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        record = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'component': self.component,
            'message': self.filter.filter_message(message),
            'context': self.filter.filter_dict(self.context),
        }
        if extra:
            record['extra'] = self.filter.filter_dict(extra)
        return record

    def _emit(self, level: int, record: Dict[str, Any], **kwargs):
        self.logger.log(level, json.dumps(record, default=str), **kwargs)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit(logging.DEBUG, self._record(message, extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit(logging.INFO, self._record(message, extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit(logging.WARNING, self._record(message, extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit(logging.ERROR, self._record(message, extra))

    def log_exception(self, exception: Exception, extra: Optional[Dict[str, Any]] = None):
        """Log an exception at ERROR with its type, details and traceback."""
        record = self._record(f"Exception occurred: {exception}", extra)
        record['exception'] = {
            'type': type(exception).__name__,
            'message': str(exception),
        }
        details = getattr(exception, 'details', None)
        if details:
            record['exception']['details'] = self.filter.filter_dict(details)
        self._emit(logging.ERROR, record, exc_info=exception)

    @contextmanager
    def scoped_context(self, context: Dict[str, Any]):
        """Attach ``context`` to every record logged inside the block."""
        saved = self.context
        self.context = {**saved, **context}
        try:
            yield
        finally:
            self.context = saved

    @contextmanager
    def timed(self, operation: str):
        """Log how long the block took and whether it raised."""
        started = time.monotonic()
        try:
            yield
        except Exception as e:
            self.error(f"{operation} failed", {
                "operation": operation,
                "duration_seconds": round(time.monotonic() - started, 3),
                "error": str(e),
            })
            raise
        self.info(f"{operation} finished", {
            "operation": operation,
            "duration_seconds": round(time.monotonic() - started, 3),
        })


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    filename: Optional[str] = None
):
    """
    Install one handler on the ``subscriptions`` logger.

    Records go to ``filename`` when given, otherwise to stderr. The ``json``
    format writes the bare JSON record; anything else prefixes it with the
    time, logger name and level.
    """
    logger = logging.getLogger("subscriptions")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.FileHandler(filename) if filename else logging.StreamHandler()
    if format == "json":
        handler.setFormatter(logging.Formatter('%(message)s'))
    else:
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logger.addHandler(handler)
    return logger
