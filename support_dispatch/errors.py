"""
Exception hierarchy for the dispatch engine.

Every error raised to a caller of ``Dispatcher.process`` inherits from
``DispatchError`` and carries:
- code: ErrorCode for categorization
- message: Human-readable error message
- query_id: The request the error belongs to, when known
- recoverable: Whether retrying later can succeed
"""

from enum import Enum
from typing import Any, Optional

from support_dispatch.config.messages import get_error_message


class ErrorCode(str, Enum):
    """Standardized error codes."""

    OVERLOADED = "OVERLOADED"
    TIMEOUT = "TIMEOUT"
    DUPLICATE_REQUEST_ID = "DUPLICATE_REQUEST_ID"
    CLOSED = "CLOSED"
    INTERNAL_UNEXPECTED = "INTERNAL_UNEXPECTED"


class DispatchError(Exception):
    """Base exception for all dispatch errors."""

    code: ErrorCode = ErrorCode.INTERNAL_UNEXPECTED
    recoverable: bool = False
    message_key: str = "unknown_error"

    def __init__(self, message: Optional[str] = None, query_id: Optional[str] = None):
        self.message = message or get_error_message(self.message_key)
        self.query_id = query_id
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.query_id:
            return f"{self.message} (query_id={self.query_id})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "query_id": self.query_id,
            "recoverable": self.recoverable,
        }


class OverloadError(DispatchError):
    """The intake queue is full; the caller may retry later."""

    code = ErrorCode.OVERLOADED
    recoverable = True
    message_key = "overloaded"


class RequestTimeoutError(DispatchError, TimeoutError):
    """No response arrived within the caller's budget.

    The in-flight work is not cancelled, only abandoned by the caller.
    """

    code = ErrorCode.TIMEOUT
    recoverable = True
    message_key = "timeout"


class DuplicateRequestIDError(DispatchError):
    """A slot is already registered for this query id (caller bug)."""

    code = ErrorCode.DUPLICATE_REQUEST_ID
    message_key = "duplicate_request_id"


class DispatcherClosedError(DispatchError):
    """The dispatcher was shut down before the request could complete."""

    code = ErrorCode.CLOSED
    message_key = "closed"
