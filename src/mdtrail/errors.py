"""Error types for mdtrail.

Two families:
- FetchError: one document could not be obtained. Discovery logs these and
  treats the document as a dead end.
- DiscoveryError: the discovery call itself cannot proceed (bad root, or the
  background task failed). These reach the caller.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for programmatic consumers (--json-errors)."""

    NOT_FOUND = "NOT_FOUND"
    IO_ERROR = "IO_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    WRONG_CONTENT_TYPE = "WRONG_CONTENT_TYPE"
    BINARY_CONTENT = "BINARY_CONTENT"
    EMPTY_CONTENT = "EMPTY_CONTENT"
    TASK_FAILURE = "TASK_FAILURE"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    UNKNOWN_OPTION = "UNKNOWN_OPTION"
    USAGE_ERROR = "USAGE_ERROR"
    CONFIGURATION = "CONFIGURATION"


class MdtrailError(Exception):
    """Base class for all mdtrail errors."""

    code: ErrorCode = ErrorCode.IO_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {"error": error}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


# ─────────────────────────────────────────────────────────────────────────────
# Per-document fetch failures
# ─────────────────────────────────────────────────────────────────────────────


class FetchError(MdtrailError):
    """Raised when a document's content cannot be obtained."""

    def __init__(self, location: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.location = location
        super().__init__(message, details)


class NotFoundError(FetchError):
    code = ErrorCode.NOT_FOUND


class ReadError(FetchError):
    """Local read or decode failure."""

    code = ErrorCode.IO_ERROR


class HTTPStatusError(FetchError):
    """Server answered with a non-2xx status."""

    code = ErrorCode.HTTP_STATUS

    def __init__(self, location: str, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(
            location,
            f"HTTP error {status_code}: {reason}",
            {"status_code": status_code},
        )


class NetworkError(FetchError):
    code = ErrorCode.NETWORK_ERROR


class FetchTimeoutError(NetworkError):
    code = ErrorCode.TIMEOUT


class WrongContentTypeError(FetchError):
    code = ErrorCode.WRONG_CONTENT_TYPE

    def __init__(self, location: str, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(
            location,
            f"Invalid content type: {content_type}. Expected text/markdown or text/plain",
            {"content_type": content_type},
        )


class BinaryContentError(FetchError):
    code = ErrorCode.BINARY_CONTENT


class EmptyContentError(FetchError):
    code = ErrorCode.EMPTY_CONTENT


# ─────────────────────────────────────────────────────────────────────────────
# Fatal discovery failures
# ─────────────────────────────────────────────────────────────────────────────


class DiscoveryError(MdtrailError):
    """Raised when a discovery call cannot run to completion."""


class RootNotFoundError(DiscoveryError):
    """The root path or URL does not resolve at all."""

    code = ErrorCode.NOT_FOUND


class TaskFailureError(DiscoveryError):
    """The background discovery task could not be joined."""

    code = ErrorCode.TASK_FAILURE
