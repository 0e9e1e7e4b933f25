"""Error Hierarchy: typed, categorized exceptions for every failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors are 400/404-level; bad stored data is 500; an unreadable
      data source is 503
    - to_response() produces the REST envelope {success, error, timestamp}
    - The core raises these and never catches them; the transport maps them

Design Decisions:
    - Single hierarchy with MicrocredError base: one FastAPI handler catches all
    - details dict carries lookup hints (availableUsers, availableCertificates)
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATA_SOURCE = "data_source"
    DATA_INTEGRITY = "data_integrity"
    INTERNAL = "internal"


class MicrocredError(Exception):
    """Base exception for all portfolio API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_response(self) -> dict:
        """Convert to the standardized REST error envelope."""
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
        }
        if self.details:
            error["details"] = self.details
        return {
            "success": False,
            "error": error,
            "timestamp": self.timestamp.isoformat(),
        }


# ─── Domain Errors ──────────────────────────────────────────────

class InvalidDateError(MicrocredError):
    """A stored date is missing or unparseable (dataset defect)."""
    def __init__(self, field: str, value: object):
        super().__init__(
            f"Invalid {field}: {value!r}",
            "INVALID_DATE", ErrorCategory.DATA_INTEGRITY,
            ErrorSeverity.ERROR, 500, {"field": field},
        )
        self.field = field
        self.value = value


class InvalidQueryError(MicrocredError):
    """Search query is missing or blank."""
    def __init__(self, message: str = "Search query is required"):
        super().__init__(
            message, "INVALID_QUERY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )


class ResourceNotFoundError(MicrocredError):
    """Requested user or certificate does not exist in the dataset."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404, details,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatasetUnavailableError(MicrocredError):
    """Backing JSON file is missing or cannot be parsed."""
    def __init__(self, message: str, source: str):
        super().__init__(
            f"Data source unavailable: {message}",
            "DATASET_UNAVAILABLE", ErrorCategory.DATA_SOURCE,
            ErrorSeverity.CRITICAL, 503, {"source": source},
        )
        self.source = source
