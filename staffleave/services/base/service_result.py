"""
Service result patterns for standardized response handling.
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from dataclasses import dataclass
from enum import Enum
from datetime import datetime, timezone

from staffleave.core.exceptions import BaseAppException, ErrorCode


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """Represents a service operation error with context."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    field: Optional[str] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)

    @classmethod
    def from_app_exception(
        cls,
        exception: BaseAppException,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
    ) -> "ServiceError":
        """Build an error from an engine exception, keeping its code and details."""
        field_errors = exception.details.get("field_errors") or {}
        return cls(
            code=exception.error_code,
            message=exception.message,
            severity=severity,
            details=dict(exception.details),
            field=next(iter(field_errors), None),
        )


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Standardized service operation result with success/failure pattern.

    Attributes:
        is_success: Operation success indicator
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
        metadata: Additional context information
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a successful result."""
        return cls(
            is_success=True,
            data=data,
            message=message,
            metadata=metadata or {},
        )

    @classmethod
    def failure(
        cls,
        error: ServiceError,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        """Create a failed result."""
        return cls(
            is_success=False,
            error=error,
            message=error.message,
            metadata=metadata or {},
        )

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def unwrap(self) -> TData:
        """
        Unwrap the result data or raise exception if failed.

        Raises:
            ValueError: If the result is not successful
        """
        if not self.is_success:
            raise ValueError(f"Cannot unwrap failed result: {self.error.message if self.error else 'Unknown error'}")
        return self.data

    def __bool__(self) -> bool:
        """Allow boolean evaluation of the result."""
        return self.is_success


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
