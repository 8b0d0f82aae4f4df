"""
Custom Exceptions for the Staff Leave engine

This module defines the exception classes raised by the eligibility rules
and the request workflow. Services convert them into ServiceResult failures;
callers that use the rule objects directly can catch them instead.
"""

from datetime import date
from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the engine"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

    # Submission rules
    INELIGIBLE_SUBMISSION = "INELIGIBLE_SUBMISSION"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    CROSS_MONTH_BATCH = "CROSS_MONTH_BATCH"
    RETROACTIVE_DATE = "RETROACTIVE_DATE"

    # Workflow
    MISSING_SIGNATURE = "MISSING_SIGNATURE"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    MISSING_REASON = "MISSING_REASON"


class BaseAppException(Exception):
    """
    Base exception class for all engine exceptions.

    Carries a message, an error code and a details mapping so the
    failure can be surfaced to the caller as a structured result.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when input data is rejected"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details)


class ConfigurationError(BaseAppException):
    """Exception raised when system settings cannot be loaded"""

    def __init__(self, message: str = "Invalid system settings", source: Optional[str] = None):
        details = {"source": source} if source else {}
        super().__init__(message, ErrorCode.INVALID_CONFIGURATION, details)


# ========================================
# Submission Rule Exceptions
# ========================================

class IneligibleSubmissionError(BaseAppException):
    """Exception raised when the eligibility gate blocks a request type"""

    def __init__(
        self,
        reason: str,
        reason_code: Optional[str] = None,
        release_date: Optional[date] = None,
        window: Optional[Dict[str, int]] = None,
    ):
        details: Dict[str, Any] = {}
        if reason_code:
            details["reason_code"] = reason_code
        if release_date:
            details["release_date"] = release_date.isoformat()
        if window:
            details["window"] = window
        self.release_date = release_date
        super().__init__(reason, ErrorCode.INELIGIBLE_SUBMISSION, details)


class QuotaExceededError(BaseAppException):
    """Exception raised when a date would exceed the monthly ceiling"""

    def __init__(self, used: int, selected: int, limit: int, year: int, month: int):
        self.used = used
        self.selected = selected
        self.limit = limit
        message = (
            f"Monthly limit reached for {month:02d}/{year}: "
            f"already used {used}, selected now {selected}, limit {limit}"
        )
        details = {
            "used": used,
            "selected": selected,
            "limit": limit,
            "year": year,
            "month": month,
        }
        super().__init__(message, ErrorCode.QUOTA_EXCEEDED, details)


class CrossMonthBatchError(BaseAppException):
    """Exception raised when a batch would mix dates from different months"""

    def __init__(self, batch_month: str, rejected_date: date):
        message = "Select days from a single month for one submission"
        details = {
            "batch_month": batch_month,
            "rejected_date": rejected_date.isoformat(),
        }
        super().__init__(message, ErrorCode.CROSS_MONTH_BATCH, details)


class RetroactiveDateError(BaseAppException):
    """Exception raised when a past date is selected while retroactive requests are blocked"""

    def __init__(self, rejected_date: date, today: date):
        message = f"Retroactive date {rejected_date.isoformat()} is not allowed"
        details = {
            "rejected_date": rejected_date.isoformat(),
            "today": today.isoformat(),
        }
        super().__init__(message, ErrorCode.RETROACTIVE_DATE, details)


# ========================================
# Workflow Exceptions
# ========================================

class MissingSignatureError(BaseAppException):
    """Exception raised when an actor without a registered signature has to sign"""

    def __init__(self, user_id: str, user_name: Optional[str] = None):
        message = "A registered signature is required for this action"
        details = {"user_id": user_id, "user_name": user_name}
        super().__init__(message, ErrorCode.MISSING_SIGNATURE, details)


class InvalidTransitionError(BaseAppException):
    """Exception raised for a transition the workflow does not define"""

    def __init__(
        self,
        current_status: str,
        action: str,
        message: Optional[str] = None,
        request_id: Optional[str] = None,
    ):
        if not message:
            message = f"Cannot {action} a request in status '{current_status}'"
        details = {
            "current_status": current_status,
            "action": action,
            "request_id": request_id,
        }
        super().__init__(message, ErrorCode.INVALID_TRANSITION, details)


class MissingReasonError(BaseAppException):
    """Exception raised when a rejection is attempted without a reason"""

    def __init__(self, action: str, request_id: Optional[str] = None):
        message = "A reason is required to reject a request"
        details = {"action": action, "request_id": request_id}
        super().__init__(message, ErrorCode.MISSING_REASON, details)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "IneligibleSubmissionError",
    "QuotaExceededError",
    "CrossMonthBatchError",
    "RetroactiveDateError",
    "MissingSignatureError",
    "InvalidTransitionError",
    "MissingReasonError",
]
