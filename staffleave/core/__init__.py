"""
Core package: exceptions and logging.
"""

from staffleave.core.exceptions import (
    BaseAppException,
    ConfigurationError,
    CrossMonthBatchError,
    ErrorCode,
    IneligibleSubmissionError,
    InvalidTransitionError,
    MissingReasonError,
    MissingSignatureError,
    QuotaExceededError,
    ResourceNotFoundError,
    RetroactiveDateError,
    ValidationError,
)

__all__ = [
    "BaseAppException",
    "ConfigurationError",
    "CrossMonthBatchError",
    "ErrorCode",
    "IneligibleSubmissionError",
    "InvalidTransitionError",
    "MissingReasonError",
    "MissingSignatureError",
    "QuotaExceededError",
    "ResourceNotFoundError",
    "RetroactiveDateError",
    "ValidationError",
]
