"""
Base services module.

Provides the building blocks every rule service shares:
- BaseService with injected SystemSettings and logging
- ServiceResult / ServiceError for structured outcomes
"""

from staffleave.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)

from staffleave.services.base.base_service import BaseService

__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "BaseService",
]
