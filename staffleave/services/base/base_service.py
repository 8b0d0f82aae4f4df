"""
Base service class providing common functionality for all rule services.
"""

from abc import ABC
from datetime import date
from typing import Optional, Dict, Any

from staffleave.core.exceptions import BaseAppException
from staffleave.core.logging import get_logger
from staffleave.schemas.settings import SystemSettings
from staffleave.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)
from staffleave.utils.date_utils import today as local_today


class BaseService(ABC):
    """
    Base service with common behaviors:
    - Injected, read-only SystemSettings
    - Shared logger
    - Consistent error handling via ServiceResult
    """

    def __init__(self, settings: SystemSettings):
        """
        Initialize base service.

        Args:
            settings: Unit rule configuration, never mutated by the service
        """
        self.settings: SystemSettings = settings
        self._logger = get_logger(self.__class__.__module__)

    @staticmethod
    def _resolve_today(today: Optional[date]) -> date:
        return today if today is not None else local_today()

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_app_exception(
        self,
        exception: BaseAppException,
        operation: str,
        entity_ref: Optional[Any] = None,
    ) -> ServiceResult:
        """
        Convert an engine exception into a ServiceResult failure.

        These are expected rule outcomes, so they are logged at INFO.
        """
        self._logger.info(
            f"{operation} refused: {exception.message}",
            extra={
                "operation": operation,
                "error_code": exception.error_code.value,
                "entity_ref": str(entity_ref) if entity_ref is not None else None,
            },
        )
        return ServiceResult.failure(ServiceError.from_app_exception(exception))

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert an unexpected exception to a ServiceResult failure with logging.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            severity: Error severity level
            additional_context: Extra context for logging/debugging

        Returns:
            ServiceResult with failure status and error details
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }

        if additional_context:
            context.update(additional_context)

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )

        return ServiceResult.failure(
            ServiceError(
                code=self._map_exception_to_error_code(exception),
                message=f"Failed to {operation}",
                details={
                    "error": str(exception),
                    "entity_ref": str(entity_ref) if entity_ref is not None else None,
                    "context": additional_context,
                },
                severity=severity,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        """
        Map exception types to appropriate error codes.

        pydantic's ValidationError is a ValueError, so schema failures map
        to VALIDATION_ERROR.
        """
        exception_mapping = {
            ValueError: ErrorCode.VALIDATION_ERROR,
            KeyError: ErrorCode.RESOURCE_NOT_FOUND,
        }

        for exc_type, error_code in exception_mapping.items():
            if isinstance(exception, exc_type):
                return error_code

        return ErrorCode.INTERNAL_ERROR
