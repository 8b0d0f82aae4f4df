"""
Staff administration helpers.
"""

from staffleave.core.exceptions import ValidationError
from staffleave.schemas.common.enums import Permission
from staffleave.schemas.user import User
from staffleave.services.base import BaseService, ServiceResult


class UserService(BaseService):
    """
    Permission checks and administrative balance adjustments.

    Permission enforcement itself belongs to the caller; these helpers only
    answer whether a flag is present.
    """

    @staticmethod
    def has_permission(user: User, permission: Permission) -> bool:
        return permission in user.permissions

    def adjust_elective_days(self, user: User, new_amount: int) -> ServiceResult[User]:
        """
        Replace the user's elective-day balance.

        Returns:
            ServiceResult containing an updated copy of the user
        """
        if new_amount < 0:
            return self._handle_app_exception(
                ValidationError(
                    "Elective-day balance cannot be negative",
                    field_errors={"available_elective_days": ["must be >= 0"]},
                ),
                "adjust_elective_days",
                user.id,
            )

        updated = user.model_copy(update={"available_elective_days": new_amount})
        self._logger.info(
            f"adjust_elective_days: {user.id} {user.available_elective_days} -> {new_amount}"
        )
        return ServiceResult.success(updated, metadata={"previous": user.available_elective_days})
