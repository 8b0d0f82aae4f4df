"""
Quota calculation for monthly request ceilings.

Usage is always recounted from the live request set: deleting a request
gives its unit back without any counter to maintain.
"""

from typing import Dict, Iterable, List, Optional

from staffleave.schemas.common.enums import (
    ContractType,
    RequestStatus,
    RequestType,
    Role,
    Shift,
)
from staffleave.schemas.eligibility import QuotaUsage, VacationSlotUsage
from staffleave.schemas.request import LeaveRequest
from staffleave.schemas.settings import ContractLimits
from staffleave.schemas.user import User
from staffleave.services.base import BaseService

# Which ContractLimits field bounds each request type; None means unbounded.
LIMIT_FIELDS: Dict[RequestType, Optional[str]] = {
    RequestType.REGULAR_SWAP: "max_regular_swaps",
    RequestType.EXTRA_SWAP: "max_extra_swaps",
    RequestType.SCALE_LEAVE: "max_scale_leaves",
    RequestType.ELECTIVE_LEAVE: None,
    RequestType.BIRTHDAY: None,
    RequestType.VACATION: None,
    RequestType.OTHER: None,
}

QUOTA_TYPES = tuple(t for t, field in LIMIT_FIELDS.items() if field is not None)


class QuotaService(BaseService):
    """
    Counts monthly usage and resolves the applicable ceilings.

    Responsibilities:
    - Count a user's non-rejected requests of a type in a month
    - Map contract type and request type to a ceiling
    - Summarize usage for the quota-bearing types
    - Report vacation slot usage per role and shift
    """

    @staticmethod
    def count_usage(
        requests: Iterable[LeaveRequest],
        user_id: str,
        request_type: RequestType,
        year: int,
        month: int,
    ) -> int:
        """
        Count the user's requests of `request_type` starting in year/month.

        Rejected requests never count.
        """
        return sum(
            1
            for r in requests
            if r.user_id == user_id
            and r.request_type is request_type
            and r.status is not RequestStatus.REJECTED
            and r.date_start.year == year
            and r.date_start.month == month
        )

    def get_limits(self, contract_type: ContractType) -> ContractLimits:
        return self.settings.limits.for_contract(contract_type)

    def get_ceiling(
        self,
        contract_type: ContractType,
        request_type: RequestType,
    ) -> Optional[int]:
        """Return the monthly ceiling, or None when the type has no ceiling."""
        field = LIMIT_FIELDS[request_type]
        if field is None:
            return None
        return getattr(self.get_limits(contract_type), field)

    def usage_summary(
        self,
        user: User,
        requests: Iterable[LeaveRequest],
        year: int,
        month: int,
    ) -> List[QuotaUsage]:
        """Usage against ceiling for every quota-bearing type in one month."""
        requests = list(requests)
        return [
            QuotaUsage(
                request_type=request_type,
                year=year,
                month=month,
                used=self.count_usage(requests, user.id, request_type, year, month),
                limit=self.get_ceiling(user.contract_type, request_type),
            )
            for request_type in QUOTA_TYPES
        ]

    def vacation_slot_usage(
        self,
        users: Iterable[User],
        requests: Iterable[LeaveRequest],
        role: Role,
        shift: Shift,
        year: int,
        month: int,
    ) -> VacationSlotUsage:
        """
        Count non-rejected vacations of staff with `role` and `shift` in a month.

        The limit comes from the vacation slot quotas and is None for roles
        or shifts that have no configured slots. Informational only.
        """
        member_ids = {u.id for u in users if u.role is role and u.shift is shift}
        used = sum(
            1
            for r in requests
            if r.user_id in member_ids
            and r.request_type is RequestType.VACATION
            and r.status is not RequestStatus.REJECTED
            and r.date_start.year == year
            and r.date_start.month == month
        )

        role_quotas = self.settings.vacation_config.quotas.for_role(role)
        limit = role_quotas.for_shift(shift) if role_quotas is not None else None

        return VacationSlotUsage(
            role=role,
            shift=shift,
            year=year,
            month=month,
            used=used,
            limit=limit,
        )
