"""
Multi-date batch selection.

A requester may pick several days of one month in a single submission.
Each day becomes an independent request that consumes its own quota unit;
a vacation is month-granular and always becomes exactly one request.
"""

import uuid
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from staffleave.core.exceptions import (
    BaseAppException,
    CrossMonthBatchError,
    MissingSignatureError,
    QuotaExceededError,
    RetroactiveDateError,
    ValidationError,
)
from staffleave.core.logging import get_logger
from staffleave.schemas.common.enums import RequestType
from staffleave.schemas.request import LeaveRequest, SignatureBundle, YearMonth
from staffleave.schemas.settings import SystemSettings
from staffleave.schemas.user import SignatureData, User
from staffleave.services.base import BaseService, ServiceResult
from staffleave.services.leave.quota_service import QuotaService
from staffleave.services.leave.workflow_service import RequestWorkflow
from staffleave.utils.date_utils import first_of_month, month_label, now_utc, today as local_today

logger = get_logger(__name__)


class DateBatch:
    """
    Dates selected for one submission of a single request type.

    The batch holds a snapshot of the requester's persisted requests and
    re-checks the monthly ceiling every time a day is added.
    """

    def __init__(
        self,
        settings: SystemSettings,
        requester: User,
        request_type: RequestType,
        requests: Iterable[LeaveRequest] = (),
        today: Optional[date] = None,
    ):
        self.settings = settings
        self.requester = requester
        self.request_type = request_type
        self.requests = [r for r in requests if r.user_id == requester.id]
        self.today = today if today is not None else local_today()
        self._quota = QuotaService(settings)
        self._dates: List[date] = []

    @property
    def dates(self) -> Tuple[date, ...]:
        return tuple(self._dates)

    @property
    def month(self) -> Optional[YearMonth]:
        if not self._dates:
            return None
        return YearMonth.of(self._dates[0])

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, day: date) -> bool:
        return day in self._dates

    def is_retroactive_blocked(self, day: date) -> bool:
        """True when `day` is in the past and retroactive requests of this category are blocked."""
        if day >= self.today:
            return False
        if self.request_type.is_swap:
            return self.settings.block_retroactive_swaps
        return self.settings.block_retroactive_leaves

    def add(self, day: date) -> None:
        """
        Admit `day` into the batch.

        Raises:
            ValidationError: vacation batches are selected by month
            RetroactiveDateError: past day while retroactive requests are blocked
            CrossMonthBatchError: day belongs to another month than the batch
            QuotaExceededError: the day would exceed the monthly ceiling
        """
        if self.request_type is RequestType.VACATION:
            raise ValidationError("Vacation requests are selected by month, not by day")
        if day in self._dates:
            return
        if self.is_retroactive_blocked(day):
            raise RetroactiveDateError(day, self.today)

        month = self.month
        if month is not None and YearMonth.of(day) != month:
            raise CrossMonthBatchError(month_label(*month), day)

        limit = self._quota.get_ceiling(self.requester.contract_type, self.request_type)
        if limit is not None:
            used = self._quota.count_usage(
                self.requests, self.requester.id, self.request_type, day.year, day.month
            )
            selected = sum(1 for d in self._dates if YearMonth.of(d) == YearMonth.of(day))
            if used + selected + 1 > limit:
                raise QuotaExceededError(used, selected, limit, day.year, day.month)

        self._dates.append(day)
        self._dates.sort()

    def remove(self, day: date) -> None:
        """Drop `day` from the batch if it is selected."""
        if day in self._dates:
            self._dates.remove(day)

    def toggle(self, day: date) -> bool:
        """Add or remove `day`; returns True when the day ends up selected."""
        if day in self._dates:
            self.remove(day)
            return False
        self.add(day)
        return True

    def clear(self) -> None:
        self._dates.clear()

    def build_requests(
        self,
        description: str = "",
        covering_employee: Optional[str] = None,
        vacation_period: Optional[YearMonth] = None,
        now: Optional[datetime] = None,
    ) -> List[LeaveRequest]:
        """
        Expand the batch into new requests ready for persistence.

        One request per selected day, or a single request keyed to the first
        day of the vacation month. The requester's signature is attached to
        every request.

        Raises:
            MissingSignatureError: requester has no registered signature
            ValidationError: nothing selected for a non-vacation batch
        """
        if not self.requester.has_signature:
            raise MissingSignatureError(self.requester.id, self.requester.name)

        if self.request_type is RequestType.VACATION:
            period = vacation_period or YearMonth.of(self.today)
            days = [first_of_month(period.year, period.month)]
        else:
            if not self._dates:
                raise ValidationError("Select at least one day")
            days = list(self._dates)

        now = now or now_utc()
        signatures = SignatureBundle(requester=SignatureData.capture(self.requester, now))
        status = RequestWorkflow.initial_status(self.request_type)

        created = [
            LeaveRequest(
                id=str(uuid.uuid4()),
                user_id=self.requester.id,
                user_name=self.requester.name,
                user_role=self.requester.role,
                request_type=self.request_type,
                date_start=day,
                description=description,
                status=status,
                created_at=now,
                covering_employee=covering_employee or None,
                signatures=signatures,
            )
            for day in days
        ]
        logger.info(
            f"built {len(created)} {self.request_type.value} request(s) for {self.requester.id}"
        )
        return created


class BatchService(BaseService):
    """
    Result-returning access to date batches.
    """

    def start(
        self,
        requester: User,
        request_type: RequestType,
        requests: Iterable[LeaveRequest] = (),
        today: Optional[date] = None,
    ) -> DateBatch:
        """Open an empty batch over a snapshot of the persisted requests."""
        return DateBatch(self.settings, requester, request_type, requests, today)

    def add_date(self, batch: DateBatch, day: date) -> ServiceResult[Tuple[date, ...]]:
        """
        Add a day to the batch.

        Returns:
            ServiceResult with the selected days, or the rule that refused the day
        """
        try:
            batch.add(day)
        except BaseAppException as e:
            return self._handle_app_exception(e, "add_date", day.isoformat())
        return ServiceResult.success(batch.dates)
