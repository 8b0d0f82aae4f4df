"""
Request submission.

Runs the creation-time rules in the order the requester meets them:
signature, eligibility gate, substitute, then batch expansion.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional

from staffleave.core.exceptions import (
    BaseAppException,
    MissingSignatureError,
    ValidationError,
)
from staffleave.schemas.common.enums import RequestType
from staffleave.schemas.records import Absence, MedicalCertificate
from staffleave.schemas.request import LeaveRequest, YearMonth
from staffleave.schemas.settings import SystemSettings
from staffleave.schemas.user import User
from staffleave.services.base import BaseService, ServiceResult
from staffleave.services.leave.batch_service import DateBatch
from staffleave.services.leave.eligibility_service import EligibilityService
from staffleave.services.leave.substitute_service import SubstituteService


class SubmissionService(BaseService):
    """
    Turns a completed date batch into new requests.

    Responsibilities:
    - Require the requester's registered signature
    - Re-run the eligibility gate at confirmation time
    - Require an eligible substitute for swaps
    - Expand the batch into one request per day (one for vacations)
    """

    def __init__(self, settings: SystemSettings):
        super().__init__(settings)
        self.eligibility = EligibilityService(settings)
        self.substitutes = SubstituteService(settings)

    def submit(
        self,
        batch: DateBatch,
        users: Iterable[User] = (),
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        description: str = "",
        covering_employee: Optional[str] = None,
        vacation_period: Optional[YearMonth] = None,
        now: Optional[datetime] = None,
    ) -> ServiceResult[List[LeaveRequest]]:
        """
        Validate and expand a batch.

        Args:
            batch: Dates selected by the requester
            users: User directory, used to validate the substitute
            certificates: All certificates
            absences: All absences
            description: Justification text
            covering_employee: Substitute name, required for swaps
            vacation_period: Selected vacation month
            now: Creation timestamp, defaults to the current UTC time

        Returns:
            ServiceResult containing the new requests
        """
        operation = "submit_requests"
        requester = batch.requester
        certificates = list(certificates)
        absences = list(absences)

        try:
            if not requester.has_signature:
                raise MissingSignatureError(requester.id, requester.name)

            self.eligibility.ensure_eligible(
                batch.request_type,
                requester,
                certificates,
                absences,
                today=batch.today,
                vacation_period=vacation_period,
            )

            if batch.request_type.is_swap:
                covering_employee = self._validate_substitute(
                    covering_employee, users, requester, certificates, absences, batch.today
                )

            created = batch.build_requests(
                description=description,
                covering_employee=covering_employee,
                vacation_period=vacation_period,
                now=now,
            )
        except BaseAppException as e:
            return self._handle_app_exception(e, operation, requester.id)
        except ValueError as e:
            return self._handle_exception(e, operation, requester.id)

        self._logger.info(
            f"{operation}: {len(created)} {batch.request_type.value} request(s) for {requester.id}"
        )
        return ServiceResult.success(
            created,
            message="Request submitted. Awaiting approval.",
            metadata={"count": len(created)},
        )

    def submit_dates(
        self,
        requester: User,
        request_type: RequestType,
        dates: Iterable[date],
        requests: Iterable[LeaveRequest] = (),
        users: Iterable[User] = (),
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        description: str = "",
        covering_employee: Optional[str] = None,
        vacation_period: Optional[YearMonth] = None,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> ServiceResult[List[LeaveRequest]]:
        """Build a batch from `dates` and submit it; the first refused day aborts."""
        batch = DateBatch(self.settings, requester, request_type, requests, today)
        if request_type is not RequestType.VACATION:
            try:
                for day in dates:
                    batch.add(day)
            except BaseAppException as e:
                return self._handle_app_exception(e, "submit_dates", requester.id)

        return self.submit(
            batch,
            users=users,
            certificates=certificates,
            absences=absences,
            description=description,
            covering_employee=covering_employee,
            vacation_period=vacation_period,
            now=now,
        )

    def _validate_substitute(
        self,
        covering_employee: Optional[str],
        users: Iterable[User],
        requester: User,
        certificates: List[MedicalCertificate],
        absences: List[Absence],
        today: date,
    ) -> str:
        if not covering_employee or not covering_employee.strip():
            raise ValidationError(
                "A substitute is required for swap requests",
                field_errors={"covering_employee": ["required"]},
            )
        substitute = self.substitutes.find_eligible(
            covering_employee, users, requester, certificates, absences, today
        )
        if substitute is None:
            raise ValidationError(
                f"{covering_employee} is not an eligible substitute",
                field_errors={"covering_employee": ["not eligible"]},
            )
        return substitute.name
