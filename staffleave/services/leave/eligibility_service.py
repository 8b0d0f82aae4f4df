"""
Eligibility gate for new requests.

Handles:
- Monthly submission window for leaves, vacation open window
- Global swap freeze
- Certificate and absence penalties for the requester

Checks run in a fixed order and the first failing one is reported, so a
requester only ever sees one reason at a time. Nothing is cached: every
call re-evaluates the current inputs.
"""

from datetime import date
from typing import Iterable, List, Optional

from staffleave.core.exceptions import BaseAppException, IneligibleSubmissionError
from staffleave.schemas.common.enums import BlockReasonCode, RequestType
from staffleave.schemas.eligibility import BlockReason
from staffleave.schemas.records import Absence, MedicalCertificate
from staffleave.schemas.request import YearMonth
from staffleave.schemas.user import User
from staffleave.services.base import BaseService, ServiceResult
from staffleave.services.leave.penalty_service import PenaltyService
from staffleave.utils.date_utils import format_date, month_label


class EligibilityService(BaseService):
    """
    Decides whether a request type may be submitted today.

    Responsibilities:
    - Evaluate the ordered rule chain for one request type
    - Report the first blocking reason with its release date or window
    """

    def evaluate(
        self,
        request_type: RequestType,
        requester: User,
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        today: Optional[date] = None,
        vacation_period: Optional[YearMonth] = None,
    ) -> Optional[BlockReason]:
        """
        Run the rule chain and return the first blocking reason.

        Args:
            request_type: Type being requested
            requester: User submitting the request
            certificates: Certificates (only the requester's are considered)
            absences: Absences (only the requester's are considered)
            today: Reference date, defaults to the local date
            vacation_period: Selected vacation month; defaults to today's month

        Returns:
            None when eligible, otherwise the BlockReason
        """
        today = self._resolve_today(today)
        own_certificates = [c for c in certificates if c.user_id == requester.id]
        own_absences = [a for a in absences if a.user_id == requester.id]

        checks = (
            lambda: self._check_submission_window(request_type, today, vacation_period),
            lambda: self._check_swap_freeze(request_type, today),
            lambda: self._check_certificate_penalty(request_type, own_certificates, today),
            lambda: self._check_absence_penalty(request_type, own_absences, today),
        )
        for check in checks:
            reason = check()
            if reason is not None:
                self._logger.debug(
                    f"{request_type.value} blocked for {requester.id}: {reason.code.value}"
                )
                return reason
        return None

    def get_blocking_reason(
        self,
        request_type: RequestType,
        requester: User,
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        today: Optional[date] = None,
        vacation_period: Optional[YearMonth] = None,
    ) -> Optional[str]:
        """Human-readable reason, or None when the request type is allowed."""
        reason = self.evaluate(
            request_type, requester, certificates, absences, today, vacation_period
        )
        return reason.message if reason else None

    def ensure_eligible(
        self,
        request_type: RequestType,
        requester: User,
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        today: Optional[date] = None,
        vacation_period: Optional[YearMonth] = None,
    ) -> None:
        """
        Raise IneligibleSubmissionError when the gate blocks the request type.
        """
        reason = self.evaluate(
            request_type, requester, certificates, absences, today, vacation_period
        )
        if reason is not None:
            raise IneligibleSubmissionError(
                reason.message,
                reason_code=reason.code.value,
                release_date=reason.release_date,
                window=reason.window,
            )

    def check(
        self,
        request_type: RequestType,
        requester: User,
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        today: Optional[date] = None,
        vacation_period: Optional[YearMonth] = None,
    ) -> ServiceResult[None]:
        """Result-returning form of `ensure_eligible`."""
        try:
            self.ensure_eligible(
                request_type, requester, certificates, absences, today, vacation_period
            )
        except BaseAppException as e:
            return self._handle_app_exception(e, "check_eligibility", requester.id)
        return ServiceResult.success(message="Eligible")

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def _check_submission_window(
        self,
        request_type: RequestType,
        today: date,
        vacation_period: Optional[YearMonth],
    ) -> Optional[BlockReason]:
        if request_type.is_swap:
            return None

        if request_type is RequestType.VACATION:
            window = self.settings.vacation_config.open_window
            selected = vacation_period or YearMonth.of(today)
            if (
                (window.year, window.month) != tuple(selected)
                or not window.start_day <= today.day <= window.end_day
            ):
                return BlockReason(
                    code=BlockReasonCode.VACATION_WINDOW,
                    message=(
                        "Vacation requests are closed. The window is open only from "
                        f"day {window.start_day} to day {window.end_day} for "
                        f"{month_label(window.year, window.month)}."
                    ),
                    window={
                        "year": window.year,
                        "month": window.month,
                        "start_day": window.start_day,
                        "end_day": window.end_day,
                    },
                )
            return None

        start = self.settings.request_window_start
        end = self.settings.request_window_end
        if not start <= today.day <= end:
            return BlockReason(
                code=BlockReasonCode.SUBMISSION_WINDOW,
                message=(
                    f"Leave requests are only accepted between day {start} "
                    f"and day {end} of each month."
                ),
                window={"start_day": start, "end_day": end},
            )
        return None

    def _check_swap_freeze(
        self,
        request_type: RequestType,
        today: date,
    ) -> Optional[BlockReason]:
        freeze_until = self.settings.global_swap_block_until
        if request_type.is_swap and freeze_until is not None and today < freeze_until:
            return BlockReason(
                code=BlockReasonCode.SWAP_FREEZE,
                message=(
                    "Swaps are temporarily frozen by the administration "
                    f"until {format_date(freeze_until)}."
                ),
                release_date=freeze_until,
            )
        return None

    def _check_certificate_penalty(
        self,
        request_type: RequestType,
        certificates: List[MedicalCertificate],
        today: date,
    ) -> Optional[BlockReason]:
        s = self.settings
        if request_type is RequestType.EXTRA_SWAP and s.block_extra_swap_on_certificate:
            code, subject = BlockReasonCode.CERTIFICATE_EXTRA_SWAP, "Extra Swap"
        elif not request_type.is_swap and s.block_leaves_on_certificate:
            code, subject = BlockReasonCode.CERTIFICATE_LEAVE, "Leaves"
        else:
            return None

        status = PenaltyService.resolve(certificates, today, s.penalty_certificate_days)
        if not status.blocked:
            return None
        return BlockReason(
            code=code,
            message=(
                f"{subject} blocked due to a recent medical certificate. "
                f"Released on {format_date(status.release_date)}."
            ),
            release_date=status.release_date,
        )

    def _check_absence_penalty(
        self,
        request_type: RequestType,
        absences: List[Absence],
        today: date,
    ) -> Optional[BlockReason]:
        s = self.settings
        if request_type is RequestType.REGULAR_SWAP and s.block_regular_swap_on_absence:
            code, subject = BlockReasonCode.ABSENCE_REGULAR_SWAP, "Regular Swap"
        elif not request_type.is_swap and s.block_leaves_on_absence:
            code, subject = BlockReasonCode.ABSENCE_LEAVE, "Leaves"
        else:
            return None

        status = PenaltyService.resolve(absences, today, s.penalty_absence_days)
        if not status.blocked:
            return None
        return BlockReason(
            code=code,
            message=(
                f"{subject} blocked due to a recent absence. "
                f"Released on {format_date(status.release_date)}."
            ),
            release_date=status.release_date,
        )
