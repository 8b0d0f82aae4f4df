"""
Substitute candidate filtering for swap requests.
"""

from datetime import date
from typing import Iterable, List, Optional

from staffleave.schemas.records import Absence, MedicalCertificate
from staffleave.schemas.user import User
from staffleave.services.base import BaseService
from staffleave.services.leave.penalty_service import PenaltyService


class SubstituteService(BaseService):
    """
    Builds the set of colleagues who may cover a requester's shift.

    Candidates share the requester's role, are not the requester, and are
    not inside an active substitute penalty window.
    """

    def eligible_substitutes(
        self,
        users: Iterable[User],
        requester: User,
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        today: Optional[date] = None,
    ) -> List[User]:
        """
        Return every eligible substitute, in directory order.

        Args:
            users: Full user directory
            requester: User asking for coverage
            certificates: All certificates
            absences: All absences
            today: Reference date, defaults to the local date
        """
        today = self._resolve_today(today)
        certificates = list(certificates)
        absences = list(absences)

        eligible = [
            candidate
            for candidate in users
            if candidate.id != requester.id
            and candidate.role is requester.role
            and not self._is_penalized(candidate, certificates, absences, today)
        ]
        self._logger.debug(
            f"{len(eligible)} eligible substitutes for {requester.id}"
        )
        return eligible

    def search(
        self,
        users: Iterable[User],
        requester: User,
        term: str = "",
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        today: Optional[date] = None,
    ) -> List[User]:
        """
        Narrow the eligible set by case-insensitive name substring.

        The search only filters eligible candidates; it never brings back
        someone the penalty rules excluded.
        """
        eligible = self.eligible_substitutes(users, requester, certificates, absences, today)
        needle = (term or "").strip().lower()
        if not needle:
            return eligible
        return [u for u in eligible if needle in u.name.lower()]

    def find_eligible(
        self,
        name: str,
        users: Iterable[User],
        requester: User,
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        today: Optional[date] = None,
    ) -> Optional[User]:
        """Return the eligible substitute whose name matches exactly, ignoring case."""
        wanted = (name or "").strip().lower()
        for candidate in self.eligible_substitutes(users, requester, certificates, absences, today):
            if candidate.name.lower() == wanted:
                return candidate
        return None

    def is_eligible_substitute(
        self,
        name: str,
        users: Iterable[User],
        requester: User,
        certificates: Iterable[MedicalCertificate] = (),
        absences: Iterable[Absence] = (),
        today: Optional[date] = None,
    ) -> bool:
        return self.find_eligible(name, users, requester, certificates, absences, today) is not None

    def _is_penalized(
        self,
        candidate: User,
        certificates: List[MedicalCertificate],
        absences: List[Absence],
        today: date,
    ) -> bool:
        s = self.settings
        if s.block_substitute_on_certificate:
            status = PenaltyService.for_user(
                certificates, candidate.id, today, s.penalty_substitute_certificate_days
            )
            if status.blocked:
                return True
        if s.block_substitute_on_absence:
            status = PenaltyService.for_user(
                absences, candidate.id, today, s.penalty_substitute_absence_days
            )
            if status.blocked:
                return True
        return False
