"""
Penalty window resolution.

Only the most recent trigger record matters: earlier absences or
certificates are superseded, never accumulated.
"""

from datetime import date
from typing import Iterable, Optional, Protocol, TypeVar

from staffleave.core.logging import get_logger
from staffleave.schemas.eligibility import PenaltyStatus
from staffleave.utils.date_utils import add_days

logger = get_logger(__name__)


class PenaltyTrigger(Protocol):
    user_id: str

    @property
    def trigger_date(self) -> date: ...


TTrigger = TypeVar("TTrigger", bound=PenaltyTrigger)


class PenaltyService:
    """Resolves whether a penalty window is active."""

    @staticmethod
    def latest(records: Iterable[TTrigger]) -> Optional[TTrigger]:
        """Return the record with the latest trigger date, if any."""
        return max(records, key=lambda r: r.trigger_date, default=None)

    @classmethod
    def resolve(
        cls,
        records: Iterable[PenaltyTrigger],
        today: date,
        penalty_days: int,
    ) -> PenaltyStatus:
        """
        Resolve the penalty window anchored to the most recent record.

        Args:
            records: Absences or certificates of one person
            today: Reference date
            penalty_days: Window length in days

        Returns:
            PenaltyStatus; blocked while today is before the release date
        """
        record = cls.latest(records)
        if record is None:
            return PenaltyStatus()

        release_date = add_days(record.trigger_date, penalty_days)
        status = PenaltyStatus(
            blocked=today < release_date,
            release_date=release_date,
            trigger_date=record.trigger_date,
        )
        logger.debug(
            f"penalty window resolved: trigger={status.trigger_date} "
            f"release={status.release_date} blocked={status.blocked}"
        )
        return status

    @classmethod
    def for_user(
        cls,
        records: Iterable[PenaltyTrigger],
        user_id: str,
        today: date,
        penalty_days: int,
    ) -> PenaltyStatus:
        """Resolve the window using only the records that belong to `user_id`."""
        return cls.resolve(
            (r for r in records if r.user_id == user_id),
            today,
            penalty_days,
        )
