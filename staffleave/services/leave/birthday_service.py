"""
Birthday leave eligibility.
"""

from datetime import date
from typing import Optional

from staffleave.schemas.user import User
from staffleave.utils.date_utils import previous_month, today as local_today


class BirthdayService:
    """Birthday leave may be requested during the month before the birthday month."""

    @staticmethod
    def eligible_month(birth_date: date) -> int:
        return previous_month(birth_date.month)

    @classmethod
    def is_eligible(cls, user: User, today: Optional[date] = None) -> bool:
        """True when the current month precedes the user's birth month."""
        if user.birth_date is None:
            return False
        today = today if today is not None else local_today()
        return today.month == cls.eligible_month(user.birth_date)
