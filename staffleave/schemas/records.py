"""
Absence and medical certificate records.

Both are penalty triggers; `trigger_date` is the date a penalty window is
anchored to.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import Field, model_validator

from staffleave.schemas.common.base import BaseSchema
from staffleave.utils.date_utils import add_days

__all__ = [
    "Absence",
    "MedicalCertificate",
]


class Absence(BaseSchema):
    """Unjustified no-show."""

    id: str
    user_id: str
    user_name: str = ""
    date: Date

    @property
    def trigger_date(self) -> Date:
        return self.date


class MedicalCertificate(BaseSchema):
    """Medical leave covering `days` days from `date_start`."""

    id: str
    user_id: str
    user_name: str = ""
    date_start: Date
    days: int = Field(..., ge=1)
    date_end: Optional[Date] = Field(
        None,
        description="Last covered day; derived as date_start + days - 1",
    )

    @model_validator(mode="before")
    @classmethod
    def derive_date_end(cls, data):
        if isinstance(data, dict) and data.get("date_end") is None:
            start = data.get("date_start")
            days = data.get("days")
            if isinstance(start, str):
                start = Date.fromisoformat(start)
            if isinstance(start, Date) and isinstance(days, int) and days >= 1:
                data = {**data, "date_end": add_days(start, days - 1)}
        return data

    @model_validator(mode="after")
    def validate_date_end(self) -> "MedicalCertificate":
        expected = add_days(self.date_start, self.days - 1)
        if self.date_end != expected:
            raise ValueError(
                f"date_end ({self.date_end}) must equal date_start + days - 1 ({expected})"
            )
        return self

    @property
    def trigger_date(self) -> Date:
        return self.date_end
