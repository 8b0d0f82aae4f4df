"""
Result schemas produced by the eligibility rules.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Dict, Optional

from pydantic import Field

from staffleave.schemas.common.base import FrozenSchema
from staffleave.schemas.common.enums import BlockReasonCode, RequestType, Role, Shift

__all__ = [
    "PenaltyStatus",
    "BlockReason",
    "QuotaUsage",
    "VacationSlotUsage",
]


class PenaltyStatus(FrozenSchema):
    """Outcome of resolving a penalty window."""

    blocked: bool = False
    release_date: Optional[Date] = Field(
        None,
        description="First day the block no longer applies",
    )
    trigger_date: Optional[Date] = Field(
        None,
        description="Date of the record that governs the window",
    )


class BlockReason(FrozenSchema):
    """First rule that refused a request type."""

    code: BlockReasonCode
    message: str
    release_date: Optional[Date] = None
    window: Optional[Dict[str, int]] = None


class QuotaUsage(FrozenSchema):
    """Monthly usage of one quota-bearing request type."""

    request_type: RequestType
    year: int
    month: int
    used: int = Field(..., ge=0)
    limit: Optional[int] = Field(None, description="None when the type is unbounded")

    @property
    def remaining(self) -> Optional[int]:
        if self.limit is None:
            return None
        return max(self.limit - self.used, 0)

    @property
    def exhausted(self) -> bool:
        return self.limit is not None and self.used >= self.limit


class VacationSlotUsage(FrozenSchema):
    """Vacation requests of one role and shift against the configured slots."""

    role: Role
    shift: Shift
    year: int
    month: int
    used: int = Field(..., ge=0)
    limit: Optional[int] = None

    @property
    def available(self) -> Optional[int]:
        if self.limit is None:
            return None
        return max(self.limit - self.used, 0)
