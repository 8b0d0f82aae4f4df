"""
Request schemas.

A `LeaveRequest` is never edited in place: the workflow builds a new,
fully validated instance for every transition so that the status and
the signature bundle can never disagree.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Any, Dict, NamedTuple, Optional

from pydantic import ConfigDict, Field, model_validator

from staffleave.schemas.common.base import FrozenSchema
from staffleave.schemas.common.enums import RequestStatus, RequestType, Role, SignatureSlot
from staffleave.schemas.user import SignatureData

__all__ = [
    "YearMonth",
    "SignatureBundle",
    "LeaveRequest",
]


class YearMonth(NamedTuple):
    """Calendar month selected for a vacation request."""

    year: int
    month: int

    @classmethod
    def of(cls, d: Date) -> "YearMonth":
        return cls(d.year, d.month)


class SignatureBundle(FrozenSchema):
    """Requester, substitute and manager signature slots."""

    requester: Optional[SignatureData] = None
    substitute: Optional[SignatureData] = None
    manager: Optional[SignatureData] = None

    def get(self, slot: SignatureSlot) -> Optional[SignatureData]:
        return getattr(self, slot.value)

    def is_signed(self, slot: SignatureSlot) -> bool:
        return self.get(slot) is not None

    def attach(self, slot: SignatureSlot, signature: SignatureData) -> "SignatureBundle":
        """Return a bundle with `slot` filled. A filled slot is never replaced."""
        if self.is_signed(slot):
            raise ValueError(f"Signature slot '{slot.value}' is already signed")
        return self.model_copy(update={slot.value: signature})


class LeaveRequest(FrozenSchema):
    """Time-off or shift-coverage request."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "5b0e3c0e-8f0a-4c55-9a53-0c7b8a3a2f10",
                "user_id": "u-002",
                "user_name": "Maria Silva",
                "user_role": "Nurse",
                "request_type": "Regular Swap",
                "date_start": "2024-03-12",
                "description": "Medical appointment",
                "covering_employee": "Ana Souza",
                "status": "Waiting Substitute",
                "created_at": "2024-03-05T10:00:00Z",
            }
        }
    )

    id: str = Field(..., min_length=1)
    user_id: str
    user_name: str
    user_role: Role
    request_type: RequestType
    date_start: Date = Field(
        ...,
        description="Requested day; for vacations the first day of the month",
    )
    description: str = ""
    status: RequestStatus
    created_at: datetime
    covering_employee: Optional[str] = Field(
        None,
        description="Name of the substitute covering a swap",
    )
    admin_note: Optional[str] = None
    signatures: SignatureBundle = Field(
        ...,
        description="Requester, substitute and manager signature snapshots",
    )

    @model_validator(mode="after")
    def validate_signatures_match_status(self) -> "LeaveRequest":
        """
        Ensure the signature bundle agrees with the status.

        - Every request carries the requester signature
        - Approved requests carry a manager signature
        - Pending and approved swaps carry the substitute signature
        - Requests waiting for a substitute carry no substitute or manager signature
        - Pending requests carry no manager signature
        """
        bundle = self.signatures
        if bundle.requester is None:
            raise ValueError("A request must carry the requester signature")
        if self.status is RequestStatus.APPROVED and bundle.manager is None:
            raise ValueError("An approved request must carry a manager signature")
        if self.status is RequestStatus.WAITING_SUBSTITUTE and (
            bundle.substitute is not None or bundle.manager is not None
        ):
            raise ValueError("A request waiting for a substitute cannot be countersigned")
        if self.status is RequestStatus.PENDING and bundle.manager is not None:
            raise ValueError("A pending request cannot carry a manager signature")
        if (
            self.request_type.is_swap
            and self.status in (RequestStatus.PENDING, RequestStatus.APPROVED)
            and bundle.substitute is None
        ):
            raise ValueError("A confirmed swap must carry the substitute signature")
        return self

    @property
    def year_month(self) -> YearMonth:
        return YearMonth.of(self.date_start)

    def evolve(self, **changes: Any) -> "LeaveRequest":
        """Return a validated copy with `changes` applied."""
        data: Dict[str, Any] = dict(self)
        data.update(changes)
        return LeaveRequest.model_validate(data)
