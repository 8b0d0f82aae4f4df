"""
Staff member and signature snapshot schemas.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from staffleave.schemas.common.base import BaseSchema, FrozenSchema
from staffleave.schemas.common.enums import ContractType, Permission, Role, Shift

__all__ = [
    "User",
    "SignatureData",
]


class User(BaseSchema):
    """
    Staff member as supplied by the data-access layer.

    Only `signature_url` and `birth_date` are consulted by the workflow and
    birthday rules; the remaining attributes feed quotas and substitutes.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "u-002",
                "name": "Maria Silva",
                "username": "123456",
                "role": "Nurse",
                "contract_type": "Statutory",
                "available_elective_days": 2,
                "shift": "Day A",
                "birth_date": "1985-05-20",
            }
        }
    )

    id: str = Field(..., min_length=1, description="Unique user identifier")
    name: str = Field(..., min_length=1, description="Display name")
    username: str = Field(default="", description="Login name (council number or employee number)")
    role: Role = Field(..., description="Job role")
    contract_type: ContractType = Field(..., description="Contract type, selects the quota table")
    available_elective_days: int = Field(
        default=0,
        ge=0,
        description="Balance of elective leave days",
    )
    available_birthday: bool = Field(default=False)
    professional_id: Optional[str] = Field(None, description="Nursing council registration")
    employee_number: Optional[str] = Field(None, description="Internal employee number")
    shift: Optional[Shift] = None
    birth_date: Optional[date] = None
    email: Optional[str] = None
    contact: Optional[str] = None
    permissions: List[Permission] = Field(default_factory=list)
    signature_url: Optional[str] = Field(
        None,
        description="Reference to the registered signature image",
    )

    @field_validator("signature_url")
    @classmethod
    def blank_signature_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def has_signature(self) -> bool:
        return bool(self.signature_url)

    @property
    def identifier(self) -> str:
        """Registration shown next to the signature."""
        return self.professional_id or self.employee_number or ""


class SignatureData(FrozenSchema):
    """Who signed, in what role, with which identifier, when and with which image."""

    name: str
    role: Role
    identifier: str = ""
    signed_at: datetime
    signature_url: str = Field(..., min_length=1)

    @classmethod
    def capture(cls, user: User, signed_at: datetime) -> "SignatureData":
        """Snapshot the user's signature at `signed_at`."""
        return cls(
            name=user.name,
            role=user.role,
            identifier=user.identifier,
            signed_at=signed_at,
            signature_url=user.signature_url,
        )
