"""
Unit-wide rule configuration.

`SystemSettings` is loaded once, treated as read-only and injected into
every rule service. It is only ever replaced wholesale by an
administrative save.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import ConfigDict, Field, model_validator

from staffleave.schemas.common.base import FrozenSchema
from staffleave.schemas.common.enums import ContractType, Role, Shift
from staffleave.utils.date_utils import today

__all__ = [
    "ContractLimits",
    "ContractLimitTable",
    "VacationWindow",
    "ShiftQuotas",
    "VacationQuotas",
    "VacationConfig",
    "SystemSettings",
]


class ContractLimits(FrozenSchema):
    """Monthly ceilings for the quota-bearing request types."""

    max_scale_leaves: int = Field(..., ge=0)
    max_regular_swaps: int = Field(..., ge=0)
    max_extra_swaps: int = Field(..., ge=0)


class ContractLimitTable(FrozenSchema):
    """Ceilings per contract type."""

    statutory: ContractLimits = ContractLimits(
        max_scale_leaves=2, max_regular_swaps=3, max_extra_swaps=10
    )
    temporary: ContractLimits = ContractLimits(
        max_scale_leaves=2, max_regular_swaps=3, max_extra_swaps=13
    )

    def for_contract(self, contract_type: ContractType) -> ContractLimits:
        if contract_type is ContractType.STATUTORY:
            return self.statutory
        if contract_type is ContractType.TEMPORARY:
            return self.temporary
        raise ValueError(f"Unsupported contract type: {contract_type}")


class VacationWindow(FrozenSchema):
    """Vacation month currently open for requests and the days it is open."""

    year: int = Field(..., ge=2000, le=9999)
    month: int = Field(..., ge=1, le=12)
    start_day: int = Field(default=1, ge=1, le=31)
    end_day: int = Field(default=10, ge=1, le=31)

    @model_validator(mode="after")
    def validate_days(self) -> "VacationWindow":
        if self.end_day < self.start_day:
            raise ValueError("end_day must be on or after start_day")
        return self


class ShiftQuotas(FrozenSchema):
    """Vacation slots per shift."""

    day_a: int = Field(default=4, ge=0)
    night_a: int = Field(default=4, ge=0)
    day_b: int = Field(default=4, ge=0)
    night_b: int = Field(default=4, ge=0)

    def for_shift(self, shift: Shift) -> Optional[int]:
        return {
            Shift.DAY_A: self.day_a,
            Shift.NIGHT_A: self.night_a,
            Shift.DAY_B: self.day_b,
            Shift.NIGHT_B: self.night_b,
            Shift.DAY_WORKER: None,
        }[shift]


class VacationQuotas(FrozenSchema):
    """Vacation slots for the rostered roles."""

    nurses: ShiftQuotas = ShiftQuotas()
    techs: ShiftQuotas = ShiftQuotas()

    def for_role(self, role: Role) -> Optional[ShiftQuotas]:
        return {
            Role.NURSE: self.nurses,
            Role.TECH: self.techs,
            Role.ADMIN: None,
            Role.MANAGER: None,
            Role.ADMIN_ASSISTANT: None,
        }[role]


def _current_window() -> VacationWindow:
    current = today()
    return VacationWindow(year=current.year, month=current.month)


class VacationConfig(FrozenSchema):
    open_window: VacationWindow = Field(default_factory=_current_window)
    quotas: VacationQuotas = VacationQuotas()


class SystemSettings(FrozenSchema):
    """
    Rule configuration consumed read-only by the engine.

    Defaults reproduce a freshly installed unit: leave requests open on
    days 1 to 10, no swap freeze, penalties disabled with 30-day windows,
    and retroactive dates blocked for both swaps and leaves.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "request_window_start": 1,
                "request_window_end": 10,
                "global_swap_block_until": None,
                "block_leaves_on_certificate": True,
                "penalty_certificate_days": 30,
            }
        }
    )

    request_window_start: int = Field(default=1, ge=1, le=31)
    request_window_end: int = Field(default=10, ge=1, le=31)
    global_swap_block_until: Optional[Date] = Field(
        None,
        description="Swaps are frozen while today is before this date",
    )

    limits: ContractLimitTable = ContractLimitTable()

    # Requester penalties by certificate
    block_extra_swap_on_certificate: bool = False
    block_leaves_on_certificate: bool = False
    penalty_certificate_days: int = Field(default=30, ge=0)

    # Substitute penalty by certificate
    block_substitute_on_certificate: bool = False
    penalty_substitute_certificate_days: int = Field(default=30, ge=0)

    # Requester penalties by absence
    block_regular_swap_on_absence: bool = False
    block_leaves_on_absence: bool = False
    penalty_absence_days: int = Field(default=30, ge=0)

    # Substitute penalty by absence
    block_substitute_on_absence: bool = False
    penalty_substitute_absence_days: int = Field(default=30, ge=0)

    block_retroactive_swaps: bool = True
    block_retroactive_leaves: bool = True

    vacation_config: VacationConfig = Field(default_factory=VacationConfig)

    system_name: str = "Staff Leave"
    support_contact: Optional[str] = None

    @model_validator(mode="after")
    def validate_request_window(self) -> "SystemSettings":
        if self.request_window_end < self.request_window_start:
            raise ValueError("request_window_end must be on or after request_window_start")
        return self
