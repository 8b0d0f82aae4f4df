"""
Schemas for the snapshots the engine reads and the results it produces.
"""

from staffleave.schemas.eligibility import (
    BlockReason,
    PenaltyStatus,
    QuotaUsage,
    VacationSlotUsage,
)
from staffleave.schemas.records import Absence, MedicalCertificate
from staffleave.schemas.request import LeaveRequest, SignatureBundle, YearMonth
from staffleave.schemas.settings import (
    ContractLimits,
    ContractLimitTable,
    ShiftQuotas,
    SystemSettings,
    VacationConfig,
    VacationQuotas,
    VacationWindow,
)
from staffleave.schemas.user import SignatureData, User

__all__ = [
    "BlockReason",
    "PenaltyStatus",
    "QuotaUsage",
    "VacationSlotUsage",
    "Absence",
    "MedicalCertificate",
    "LeaveRequest",
    "SignatureBundle",
    "YearMonth",
    "ContractLimits",
    "ContractLimitTable",
    "ShiftQuotas",
    "SystemSettings",
    "VacationConfig",
    "VacationQuotas",
    "VacationWindow",
    "SignatureData",
    "User",
]
