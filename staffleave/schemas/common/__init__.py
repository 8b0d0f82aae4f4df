from staffleave.schemas.common.base import BaseSchema, FrozenSchema
from staffleave.schemas.common.enums import (
    BlockReasonCode,
    ContractType,
    Permission,
    RequestCategory,
    RequestStatus,
    RequestType,
    Role,
    Shift,
    SignatureSlot,
    WorkflowAction,
)

__all__ = [
    "BaseSchema",
    "FrozenSchema",
    "BlockReasonCode",
    "ContractType",
    "Permission",
    "RequestCategory",
    "RequestStatus",
    "RequestType",
    "Role",
    "Shift",
    "SignatureSlot",
    "WorkflowAction",
]
