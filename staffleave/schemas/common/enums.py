"""
Enumerations shared by the engine.

Every per-type rule dispatches on these closed sets; rule tables keyed by
them are checked for completeness in the test suite.
"""

from enum import Enum

__all__ = [
    "Role",
    "ContractType",
    "Shift",
    "RequestType",
    "RequestCategory",
    "RequestStatus",
    "Permission",
    "SignatureSlot",
    "WorkflowAction",
    "BlockReasonCode",
]


class Role(str, Enum):
    """Job roles of the unit's staff."""

    ADMIN = "Administrator"
    MANAGER = "Nursing Manager"
    NURSE = "Nurse"
    TECH = "Nursing Technician"
    ADMIN_ASSISTANT = "Administrative Assistant"


class ContractType(str, Enum):
    """Employment contract types."""

    STATUTORY = "Statutory"
    TEMPORARY = "Temporary"


class Shift(str, Enum):
    """Work shifts."""

    DAY_A = "Day A"
    NIGHT_A = "Night A"
    DAY_B = "Day B"
    NIGHT_B = "Night B"
    DAY_WORKER = "Day Worker"


class RequestCategory(str, Enum):
    """Swap requests need a substitute; leaves do not."""

    SWAP = "swap"
    LEAVE = "leave"


class RequestType(str, Enum):
    """Request type enumeration."""

    REGULAR_SWAP = "Regular Swap"
    EXTRA_SWAP = "Extra Swap"
    ELECTIVE_LEAVE = "Elective-Day Leave"
    SCALE_LEAVE = "Scale-Based Leave"
    BIRTHDAY = "Birthday Leave"
    VACATION = "Vacation"
    OTHER = "Other"

    @property
    def category(self) -> RequestCategory:
        if self in (RequestType.REGULAR_SWAP, RequestType.EXTRA_SWAP):
            return RequestCategory.SWAP
        return RequestCategory.LEAVE

    @property
    def is_swap(self) -> bool:
        return self.category is RequestCategory.SWAP


class RequestStatus(str, Enum):
    """Request workflow status."""

    WAITING_SUBSTITUTE = "Waiting Substitute"
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestStatus.APPROVED, RequestStatus.REJECTED)


class Permission(str, Enum):
    """Administrative permission flags."""

    MANAGE_REQUESTS = "Manage Requests"
    MANAGE_USERS = "Manage Users"
    MANAGE_RECORDS = "Manage Absences/Certificates/Elective Days"
    MANAGE_SETTINGS = "Manage Settings"


class SignatureSlot(str, Enum):
    """Signature slots of a request."""

    REQUESTER = "requester"
    SUBSTITUTE = "substitute"
    MANAGER = "manager"


class WorkflowAction(str, Enum):
    """Actions that move a request through its workflow."""

    SUBSTITUTE_CONFIRM = "substitute_confirm"
    SUBSTITUTE_DECLINE = "substitute_decline"
    MANAGER_APPROVE = "manager_approve"
    MANAGER_REJECT = "manager_reject"


class BlockReasonCode(str, Enum):
    """Why the eligibility gate refused a request type."""

    SUBMISSION_WINDOW = "submission_window"
    VACATION_WINDOW = "vacation_window"
    SWAP_FREEZE = "swap_freeze"
    CERTIFICATE_EXTRA_SWAP = "certificate_extra_swap"
    CERTIFICATE_LEAVE = "certificate_leave"
    ABSENCE_REGULAR_SWAP = "absence_regular_swap"
    ABSENCE_LEAVE = "absence_leave"
