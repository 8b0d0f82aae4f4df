"""
Request workflow state machine.

States:
    Waiting Substitute -> Pending | Rejected
    Pending            -> Approved | Rejected
    Approved, Rejected are terminal.

Every transition builds a new validated request; a refused transition
leaves the original untouched. Signature slots are write-once.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from staffleave.core.exceptions import (
    BaseAppException,
    InvalidTransitionError,
    MissingReasonError,
    MissingSignatureError,
    ResourceNotFoundError,
)
from staffleave.core.logging import bound_user, get_audit_logger
from staffleave.schemas.common.enums import (
    RequestStatus,
    RequestType,
    SignatureSlot,
    WorkflowAction,
)
from staffleave.schemas.request import LeaveRequest
from staffleave.schemas.user import SignatureData, User
from staffleave.services.base import BaseService, ServiceResult
from staffleave.utils.date_utils import now_utc

audit_logger = get_audit_logger()

TRANSITIONS: Dict[Tuple[RequestStatus, WorkflowAction], RequestStatus] = {
    (RequestStatus.WAITING_SUBSTITUTE, WorkflowAction.SUBSTITUTE_CONFIRM): RequestStatus.PENDING,
    (RequestStatus.WAITING_SUBSTITUTE, WorkflowAction.SUBSTITUTE_DECLINE): RequestStatus.REJECTED,
    (RequestStatus.PENDING, WorkflowAction.MANAGER_APPROVE): RequestStatus.APPROVED,
    (RequestStatus.PENDING, WorkflowAction.MANAGER_REJECT): RequestStatus.REJECTED,
}

# Slot filled by the actor of a signing action
SIGNED_SLOT: Dict[WorkflowAction, SignatureSlot] = {
    WorkflowAction.SUBSTITUTE_CONFIRM: SignatureSlot.SUBSTITUTE,
    WorkflowAction.MANAGER_APPROVE: SignatureSlot.MANAGER,
}

REASON_REQUIRED = frozenset({WorkflowAction.SUBSTITUTE_DECLINE, WorkflowAction.MANAGER_REJECT})

SUBSTITUTE_ACTIONS = frozenset({WorkflowAction.SUBSTITUTE_CONFIRM, WorkflowAction.SUBSTITUTE_DECLINE})


def is_named_substitute(request: LeaveRequest, user: User) -> bool:
    """Substitutes are matched by name, ignoring case."""
    return bool(request.covering_employee) and (
        request.covering_employee.strip().lower() == user.name.strip().lower()
    )


class RequestWorkflow:
    """Pure transition logic for a single request."""

    @staticmethod
    def initial_status(request_type: RequestType) -> RequestStatus:
        """Swaps wait for their substitute first; leaves go straight to the manager."""
        if request_type.is_swap:
            return RequestStatus.WAITING_SUBSTITUTE
        return RequestStatus.PENDING

    @staticmethod
    def allowed_actions(status: RequestStatus) -> List[WorkflowAction]:
        return [action for (state, action) in TRANSITIONS if state is status]

    @staticmethod
    def next_status(
        request: LeaveRequest,
        action: WorkflowAction,
    ) -> RequestStatus:
        try:
            return TRANSITIONS[(request.status, action)]
        except KeyError:
            raise InvalidTransitionError(
                request.status.value, action.value, request_id=request.id
            ) from None

    @classmethod
    def apply(
        cls,
        request: LeaveRequest,
        action: WorkflowAction,
        actor: User,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        """
        Apply `action` by `actor` and return the updated request.

        Raises:
            InvalidTransitionError: action not defined for the current status,
                or a substitute action by someone other than the named substitute
            MissingReasonError: rejection without a reason
            MissingSignatureError: signing action by an actor without a signature
        """
        new_status = cls.next_status(request, action)

        note = (reason or "").strip()
        if action in REASON_REQUIRED and not note:
            raise MissingReasonError(action.value, request.id)

        if action in SUBSTITUTE_ACTIONS and not is_named_substitute(request, actor):
            raise InvalidTransitionError(
                request.status.value,
                action.value,
                message="Only the named substitute can answer this request",
                request_id=request.id,
            )

        changes = {"status": new_status}
        slot = SIGNED_SLOT.get(action)
        if slot is not None:
            if not actor.has_signature:
                raise MissingSignatureError(actor.id, actor.name)
            signature = SignatureData.capture(actor, now or now_utc())
            try:
                changes["signatures"] = request.signatures.attach(slot, signature)
            except ValueError as e:
                raise InvalidTransitionError(
                    request.status.value, action.value, message=str(e), request_id=request.id
                ) from e
        if note:
            changes["admin_note"] = note

        updated = request.evolve(**changes)
        audit_logger.info(
            "request_transition",
            request_id=request.id,
            action=action.value,
            from_status=request.status.value,
            to_status=new_status.value,
            actor_id=actor.id,
        )
        return updated

    @classmethod
    def confirm_substitute(
        cls, request: LeaveRequest, substitute: User, now: Optional[datetime] = None
    ) -> LeaveRequest:
        return cls.apply(request, WorkflowAction.SUBSTITUTE_CONFIRM, substitute, now=now)

    @classmethod
    def decline_substitute(
        cls, request: LeaveRequest, substitute: User, reason: Optional[str]
    ) -> LeaveRequest:
        return cls.apply(request, WorkflowAction.SUBSTITUTE_DECLINE, substitute, reason=reason)

    @classmethod
    def approve(
        cls,
        request: LeaveRequest,
        approver: User,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        return cls.apply(request, WorkflowAction.MANAGER_APPROVE, approver, reason=note, now=now)

    @classmethod
    def reject(
        cls, request: LeaveRequest, manager: User, reason: Optional[str]
    ) -> LeaveRequest:
        return cls.apply(request, WorkflowAction.MANAGER_REJECT, manager, reason=reason)


class WorkflowService(BaseService):
    """
    Result-returning request workflow operations.

    Responsibilities:
    - Substitute confirmation and decline
    - Manager approval and rejection
    - Request deletion (quota is given back by recount)
    - Substitute inbox
    """

    def transition(
        self,
        request: LeaveRequest,
        action: WorkflowAction,
        actor: User,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ServiceResult[LeaveRequest]:
        operation = action.value
        with bound_user(actor.id):
            try:
                updated = RequestWorkflow.apply(request, action, actor, reason=reason, now=now)
            except BaseAppException as e:
                return self._handle_app_exception(e, operation, request.id)
        return ServiceResult.success(
            updated,
            message=f"Request {updated.status.value.lower()}",
            metadata={"previous_status": request.status.value},
        )

    def confirm_substitute(
        self, request: LeaveRequest, substitute: User, now: Optional[datetime] = None
    ) -> ServiceResult[LeaveRequest]:
        return self.transition(request, WorkflowAction.SUBSTITUTE_CONFIRM, substitute, now=now)

    def decline_substitute(
        self, request: LeaveRequest, substitute: User, reason: Optional[str]
    ) -> ServiceResult[LeaveRequest]:
        return self.transition(request, WorkflowAction.SUBSTITUTE_DECLINE, substitute, reason=reason)

    def approve(
        self,
        request: LeaveRequest,
        approver: User,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ServiceResult[LeaveRequest]:
        return self.transition(request, WorkflowAction.MANAGER_APPROVE, approver, reason=note, now=now)

    def reject(
        self, request: LeaveRequest, manager: User, reason: Optional[str]
    ) -> ServiceResult[LeaveRequest]:
        return self.transition(request, WorkflowAction.MANAGER_REJECT, manager, reason=reason)

    def delete_request(
        self,
        requests: Iterable[LeaveRequest],
        request_id: str,
    ) -> ServiceResult[List[LeaveRequest]]:
        """
        Remove a request from the set.

        Returns:
            ServiceResult with the remaining requests
        """
        requests = list(requests)
        remaining = [r for r in requests if r.id != request_id]
        if len(remaining) == len(requests):
            return self._handle_app_exception(
                ResourceNotFoundError("Request", request_id), "delete_request", request_id
            )
        self._logger.info(f"delete_request: {request_id} removed")
        return ServiceResult.success(remaining, message="Request deleted")

    @staticmethod
    def pending_for_substitute(
        requests: Iterable[LeaveRequest],
        user: User,
    ) -> List[LeaveRequest]:
        """Requests waiting for `user` to answer as substitute."""
        return [
            r
            for r in requests
            if r.status is RequestStatus.WAITING_SUBSTITUTE and is_named_substitute(r, user)
        ]
