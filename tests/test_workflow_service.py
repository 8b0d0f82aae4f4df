from datetime import date

import pytest

from staffleave.core.exceptions import (
    ErrorCode,
    InvalidTransitionError,
    MissingReasonError,
    MissingSignatureError,
)
from staffleave.schemas.common.enums import (
    RequestStatus,
    RequestType,
    Role,
    SignatureSlot,
    WorkflowAction,
)
from staffleave.services.leave import RequestWorkflow, WorkflowService

from tests.conftest import NOW, build_request, build_user, signature_of


@pytest.fixture
def service(settings):
    return WorkflowService(settings)


@pytest.fixture
def swap(requester, colleague):
    return build_request(requester, RequestType.REGULAR_SWAP, covering_employee=colleague.name)


@pytest.fixture
def pending_leave(requester):
    return build_request(requester, RequestType.SCALE_LEAVE)


def test_initial_status_depends_on_category():
    assert RequestWorkflow.initial_status(RequestType.EXTRA_SWAP) is RequestStatus.WAITING_SUBSTITUTE
    assert RequestWorkflow.initial_status(RequestType.VACATION) is RequestStatus.PENDING
    assert RequestWorkflow.initial_status(RequestType.BIRTHDAY) is RequestStatus.PENDING


def test_terminal_states_allow_no_action():
    assert RequestWorkflow.allowed_actions(RequestStatus.APPROVED) == []
    assert RequestWorkflow.allowed_actions(RequestStatus.REJECTED) == []
    assert set(RequestWorkflow.allowed_actions(RequestStatus.PENDING)) == {
        WorkflowAction.MANAGER_APPROVE,
        WorkflowAction.MANAGER_REJECT,
    }


def test_swap_reaches_approval_with_all_signatures(swap, colleague, manager):
    confirmed = RequestWorkflow.confirm_substitute(swap, colleague, now=NOW)
    assert confirmed.status is RequestStatus.PENDING
    assert confirmed.signatures.substitute.name == "Ana Souza"
    assert confirmed.signatures.manager is None

    approved = RequestWorkflow.approve(confirmed, manager, now=NOW)
    assert approved.status is RequestStatus.APPROVED
    assert approved.signatures.requester == swap.signatures.requester
    assert approved.signatures.substitute == confirmed.signatures.substitute
    assert approved.signatures.manager.name == "Carla Gerente"
    assert approved.signatures.manager.role is Role.MANAGER


def test_substitute_decline_rejects_without_manager(service, swap, colleague):
    result = service.decline_substitute(swap, colleague, "unavailable")

    request = result.unwrap()
    assert request.status is RequestStatus.REJECTED
    assert request.admin_note == "unavailable"
    assert request.signatures.manager is None
    assert request.signatures.substitute is None
    assert result.metadata == {"previous_status": "Waiting Substitute"}


def test_approval_without_signature_leaves_request_untouched(service, pending_leave):
    unsigned_manager = build_user("m-2", "Paulo Chefe", role=Role.MANAGER, signed=False)

    result = service.approve(pending_leave, unsigned_manager)

    assert not result
    assert result.error_code is ErrorCode.MISSING_SIGNATURE
    assert pending_leave.status is RequestStatus.PENDING
    assert pending_leave.signatures.manager is None


def test_manager_cannot_act_on_waiting_swap(swap, manager):
    with pytest.raises(InvalidTransitionError):
        RequestWorkflow.approve(swap, manager)
    with pytest.raises(InvalidTransitionError):
        RequestWorkflow.reject(swap, manager, "no")


def test_terminal_requests_cannot_transition(pending_leave, manager):
    rejected = RequestWorkflow.reject(pending_leave, manager, "Understaffed")

    for action in WorkflowAction:
        with pytest.raises(InvalidTransitionError):
            RequestWorkflow.apply(rejected, action, manager, reason="again")


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_rejection_requires_reason(pending_leave, manager, reason):
    with pytest.raises(MissingReasonError):
        RequestWorkflow.reject(pending_leave, manager, reason)


def test_decline_requires_reason(swap, colleague):
    with pytest.raises(MissingReasonError):
        RequestWorkflow.decline_substitute(swap, colleague, None)


def test_only_named_substitute_can_answer(swap):
    stranger = build_user("u-3", "Bruno Lima")

    with pytest.raises(InvalidTransitionError):
        RequestWorkflow.confirm_substitute(swap, stranger)
    with pytest.raises(InvalidTransitionError):
        RequestWorkflow.decline_substitute(swap, stranger, "busy")


def test_substitute_name_matches_ignoring_case(requester):
    request = build_request(requester, RequestType.EXTRA_SWAP, covering_employee="ana souza")
    substitute = build_user("u-2", "Ana Souza")

    assert RequestWorkflow.confirm_substitute(request, substitute).status is RequestStatus.PENDING


def test_unsigned_substitute_cannot_confirm(requester):
    request = build_request(requester, covering_employee="Ana Souza")
    unsigned = build_user("u-2", "Ana Souza", signed=False)

    with pytest.raises(MissingSignatureError):
        RequestWorkflow.confirm_substitute(request, unsigned)


def test_unsigned_substitute_can_still_decline(requester):
    request = build_request(requester, covering_employee="Ana Souza")
    unsigned = build_user("u-2", "Ana Souza", signed=False)

    declined = RequestWorkflow.decline_substitute(request, unsigned, "on leave")

    assert declined.status is RequestStatus.REJECTED


def test_approval_note_is_recorded(pending_leave, manager):
    approved = RequestWorkflow.approve(pending_leave, manager, note="Enjoy")

    assert approved.admin_note == "Enjoy"


def test_signed_slots_are_never_overwritten(pending_leave, colleague):
    signed = pending_leave.signatures.attach(SignatureSlot.SUBSTITUTE, signature_of(colleague))

    with pytest.raises(ValueError):
        signed.attach(SignatureSlot.SUBSTITUTE, signature_of(colleague))
    assert pending_leave.signatures.substitute is None


def test_delete_request_returns_remaining(service, requester):
    first = build_request(requester, day=date(2024, 3, 12))
    second = build_request(requester, day=date(2024, 3, 13))

    result = service.delete_request([first, second], first.id)

    assert result.unwrap() == [second]


def test_delete_unknown_request_is_not_found(service, requester):
    result = service.delete_request([build_request(requester)], "missing")

    assert result.error_code is ErrorCode.RESOURCE_NOT_FOUND


def test_substitute_inbox(requester, colleague):
    waiting = build_request(requester, covering_employee="Ana Souza")
    other = build_request(requester, covering_employee="Bruno Lima")
    leave = build_request(requester, RequestType.OTHER)
    answered = RequestWorkflow.confirm_substitute(
        build_request(requester, covering_employee="Ana Souza"), colleague
    )

    inbox = WorkflowService.pending_for_substitute([waiting, other, leave, answered], colleague)

    assert inbox == [waiting]
