from datetime import date

import pytest

from staffleave.core.exceptions import ErrorCode
from staffleave.schemas.common.enums import RequestStatus, RequestType
from staffleave.schemas.request import YearMonth
from staffleave.services.base import ErrorSeverity
from staffleave.services.leave import BatchService, SubmissionService

from tests.conftest import NOW, absence, build_request, build_settings, build_user

TODAY = date(2024, 3, 5)


@pytest.fixture
def service(settings):
    return SubmissionService(settings)


def test_swap_submission_creates_waiting_requests(service, requester, directory):
    result = service.submit_dates(
        requester,
        RequestType.REGULAR_SWAP,
        [date(2024, 3, 12), date(2024, 3, 14)],
        users=directory,
        description="Course",
        covering_employee="ana souza",
        today=TODAY,
        now=NOW,
    )

    created = result.unwrap()
    assert result.message == "Request submitted. Awaiting approval."
    assert result.metadata == {"count": 2}
    assert [r.status for r in created] == [RequestStatus.WAITING_SUBSTITUTE] * 2
    assert {r.covering_employee for r in created} == {"Ana Souza"}


def test_leave_submission_needs_no_substitute(service, requester):
    result = service.submit_dates(
        requester, RequestType.SCALE_LEAVE, [date(2024, 3, 20)], today=TODAY, now=NOW
    )

    (request,) = result.unwrap()
    assert request.status is RequestStatus.PENDING
    assert request.covering_employee is None


def test_vacation_submission_is_month_granular(service, requester):
    result = service.submit_dates(
        requester,
        RequestType.VACATION,
        [],
        vacation_period=YearMonth(2024, 3),
        today=TODAY,
        now=NOW,
    )

    (request,) = result.unwrap()
    assert request.date_start == date(2024, 3, 1)


def test_requester_without_signature_is_refused(service):
    unsigned = build_user(signed=False)

    result = service.submit_dates(
        unsigned, RequestType.SCALE_LEAVE, [date(2024, 3, 20)], today=TODAY
    )

    assert result.error_code is ErrorCode.MISSING_SIGNATURE


def test_gate_is_checked_again_on_submit(requester):
    service = SubmissionService(build_settings(request_window_end=4))

    result = service.submit_dates(
        requester, RequestType.OTHER, [date(2024, 3, 20)], today=TODAY
    )

    assert result.error_code is ErrorCode.INELIGIBLE_SUBMISSION
    assert result.error.details["reason_code"] == "submission_window"


def test_swap_requires_substitute(service, requester, directory):
    result = service.submit_dates(
        requester, RequestType.EXTRA_SWAP, [date(2024, 3, 20)], users=directory, today=TODAY
    )

    assert result.error_code is ErrorCode.VALIDATION_ERROR
    assert result.error.details["field_errors"] == {"covering_employee": ["required"]}
    assert result.error.field == "covering_employee"
    assert result.error.severity is ErrorSeverity.WARNING


@pytest.mark.parametrize("name", ["Maria Silva", "Joao Santos", "Nobody"])
def test_swap_rejects_ineligible_substitute(service, requester, directory, name):
    result = service.submit_dates(
        requester,
        RequestType.EXTRA_SWAP,
        [date(2024, 3, 20)],
        users=directory,
        covering_employee=name,
        today=TODAY,
    )

    assert result.error_code is ErrorCode.VALIDATION_ERROR
    assert result.error.details["field_errors"] == {"covering_employee": ["not eligible"]}


def test_penalized_substitute_is_rejected(requester, colleague, directory):
    service = SubmissionService(build_settings(block_substitute_on_absence=True))

    result = service.submit_dates(
        requester,
        RequestType.REGULAR_SWAP,
        [date(2024, 3, 20)],
        users=directory,
        absences=[absence(colleague, date(2024, 3, 1))],
        covering_employee=colleague.name,
        today=TODAY,
    )

    assert result.error_code is ErrorCode.VALIDATION_ERROR


def test_quota_refusal_aborts_submission(service, requester, directory):
    existing = [build_request(requester, RequestType.SCALE_LEAVE, date(2024, 3, d)) for d in (6, 7)]

    result = service.submit_dates(
        requester,
        RequestType.SCALE_LEAVE,
        [date(2024, 3, 20)],
        requests=existing,
        today=TODAY,
    )

    assert result.error_code is ErrorCode.QUOTA_EXCEEDED


def test_submit_prebuilt_batch(settings, service, requester):
    batch = BatchService(settings).start(requester, RequestType.BIRTHDAY, today=TODAY)
    batch.add(date(2024, 5, 20))

    result = service.submit(batch, now=NOW)

    assert result.unwrap()[0].date_start == date(2024, 5, 20)


def test_empty_batch_is_a_validation_failure(settings, service, requester):
    batch = BatchService(settings).start(requester, RequestType.OTHER, today=TODAY)

    result = service.submit(batch)

    assert result.error_code is ErrorCode.VALIDATION_ERROR
