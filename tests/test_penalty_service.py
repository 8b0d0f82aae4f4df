from datetime import date

from staffleave.services.leave import PenaltyService

from tests.conftest import absence, certificate


def test_no_records_never_blocks(requester):
    status = PenaltyService.resolve([], date(2024, 3, 20), 30)

    assert not status.blocked
    assert status.release_date is None


def test_certificate_window_anchored_to_end_date(requester):
    cert = certificate(requester, date(2024, 3, 1), 10)  # ends 2024-03-10

    blocked = PenaltyService.resolve([cert], date(2024, 3, 20), 30)
    released = PenaltyService.resolve([cert], date(2024, 4, 10), 30)

    assert blocked.blocked
    assert blocked.release_date == date(2024, 4, 9)
    assert blocked.trigger_date == date(2024, 3, 10)
    assert not released.blocked


def test_release_date_itself_is_not_blocked(requester):
    record = absence(requester, date(2024, 2, 1))

    assert PenaltyService.resolve([record], date(2024, 3, 1), 29).blocked is False
    assert PenaltyService.resolve([record], date(2024, 2, 29), 29).blocked is True


def test_only_latest_record_governs(requester):
    older = absence(requester, date(2024, 1, 1))
    newer = absence(requester, date(2024, 2, 25))

    status = PenaltyService.resolve([newer, older], date(2024, 3, 1), 3)

    assert status.trigger_date == date(2024, 2, 25)
    assert status.release_date == date(2024, 2, 28)
    assert not status.blocked


def test_penalties_do_not_accumulate(requester):
    records = [absence(requester, date(2024, 3, 1)), absence(requester, date(2024, 3, 5))]

    status = PenaltyService.resolve(records, date(2024, 3, 16), 10)

    assert status.release_date == date(2024, 3, 15)
    assert not status.blocked


def test_for_user_ignores_other_people(requester, colleague):
    records = [absence(colleague, date(2024, 3, 15))]

    assert not PenaltyService.for_user(records, requester.id, date(2024, 3, 20), 30).blocked
    assert PenaltyService.for_user(records, colleague.id, date(2024, 3, 20), 30).blocked
