from datetime import date, datetime, timezone
import uuid

import pytest

from staffleave.schemas import (
    Absence,
    LeaveRequest,
    MedicalCertificate,
    SignatureBundle,
    SignatureData,
    SystemSettings,
    User,
    VacationConfig,
    VacationWindow,
)
from staffleave.schemas.common.enums import (
    ContractType,
    Permission,
    RequestStatus,
    RequestType,
    Role,
    Shift,
)

NOW = datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)


def build_settings(**overrides) -> SystemSettings:
    values = {
        "vacation_config": VacationConfig(
            open_window=VacationWindow(year=2024, month=3, start_day=1, end_day=10)
        ),
    }
    values.update(overrides)
    return SystemSettings(**values)


def build_user(
    user_id="u-1",
    name="Maria Silva",
    role=Role.NURSE,
    contract_type=ContractType.STATUTORY,
    signed=True,
    **extra,
) -> User:
    return User(
        id=user_id,
        name=name,
        username=user_id,
        role=role,
        contract_type=contract_type,
        signature_url=f"data:image/png;base64,{user_id}" if signed else None,
        **extra,
    )


def signature_of(user: User, when: datetime = NOW) -> SignatureData:
    return SignatureData(
        name=user.name,
        role=user.role,
        identifier=user.identifier,
        signed_at=when,
        signature_url=user.signature_url or "data:image/png;base64,x",
    )


def build_request(
    user: User,
    request_type=RequestType.REGULAR_SWAP,
    day=date(2024, 3, 12),
    status=None,
    covering_employee=None,
    manager: User = None,
    substitute: User = None,
) -> LeaveRequest:
    if status is None:
        status = (
            RequestStatus.WAITING_SUBSTITUTE if request_type.is_swap else RequestStatus.PENDING
        )
    signatures = SignatureBundle(
        requester=signature_of(user),
        substitute=signature_of(substitute) if substitute else None,
        manager=signature_of(manager) if manager else None,
    )
    return LeaveRequest(
        id=str(uuid.uuid4()),
        user_id=user.id,
        user_name=user.name,
        user_role=user.role,
        request_type=request_type,
        date_start=day,
        description="test",
        status=status,
        created_at=NOW,
        covering_employee=covering_employee,
        signatures=signatures,
    )


def absence(user: User, day: date) -> Absence:
    return Absence(id=str(uuid.uuid4()), user_id=user.id, user_name=user.name, date=day)


def certificate(user: User, start: date, days: int) -> MedicalCertificate:
    return MedicalCertificate(
        id=str(uuid.uuid4()), user_id=user.id, user_name=user.name, date_start=start, days=days
    )


@pytest.fixture
def settings() -> SystemSettings:
    return build_settings()


@pytest.fixture
def requester() -> User:
    return build_user(
        "u-1",
        "Maria Silva",
        shift=Shift.DAY_A,
        birth_date=date(1985, 5, 20),
        professional_id="123456",
    )


@pytest.fixture
def colleague() -> User:
    return build_user("u-2", "Ana Souza", shift=Shift.DAY_A)


@pytest.fixture
def manager() -> User:
    return build_user(
        "m-1",
        "Carla Gerente",
        role=Role.MANAGER,
        permissions=[Permission.MANAGE_REQUESTS],
    )


@pytest.fixture
def directory(requester, colleague, manager):
    return [
        requester,
        colleague,
        build_user("u-3", "Bruno Lima"),
        build_user("t-1", "Joao Santos", role=Role.TECH),
        manager,
    ]
