"""Shared fixtures for the notification dispatch tests."""

from __future__ import annotations

import os
from dataclasses import dataclass

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
for _name in (
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_FROM_NUMBER",
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "FCM_PROJECT_ID",
    "FCM_CREDENTIALS_PATH",
    "APP_TIMEZONE",
):
    os.environ.pop(_name, None)

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from carecomm.domain.entities import (
    ChannelResult,
    Facility,
    NotificationChannel,
    NotificationRequest,
    Resident,
    User,
)
from carecomm.infrastructure import models  # noqa: F401
from carecomm.infrastructure.database import Base
from carecomm.infrastructure.providers import DeliveryProvider
from carecomm.infrastructure.repositories import (
    FacilityRepository,
    ResidentRepository,
    UserRepository,
)


class RecordingProvider(DeliveryProvider):
    """Provider double that records requests and replays scripted outcomes.

    ``outcomes`` items are ``True`` (success), ``False`` (failed result) or an
    exception instance, which is raised from :meth:`send`.
    """

    def __init__(
        self,
        channel: NotificationChannel,
        *,
        configured: bool = True,
        outcomes: list | None = None,
    ) -> None:
        self.supported_channel = channel
        super().__init__(configured=configured)
        self.requests: list[NotificationRequest] = []
        self.outcomes = list(outcomes or [])

    def send(self, request: NotificationRequest) -> ChannelResult:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if self.outcomes else True
        if isinstance(outcome, Exception):
            raise outcome
        if outcome:
            return ChannelResult.success(
                self.supported_channel,
                f"{self.supported_channel.label} delivered",
                external_id=f"{self.supported_channel.label}-{len(self.requests)}",
            )
        return ChannelResult.failure(
            self.supported_channel, "Rejected by vendor", error_code="VENDOR_REJECTED"
        )

    def _deliver(self, address, body, request):  # pragma: no cover - send is overridden
        raise NotImplementedError


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def session(session_factory) -> Session:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@dataclass
class CareHome:
    facility: Facility
    resident: Resident
    other_resident: Resident
    lonely_resident: Resident
    nurse: User
    caregiver: User
    administrator: User


@pytest.fixture()
def care_home(session) -> CareHome:
    """A facility with two cared-for residents and one resident with no care team."""

    facility = FacilityRepository(session).create(
        Facility(id=None, name="Maple Grove", city="Springfield", state="IL")
    )
    residents = ResidentRepository(session)
    resident = residents.create(
        Resident(id=None, first_name="Ada", last_name="Lovelace", facility_id=facility.id)
    )
    other_resident = residents.create(
        Resident(id=None, first_name="Alan", last_name="Turing", facility_id=facility.id)
    )
    lonely_resident = residents.create(
        Resident(id=None, first_name="Grace", last_name="Hopper", facility_id=facility.id)
    )

    users = UserRepository(session)
    nurse = users.create(
        User(
            id=None,
            first_name="Nina",
            last_name="Nurse",
            email="nina@example.com",
            mobile_number="+15550000001",
            push_token="token-nina",
            user_type="Nurse",
        )
    )
    caregiver = users.create(
        User(
            id=None,
            first_name="Carl",
            last_name="Giver",
            email="carl@example.com",
            mobile_number="+15550000002",
            user_type="caregiver",
        )
    )
    administrator = users.create(
        User(
            id=None,
            first_name="Alice",
            last_name="Admin",
            email="alice@example.com",
            mobile_number="+15550000003",
            user_type="administrator",
        )
    )

    for user in (nurse, caregiver, administrator):
        users.assign_to_resident(user.id, resident.id)
    users.assign_to_resident(nurse.id, other_resident.id)

    return CareHome(
        facility=facility,
        resident=resident,
        other_resident=other_resident,
        lonely_resident=lonely_resident,
        nurse=nurse,
        caregiver=caregiver,
        administrator=administrator,
    )


@pytest.fixture()
def provider_factory():
    """Return the recording provider class used to script deliveries."""

    return RecordingProvider
