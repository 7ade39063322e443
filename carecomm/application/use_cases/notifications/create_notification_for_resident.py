"""Use case for recording a note a user authored about a resident."""

from sqlalchemy.orm import Session

from carecomm.domain.entities import NotificationPriority, NotificationRecord
from carecomm.domain.errors import NotFoundError
from carecomm.infrastructure.repositories import (
    NotificationRepository,
    ResidentRepository,
    UserRepository,
)
from carecomm.utils import now_in_app_timezone


def create_notification_for_resident(
    session: Session,
    *,
    user_id: int,
    resident_id: int,
    message: str,
    priority: NotificationPriority,
) -> NotificationRecord:
    """Persist a notification for the resident's facility and subscribe its author."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError(f"User with id {user_id} not found")

    resident = ResidentRepository(session).get(resident_id)
    if resident is None:
        raise NotFoundError(f"Resident with id {resident_id} not found")

    repository = NotificationRepository(session)
    record = repository.create(
        NotificationRecord(
            id=None,
            message=message,
            priority=priority,
            facility_id=resident.facility_id,
            created_at=now_in_app_timezone(),
        )
    )
    repository.add_subscription(user_id=user.id, notification_id=record.id)
    return record
