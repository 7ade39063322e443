"""Endpoints that trigger notification dispatch."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from carecomm.application.use_cases.notifications import NotificationDispatcher
from carecomm.domain.entities import NotificationRequest
from carecomm.domain.errors import NotFoundError
from carecomm.interfaces.api.dependencies import get_dispatcher
from carecomm.interfaces.api.schemas import (
    AvailableChannelsRead,
    BatchResultRead,
    CareTeamNotificationCreate,
    DirectNotificationCreate,
    FacilityNotificationCreate,
    NotificationRecordRead,
    ResidentNoteCreate,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/channels", response_model=AvailableChannelsRead)
def list_available_channels(
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> AvailableChannelsRead:
    """Return the channels that currently have a configured provider."""

    return AvailableChannelsRead(
        channels=[channel.label for channel in dispatcher.available_channels()]
    )


@router.post("/send", response_model=BatchResultRead)
def send_notification(
    payload: DirectNotificationCreate,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> BatchResultRead:
    """Send a notification to explicit contact addresses."""

    request = NotificationRequest(
        message=payload.message,
        priority=payload.priority,
        channels=payload.channels,
        recipients=tuple(payload.recipients),
        about_resident_id=payload.about_resident_id,
        facility_id=payload.facility_id,
        metadata=payload.metadata,
    )
    return BatchResultRead.from_entity(dispatcher.send_notification(request))


@router.post("/residents/{resident_id}/care-team", response_model=BatchResultRead)
def notify_care_team(
    resident_id: int,
    payload: CareTeamNotificationCreate,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> BatchResultRead:
    """Notify the care team of a resident according to their preferences."""

    result = dispatcher.send_about_resident_to_care_team(
        resident_id, payload.message, payload.priority, payload.channels
    )
    return BatchResultRead.from_entity(result)


@router.post("/facilities/{facility_id}", response_model=BatchResultRead)
def notify_facility(
    facility_id: int,
    payload: FacilityNotificationCreate,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> BatchResultRead:
    """Send a facility-wide alert to every staff member of the facility."""

    result = dispatcher.send_facility_notification(
        facility_id, payload.message, payload.priority, payload.channels
    )
    return BatchResultRead.from_entity(result)


@router.post(
    "/residents/{resident_id}/records",
    response_model=NotificationRecordRead,
    status_code=status.HTTP_201_CREATED,
)
def create_resident_note(
    resident_id: int,
    payload: ResidentNoteCreate,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationRecordRead:
    """Record a note authored by a user about a resident."""

    try:
        record = dispatcher.create_notification_for_resident(
            payload.user_id, resident_id, payload.message, payload.priority
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return NotificationRecordRead.from_entity(record)
