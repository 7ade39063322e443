"""Endpoints for reading and replacing notification preferences."""

from fastapi import APIRouter, Depends

from carecomm.application.use_cases.notifications import NotificationPreferencesService
from carecomm.interfaces.api.dependencies import get_preferences_service
from carecomm.interfaces.api.schemas import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
)

router = APIRouter(prefix="/notifications/preferences", tags=["notification preferences"])


@router.get("/{user_id}", response_model=NotificationPreferencesRead)
def read_preferences(
    user_id: int,
    preferences: NotificationPreferencesService = Depends(get_preferences_service),
) -> NotificationPreferencesRead:
    return NotificationPreferencesRead.from_entity(preferences.resolve(user_id))


@router.put("/{user_id}", response_model=NotificationPreferencesRead)
def update_preferences(
    user_id: int,
    payload: NotificationPreferencesUpdate,
    preferences: NotificationPreferencesService = Depends(get_preferences_service),
) -> NotificationPreferencesRead:
    updated = preferences.update(user_id, payload.to_entity(user_id))
    return NotificationPreferencesRead.from_entity(updated)
