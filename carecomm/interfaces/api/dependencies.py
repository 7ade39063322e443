"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from carecomm.application.use_cases.notifications import (
    NotificationDispatcher,
    NotificationHub,
    NotificationPreferencesService,
)
from carecomm.infrastructure.database import get_db


def get_notification_hub(request: Request) -> NotificationHub:
    """Return the hub created by the application lifespan."""

    hub = getattr(request.app.state, "notification_hub", None)
    if hub is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification service is not initialised",
        )
    return hub


def get_dispatcher(
    db: Session = Depends(get_db),
    hub: NotificationHub = Depends(get_notification_hub),
) -> NotificationDispatcher:
    """Return a dispatcher bound to the request's database session."""

    return hub.dispatcher(db)


def get_preferences_service(
    hub: NotificationHub = Depends(get_notification_hub),
) -> NotificationPreferencesService:
    return hub.preferences
