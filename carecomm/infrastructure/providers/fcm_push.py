"""Push notification provider using Firebase Cloud Messaging (HTTP v1)."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from carecomm.config import Settings
from carecomm.domain.entities import (
    ChannelResult,
    NotificationChannel,
    NotificationPriority,
    NotificationRequest,
)

from .base import DeliveryProvider

logger = logging.getLogger(__name__)

FCM_API_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"
FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
_TITLE = "Care team notification"


def load_credentials(credentials_path: str | None) -> Any | None:
    """Load service account credentials scoped for FCM, or ``None``."""

    if not credentials_path:
        return None
    if not os.path.exists(credentials_path):
        logger.error("Firebase credentials file not found: %s", credentials_path)
        return None
    try:
        return service_account.Credentials.from_service_account_file(
            credentials_path, scopes=[FCM_SCOPE]
        )
    except (OSError, ValueError):
        logger.exception("Failed to load Firebase credentials from %s", credentials_path)
        return None


def build_fcm_message(token: str, body: str, request: NotificationRequest) -> dict[str, Any]:
    """Return the FCM v1 ``message`` envelope for a single device token."""

    urgent = request.priority.is_at_least_as_urgent_as(NotificationPriority.HIGH)
    data = {"priority": request.priority.name}
    if request.about_resident_id is not None:
        data["about_resident_id"] = str(request.about_resident_id)
    if request.facility_id is not None:
        data["facility_id"] = str(request.facility_id)

    return {
        "message": {
            "token": token,
            "notification": {"title": _TITLE, "body": body},
            "data": data,
            "android": {"priority": "high" if urgent else "normal"},
            "apns": {"headers": {"apns-priority": "10" if urgent else "5"}},
        }
    }


class FcmPushProvider(DeliveryProvider):
    """Send push notifications to device tokens through FCM."""

    supported_channel = NotificationChannel.PUSH

    def __init__(
        self,
        project_id: str | None,
        credentials: Any | None,
        *,
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        configured = bool(project_id and credentials is not None)
        super().__init__(configured=configured)
        self._project_id = project_id
        self._credentials = credentials
        self._http = http_client
        if configured:
            if self._http is None:
                self._http = httpx.Client(timeout=timeout)
            logger.info("FCM push provider initialized for project %s", project_id)
        else:
            logger.warning(
                "Push notifications disabled: FCM_PROJECT_ID or FCM_CREDENTIALS_PATH not set"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "FcmPushProvider":
        credentials = None
        if settings.fcm_project_id:
            credentials = load_credentials(settings.fcm_credentials_path)
        return cls(
            settings.fcm_project_id,
            credentials,
            timeout=settings.provider_timeout_seconds,
        )

    def _access_token(self) -> str:
        if not self._credentials.valid:
            self._credentials.refresh(GoogleAuthRequest())
        return self._credentials.token

    def _deliver(
        self, address: str, body: str, request: NotificationRequest
    ) -> ChannelResult:
        response = self._http.post(
            FCM_API_URL.format(project_id=self._project_id),
            json=build_fcm_message(address, body, request),
            headers={"Authorization": f"Bearer {self._access_token()}"},
        )
        if response.status_code >= 300:
            logger.error(
                "FCM rejected push to %s with status %s: %s",
                address,
                response.status_code,
                response.text,
            )
            return ChannelResult.failure(
                self.supported_channel,
                f"FCM responded with status {response.status_code}",
                error_code="PUSH_REJECTED",
            )

        message_name = response.json().get("name")
        logger.info("Push sent, FCM message %s", message_name)
        return ChannelResult.success(
            self.supported_channel, "Push notification sent", external_id=message_name
        )


__all__ = ["FcmPushProvider", "build_fcm_message", "load_credentials"]
