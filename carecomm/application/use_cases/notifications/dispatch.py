"""Notification dispatch pipeline and audience fan-out."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from carecomm.domain.entities import (
    PROVIDER_NOT_AVAILABLE,
    BatchResult,
    ChannelResult,
    NotificationChannel,
    NotificationPriority,
    NotificationRecord,
    NotificationRequest,
    User,
    format_channels,
    individual_channels,
    intersect_channels,
)
from carecomm.infrastructure.providers import DeliveryProvider, ProviderRegistry
from carecomm.infrastructure.repositories import (
    FacilityRepository,
    ResidentRepository,
    UserRepository,
)

from .audit import FACILITY_METADATA_KEY, NotificationAuditRecorder
from .create_notification_for_resident import create_notification_for_resident
from .preferences import NotificationPreferencesService

logger = logging.getLogger(__name__)


def contact_addresses(
    user: User,
) -> tuple[tuple[str, ...], dict[NotificationChannel, tuple[str, ...]]]:
    """Return every contact of ``user`` plus the addresses usable per channel."""

    phone = (user.mobile_number or "").strip()
    email = (user.email or "").strip()
    token = (user.push_token or "").strip()

    per_channel = {
        NotificationChannel.SMS: (phone,) if phone else (),
        NotificationChannel.IVR: (phone,) if phone else (),
        NotificationChannel.EMAIL: (email,) if email else (),
        NotificationChannel.PUSH: (token,) if token else (),
    }
    recipients = tuple(value for value in (phone, email, token) if value)
    return recipients, per_channel


class NotificationDispatcher:
    """Route notifications to providers and record every attempt.

    Channels and recipients are processed one after the other. A failure on
    one channel or recipient never prevents the remaining attempts.
    """

    def __init__(
        self,
        session: Session,
        *,
        registry: ProviderRegistry,
        preferences: NotificationPreferencesService,
        audit: NotificationAuditRecorder | None = None,
    ) -> None:
        self.session = session
        self._registry = registry
        self._preferences = preferences
        self._audit = audit or NotificationAuditRecorder(session)

    def register_provider(self, provider: DeliveryProvider) -> bool:
        return self._registry.register(provider)

    def available_channels(self) -> list[NotificationChannel]:
        return self._registry.available_channels()

    def send_notification(self, request: NotificationRequest) -> BatchResult:
        """Attempt every channel of ``request`` and audit the outcome."""

        batch = BatchResult()
        for channel in individual_channels(request.channels):
            provider = self._registry.resolve(channel)
            if provider is None:
                logger.warning("No provider available for channel %s", channel.label)
                batch.add(
                    ChannelResult.failure(
                        channel,
                        f"Provider for {channel.label} not available",
                        error_code=PROVIDER_NOT_AVAILABLE,
                    )
                )
                continue

            try:
                result = provider.send(request)
            except Exception as exc:
                logger.exception("Error sending notification via %s", channel.label)
                result = ChannelResult.failure(
                    channel,
                    f"Provider error: {exc}",
                    error_code=type(exc).__name__,
                )
            else:
                logger.info(
                    "Notification sent via %s: %s", channel.label, result.message
                )
            batch.add(result)

        self._audit.record_attempt(request, batch)
        return batch

    def send_batch_notifications(
        self, requests: Sequence[NotificationRequest]
    ) -> BatchResult:
        overall = BatchResult()
        for request in requests:
            overall.extend(self.send_notification(request))

        logger.info(
            "Batch notification completed. Total sent: %s, Total failed: %s",
            overall.total_sent,
            overall.total_failed,
        )
        return overall

    def send_about_resident_to_care_team(
        self,
        resident_id: int,
        message: str,
        priority: NotificationPriority,
        channels: NotificationChannel = NotificationChannel.ALL,
    ) -> BatchResult:
        """Notify the care team of a resident, honouring each member's preferences."""

        resident = ResidentRepository(self.session).get(resident_id)
        if resident is None:
            logger.warning("No resident found with id %s", resident_id)
            return BatchResult()

        care_team = UserRepository(self.session).list_for_resident(resident_id)
        if not care_team:
            logger.warning("No care team found for resident %s", resident_id)
            return BatchResult()

        facility_name = resident.facility.name if resident.facility else ""
        contextual_message = f"[{facility_name}] {resident.full_name}: {message}"
        preferences_by_user = self._preferences.resolve_batch(
            [user.id for user in care_team]
        )

        requests: list[NotificationRequest] = []
        for user in care_team:
            preferences = preferences_by_user[user.id]
            if not self._preferences.should_send_now(preferences, priority):
                logger.info(
                    "Skipping notification for user %s due to quiet hours (priority: %s)",
                    user.id,
                    priority.name,
                )
                continue

            enabled = preferences.enabled_channels()
            final_channels = intersect_channels(channels, enabled)
            if final_channels == NotificationChannel.NONE:
                logger.info("No enabled channels for user %s, skipping notification", user.id)
                continue

            recipients, per_channel = contact_addresses(user)
            requests.append(
                NotificationRequest(
                    message=contextual_message,
                    priority=priority,
                    channels=final_channels,
                    recipients=recipients,
                    channel_recipients=per_channel,
                    about_resident_id=resident.id,
                    facility_id=resident.facility_id,
                    metadata={
                        "AboutResidentId": resident.id,
                        "RecipientUserId": user.id,
                        "RecipientUserType": user.user_type,
                        "RequestedChannels": format_channels(channels),
                        "UserEnabledChannels": format_channels(enabled),
                        "FinalChannels": format_channels(final_channels),
                        "NotificationType": "ResidentCare",
                    },
                )
            )

        if not requests:
            logger.warning(
                "No eligible users found for notification after applying preferences "
                "(resident %s)",
                resident_id,
            )
            return BatchResult()

        return self.send_batch_notifications(requests)

    def send_facility_notification(
        self,
        facility_id: int,
        message: str,
        priority: NotificationPriority,
        channels: NotificationChannel = NotificationChannel.ALL,
    ) -> BatchResult:
        """Alert every staff member covering a resident of the facility.

        Facility alerts are not filtered by personal preferences or quiet hours.
        """

        facility = FacilityRepository(self.session).get(facility_id)
        if facility is None:
            logger.warning("No facility found with id %s", facility_id)
            return BatchResult()

        staff = UserRepository(self.session).list_for_facility(facility_id)
        if not staff:
            logger.warning("No staff found for facility %s", facility_id)
            return BatchResult()

        contextual_message = f"[{facility.name}] FACILITY ALERT: {message}"
        requests = []
        for user in staff:
            recipients, per_channel = contact_addresses(user)
            requests.append(
                NotificationRequest(
                    message=contextual_message,
                    priority=priority,
                    channels=channels,
                    recipients=recipients,
                    channel_recipients=per_channel,
                    facility_id=facility.id,
                    metadata={
                        FACILITY_METADATA_KEY: facility.id,
                        "UserId": user.id,
                        "UserType": user.user_type,
                        "NotificationType": "FacilityAlert",
                    },
                )
            )

        return self.send_batch_notifications(requests)

    def create_notification_for_resident(
        self,
        user_id: int,
        resident_id: int,
        message: str,
        priority: NotificationPriority,
    ) -> NotificationRecord:
        return create_notification_for_resident(
            self.session,
            user_id=user_id,
            resident_id=resident_id,
            message=message,
            priority=priority,
        )


__all__ = ["NotificationDispatcher", "contact_addresses"]
