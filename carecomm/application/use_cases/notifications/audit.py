"""Durable audit trail for dispatch attempts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from carecomm.domain.entities import BatchResult, NotificationRecord, NotificationRequest
from carecomm.infrastructure.repositories import NotificationRepository
from carecomm.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

FACILITY_METADATA_KEY = "FacilityId"


def facility_id_from_metadata(request: NotificationRequest) -> int | None:
    value = request.metadata.get(FACILITY_METADATA_KEY)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


class NotificationAuditRecorder:
    """Persist one notification record per dispatch attempt."""

    def __init__(self, session: Session, *, default_facility_id: int = 1) -> None:
        self.session = session
        self._default_facility_id = default_facility_id

    def resolve_facility_id(self, request: NotificationRequest) -> int:
        if request.facility_id is not None:
            return request.facility_id
        from_metadata = facility_id_from_metadata(request)
        if from_metadata is not None:
            return from_metadata
        return self._default_facility_id

    def record_attempt(
        self, request: NotificationRequest, result: BatchResult
    ) -> NotificationRecord | None:
        """Store ``request`` regardless of outcome; persistence errors are only logged."""

        try:
            record = NotificationRepository(self.session).create(
                NotificationRecord(
                    id=None,
                    message=request.message,
                    priority=request.priority,
                    facility_id=self.resolve_facility_id(request),
                    created_at=now_in_app_timezone(),
                )
            )
        except Exception:
            logger.exception("Failed to log notification attempt to database")
            try:
                self.session.rollback()
            except Exception:
                logger.exception("Failed to roll back audit session")
            return None

        if request.about_resident_id is not None:
            logger.info(
                "Logged notification about resident %s with ID %s. Sent: %s, failed: %s",
                request.about_resident_id,
                record.id,
                result.total_sent,
                result.total_failed,
            )
        else:
            logger.info("Logged facility notification with ID %s", record.id)
        return record


__all__ = ["NotificationAuditRecorder", "facility_id_from_metadata"]
