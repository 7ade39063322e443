"""Persistence helpers for notification audit records."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from carecomm.domain.entities import (
    NotificationPriority,
    NotificationRecord,
    NotificationSubscription,
)
from carecomm.infrastructure.models import NotificationModel, NotificationSubscriptionModel
from carecomm.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide create and query operations for notification records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_facility(
        self, facility_id: int, *, limit: int | None = 50
    ) -> Sequence[NotificationRecord]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.facility_id == facility_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create(self, record: NotificationRecord) -> NotificationRecord:
        model = NotificationModel(
            message=record.message,
            priority=int(record.priority),
            facility_id=record.facility_id,
            created_at=ensure_app_naive_datetime(record.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone()),
        )
        if record.external_id is not None:
            model.external_id = record.external_id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def add_subscription(self, *, user_id: int, notification_id: int) -> NotificationSubscription:
        model = NotificationSubscriptionModel(
            user_id=user_id, notification_id=notification_id
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return NotificationSubscription(
            id=model.id, user_id=model.user_id, notification_id=model.notification_id
        )

    def list_subscriptions(self, notification_id: int) -> Sequence[NotificationSubscription]:
        query = self.session.query(NotificationSubscriptionModel).filter(
            NotificationSubscriptionModel.notification_id == notification_id
        )
        return [
            NotificationSubscription(
                id=model.id, user_id=model.user_id, notification_id=model.notification_id
            )
            for model in query.all()
        ]

    @staticmethod
    def _to_entity(model: NotificationModel) -> NotificationRecord:
        return NotificationRecord(
            id=model.id,
            message=model.message,
            priority=NotificationPriority(model.priority),
            facility_id=model.facility_id,
            created_at=ensure_app_timezone(model.created_at),
            external_id=model.external_id,
        )


__all__ = ["NotificationRepository"]
