"""Resolution and caching of per-user notification preferences."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import time
from threading import Lock

from sqlalchemy.orm import Session

from carecomm.domain.entities import (
    NotificationPriority,
    User,
    UserNotificationPreferences,
)
from carecomm.infrastructure.repositories import UserRepository
from carecomm.utils import now_in_app_time_of_day

logger = logging.getLogger(__name__)

CLINICAL_ROLES = ("nurse", "doctor")
CAREGIVER_ROLES = ("caregiver",)
ADMINISTRATIVE_ROLES = ("administrator", "manager")

ADMIN_QUIET_HOURS_START = time(18, 0)
ADMIN_QUIET_HOURS_END = time(8, 0)


def default_preferences_for(user_id: int, user: User | None) -> UserNotificationPreferences:
    """Return the role based defaults for ``user`` (baseline when unknown)."""

    preferences = UserNotificationPreferences(user_id=user_id)
    if user is None:
        return preferences

    if user.has_type(*CLINICAL_ROLES):
        preferences.minimum_urgent_priority = NotificationPriority.MEDIUM
        preferences.ivr_enabled = True
    elif user.has_type(*CAREGIVER_ROLES):
        preferences.minimum_urgent_priority = NotificationPriority.HIGH
    elif user.has_type(*ADMINISTRATIVE_ROLES):
        # LOW is the least urgent ordinal, so every priority clears this threshold
        # and the quiet window below never holds a message back.
        preferences.minimum_urgent_priority = NotificationPriority.LOW
        preferences.quiet_hours_start = ADMIN_QUIET_HOURS_START
        preferences.quiet_hours_end = ADMIN_QUIET_HOURS_END
    return preferences


class NotificationPreferencesService:
    """Resolve preferences lazily and keep them for the life of the service.

    The in-memory cache is currently the only store for preferences; values set
    through :meth:`update` live until the process exits.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self._cache: dict[int, UserNotificationPreferences] = {}
        self._lock = Lock()

    def resolve(self, user_id: int) -> UserNotificationPreferences:
        with self._lock:
            cached = self._cache.get(user_id)
        if cached is not None:
            return cached

        preferences = default_preferences_for(user_id, self._load_user(user_id))
        with self._lock:
            return self._cache.setdefault(user_id, preferences)

    def resolve_batch(self, user_ids: Iterable[int]) -> dict[int, UserNotificationPreferences]:
        """Resolve several users; a failing lookup falls back to baseline defaults."""

        resolved: dict[int, UserNotificationPreferences] = {}
        for user_id in user_ids:
            try:
                resolved[user_id] = self.resolve(user_id)
            except Exception:
                logger.exception(
                    "Failed to resolve notification preferences for user %s; using defaults",
                    user_id,
                )
                resolved[user_id] = UserNotificationPreferences(user_id=user_id)
        return resolved

    def update(
        self, user_id: int, preferences: UserNotificationPreferences
    ) -> UserNotificationPreferences:
        # TODO: persist to a user preferences table once the schema has one.
        stored = replace(preferences, user_id=user_id)
        with self._lock:
            self._cache[user_id] = stored
        logger.info("Updated notification preferences for user %s", user_id)
        return stored

    def invalidate(self, user_id: int | None = None) -> None:
        with self._lock:
            if user_id is None:
                self._cache.clear()
            else:
                self._cache.pop(user_id, None)

    @staticmethod
    def should_send_now(
        preferences: UserNotificationPreferences,
        priority: NotificationPriority,
        now: time | None = None,
    ) -> bool:
        """Apply the quiet-hours rule using the application clock by default."""

        current = now if now is not None else now_in_app_time_of_day()
        return preferences.should_send_now(priority, current)

    def _load_user(self, user_id: int) -> User | None:
        session = self._session_factory()
        try:
            return UserRepository(session).get(user_id)
        finally:
            session.close()


__all__ = [
    "ADMINISTRATIVE_ROLES",
    "CAREGIVER_ROLES",
    "CLINICAL_ROLES",
    "NotificationPreferencesService",
    "default_preferences_for",
]
