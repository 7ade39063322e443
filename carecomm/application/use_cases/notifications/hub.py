"""Composition root owning the long-lived notification components."""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session

from carecomm.config import Settings
from carecomm.infrastructure.providers import ProviderRegistry

from .audit import NotificationAuditRecorder
from .dispatch import NotificationDispatcher
from .preferences import NotificationPreferencesService
from .providers import configure_providers


class NotificationHub:
    """Hold the provider registry and preference cache for the process.

    Dispatchers are cheap and bound to a single database session; build one per
    unit of work with :meth:`dispatcher`.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        settings: Settings,
        *,
        registry: ProviderRegistry | None = None,
        preferences: NotificationPreferencesService | None = None,
    ) -> None:
        self.settings = settings
        self.registry = registry or ProviderRegistry()
        self.preferences = preferences or NotificationPreferencesService(session_factory)

    @classmethod
    def from_settings(
        cls, session_factory: Callable[[], Session], settings: Settings
    ) -> "NotificationHub":
        hub = cls(session_factory, settings)
        configure_providers(hub.registry, settings)
        return hub

    def dispatcher(self, session: Session) -> NotificationDispatcher:
        return NotificationDispatcher(
            session,
            registry=self.registry,
            preferences=self.preferences,
            audit=NotificationAuditRecorder(
                session, default_facility_id=self.settings.default_facility_id
            ),
        )


__all__ = ["NotificationHub"]
