"""Registry holding at most one delivery provider per channel."""

from __future__ import annotations

import logging
from threading import Lock

from carecomm.domain.entities import ATOMIC_CHANNELS, NotificationChannel

from .base import DeliveryProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Map channels to the configured provider that serves them."""

    def __init__(self) -> None:
        self._providers: dict[NotificationChannel, DeliveryProvider] = {}
        self._lock = Lock()

    def register(self, provider: DeliveryProvider) -> bool:
        """Store ``provider`` for its channel; unconfigured providers are ignored."""

        channel = provider.supported_channel
        if not provider.is_configured:
            logger.warning(
                "Provider for %s not configured, skipping registration", channel.label
            )
            return False

        with self._lock:
            previous = self._providers.get(channel)
            self._providers[channel] = provider

        if previous is not None and previous is not provider:
            logger.info(
                "Replaced %s provider %s with %s", channel.label, previous.name, provider.name
            )
        else:
            logger.info("Registered notification provider for %s", channel.label)
        return True

    def resolve(self, channel: NotificationChannel) -> DeliveryProvider | None:
        with self._lock:
            return self._providers.get(channel)

    def available_channels(self) -> list[NotificationChannel]:
        with self._lock:
            return [channel for channel in ATOMIC_CHANNELS if channel in self._providers]


__all__ = ["ProviderRegistry"]
