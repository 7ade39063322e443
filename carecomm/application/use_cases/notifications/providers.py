"""Build the delivery providers from settings and register them."""

from __future__ import annotations

import logging

from carecomm.config import Settings
from carecomm.infrastructure.providers import (
    DeliveryProvider,
    FcmPushProvider,
    ProviderRegistry,
    SendGridEmailProvider,
    TwilioSmsProvider,
    TwilioVoiceProvider,
)

logger = logging.getLogger(__name__)


def build_providers(settings: Settings) -> list[DeliveryProvider]:
    """Instantiate one provider per channel; unconfigured ones are still returned."""

    return [
        TwilioSmsProvider.from_settings(settings),
        FcmPushProvider.from_settings(settings),
        TwilioVoiceProvider.from_settings(settings),
        SendGridEmailProvider.from_settings(settings),
    ]


def configure_providers(registry: ProviderRegistry, settings: Settings) -> ProviderRegistry:
    """Offer every provider to ``registry``; only configured ones are kept."""

    for provider in build_providers(settings):
        registry.register(provider)

    channels = registry.available_channels()
    logger.info(
        "Notification channels available: %s",
        ", ".join(channel.label for channel in channels) or "none",
    )
    return registry


__all__ = ["build_providers", "configure_providers"]
