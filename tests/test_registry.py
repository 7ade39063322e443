"""Tests for the provider registry."""

from __future__ import annotations

from carecomm.application.use_cases.notifications import (
    NotificationDispatcher,
    NotificationPreferencesService,
    configure_providers,
)
from carecomm.config import Settings
from carecomm.domain.entities import NotificationChannel
from carecomm.infrastructure.providers import ProviderRegistry


def test_registry_exposes_channels_in_canonical_order(provider_factory) -> None:
    registry = ProviderRegistry()

    registry.register(provider_factory(NotificationChannel.EMAIL))
    registry.register(provider_factory(NotificationChannel.SMS))

    assert registry.available_channels() == [
        NotificationChannel.SMS,
        NotificationChannel.EMAIL,
    ]


def test_unconfigured_provider_is_not_registered(provider_factory, caplog) -> None:
    registry = ProviderRegistry()

    with caplog.at_level("WARNING"):
        registered = registry.register(
            provider_factory(NotificationChannel.PUSH, configured=False)
        )

    assert registered is False
    assert registry.available_channels() == []
    assert registry.resolve(NotificationChannel.PUSH) is None
    assert "not configured" in caplog.text


def test_registering_same_channel_replaces_provider(provider_factory) -> None:
    registry = ProviderRegistry()
    first = provider_factory(NotificationChannel.SMS)
    second = provider_factory(NotificationChannel.SMS)

    registry.register(first)
    registry.register(second)

    assert registry.resolve(NotificationChannel.SMS) is second
    assert registry.available_channels() == [NotificationChannel.SMS]


def test_configure_providers_without_credentials_registers_nothing() -> None:
    registry = configure_providers(ProviderRegistry(), Settings())

    assert registry.available_channels() == []


def test_dispatcher_delegates_registration(session, session_factory, provider_factory) -> None:
    dispatcher = NotificationDispatcher(
        session,
        registry=ProviderRegistry(),
        preferences=NotificationPreferencesService(session_factory),
    )

    assert dispatcher.register_provider(provider_factory(NotificationChannel.IVR)) is True
    assert dispatcher.register_provider(
        provider_factory(NotificationChannel.SMS, configured=False)
    ) is False
    assert dispatcher.available_channels() == [NotificationChannel.IVR]
