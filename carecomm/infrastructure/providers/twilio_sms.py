"""Twilio SMS delivery provider."""

from __future__ import annotations

import logging
from typing import Any

from twilio.rest import Client

from carecomm.config import Settings
from carecomm.domain.entities import ChannelResult, NotificationChannel, NotificationRequest

from .base import DeliveryProvider

logger = logging.getLogger(__name__)

_FAILED_STATUSES = {"failed", "undelivered"}


class TwilioSmsProvider(DeliveryProvider):
    """Send text messages through the Twilio Messages API."""

    supported_channel = NotificationChannel.SMS

    def __init__(
        self,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str | None,
        *,
        client: Any | None = None,
    ) -> None:
        configured = bool(account_sid and auth_token and from_number)
        super().__init__(configured=configured)
        self._from_number = from_number
        self._client = None
        if configured:
            self._client = client if client is not None else Client(account_sid, auth_token)
            logger.info("Twilio SMS provider initialized successfully")
        else:
            logger.warning(
                "Twilio SMS provider not configured. Missing AccountSid, AuthToken, or FromNumber"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "TwilioSmsProvider":
        return cls(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            settings.twilio_from_number,
        )

    def _deliver(
        self, address: str, body: str, request: NotificationRequest
    ) -> ChannelResult:
        message = self._client.messages.create(
            body=body,
            from_=self._from_number,
            to=address,
        )
        status = str(getattr(message, "status", "") or "").lower()
        if status in _FAILED_STATUSES:
            logger.warning("Twilio reported SMS %s to %s as %s", message.sid, address, status)
            return ChannelResult(
                is_success=False,
                channel=self.supported_channel,
                message=f"SMS to {address} was {status}",
                external_id=message.sid,
                error_code="MESSAGE_FAILED",
            )

        logger.info("SMS sent successfully to %s, SID: %s", address, message.sid)
        return ChannelResult.success(
            self.supported_channel, f"SMS sent to {address}", external_id=message.sid
        )


__all__ = ["TwilioSmsProvider"]
