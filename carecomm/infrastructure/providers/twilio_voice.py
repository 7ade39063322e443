"""Twilio programmable voice provider used for IVR call-outs."""

from __future__ import annotations

import logging
from typing import Any

from twilio.rest import Client
from twilio.twiml.voice_response import VoiceResponse

from carecomm.config import Settings
from carecomm.domain.entities import ChannelResult, NotificationChannel, NotificationRequest

from .base import DeliveryProvider

logger = logging.getLogger(__name__)

# Times the message is read out on a single call
_REPEAT_COUNT = 2


def build_call_twiml(body: str) -> str:
    """Return the TwiML document that reads ``body`` to the callee."""

    response = VoiceResponse()
    response.say(body, loop=_REPEAT_COUNT)
    return str(response)


class TwilioVoiceProvider(DeliveryProvider):
    """Place outbound calls that read the notification aloud."""

    supported_channel = NotificationChannel.IVR

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
            logger.info("Twilio voice provider initialized successfully")
        else:
            logger.warning("Twilio voice provider not configured; IVR call-outs disabled")

    @classmethod
    def from_settings(cls, settings: Settings) -> "TwilioVoiceProvider":
        return cls(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            settings.twilio_from_number,
        )

    def _deliver(
        self, address: str, body: str, request: NotificationRequest
    ) -> ChannelResult:
        call = self._client.calls.create(
            to=address,
            from_=self._from_number,
            twiml=build_call_twiml(body),
        )
        logger.info("Voice call placed to %s, SID: %s", address, call.sid)
        return ChannelResult.success(
            self.supported_channel, f"Voice call placed to {address}", external_id=call.sid
        )


__all__ = ["TwilioVoiceProvider", "build_call_twiml"]
