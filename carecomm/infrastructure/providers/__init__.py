"""Delivery providers, one per notification channel."""

from .base import DeliveryProvider, format_message
from .fcm_push import FcmPushProvider
from .registry import ProviderRegistry
from .sendgrid_email import SendGridEmailProvider
from .twilio_sms import TwilioSmsProvider
from .twilio_voice import TwilioVoiceProvider

__all__ = [
    "DeliveryProvider",
    "FcmPushProvider",
    "ProviderRegistry",
    "SendGridEmailProvider",
    "TwilioSmsProvider",
    "TwilioVoiceProvider",
    "format_message",
]
