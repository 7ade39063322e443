"""Unit tests for the vendor backed delivery providers."""

from __future__ import annotations

import json
import types

import httpx
import pytest

from carecomm.domain.entities import (
    INVALID_RECIPIENT,
    NO_RECIPIENTS,
    PROVIDER_NOT_CONFIGURED,
    NotificationChannel,
    NotificationPriority,
    NotificationRequest,
)
from carecomm.infrastructure.providers import (
    FcmPushProvider,
    SendGridEmailProvider,
    TwilioSmsProvider,
    TwilioVoiceProvider,
    format_message,
)
from carecomm.infrastructure.providers.fcm_push import build_fcm_message
from carecomm.infrastructure.providers.sendgrid_email import build_html_content, build_subject
from carecomm.infrastructure.providers.twilio_voice import build_call_twiml


class FakeTwilioMessages:
    def __init__(self, status: str = "queued", error: Exception | None = None) -> None:
        self.calls: list[dict] = []
        self.status = status
        self.error = error

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return types.SimpleNamespace(sid=f"SM{len(self.calls)}", status=self.status)


class FakeTwilioCalls:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return types.SimpleNamespace(sid="CA1", status="queued")


def _twilio_client(**kwargs):
    return types.SimpleNamespace(messages=FakeTwilioMessages(**kwargs), calls=FakeTwilioCalls())


def _request(*recipients: str, priority=NotificationPriority.HIGH, **extra) -> NotificationRequest:
    return NotificationRequest(
        message="Resident requires assistance",
        priority=priority,
        channels=NotificationChannel.ALL,
        recipients=recipients,
        **extra,
    )


def _sms_provider(client) -> TwilioSmsProvider:
    return TwilioSmsProvider("AC123", "secret", "+15550001111", client=client)


@pytest.mark.parametrize(
    ("priority", "expected"),
    [
        (NotificationPriority.HIGH, "[HIGH PRIORITY] Hello"),
        (NotificationPriority.INCIDENT, "[INCIDENT] Hello"),
        (NotificationPriority.MEDIUM, "[MEDIUM] Hello"),
        (NotificationPriority.LOW, "[LOW] Hello"),
        (NotificationPriority.GENERAL, "Hello"),
    ],
)
def test_format_message_prefixes_priority(priority, expected) -> None:
    assert format_message("Hello", priority) == expected


def test_sms_success_uses_priority_prefix() -> None:
    client = _twilio_client()
    provider = _sms_provider(client)

    result = provider.send(_request("+15552223333"))

    assert result.is_success
    assert result.channel is NotificationChannel.SMS
    assert result.external_id == "SM1"
    assert client.messages.calls == [
        {
            "body": "[HIGH PRIORITY] Resident requires assistance",
            "from_": "+15550001111",
            "to": "+15552223333",
        }
    ]


def test_sms_blank_number_fails_without_calling_twilio() -> None:
    client = _twilio_client()
    provider = _sms_provider(client)

    result = provider.send(_request("   "))

    assert not result.is_success
    assert result.error_code == INVALID_RECIPIENT
    assert client.messages.calls == []


def test_sms_without_recipients_reports_no_recipients() -> None:
    provider = _sms_provider(_twilio_client())

    result = provider.send(_request())

    assert not result.is_success
    assert result.error_code == NO_RECIPIENTS
    assert result.message == "No recipients provided"


def test_unconfigured_sms_provider_reports_not_configured(caplog) -> None:
    with caplog.at_level("WARNING"):
        provider = TwilioSmsProvider(None, None, None)

    result = provider.send(_request("+15552223333"))

    assert provider.is_configured is False
    assert result.error_code == PROVIDER_NOT_CONFIGURED
    assert "not configured" in caplog.text


def test_sms_vendor_exception_becomes_failure() -> None:
    provider = _sms_provider(_twilio_client(error=ConnectionError("network down")))

    result = provider.send(_request("+15552223333"))

    assert not result.is_success
    assert result.error_code == "ConnectionError"
    assert "network down" in result.message


def test_sms_failed_status_is_reported() -> None:
    provider = _sms_provider(_twilio_client(status="undelivered"))

    result = provider.send(_request("+15552223333"))

    assert not result.is_success
    assert result.error_code == "MESSAGE_FAILED"
    assert result.external_id == "SM1"


def test_sms_uses_channel_specific_addresses_and_combines_results() -> None:
    client = _twilio_client()
    provider = _sms_provider(client)
    request = _request(
        "nurse@example.com",
        channel_recipients={NotificationChannel.SMS: ("+15550000001", "+15550000002")},
    )

    result = provider.send(request)

    assert result.is_success
    assert result.external_id == "SM1,SM2"
    assert [call["to"] for call in client.messages.calls] == ["+15550000001", "+15550000002"]


def test_partial_failure_reports_first_error_code() -> None:
    client = _twilio_client()
    provider = _sms_provider(client)

    result = provider.send(_request("+15550000001", ""))

    assert not result.is_success
    assert result.error_code == INVALID_RECIPIENT
    assert len(client.messages.calls) == 1


def test_send_batch_counts_outcomes() -> None:
    provider = _sms_provider(_twilio_client())

    batch = provider.send_batch([_request("+15550000001"), _request(" ")])

    assert batch.total_sent == 1
    assert batch.total_failed == 1


def test_voice_call_reads_message_twice() -> None:
    client = _twilio_client()
    provider = TwilioVoiceProvider("AC123", "secret", "+15550001111", client=client)

    result = provider.send(_request("+15552223333", priority=NotificationPriority.INCIDENT))

    assert result.is_success
    assert result.channel is NotificationChannel.IVR
    call = client.calls.calls[0]
    assert call["to"] == "+15552223333"
    assert call["from_"] == "+15550001111"
    assert "[INCIDENT] Resident requires assistance" in call["twiml"]


def test_build_call_twiml() -> None:
    twiml = build_call_twiml("Check room 4")

    assert "<Say" in twiml
    assert 'loop="2"' in twiml
    assert "Check room 4" in twiml


class FakeSendGridClient:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.messages = []
        self.response = response
        self.error = error

    def send(self, message):
        self.messages.append(message)
        if self.error is not None:
            raise self.error
        return self.response


def test_email_success_returns_message_id() -> None:
    client = FakeSendGridClient(
        types.SimpleNamespace(status_code=202, body=None, headers={"X-Message-Id": "abc123"})
    )
    provider = SendGridEmailProvider("SG.fake", "alerts@example.com", client=client)

    result = provider.send(_request("nurse@example.com"))

    assert result.is_success
    assert result.channel is NotificationChannel.EMAIL
    assert result.external_id == "abc123"
    assert len(client.messages) == 1


def test_email_logs_forbidden_error(caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    provider = SendGridEmailProvider(
        "SG.fake", "alerts@example.com", client=FakeSendGridClient(error=FakeForbiddenError())
    )

    with caplog.at_level("ERROR"):
        result = provider.send(_request("nurse@example.com"))

    assert not result.is_success
    assert result.error_code == "FakeForbiddenError"
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_email_non_success_status_is_rejected() -> None:
    client = FakeSendGridClient(types.SimpleNamespace(status_code=400, body=b"bad request"))
    provider = SendGridEmailProvider("SG.fake", "alerts@example.com", client=client)

    result = provider.send(_request("nurse@example.com"))

    assert not result.is_success
    assert result.error_code == "EMAIL_REJECTED"
    assert "status 400" in result.message


def test_email_without_configuration() -> None:
    provider = SendGridEmailProvider(None, None)

    assert provider.send(_request("nurse@example.com")).error_code == PROVIDER_NOT_CONFIGURED


def test_email_subject_and_body_rendering() -> None:
    assert build_subject(NotificationPriority.LOW) == "[LOW] Care team notification"
    assert build_html_content("Line <1>\n\nLine 2") == "<p>Line &lt;1&gt;</p><p>Line 2</p>"


class FakeCredentials:
    def __init__(self) -> None:
        self.valid = True
        self.token = "access-token"

    def refresh(self, request):  # pragma: no cover - credentials stay valid
        self.valid = True


def _fcm_provider(handler) -> FcmPushProvider:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return FcmPushProvider("care-app", FakeCredentials(), http_client=client)


def test_push_posts_fcm_message() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"name": "projects/care-app/messages/1"})

    provider = _fcm_provider(handler)

    result = provider.send(_request("device-token", about_resident_id=5))

    assert result.is_success
    assert result.external_id == "projects/care-app/messages/1"
    request = seen[0]
    assert request.url == "https://fcm.googleapis.com/v1/projects/care-app/messages:send"
    assert request.headers["Authorization"] == "Bearer access-token"
    payload = json.loads(request.content)
    assert payload["message"]["token"] == "device-token"
    assert payload["message"]["data"]["about_resident_id"] == "5"


def test_push_rejection_is_reported() -> None:
    provider = _fcm_provider(lambda request: httpx.Response(404, json={"error": "UNREGISTERED"}))

    result = provider.send(_request("stale-token"))

    assert not result.is_success
    assert result.error_code == "PUSH_REJECTED"


def test_push_without_credentials_is_not_configured() -> None:
    provider = FcmPushProvider("care-app", None)

    assert provider.is_configured is False
    assert provider.send(_request("device-token")).error_code == PROVIDER_NOT_CONFIGURED


def test_fcm_message_marks_urgent_priorities() -> None:
    urgent = build_fcm_message("t", "body", _request(priority=NotificationPriority.INCIDENT))
    routine = build_fcm_message("t", "body", _request(priority=NotificationPriority.LOW))

    assert urgent["message"]["android"]["priority"] == "high"
    assert urgent["message"]["apns"]["headers"]["apns-priority"] == "10"
    assert routine["message"]["android"]["priority"] == "normal"
