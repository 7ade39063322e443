"""Email delivery provider backed by the SendGrid REST API."""

from __future__ import annotations

import html
import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from carecomm.config import Settings
from carecomm.domain.entities import (
    ChannelResult,
    NotificationChannel,
    NotificationPriority,
    NotificationRequest,
)

from .base import DeliveryProvider, format_message

logger = logging.getLogger(__name__)

_SUBJECT = "Care team notification"


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, details: str | None) -> str:
    if status_code and details:
        return f"SendGrid API request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid API request failed with status {status_code}"
    if details:
        return f"SendGrid API request failed: {details}"
    return "SendGrid API request failed"


def build_subject(priority: NotificationPriority) -> str:
    return format_message(_SUBJECT, priority)


def build_html_content(body: str) -> str:
    paragraphs = (line for line in body.splitlines() if line.strip())
    return "".join(f"<p>{html.escape(line)}</p>" for line in paragraphs)


class SendGridEmailProvider(DeliveryProvider):
    """Send notification emails using the configured SendGrid credentials."""

    supported_channel = NotificationChannel.EMAIL

    def __init__(
        self,
        api_key: str | None,
        sender: str | None,
        *,
        client: Any | None = None,
    ) -> None:
        configured = bool(api_key and sender)
        super().__init__(configured=configured)
        self._sender = sender
        self._client = None
        if configured:
            self._client = client if client is not None else SendGridAPIClient(api_key)
            logger.info("SendGrid email provider initialized successfully")
        else:
            logger.warning("SendGrid configuration incomplete; email delivery disabled")

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendGridEmailProvider":
        return cls(settings.sendgrid_api_key, settings.sendgrid_sender)

    def _deliver(
        self, address: str, body: str, request: NotificationRequest
    ) -> ChannelResult:
        message = Mail(
            from_email=self._sender,
            to_emails=address,
            subject=build_subject(request.priority),
            html_content=build_html_content(body),
        )

        try:
            response = self._client.send(message)
        except Exception as exc:
            description = _describe_failure(
                getattr(exc, "status_code", None),
                _extract_sendgrid_error_details(getattr(exc, "body", None)),
            )
            logger.error("Email to %s not sent. %s", address, description)
            return ChannelResult.failure(
                self.supported_channel, description, error_code=type(exc).__name__
            )

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            description = _describe_failure(
                status_code,
                _extract_sendgrid_error_details(getattr(response, "body", None)),
            )
            logger.error("Email to %s rejected. %s", address, description)
            return ChannelResult.failure(
                self.supported_channel, description, error_code="EMAIL_REJECTED"
            )

        headers = getattr(response, "headers", None) or {}
        message_id = headers.get("X-Message-Id") if hasattr(headers, "get") else None
        logger.info("Email sent to %s", address)
        return ChannelResult.success(
            self.supported_channel, f"Email sent to {address}", external_id=message_id
        )


__all__ = ["SendGridEmailProvider", "build_html_content", "build_subject"]
