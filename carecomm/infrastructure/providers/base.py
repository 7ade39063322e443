"""Base class shared by every delivery provider.

A provider transmits a :class:`NotificationRequest` over exactly one channel.
Providers never raise on delivery problems: transport and vendor errors are
turned into failed :class:`ChannelResult` objects so the dispatcher can carry on
with the remaining channels and recipients.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from carecomm.domain.entities import (
    INVALID_RECIPIENT,
    NO_RECIPIENTS,
    PROVIDER_NOT_CONFIGURED,
    BatchResult,
    ChannelResult,
    NotificationChannel,
    NotificationPriority,
    NotificationRequest,
)

logger = logging.getLogger(__name__)

_PRIORITY_PREFIXES: dict[NotificationPriority, str] = {
    NotificationPriority.HIGH: "[HIGH PRIORITY] ",
    NotificationPriority.INCIDENT: "[INCIDENT] ",
    NotificationPriority.MEDIUM: "[MEDIUM] ",
    NotificationPriority.LOW: "[LOW] ",
}


def format_message(message: str, priority: NotificationPriority) -> str:
    """Prefix ``message`` with a tag describing ``priority``."""

    return f"{_PRIORITY_PREFIXES.get(priority, '')}{message}"


class DeliveryProvider(ABC):
    """Deliver notifications through a single channel technology."""

    supported_channel: NotificationChannel = NotificationChannel.NONE

    def __init__(self, *, configured: bool) -> None:
        self._configured = configured

    @property
    def is_configured(self) -> bool:
        """Whether the credentials required by the provider were supplied."""

        return self._configured

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def send(self, request: NotificationRequest) -> ChannelResult:
        """Deliver ``request`` to each of its addresses for this channel."""

        channel = self.supported_channel
        if not self.is_configured:
            return ChannelResult.failure(
                channel,
                f"{self.name} is not configured",
                error_code=PROVIDER_NOT_CONFIGURED,
            )

        addresses = request.recipients_for(channel)
        if not addresses:
            return ChannelResult.failure(
                channel, "No recipients provided", error_code=NO_RECIPIENTS
            )

        body = format_message(request.message, request.priority)
        results: list[ChannelResult] = []
        for address in addresses:
            if not address or not address.strip():
                results.append(
                    ChannelResult.failure(
                        channel,
                        f"Empty {channel.label} recipient address",
                        error_code=INVALID_RECIPIENT,
                    )
                )
                continue

            target = address.strip()
            try:
                results.append(self._deliver(target, body, request))
            except Exception as exc:
                logger.exception(
                    "%s failed to deliver to %s", self.name, target
                )
                results.append(
                    ChannelResult.failure(
                        channel,
                        f"Failed to send {channel.label} to {target}: {exc}",
                        error_code=type(exc).__name__,
                    )
                )

        return self._combine(results)

    def send_batch(self, requests: Sequence[NotificationRequest]) -> BatchResult:
        """Send every request in turn; there is no atomicity across requests."""

        batch = BatchResult()
        for request in requests:
            batch.add(self.send(request))

        logger.info(
            "%s batch completed. Sent: %s, Failed: %s",
            self.name,
            batch.total_sent,
            batch.total_failed,
        )
        return batch

    @abstractmethod
    def _deliver(
        self, address: str, body: str, request: NotificationRequest
    ) -> ChannelResult:
        """Transmit ``body`` to a single non-blank ``address``.

        Implementations may raise; :meth:`send` converts exceptions into failed
        results whose error code is the exception class name.
        """

    def _combine(self, results: list[ChannelResult]) -> ChannelResult:
        """Fold the per-address results into the single result for this channel."""

        if len(results) == 1:
            return results[0]

        failures = [result for result in results if not result.is_success]
        if not failures:
            external_ids = [result.external_id for result in results if result.external_id]
            return ChannelResult.success(
                self.supported_channel,
                f"{self.supported_channel.label} sent to {len(results)} recipients",
                external_id=",".join(external_ids) or None,
            )

        first = failures[0]
        return ChannelResult.failure(
            self.supported_channel,
            f"{len(failures)} of {len(results)} {self.supported_channel.label} "
            f"deliveries failed: {first.message}",
            error_code=first.error_code or "DELIVERY_FAILED",
        )


__all__ = ["DeliveryProvider", "format_message"]
