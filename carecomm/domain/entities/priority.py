"""Notification priority enumeration."""

from __future__ import annotations

from enum import IntEnum


class NotificationPriority(IntEnum):
    """Priorities in their persisted order.

    The ordinal is the stored and serialized representation, so members must
    never be reordered. Urgency comparisons use the ordinal: a smaller value is
    treated as at least as urgent as a larger one.
    """

    GENERAL = 0
    INCIDENT = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4

    def is_at_least_as_urgent_as(self, minimum: "NotificationPriority") -> bool:
        return self.value <= minimum.value

    @classmethod
    def parse(cls, value: "int | str | NotificationPriority") -> "NotificationPriority":
        """Accept an ordinal, a member name or a member instance."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls(int(text))
            try:
                return cls[text.upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown notification priority: {value}") from exc
        return cls(int(value))


__all__ = ["NotificationPriority"]
